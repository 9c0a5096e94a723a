# 컬렉션 인덱스 생성
# 앱 스타트업에서 한 번 ensure_indexes()를 await로 호출한다.

from recipegen.db.init import get_db

async def ensure_indexes(db=None):
    db = db if db is not None else get_db()

    # 사용자: 이메일로 로그인
    await db["users"].create_index("email", unique=True)

    # 레시피: 소유자별 최신순 목록
    await db["recipes"].create_index([("user", 1), ("createdAt", -1)])
    await db["recipes"].create_index([("user", 1), ("title", 1)])
