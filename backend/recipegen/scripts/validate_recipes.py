# 저장된 레시피 점검: 필수 영양 정보/제목/재료가 빠진 문서 찾기
import asyncio
import sys
from typing import List

from recipegen.db.init import close_db, init_db

REQUIRED_NUTRITION = ("calories", "protein", "fat", "carbohydrates")

def _problems(doc: dict) -> List[str]:
    probs: List[str] = []
    if not (doc.get("title") or "").strip():
        probs.append("no-title")
    if not doc.get("ingredients"):
        probs.append("no-ingredients")
    if not doc.get("instructions"):
        probs.append("no-instructions")
    if not doc.get("user"):
        probs.append("no-owner")
    nutrition = doc.get("nutrition") or {}
    for k in REQUIRED_NUTRITION:
        if not isinstance(nutrition.get(k), (int, float)):
            probs.append(f"nutrition.{k}")
    return probs

async def main(limit: int = 200):
    db = await init_db()
    try:
        docs = await db["recipes"].find({}).limit(limit).to_list(length=limit)
        bad = []
        for d in docs:
            p = _problems(d)
            if p:
                bad.append((str(d.get("_id")), d.get("title"), p))
        print(f"checked: {len(docs)}, issues: {len(bad)}")
        for bid, title, probs in bad[:20]:
            print("-", bid, "/", title, "=>", probs)
    finally:
        await close_db()

if __name__ == "__main__":
    asyncio.run(main(int(sys.argv[1]) if len(sys.argv) > 1 else 200))
