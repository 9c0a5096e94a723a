# recipegen/db/init.py
# motor 클라이언트 1개를 프로세스 전역으로 공유 (startup에서 열고 shutdown에서 닫음)

from __future__ import annotations
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from recipegen.core.config import settings

log = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


async def init_db() -> AsyncIOMotorDatabase:
    global _client, _db
    if _db is not None:
        return _db

    # tz_aware: createdAt 을 UTC aware datetime 으로 돌려받는다 (정렬/직렬화 일관)
    client = AsyncIOMotorClient(
        settings.MONGO_URI,
        tz_aware=True,
        serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
        appname="recipegen",
    )
    db = client[settings.MONGO_DB]
    try:
        await db.command("ping")
    except Exception:
        client.close()
        raise

    _client, _db = client, db
    log.info("connected to mongo db=%s", settings.MONGO_DB)
    return _db


def get_db() -> AsyncIOMotorDatabase:
    # 라우터 의존성. 테스트에서는 dependency_overrides 로 교체
    if _db is None:
        raise RuntimeError("MongoDB is not initialized yet.")
    return _db


async def close_db() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
    _client = None
    _db = None
