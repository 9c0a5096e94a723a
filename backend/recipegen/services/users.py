# recipegen/services/users.py
# users 컬렉션 접근 (가입/조회)

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError

from recipegen.core.security import hash_password
from recipegen.db.models.user import RegisterIn, UserOut

log = logging.getLogger(__name__)


class UserExists(Exception):
    pass


def to_user_out(doc: Mapping[str, Any]) -> UserOut:
    return UserOut(id=str(doc["_id"]), name=doc.get("name", ""), email=doc.get("email", ""))


async def find_by_email(db, email: str) -> Optional[Dict[str, Any]]:
    return await db["users"].find_one({"email": (email or "").strip().lower()})


async def get_user(db, user_id: str) -> Optional[Dict[str, Any]]:
    try:
        oid = ObjectId(user_id)
    except (InvalidId, TypeError):
        return None
    return await db["users"].find_one({"_id": oid})


async def create_user(db, payload: RegisterIn) -> Dict[str, Any]:
    if await find_by_email(db, payload.email):
        raise UserExists(payload.email)

    now = datetime.now(timezone.utc)
    doc = {
        "name": payload.name.strip(),
        "email": payload.email,
        "password": hash_password(payload.password),
        "createdAt": now,
        "updatedAt": now,
    }
    try:
        result = await db["users"].insert_one(doc)
    except DuplicateKeyError as e:
        # 동시 가입 경합: unique 인덱스가 막음
        raise UserExists(payload.email) from e
    doc["_id"] = result.inserted_id
    log.info("registered user %s", doc["_id"])
    return doc
