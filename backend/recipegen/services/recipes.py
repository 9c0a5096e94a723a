# recipegen/services/recipes.py
# recipes 컬렉션 접근 — 모든 읽기/쓰기는 호출자(user) 범위로 제한

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping

from bson import ObjectId
from bson.errors import InvalidId

from recipegen.db.models.recipe import RecipeIn, RecipeUpdate
from recipegen.errors import NotFound, NotOwner
from recipegen.models.recipe import normalize_ids

log = logging.getLogger(__name__)


def to_object_id(value: str) -> ObjectId:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError) as e:
        raise NotFound() from e


def serialize(doc: Mapping[str, Any]) -> Dict[str, Any]:
    """Mongo 문서 → 전송용 dict (_id/user 문자열화, id/_id 동일)."""
    out = dict(doc)
    out["_id"] = str(out["_id"])
    if out.get("user") is not None:
        out["user"] = str(out["user"])
    return normalize_ids(out)


class RecipeRepository:
    def __init__(self, db) -> None:
        self.col = db["recipes"]

    async def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        cursor = self.col.find({"user": to_object_id(user_id)}).sort("createdAt", -1)
        docs = await cursor.to_list(length=None)
        return [serialize(d) for d in docs]

    async def create(self, user_id: str, payload: RecipeIn) -> Dict[str, Any]:
        now = datetime.now(timezone.utc)
        doc = payload.model_dump(exclude_none=True)
        doc.update({"user": to_object_id(user_id), "createdAt": now, "updatedAt": now})
        result = await self.col.insert_one(doc)
        doc["_id"] = result.inserted_id
        log.info("saved recipe %s for user %s", doc["_id"], user_id)
        return serialize(doc)

    async def _get_owned_doc(self, user_id: str, recipe_id: str) -> Dict[str, Any]:
        doc = await self.col.find_one({"_id": to_object_id(recipe_id)})
        if not doc:
            raise NotFound()
        if str(doc.get("user")) != str(user_id):
            raise NotOwner()
        return doc

    async def get(self, user_id: str, recipe_id: str) -> Dict[str, Any]:
        return serialize(await self._get_owned_doc(user_id, recipe_id))

    async def update(self, user_id: str, recipe_id: str, payload: RecipeUpdate) -> Dict[str, Any]:
        doc = await self._get_owned_doc(user_id, recipe_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)
        if changes:
            changes["updatedAt"] = datetime.now(timezone.utc)
            await self.col.update_one({"_id": doc["_id"]}, {"$set": changes})
            doc = await self.col.find_one({"_id": doc["_id"]})
        return serialize(doc)

    async def delete(self, user_id: str, recipe_id: str) -> str:
        doc = await self._get_owned_doc(user_id, recipe_id)
        await self.col.delete_one({"_id": doc["_id"]})
        log.info("deleted recipe %s for user %s", recipe_id, user_id)
        return recipe_id
