# recipegen/api/routes_recipes.py
# 레시피 생성/저장/조회/수정/삭제 — 전부 Bearer 인증 필요, 호출자 소유 레시피만

from __future__ import annotations
from typing import Any, Dict, List
import logging

import openai
from fastapi import APIRouter, Depends, HTTPException

from recipegen.core.deps import get_current_user
from recipegen.db.init import get_db
from recipegen.db.models.recipe import RecipeIn, RecipeUpdate
from recipegen.errors import ApiFailure, ErrorKind, RecipeError
from recipegen.models.recipe import RecipeParams
from recipegen.services.generator import RecipeGenerator, get_generator
from recipegen.services.recipes import RecipeRepository

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recipes", tags=["recipes"])

STATUS_BY_KIND = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.NOT_AUTHENTICATED: 401,
    ErrorKind.NOT_OWNER: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.NO_CONTENT: 502,
    ErrorKind.MALFORMED_RESPONSE: 502,
    ErrorKind.API_FAILURE: 502,
    ErrorKind.GENERATION_NOT_READY: 503,
}


def to_http(err: RecipeError) -> HTTPException:
    return HTTPException(status_code=STATUS_BY_KIND.get(err.kind, 500), detail=err.to_detail())


def get_repo(db=Depends(get_db)) -> RecipeRepository:
    return RecipeRepository(db)


@router.post("/generate")
async def generate_recipe(
    params: RecipeParams,
    user: Dict[str, Any] = Depends(get_current_user),
    generator: RecipeGenerator = Depends(get_generator),
):
    """생성만 한다 (저장 X). 저장은 클라이언트가 명시적으로 POST /api/recipes"""
    try:
        recipe = await generator.generate(params)
    except RecipeError as e:
        log.warning("generation failed for user %s: %s", user["id"], e.message)
        raise to_http(e)
    except openai.OpenAIError as e:
        log.exception("openai call failed for user %s", user["id"])
        raise to_http(ApiFailure(f"Recipe generation failed: {e}"))
    return recipe.to_wire()


@router.get("")
async def list_recipes(
    user: Dict[str, Any] = Depends(get_current_user),
    repo: RecipeRepository = Depends(get_repo),
) -> List[Dict[str, Any]]:
    return await repo.list_for_user(user["id"])


@router.post("", status_code=201)
async def create_recipe(
    payload: RecipeIn,
    user: Dict[str, Any] = Depends(get_current_user),
    repo: RecipeRepository = Depends(get_repo),
):
    return await repo.create(user["id"], payload)


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    repo: RecipeRepository = Depends(get_repo),
):
    try:
        return await repo.get(user["id"], recipe_id)
    except RecipeError as e:
        raise to_http(e)


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: str,
    payload: RecipeUpdate,
    user: Dict[str, Any] = Depends(get_current_user),
    repo: RecipeRepository = Depends(get_repo),
):
    try:
        return await repo.update(user["id"], recipe_id, payload)
    except RecipeError as e:
        raise to_http(e)


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: str,
    user: Dict[str, Any] = Depends(get_current_user),
    repo: RecipeRepository = Depends(get_repo),
):
    try:
        deleted = await repo.delete(user["id"], recipe_id)
    except RecipeError as e:
        raise to_http(e)
    return {"id": deleted}
