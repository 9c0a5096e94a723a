# recipegen/services/parser.py
# LLM 응답 텍스트 → Recipe
# - 첫 '{' 부터 마지막 '}' 까지 탐욕 매칭 (모델이 앞뒤에 설명을 붙여도 통과)
# - 스키마 검사는 파싱 직후 바로 한다

from __future__ import annotations
import json
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import ValidationError

from recipegen.errors import MalformedResponse, NoContent
from recipegen.models.recipe import Recipe, new_recipe_id

log = logging.getLogger(__name__)

JSON_BLOCK_RE = re.compile(r"\{[\s\S]*\}")


def extract_json_block(text: str) -> Optional[str]:
    m = JSON_BLOCK_RE.search(text or "")
    return m.group(0) if m else None


def _summarize(err: ValidationError) -> str:
    parts = []
    for e in err.errors()[:5]:
        loc = ".".join(str(x) for x in e.get("loc", ()))
        parts.append(f"{loc}: {e.get('msg')}")
    return "; ".join(parts)


def parse_recipe_payload(text: Optional[str]) -> Dict[str, Any]:
    if not text or not text.strip():
        raise NoContent()

    block = extract_json_block(text)
    if block is None:
        raise MalformedResponse()

    try:
        data = json.loads(block)
    except json.JSONDecodeError as e:
        log.warning("model returned non-JSON block: %s", e)
        raise MalformedResponse() from e

    if not isinstance(data, dict):
        raise MalformedResponse("Model response JSON is not an object")
    return data


def parse_recipe_text(text: Optional[str]) -> Recipe:
    """
    모델 텍스트에서 레시피를 만든다.
    성공 시 새 id와 생성 시각을 찍는다. 모델이 보낸 id/_id/user는 무시.
    """
    data = parse_recipe_payload(text)
    for k in ("id", "_id", "user", "createdAt"):
        data.pop(k, None)

    try:
        recipe = Recipe.model_validate(data)
    except ValidationError as e:
        log.warning("model recipe failed validation: %s", _summarize(e))
        raise MalformedResponse(f"Recipe is missing required fields ({_summarize(e)})") from e

    return recipe.model_copy(update={
        "id": new_recipe_id(),
        "createdAt": datetime.now(timezone.utc),
    })
