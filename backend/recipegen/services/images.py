# recipegen/services/images.py
# 레시피 대표 이미지
# - 이미지 생성 실패는 레시피 생성을 막지 않는다: 항상 제목 기반 대체 이미지로 수렴

from __future__ import annotations
import logging
from typing import Any, Optional

from recipegen.core.config import settings
from recipegen.models.recipe import Recipe
from recipegen.models.tags import DEFAULT_IMAGE, IMAGE_CATEGORIES

log = logging.getLogger(__name__)

IMAGE_SIZE = "1024x1024"
PROMPT_INGREDIENTS = 3


def build_image_prompt(recipe: Recipe) -> str:
    ings = ", ".join(recipe.ingredients[:PROMPT_INGREDIENTS])
    prompt = f"A professional, appetizing food photograph of {recipe.title}"
    if ings:
        prompt += f", made with {ings}"
    return prompt + ". Plated dish, natural light, top-down view, no text."


def fallback_category(title: str) -> Optional[str]:
    t = (title or "").lower()
    for category, _ in IMAGE_CATEGORIES:
        if category in t:
            return category
    return None


def fallback_image_url(title: str) -> str:
    """제목만으로 결정되는 대체 이미지 (표 순서상 먼저 걸린 카테고리)."""
    category = fallback_category(title)
    return dict(IMAGE_CATEGORIES)[category] if category else DEFAULT_IMAGE


async def generate_image_url(recipe: Recipe, client: Any) -> Optional[str]:
    rsp = await client.images.generate(
        model=settings.OPENAI_IMAGE_MODEL,
        prompt=build_image_prompt(recipe),
        n=1,
        size=IMAGE_SIZE,
    )
    data = getattr(rsp, "data", None) or []
    return getattr(data[0], "url", None) if data else None


async def attach_image(recipe: Recipe, client: Any) -> Recipe:
    url: Optional[str] = None
    if client is not None:
        try:
            url = await generate_image_url(recipe, client)
        except Exception as e:
            # 네트워크/정책 거절 등 전부 대체 이미지로
            log.warning("image generation failed for %r: %s", recipe.title, e)
    if not url:
        url = fallback_image_url(recipe.title)
        log.info("using fallback image for %r", recipe.title)
    return recipe.model_copy(update={"imageUrl": url})
