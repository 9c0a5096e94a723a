# recipegen/services/generator.py
# 레시피 생성 파이프라인 (OpenAI)
# 프롬프트 → chat completions → 파싱/검증 → 이미지 부착

from __future__ import annotations
import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from recipegen.core.config import settings
from recipegen.errors import GenerationNotReady, NoContent
from recipegen.models.recipe import Recipe, RecipeParams, validate_params
from recipegen.services.images import attach_image
from recipegen.services.parser import parse_recipe_text
from recipegen.services.prompt import build_messages

log = logging.getLogger(__name__)


def openai_client(api_key: Optional[str] = None) -> AsyncOpenAI:
    api_key = api_key or settings.OPENAI_API_KEY
    if not api_key:
        raise GenerationNotReady("OPENAI_API_KEY not set")
    return AsyncOpenAI(api_key=api_key)


class RecipeGenerator:
    """Turns RecipeParams into a validated Recipe with an image attached."""

    def __init__(
        self,
        client: Any = None,
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        self._client = client
        self.model = model or settings.OPENAI_MODEL
        self.temperature = settings.OPENAI_TEMPERATURE if temperature is None else temperature
        self.max_tokens = max_tokens or settings.OPENAI_MAX_TOKENS

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = openai_client()
        return self._client

    async def complete(self, params: RecipeParams) -> str:
        chat = await self.client.chat.completions.create(
            model=self.model,
            messages=build_messages(params),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        if not chat or not chat.choices:
            raise NoContent()
        return chat.choices[0].message.content or ""

    async def generate(self, params: RecipeParams) -> Recipe:
        validate_params(params)
        text = await self.complete(params)
        recipe = parse_recipe_text(text)
        log.info("generated recipe %s (%r)", recipe.id, recipe.title)
        # 텍스트 실패는 위에서 예외로 끝나고, 이미지 실패는 대체 이미지로 끝난다
        return await attach_image(recipe, self.client)

    async def close(self) -> None:
        if isinstance(self._client, AsyncOpenAI):
            await self._client.close()
        self._client = None


_generator: Optional[RecipeGenerator] = None


def get_generator() -> RecipeGenerator:
    global _generator
    if _generator is None:
        _generator = RecipeGenerator()
    return _generator
