# recipegen/db/models/recipe.py
# 저장소(recipes 컬렉션) 쪽 레시피 스키마
# - id/_id/user/createdAt 는 클라이언트가 보내도 무시 (서버가 채움)
# - prepTime/cookTime/servings 는 숫자로 저장
# - 저장되는 문서는 항상 Recipe.from_wire 로 다시 읽을 수 있어야 한다 (제목/재료/조리순서 필수)
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipegen.models.recipe import Nutrition, leading_number


def _strip(v):
    return v.strip() if isinstance(v, str) else v


def _to_number(v):
    v = leading_number(v)
    if isinstance(v, float) and v.is_integer():
        return int(v)
    return v


class RecipeIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1)
    description: str = ""
    ingredients: List[str] = Field(min_length=1)
    instructions: List[str] = Field(min_length=1)
    prepTime: float = 0
    cookTime: float = 0
    servings: int = Field(default=1, ge=1)
    nutrition: Nutrition
    imageUrl: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _v_title(cls, v):
        return _strip(v)

    @field_validator("prepTime", "cookTime", mode="before")
    @classmethod
    def _v_minutes(cls, v):
        if v is None or v == "":
            return 0
        return _to_number(v)

    @field_validator("servings", mode="before")
    @classmethod
    def _v_servings(cls, v):
        # 비어 있으면 기본값 1인분
        if v is None or v == "":
            return 1
        return _to_number(v)


class RecipeUpdate(BaseModel):
    # PUT: 보낸 필드만 갱신
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    ingredients: Optional[List[str]] = Field(default=None, min_length=1)
    instructions: Optional[List[str]] = Field(default=None, min_length=1)
    prepTime: Optional[float] = None
    cookTime: Optional[float] = None
    servings: Optional[int] = Field(default=None, ge=1)
    nutrition: Optional[Nutrition] = None
    imageUrl: Optional[str] = None

    @field_validator("title", mode="before")
    @classmethod
    def _v_title(cls, v):
        return _strip(v)

    @field_validator("prepTime", "cookTime", "servings", mode="before")
    @classmethod
    def _v_numbers(cls, v):
        return _to_number(v)
