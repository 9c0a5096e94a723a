# recipegen/models/recipe.py
# 생성/전송/저장 사이에서 공유하는 레시피 도메인 모델
# - 내부에서는 식별자 하나(id)만 들고 다닌다
# - 전송 경계에서만 id/_id 두 필드로 풀어준다 (to_wire / from_wire)

from __future__ import annotations
import re
import time
import uuid
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipegen.errors import ValidationFailed
from recipegen.models.tags import is_no_preference

_NUM_RE = re.compile(r"-?\d+(?:\.\d+)?")


def leading_number(v: Any) -> Any:
    """ "25g" / "15 minutes" 같은 값에서 첫 숫자만 뽑는다. 숫자가 없으면 원본 유지."""
    if isinstance(v, str):
        m = _NUM_RE.search(v)
        if m:
            return float(m.group(0))
    return v


def _split_list(v: Any) -> Any:
    # 폼에서 "chicken, rice" 처럼 문자열로 올 수 있다
    if v is None:
        return []
    if isinstance(v, str):
        v = v.split(",")
    if isinstance(v, (list, tuple, set)):
        out: List[str] = []
        for x in v:
            s = str(x).strip()
            if s and s not in out:
                out.append(s)
        return out
    return v


class RecipeParams(BaseModel):
    model_config = ConfigDict(extra="ignore")

    diet: List[str] = Field(default_factory=list)
    allergies: List[str] = Field(default_factory=list)
    calories: Optional[int] = Field(default=None, gt=0)
    mainIngredients: List[str] = Field(default_factory=list)
    servings: Optional[int] = Field(default=None, gt=0)

    @field_validator("diet", mode="before")
    @classmethod
    def _v_diet(cls, v):
        v = _split_list(v)
        if isinstance(v, list):
            v = [d for d in v if not is_no_preference(d)]
        return v

    @field_validator("allergies", "mainIngredients", mode="before")
    @classmethod
    def _v_lists(cls, v):
        return _split_list(v)


def validate_params(params: RecipeParams) -> RecipeParams:
    # 폼 단계 검사: 주재료는 최소 1개
    if not params.mainIngredients:
        raise ValidationFailed()
    return params


class Nutrition(BaseModel):
    calories: float
    protein: float
    fat: float
    carbohydrates: float
    sugar: Optional[float] = None
    cholesterol: Optional[float] = None
    fiber: Optional[float] = None

    @field_validator("*", mode="before")
    @classmethod
    def _v_numbers(cls, v):
        return leading_number(v)


class Recipe(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: str = Field(min_length=1)
    description: str = ""
    ingredients: List[str] = Field(min_length=1)
    instructions: List[str] = Field(min_length=1)
    nutrition: Nutrition
    prepTime: str = ""
    cookTime: str = ""
    servings: int = Field(default=1, ge=1)
    imageUrl: Optional[str] = None
    createdAt: Optional[datetime] = None
    user: Optional[str] = None  # 서버가 채우는 소유자. 클라이언트 입력으로는 받지 않음

    @field_validator("title", mode="before")
    @classmethod
    def _v_title(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("prepTime", "cookTime", mode="before")
    @classmethod
    def _v_minutes(cls, v):
        # 저장소에서는 숫자, 전송 중에는 문자열
        if v is None:
            return ""
        if isinstance(v, float) and v.is_integer():
            v = int(v)
        return str(v)

    @field_validator("servings", mode="before")
    @classmethod
    def _v_servings(cls, v):
        v = leading_number(v)
        if isinstance(v, float) and v.is_integer():
            return int(v)
        return v

    @field_validator("id", "user", mode="before")
    @classmethod
    def _v_ids(cls, v):
        # ObjectId 등은 문자열로
        return None if v is None or v == "" else str(v)

    @property
    def dedupe_key(self) -> Tuple[str, str]:
        return (self.title, self.description)

    def to_wire(self) -> Dict[str, Any]:
        """전송용 dict. id가 있으면 id/_id 둘 다 같은 값으로 내보낸다."""
        d = self.model_dump(mode="json", exclude_none=True)
        if self.id:
            d["_id"] = self.id
        return d

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> "Recipe":
        return cls.model_validate(normalize_ids(data))


def normalize_ids(data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    id(클라이언트 발급)와 _id(저장소 발급)를 같은 값으로 맞춘다.
    - 둘 다 없으면 그대로 (저장 전, id 스탬프 전 레시피)
    - 하나만 있으면 그 값을 양쪽에
    - 둘 다 있으면 _id 우선 (저장 이후에는 저장소 id가 기준)
    여러 번 적용해도 결과가 같다.
    """
    out = dict(data)
    cid, sid = out.get("id"), out.get("_id")
    if not cid and not sid:
        return out
    rid = str(sid) if sid else str(cid)
    out["id"] = rid
    out["_id"] = rid
    return out


def new_recipe_id() -> str:
    # 세션 안에서 충돌 안 나게 시간(ms) + 랜덤
    return f"recipe_{int(time.time() * 1000)}_{uuid.uuid4().hex[:6]}"
