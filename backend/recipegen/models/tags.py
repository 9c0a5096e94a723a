# recipegen/models/tags.py
# 식단/알레르기 선택지 + 식단별 프롬프트 가이드 + 대체 이미지 카테고리 표
from typing import Dict, List, Optional, Tuple
import re

# === 폼 선택지 ================================================================
DIET_OPTIONS: List[str] = [
    "No Preference",
    "Vegetarian",
    "Vegan",
    "Pescatarian",
    "Keto",
    "Paleo",
    "Low-Carb",
    "Low-Fat",
    "Mediterranean",
    "Gluten-Free",
    "Diabetic-Friendly",
    "Low-Cholesterol",
    "Heart-Healthy",
    "Low-Sodium",
    "High-Protein",
]

ALLERGY_OPTIONS: List[str] = [
    "Dairy",
    "Eggs",
    "Peanuts",
    "Tree Nuts",
    "Soy",
    "Wheat",
    "Fish",
    "Shellfish",
    "Sesame",
]

# "선호 없음"으로 취급하는 값
NO_PREFERENCE = {"", "none", "no preference", "no-preference", "any"}

# === 식단 태그 정규화 ==========================================================
# 표시 라벨/동의어 → 내부 태그
_DIET_SYNONYMS: Dict[str, str] = {
    "diabetic-friendly": "diabetic",
    "diabetic": "diabetic",
    "diabetes": "diabetic",
    "diabetes-friendly": "diabetic",
    "low-sugar": "diabetic",
    "low-cholesterol": "low-cholesterol",
    "cholesterol": "low-cholesterol",
    "heart-healthy": "heart-healthy",
    "low-sodium": "low-sodium",
    "high-protein": "high-protein",
    "keto": "keto",
    "ketogenic": "keto",
}

# 인식된 태그에만 붙는 가이드 문장 (순서 고정)
DIET_GUIDANCE: List[Tuple[str, str]] = [
    ("diabetic",
     "Keep the glycemic load low: avoid added sugars and refined flour, prefer whole grains "
     "and fiber-rich vegetables, and report sugar (in grams) in the nutrition object."),
    ("low-cholesterol",
     "Limit saturated fat and dietary cholesterol: prefer lean proteins, plant oils and "
     "legumes, and report cholesterol (in milligrams) in the nutrition object."),
    ("heart-healthy",
     "Favor unsaturated fats, whole grains and vegetables, and keep sodium moderate."),
    ("low-sodium",
     "Keep sodium low: no added salt beyond a pinch, avoid cured or processed ingredients."),
    ("high-protein",
     "Make protein the main macronutrient, at least 30 grams per serving."),
    ("keto",
     "Keep net carbohydrates under 10 grams per serving."),
]


def _slug(label: str) -> str:
    return re.sub(r"[\s_]+", "-", (label or "").strip().lower())


def is_no_preference(label: str) -> bool:
    return _slug(label) in NO_PREFERENCE or (label or "").strip().lower() in NO_PREFERENCE


def canonicalize_diet(label: str) -> Optional[str]:
    """식단 라벨을 가이드용 내부 태그로 변환. 가이드가 없는 라벨이면 None."""
    return _DIET_SYNONYMS.get(_slug(label))


def diet_guidance(diets: List[str]) -> List[str]:
    tags = {canonicalize_diet(d) for d in diets or []}
    return [text for tag, text in DIET_GUIDANCE if tag in tags]


# === 대체 이미지 =============================================================
# 순서가 곧 우선순위: 제목에서 먼저 걸리는 카테고리가 이긴다
_UNSPLASH = "https://images.unsplash.com/{}?auto=format&fit=crop&w=1024&q=80"

IMAGE_CATEGORIES: List[Tuple[str, str]] = [
    ("breakfast", _UNSPLASH.format("photo-1533089860892-a7c6f0a88666")),
    ("lunch", _UNSPLASH.format("photo-1547496502-affa22d38842")),
    ("dinner", _UNSPLASH.format("photo-1559847844-5315695dadae")),
    ("dessert", _UNSPLASH.format("photo-1551024601-bec78aea704b")),
    ("salad", _UNSPLASH.format("photo-1512621776951-a57141f2eefd")),
    ("soup", _UNSPLASH.format("photo-1547592166-23ac45744acd")),
    ("pasta", _UNSPLASH.format("photo-1551183053-bf91a1d81141")),
    ("meat", _UNSPLASH.format("photo-1529692236671-f1f6cf9683ba")),
    ("fish", _UNSPLASH.format("photo-1467003909585-2f8a72700288")),
    ("vegetables", _UNSPLASH.format("photo-1540420773420-3366772f4999")),
    ("chicken", _UNSPLASH.format("photo-1598103442097-8b74394b95c6")),
    ("beef", _UNSPLASH.format("photo-1546964124-0cce460f38ef")),
]

DEFAULT_IMAGE = _UNSPLASH.format("photo-1498837167922-ddd27525d352")
