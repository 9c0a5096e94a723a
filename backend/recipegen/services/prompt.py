# recipegen/services/prompt.py
# RecipeParams → LLM 프롬프트 문자열 (순수 문자열 조립, 예외 없음)

from __future__ import annotations
from typing import List

from recipegen.models.recipe import RecipeParams
from recipegen.models.tags import diet_guidance

SYSTEM_PROMPT = (
    "You are a professional chef and nutritionist who creates delicious, healthy recipes."
)

INSTRUCTION = (
    "Generate a detailed recipe with the following structure:\n"
    "1. Title\n"
    "2. Brief description\n"
    "3. List of ingredients with measurements\n"
    "4. Step-by-step cooking instructions\n"
    "5. Nutritional information (calories, protein, fat, carbohydrates)\n"
    "6. Preparation time\n"
    "7. Cooking time\n"
    "8. Number of servings\n"
)

# 응답 JSON 레이아웃 (파서가 기대하는 필드와 같다)
JSON_LAYOUT = """
Format the response as JSON with the following structure:
{
  "title": "Recipe Title",
  "description": "Brief description of the dish",
  "ingredients": ["Ingredient 1 with measurement", "Ingredient 2 with measurement", ...],
  "instructions": ["Step 1", "Step 2", ...],
  "nutrition": {
    "calories": number,
    "protein": number (in grams),
    "fat": number (in grams),
    "carbohydrates": number (in grams)
  },
  "prepTime": "time in minutes",
  "cookTime": "time in minutes",
  "servings": number
}"""


def _join(values: List[str]) -> str:
    return ", ".join(str(v) for v in values)


def build_recipe_prompt(params: RecipeParams) -> str:
    lines: List[str] = [INSTRUCTION]

    if params.diet:
        lines.append(f"Diet preference: {_join(params.diet)}")
    if params.allergies:
        lines.append(f"Allergies (avoid these ingredients): {_join(params.allergies)}")
    if params.calories:
        lines.append(f"Target calories per serving: approximately {params.calories} calories")
    if params.mainIngredients:
        lines.append(f"Main ingredients to include: {_join(params.mainIngredients)}")
    if params.servings:
        lines.append(f"Number of servings: {params.servings}")

    guidance = diet_guidance(params.diet)
    if guidance:
        lines.append("")
        lines.extend(guidance)

    return "\n".join(lines) + "\n" + JSON_LAYOUT


def build_messages(params: RecipeParams) -> List[dict]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_recipe_prompt(params)},
    ]
