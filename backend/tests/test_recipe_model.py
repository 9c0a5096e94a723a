"""Unit tests for the recipe model and identifier normalization."""

import pytest
from bson import ObjectId

from recipegen.db.models.recipe import RecipeIn
from recipegen.errors import ValidationFailed
from recipegen.models.recipe import Recipe, RecipeParams, normalize_ids, validate_params

from conftest import SAMPLE_RECIPE


@pytest.mark.parametrize(
    "ids",
    [
        {"id": "recipe_1"},
        {"_id": "65f0c0ffee0000000000abcd"},
        {},
        {"id": "65f0c0ffee0000000000abcd", "_id": "65f0c0ffee0000000000abcd"},
        {"id": "recipe_1", "_id": "65f0c0ffee0000000000abcd"},
    ],
)
def test_normalize_is_idempotent(ids) -> None:
    doc = dict(SAMPLE_RECIPE, **ids)
    once = normalize_ids(doc)
    assert normalize_ids(once) == once


def test_only_client_id_is_copied() -> None:
    out = normalize_ids({"id": "recipe_1"})
    assert out["id"] == out["_id"] == "recipe_1"


def test_only_store_id_is_copied() -> None:
    oid = ObjectId()
    out = normalize_ids({"_id": oid})
    assert out["id"] == out["_id"] == str(oid)


def test_store_id_wins_when_both_differ() -> None:
    out = normalize_ids({"id": "recipe_1", "_id": "abc"})
    assert out["id"] == out["_id"] == "abc"


def test_neither_id_passes_through() -> None:
    doc = {"title": "x"}
    assert normalize_ids(doc) == doc
    assert "id" not in normalize_ids(doc)


def test_normalize_does_not_mutate_input() -> None:
    doc = {"id": "recipe_1"}
    normalize_ids(doc)
    assert doc == {"id": "recipe_1"}


class TestRecipeWire:
    """Tests for the transport boundary."""

    def test_from_wire_accepts_either_field(self) -> None:
        assert Recipe.from_wire(dict(SAMPLE_RECIPE, _id="s1")).id == "s1"
        assert Recipe.from_wire(dict(SAMPLE_RECIPE, id="c1")).id == "c1"

    def test_to_wire_emits_both_fields(self) -> None:
        wire = Recipe.from_wire(dict(SAMPLE_RECIPE, id="c1")).to_wire()
        assert wire["id"] == wire["_id"] == "c1"

    def test_to_wire_without_id(self) -> None:
        wire = Recipe.model_validate(SAMPLE_RECIPE).to_wire()
        assert "id" not in wire and "_id" not in wire

    def test_dedupe_key_ignores_ids(self) -> None:
        a = Recipe.from_wire(dict(SAMPLE_RECIPE, id="a"))
        b = Recipe.from_wire(dict(SAMPLE_RECIPE, _id="b", servings=6))
        assert a.dedupe_key == b.dedupe_key

    def test_numeric_store_times_become_strings(self) -> None:
        recipe = Recipe.from_wire(dict(SAMPLE_RECIPE, prepTime=10.0, cookTime=25))
        assert recipe.prepTime == "10"
        assert recipe.cookTime == "25"


class TestRecipeIn:
    """Tests for the store-facing create payload."""

    def test_times_coerced_to_numbers(self) -> None:
        payload = RecipeIn.model_validate(dict(SAMPLE_RECIPE, prepTime="10 minutes", cookTime="15"))
        assert payload.prepTime == 10
        assert payload.cookTime == 15
        assert payload.servings == 2

    def test_ids_and_owner_are_dropped(self) -> None:
        payload = RecipeIn.model_validate(dict(SAMPLE_RECIPE, id="x", _id="y", user="someone"))
        dumped = payload.model_dump()
        assert "user" not in dumped and "id" not in dumped and "_id" not in dumped

    def test_missing_nutrition_rejected(self) -> None:
        data = dict(SAMPLE_RECIPE)
        data["nutrition"] = {"calories": 500, "protein": 20, "fat": 10}
        with pytest.raises(ValueError):
            RecipeIn.model_validate(data)

    def test_stored_recipe_is_readable_by_client(self) -> None:
        payload = RecipeIn.model_validate(dict(SAMPLE_RECIPE, title="  Fried Rice  "))
        assert payload.title == "Fried Rice"
        Recipe.from_wire(payload.model_dump())

    @pytest.mark.parametrize("blank", [None, ""])
    def test_blank_servings_defaults(self, blank) -> None:
        assert RecipeIn.model_validate(dict(SAMPLE_RECIPE, servings=blank)).servings == 1


class TestRecipeParams:
    """Tests for RecipeParams and the form check."""

    def test_validate_requires_main_ingredient(self) -> None:
        with pytest.raises(ValidationFailed):
            validate_params(RecipeParams(calories=500))

    def test_validate_passes(self) -> None:
        params = RecipeParams(mainIngredients=["chicken", "rice"], calories=600)
        assert validate_params(params) is params

    def test_negative_calories_rejected(self) -> None:
        with pytest.raises(ValueError):
            RecipeParams(calories=-1, mainIngredients=["x"])

    @pytest.mark.parametrize("field", ["calories", "servings"])
    def test_zero_rejected(self, field) -> None:
        with pytest.raises(ValueError):
            RecipeParams(mainIngredients=["x"], **{field: 0})
