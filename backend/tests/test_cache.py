"""Unit tests for the saved-recipe list cache."""

from recipegen.client.cache import RecipeListCache

from conftest import FakeClock


def test_fresh_within_window() -> None:
    clock = FakeClock()
    cache = RecipeListCache(ttl=300, clock=clock)
    cache.mark_fetched()
    clock.advance(4 * 60 + 59)
    assert cache.is_fresh(has_items=True)


def test_stale_after_window() -> None:
    clock = FakeClock()
    cache = RecipeListCache(ttl=300, clock=clock)
    cache.mark_fetched()
    clock.advance(5 * 60 + 1)
    assert not cache.is_fresh(has_items=True)


def test_empty_collection_never_fresh() -> None:
    cache = RecipeListCache(ttl=300, clock=FakeClock())
    cache.mark_fetched()
    assert not cache.is_fresh(has_items=False)


def test_never_fetched_is_stale() -> None:
    assert not RecipeListCache(ttl=300, clock=FakeClock()).is_fresh(has_items=True)


def test_invalidate() -> None:
    cache = RecipeListCache(ttl=300, clock=FakeClock())
    cache.mark_fetched()
    cache.invalidate()
    assert not cache.is_fresh(has_items=True)


def test_default_ttl_is_five_minutes() -> None:
    assert RecipeListCache().ttl == 300
