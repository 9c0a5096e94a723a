"""Shared fixtures: in-memory Mongo stand-in, stubbed OpenAI client, ASGI-backed session."""

import json
from types import SimpleNamespace
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from bson import ObjectId
from pymongo.errors import DuplicateKeyError

from recipegen.client.session import RecipeSession
from recipegen.db.init import get_db
from recipegen.main import app
from recipegen.services.generator import RecipeGenerator, get_generator


SAMPLE_RECIPE: Dict[str, Any] = {
    "title": "Chicken Fried Rice",
    "description": "Quick weeknight fried rice with chicken and vegetables",
    "ingredients": ["2 cups cooked rice", "200g chicken breast, diced", "1 cup mixed vegetables"],
    "instructions": ["Cook the chicken.", "Add the vegetables.", "Stir in the rice and season."],
    "nutrition": {"calories": 580, "protein": 38, "fat": 14, "carbohydrates": 70},
    "prepTime": "10",
    "cookTime": "15",
    "servings": 2,
}


def model_text(payload: Optional[Dict[str, Any]] = None) -> str:
    body = json.dumps(payload if payload is not None else SAMPLE_RECIPE, indent=2)
    return f"Here is your recipe:\n```json\n{body}\n```\nEnjoy!"


class _Cursor:
    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key: str, direction: int = 1) -> "_Cursor":
        self._docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    def limit(self, n: int) -> "_Cursor":
        self._docs = self._docs[:n]
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        return list(self._docs if length is None else self._docs[:length])


class FakeCollection:
    """Just enough of a motor collection for the repository code (top-level equality filters)."""

    def __init__(self, unique: Optional[str] = None) -> None:
        self.docs: List[Dict[str, Any]] = []
        self.unique = unique

    def _match(self, doc: Dict[str, Any], flt: Dict[str, Any]) -> bool:
        return all(doc.get(k) == v for k, v in (flt or {}).items())

    def find(self, flt: Optional[Dict[str, Any]] = None) -> _Cursor:
        return _Cursor([dict(d) for d in self.docs if self._match(d, flt or {})])

    async def find_one(self, flt: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        for d in self.docs:
            if self._match(d, flt):
                return dict(d)
        return None

    async def insert_one(self, doc: Dict[str, Any]) -> SimpleNamespace:
        if self.unique and any(d.get(self.unique) == doc.get(self.unique) for d in self.docs):
            raise DuplicateKeyError(f"duplicate {self.unique}")
        stored = dict(doc)
        stored.setdefault("_id", ObjectId())
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=stored["_id"])

    async def update_one(self, flt: Dict[str, Any], update: Dict[str, Any]) -> SimpleNamespace:
        for d in self.docs:
            if self._match(d, flt):
                d.update(update.get("$set", {}))
                return SimpleNamespace(modified_count=1)
        return SimpleNamespace(modified_count=0)

    async def delete_one(self, flt: Dict[str, Any]) -> SimpleNamespace:
        for i, d in enumerate(self.docs):
            if self._match(d, flt):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def create_index(self, *args: Any, **kwargs: Any) -> str:
        return "ok"


class FakeDB:
    def __init__(self) -> None:
        self.collections = {"users": FakeCollection(unique="email"), "recipes": FakeCollection()}

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name: str) -> Dict[str, Any]:
        return {"ok": 1}


def make_openai(text: Optional[str] = None, image_url: Optional[str] = "https://images.example/generated.png",
                image_error: Optional[Exception] = None) -> MagicMock:
    client = MagicMock()
    content = model_text() if text is None else text
    client.chat.completions.create = AsyncMock(
        return_value=SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])
    )
    if image_error is not None:
        client.images.generate = AsyncMock(side_effect=image_error)
    else:
        data = [SimpleNamespace(url=image_url)] if image_url else []
        client.images.generate = AsyncMock(return_value=SimpleNamespace(data=data))
    return client


@pytest.fixture
def fake_db() -> FakeDB:
    return FakeDB()


@pytest.fixture
def openai_stub() -> MagicMock:
    return make_openai()


@pytest.fixture
def api(fake_db, openai_stub):
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_generator] = lambda: RecipeGenerator(client=openai_stub)
    yield app
    app.dependency_overrides.clear()


class RequestCounter:
    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> None:
        self.requests.append(request)

    def count(self, method: Optional[str] = None) -> int:
        return sum(1 for r in self.requests if method is None or r.method == method)


@pytest.fixture
def counter() -> RequestCounter:
    return RequestCounter()


@pytest.fixture
def http_client(api, counter):
    return httpx.AsyncClient(
        transport=httpx.ASGITransport(app=api),
        base_url="http://test",
        event_hooks={"request": [counter]},
    )


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest_asyncio.fixture
async def session(http_client, clock):
    s = RecipeSession(client=http_client, clock=clock)
    ok = await s.register("Test Cook", "cook@example.com", "secret123")
    assert ok, s.message
    yield s
    await s.close()
