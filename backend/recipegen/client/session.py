# recipegen/client/session.py
# 클라이언트 상태 계층: 현재 레시피 / 저장 목록 / 요청 상태 플래그
# - UI는 이 객체의 속성(is_generating, is_loading, message ...)을 직접 본다
# - 모든 실패는 작업 경계에서 잡아서 상태(error_kind, message)로 바꾼다

from __future__ import annotations
import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import ValidationError

from recipegen.client.cache import RecipeListCache
from recipegen.errors import (
    ApiFailure,
    DuplicateRecipe,
    ErrorKind,
    MalformedResponse,
    MissingIdentifier,
    NotAuthenticated,
    RecipeError,
    ValidationFailed,
    error_from_kind,
)
from recipegen.models.recipe import Recipe, RecipeParams, validate_params

log = logging.getLogger(__name__)

RECIPES_PATH = "/api/recipes"
AUTH_PATH = "/api/auth"


def _error_from_response(resp: httpx.Response) -> RecipeError:
    """API 에러 응답 → 타입 있는 에러. 401은 항상 NotAuthenticated."""
    try:
        body = resp.json()
    except ValueError:
        body = None

    detail: Any = body.get("detail", body.get("message")) if isinstance(body, dict) else None
    if resp.status_code == 401 and not (isinstance(detail, dict) and detail.get("kind")):
        return NotAuthenticated(detail if isinstance(detail, str) else None)
    if isinstance(detail, dict):
        return error_from_kind(detail.get("kind"), detail.get("message"))
    if isinstance(detail, list):
        # FastAPI 422 검증 에러
        msgs = [str(d.get("msg")) for d in detail if isinstance(d, dict)]
        return ValidationFailed("; ".join(msgs) or None)
    return ApiFailure(detail if isinstance(detail, str) else f"Request failed ({resp.status_code})")


class RecipeSession:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        client: Optional[httpx.AsyncClient] = None,
        token: Optional[str] = None,
        user: Optional[Dict[str, Any]] = None,
        cache_ttl: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
        timeout: float = 120.0,
    ) -> None:
        self._http = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self._cache_ttl = cache_ttl
        self._clock = clock

        self.token = token
        self.user = user
        self.cache: Optional[RecipeListCache] = self._new_cache() if token else None

        self.recipes: List[Recipe] = []
        self.current_recipe: Optional[Recipe] = None

        self.is_loading = False
        self.is_generating = False
        self.is_error = False
        self.is_success = False
        self.message = ""
        self.error_kind: Optional[ErrorKind] = None

    # ------------------------------------------------------------------
    # 상태 헬퍼
    # ------------------------------------------------------------------

    def _new_cache(self) -> RecipeListCache:
        return RecipeListCache(ttl=self._cache_ttl, clock=self._clock)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    @property
    def is_busy(self) -> bool:
        return self.is_generating or self.is_loading

    def reset(self) -> None:
        self.is_loading = False
        self.is_generating = False
        self.is_error = False
        self.is_success = False
        self.message = ""
        self.error_kind = None

    def _start(self) -> None:
        self.is_error = False
        self.is_success = False
        self.message = ""
        self.error_kind = None

    def _fail(self, err: RecipeError) -> None:
        self.is_error = True
        self.is_success = False
        self.message = err.message
        self.error_kind = err.kind
        if err.kind is ErrorKind.NOT_AUTHENTICATED:
            # 재시도 없이 로그인으로 돌려보낸다
            self._drop_auth()
        log.info("session operation failed: %s (%s)", err.kind.value, err.message)

    def _succeed(self, message: str = "") -> None:
        self.is_success = True
        self.message = message

    def _require_auth(self) -> None:
        if not self.is_authenticated:
            raise NotAuthenticated()

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            resp = await self._http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.HTTPError as e:
            raise ApiFailure(str(e) or e.__class__.__name__) from e
        if resp.status_code >= 400:
            raise _error_from_response(resp)
        try:
            return resp.json()
        except ValueError as e:
            raise ApiFailure(f"Unexpected response from server ({resp.status_code})") from e

    @staticmethod
    def _load(data: Any) -> Recipe:
        # 서버가 준 레시피를 읽지 못하면 MalformedResponse 로 (작업 경계에서 상태로 바뀜)
        try:
            return Recipe.from_wire(data)
        except (ValidationError, TypeError) as e:
            raise MalformedResponse(f"Server returned an invalid recipe: {e}") from e

    # ------------------------------------------------------------------
    # 인증
    # ------------------------------------------------------------------

    def _set_auth(self, payload: Mapping[str, Any]) -> None:
        if not isinstance(payload, Mapping):
            raise ApiFailure("Unexpected response from server")
        token, user = payload.get("token"), payload.get("user")
        if not token or not isinstance(user, Mapping):
            raise ApiFailure("Unexpected response from server")
        self.token = token
        self.user = dict(user)
        # 세션 시작 시 캐시 생성
        self.cache = self._new_cache()
        self.recipes = []

    def _drop_auth(self) -> None:
        self.token = None
        self.user = None
        self.cache = None
        self.recipes = []
        self.current_recipe = None

    async def register(self, name: str, email: str, password: str) -> bool:
        self._start()
        self.is_loading = True
        try:
            payload = await self._request(
                "POST", f"{AUTH_PATH}/register",
                json={"name": name, "email": email, "password": password},
            )
            self._set_auth(payload)
            self._succeed()
            return True
        except RecipeError as e:
            self._fail(e)
            return False
        finally:
            self.is_loading = False

    async def login(self, email: str, password: str) -> bool:
        self._start()
        self.is_loading = True
        try:
            payload = await self._request(
                "POST", f"{AUTH_PATH}/login", json={"email": email, "password": password}
            )
            self._set_auth(payload)
            self._succeed()
            return True
        except RecipeError as e:
            self._fail(e)
            return False
        finally:
            self.is_loading = False

    def logout(self) -> None:
        # 캐시는 세션과 함께 폐기
        self._drop_auth()
        self.reset()

    # ------------------------------------------------------------------
    # 생성
    # ------------------------------------------------------------------

    async def generate(self, params: Union[RecipeParams, Mapping[str, Any]]) -> Optional[Recipe]:
        if self.is_generating:
            # 이미 요청 중이면 두 번째 요청은 보내지 않는다
            log.info("generation already in flight; ignoring request")
            return None

        self._start()
        self.is_generating = True
        try:
            if not isinstance(params, RecipeParams):
                params = RecipeParams.model_validate(dict(params or {}))
            validate_params(params)
            self._require_auth()
            data = await self._request("POST", f"{RECIPES_PATH}/generate", json=params.model_dump())
            recipe = self._load(data)
            self.current_recipe = recipe
            self._succeed()
            return recipe
        except RecipeError as e:
            self._fail(e)
            return None
        except ValueError as e:
            # pydantic 검증 실패 (ValidationError 는 ValueError 하위)
            self._fail(ValidationFailed(str(e)))
            return None
        finally:
            self.is_generating = False

    # ------------------------------------------------------------------
    # 현재 레시피
    # ------------------------------------------------------------------

    def set_current_recipe(self, recipe: Union[Recipe, Mapping[str, Any]]) -> Recipe:
        if not isinstance(recipe, Recipe):
            recipe = Recipe.from_wire(recipe)
        self.current_recipe = recipe
        return recipe

    def clear_current_recipe(self) -> None:
        self.current_recipe = None

    async def open_recipe(self, recipe_id: str) -> Optional[Recipe]:
        self._start()
        self.is_loading = True
        try:
            if not recipe_id:
                raise MissingIdentifier("Missing recipe ID")
            self._require_auth()
            data = await self._request("GET", f"{RECIPES_PATH}/{recipe_id}")
            recipe = self.set_current_recipe(self._load(data))
            self._succeed()
            return recipe
        except RecipeError as e:
            self._fail(e)
            return None
        finally:
            self.is_loading = False

    # ------------------------------------------------------------------
    # 저장 목록
    # ------------------------------------------------------------------

    async def fetch_recipes(self, force: bool = False) -> List[Recipe]:
        self._start()
        try:
            self._require_auth()
            if not force and self.cache is not None and self.cache.is_fresh(bool(self.recipes)):
                log.debug("serving %d recipes from cache", len(self.recipes))
                self._succeed()
                return self.recipes

            self.is_loading = True
            data = await self._request("GET", RECIPES_PATH)
            self.recipes = [self._load(d) for d in data or []]
            if self.cache is not None:
                self.cache.mark_fetched()
            self._succeed()
            return self.recipes
        except RecipeError as e:
            self._fail(e)
            return self.recipes
        finally:
            self.is_loading = False

    def find_duplicate(self, recipe: Recipe) -> Optional[Recipe]:
        key = recipe.dedupe_key
        return next((r for r in self.recipes if r.dedupe_key == key), None)

    async def save_recipe(self, recipe: Optional[Recipe] = None) -> Optional[Recipe]:
        self._start()
        self.is_loading = True
        try:
            recipe = recipe or self.current_recipe
            if recipe is None:
                raise ValidationFailed("No recipe to save")
            self._require_auth()
            if self.find_duplicate(recipe) is not None:
                raise DuplicateRecipe()

            data = await self._request("POST", RECIPES_PATH, json=recipe.to_wire())
            saved = self._load(data)
            self.recipes.insert(0, saved)
            if self.current_recipe is not None and self.current_recipe.dedupe_key == saved.dedupe_key:
                # 저장소 id로 현재 레시피도 갱신
                self.current_recipe = saved
            if self.cache is not None:
                self.cache.invalidate()
            self._succeed("Recipe saved successfully!")
            return saved
        except RecipeError as e:
            self._fail(e)
            return None
        finally:
            self.is_loading = False

    async def delete_recipe(self, target: Union[Recipe, str]) -> Optional[str]:
        self._start()
        self.is_loading = True
        try:
            recipe_id = target if isinstance(target, str) else target.id
            if not recipe_id:
                raise MissingIdentifier()
            self._require_auth()

            data = await self._request("DELETE", f"{RECIPES_PATH}/{recipe_id}")
            deleted = str((data or {}).get("id") or recipe_id)
            self._remove_local(deleted)
            if self.cache is not None:
                self.cache.invalidate()
            self._succeed("Recipe deleted successfully!")
            return deleted
        except RecipeError as e:
            self._fail(e)
            return None
        finally:
            self.is_loading = False

    def _remove_local(self, recipe_id: str) -> None:
        # id 하나로 정규화되어 있으므로 id 비교 = 클라이언트/저장소 id 비교
        for i, r in enumerate(self.recipes):
            if r.id == recipe_id:
                del self.recipes[i]
                return

    # ------------------------------------------------------------------

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "RecipeSession":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()
