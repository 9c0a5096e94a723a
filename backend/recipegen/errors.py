# recipegen/errors.py
# 실패 종류를 발생 지점에서 타입으로 만든다 (메시지 문자열로 나중에 추론하지 않음)

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    VALIDATION_FAILED = "ValidationFailed"
    NOT_AUTHENTICATED = "NotAuthenticated"
    NO_CONTENT = "NoContent"
    MALFORMED_RESPONSE = "MalformedResponse"
    DUPLICATE_RECIPE = "DuplicateRecipe"
    NOT_OWNER = "NotOwner"
    NOT_FOUND = "NotFound"
    MISSING_IDENTIFIER = "MissingIdentifier"
    GENERATION_NOT_READY = "GenerationNotReady"
    API_FAILURE = "ApiFailure"


class RecipeError(Exception):
    """Base failure; every subclass carries a fixed ``kind``."""

    kind: ErrorKind = ErrorKind.API_FAILURE
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_detail(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}


class ValidationFailed(RecipeError):
    kind = ErrorKind.VALIDATION_FAILED
    default_message = "Please enter at least one main ingredient"


class NotAuthenticated(RecipeError):
    kind = ErrorKind.NOT_AUTHENTICATED
    default_message = "User not authenticated"


class NoContent(RecipeError):
    kind = ErrorKind.NO_CONTENT
    default_message = "No content returned from the model"


class MalformedResponse(RecipeError):
    kind = ErrorKind.MALFORMED_RESPONSE
    default_message = "Could not parse JSON from the model response"


class DuplicateRecipe(RecipeError):
    kind = ErrorKind.DUPLICATE_RECIPE
    default_message = "Recipe already exists in your collection"


class NotOwner(RecipeError):
    kind = ErrorKind.NOT_OWNER
    default_message = "Not authorized to access this recipe"


class NotFound(RecipeError):
    kind = ErrorKind.NOT_FOUND
    default_message = "Recipe not found"


class MissingIdentifier(RecipeError):
    kind = ErrorKind.MISSING_IDENTIFIER
    default_message = "Cannot delete recipe: Missing recipe ID"


class GenerationNotReady(RecipeError):
    # OpenAI 키/패키지 미준비
    kind = ErrorKind.GENERATION_NOT_READY
    default_message = "Recipe generation is not configured"


class ApiFailure(RecipeError):
    kind = ErrorKind.API_FAILURE


_BY_KIND = {
    cls.kind: cls
    for cls in (
        ValidationFailed, NotAuthenticated, NoContent, MalformedResponse,
        DuplicateRecipe, NotOwner, NotFound, MissingIdentifier,
        GenerationNotReady, ApiFailure,
    )
}


def error_from_kind(kind: Optional[str], message: Optional[str] = None) -> RecipeError:
    """Rebuild a typed error from a ``{kind, message}`` payload sent by the API."""
    try:
        cls = _BY_KIND[ErrorKind(kind)]
    except (ValueError, KeyError):
        cls = ApiFailure
    return cls(message)
