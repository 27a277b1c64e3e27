"""
Input validation for user payloads.

Handlers run the matching ``validate_*`` function on raw client input
before calling the store.  Each function returns a
:class:`ValidationResult`: either ``ok`` with the parsed ``value`` or
not ok with a list of human readable ``errors`` such as
``"email: Value error, Invalid email"``.  The field rules themselves
are declared on the pydantic models in ``schemas.user``.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Iterable, List, Mapping, Optional, TypeVar

from pydantic import ValidationError

from ..schemas.user import UserCreate, UserUpdate

T = TypeVar("T")


@dataclass
class ValidationResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    errors: List[str] = field(default_factory=list)

    @classmethod
    def valid(cls, value: T) -> "ValidationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def invalid(cls, errors: Iterable[str]) -> "ValidationResult[T]":
        return cls(ok=False, errors=list(errors))


def describe_errors(errors: Iterable[Mapping[str, Any]]) -> List[str]:
    """Turn pydantic/FastAPI error dicts into ``"<location>: <message>"`` strings.

    The ``body``/``query`` prefix FastAPI adds to locations is dropped;
    errors about the payload as a whole are reported under ``body``.
    """
    reasons = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in {"body", "query", "path"}:
            location = location[1:]
        reasons.append(f"{'.'.join(location) or 'body'}: {error.get('msg', 'Invalid value')}")
    return reasons


def validate_user_create(payload: Any) -> ValidationResult[UserCreate]:
    """Validate the body of a create request."""
    try:
        return ValidationResult.valid(UserCreate.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult.invalid(describe_errors(exc.errors()))


def validate_user_update(payload: Any) -> ValidationResult[UserUpdate]:
    """Validate the body of an update request.

    Every field is optional, so ``{}`` is valid.  Explicit ``null``
    values are rejected.
    """
    try:
        return ValidationResult.valid(UserUpdate.model_validate(payload))
    except ValidationError as exc:
        return ValidationResult.invalid(describe_errors(exc.errors()))


def validate_search_query(query: Optional[str]) -> ValidationResult[str]:
    if query is None or query == "":
        return ValidationResult.invalid(["q: Search query is required"])
    return ValidationResult.valid(query)
