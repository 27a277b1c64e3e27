"""
User endpoints.

CRUD operations, paginated listing, search and statistics over the
application's :class:`UserStore`.  Request bodies are checked with the
functions from ``services.validation`` before the store is called;
``page``/``limit`` constraints are declared on the query parameters.
Every response is wrapped in an :class:`ApiResponse` envelope.

The static paths ``/search`` and ``/stats`` are declared before
``/{user_id}`` so they are not captured as ids.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from ...core.dependencies import get_user_store
from ...core.errors import user_not_found, validation_failed
from ...schemas.envelope import ApiResponse, Page, build_pagination
from ...schemas.user import User, UserStats
from ...services.user_store import UserStore
from ...services.validation import (
    validate_search_query,
    validate_user_create,
    validate_user_update,
)

router = APIRouter()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@router.get("", response_model=ApiResponse[Page[User]], response_model_exclude_unset=True)
async def list_users(
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    store: UserStore = Depends(get_user_store),
) -> ApiResponse[Page[User]]:
    """Return one page of users in creation order.

    Pages past the end are empty rather than an error.
    """
    items, total = store.list_users(page, limit)
    return ApiResponse(
        success=True,
        message="Users retrieved successfully",
        data=Page(items=items, pagination=build_pagination(page, limit, total)),
    )


@router.get("/search", response_model=ApiResponse[Page[User]], response_model_exclude_unset=True)
async def search_users(
    q: Optional[str] = Query(None, description="Case-insensitive text matched against name and email"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
    store: UserStore = Depends(get_user_store),
) -> ApiResponse[Page[User]]:
    """Search users by name or email.  ``q`` is required."""
    result = validate_search_query(q)
    if not result.ok:
        raise validation_failed(result.errors)
    items, total = store.search_users(result.value, page, limit)
    return ApiResponse(
        success=True,
        message="Search completed successfully",
        data=Page(items=items, pagination=build_pagination(page, limit, total)),
    )


@router.get("/stats", response_model=ApiResponse[UserStats], response_model_exclude_unset=True)
async def get_user_stats(store: UserStore = Depends(get_user_store)) -> ApiResponse[UserStats]:
    return ApiResponse(
        success=True,
        message="User statistics retrieved successfully",
        data=store.get_stats(),
    )


@router.get("/{user_id}", response_model=ApiResponse[User], response_model_exclude_unset=True)
async def get_user(user_id: str, store: UserStore = Depends(get_user_store)) -> ApiResponse[User]:
    user = store.get_user(user_id)
    if user is None:
        raise user_not_found(user_id)
    return ApiResponse(success=True, message="User retrieved successfully", data=user)


@router.post(
    "",
    response_model=ApiResponse[User],
    response_model_exclude_unset=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    payload: Any = Body(None),
    store: UserStore = Depends(get_user_store),
) -> ApiResponse[User]:
    """Create a user from ``name``, ``email`` and optional ``age``."""
    result = validate_user_create(payload)
    if not result.ok:
        raise validation_failed(result.errors)
    user = store.create_user(result.value)
    return ApiResponse(success=True, message="User created successfully", data=user)


@router.put("/{user_id}", response_model=ApiResponse[User], response_model_exclude_unset=True)
async def update_user(
    user_id: str,
    payload: Any = Body(None),
    store: UserStore = Depends(get_user_store),
) -> ApiResponse[User]:
    """Overwrite the fields present in the body.

    The body is validated before the id is looked up, so an invalid
    body for an unknown id yields 400 rather than 404.
    """
    result = validate_user_update(payload)
    if not result.ok:
        raise validation_failed(result.errors)
    user = store.update_user(user_id, result.value)
    if user is None:
        raise user_not_found(user_id)
    return ApiResponse(success=True, message="User updated successfully", data=user)


@router.delete("/{user_id}", response_model=ApiResponse[None], response_model_exclude_unset=True)
async def delete_user(user_id: str, store: UserStore = Depends(get_user_store)) -> ApiResponse[None]:
    if not store.delete_user(user_id):
        raise user_not_found(user_id)
    return ApiResponse(success=True, message="User deleted successfully")
