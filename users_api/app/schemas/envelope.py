"""
Response envelope shared by every endpoint.

Successful and failed responses have the same outer shape::

    {"success": true, "message": "...", "data": {...}}
    {"success": false, "message": "...", "error": "..."}

``data`` and ``error`` are omitted when unset.  Routes returning a
collection wrap it in :class:`Page`, which adds a ``pagination`` block.
"""

import math
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(CamelModel, Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    error: Optional[str] = None


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class Page(CamelModel, Generic[T]):
    items: List[T]
    pagination: Pagination


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    """Return the pagination block for ``total`` items split in pages of ``limit``."""
    total_pages = math.ceil(total / limit) if limit > 0 else 0
    return Pagination(page=page, limit=limit, total=total, total_pages=total_pages)
