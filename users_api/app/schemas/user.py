"""
Pydantic models for user data.

``UserCreate`` and ``UserUpdate`` describe what clients may send;
``User`` is the stored record returned by the API.  Identifiers and
timestamps are assigned by the store and cannot be supplied by
clients: unknown keys in the input are ignored.
"""

import re
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator

from .envelope import CamelModel

# Single "@", no whitespace, at least one dot in the domain part.
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

NAME_MAX_LENGTH = 100
AGE_MIN = 0
AGE_MAX = 150


class UserCreate(BaseModel):
    """Schema for creating a user."""

    name: StrictStr = Field(..., min_length=1, max_length=NAME_MAX_LENGTH, examples=["John Doe"])
    email: StrictStr = Field(..., examples=["john@example.com"])
    age: Optional[StrictInt] = Field(None, ge=AGE_MIN, le=AGE_MAX, examples=[30])

    @field_validator("name", "email", "age", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        # Fields may be omitted but never sent as an explicit null.
        if value is None:
            raise ValueError("must not be null")
        return value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        if not EMAIL_RE.match(value):
            raise ValueError("Invalid email")
        return value


class UserUpdate(UserCreate):
    """Schema for partially updating a user.

    All fields are optional; only the ones present in the request are
    written to the record.
    """

    name: Optional[StrictStr] = Field(None, min_length=1, max_length=NAME_MAX_LENGTH)
    email: Optional[StrictStr] = None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields explicitly provided by the client."""
        return self.model_dump(exclude_unset=True)


class User(CamelModel):
    """A stored user record."""

    id: str
    name: str
    email: str
    age: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class UserStats(CamelModel):
    """Aggregate statistics over the whole collection."""

    total_users: int
    average_age: Optional[float] = None
    age_groups: Dict[str, int] = Field(default_factory=dict)
