"""Normalized response envelope returned by every API client call."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


class ErrorKind(str, Enum):
    """Why a call produced no usable result."""

    UNAUTHORIZED = "unauthorized"  # no active session, request never sent
    TRANSPORT = "transport"  # connect/timeout/protocol failure
    REMOTE = "remote"  # non-2xx response
    PRECONDITION = "precondition"  # e.g. user has no workspace
    VALIDATION = "validation"  # local input rejected before any call
    NOT_FOUND = "not_found"  # successful call, nothing to unwrap


class Pagination(BaseModel):
    """Page cursors and total count from a paginated list endpoint."""

    next: Optional[str] = None
    prev: Optional[str] = None
    count: int = 0

    @field_validator("next", "prev", mode="before")
    @classmethod
    def _cursor_as_text(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)

    @field_validator("count", mode="before")
    @classmethod
    def _count_or_zero(cls, v: Any) -> int:
        """Unparseable or negative counts read as 0."""
        try:
            count = int(v)
        except (TypeError, ValueError, OverflowError):
            return 0
        return max(count, 0)


class Envelope(BaseModel):
    """
    Uniform result of a request: ``data`` is always a list, even for
    single-entity fetches; callers unwrap index 0 via ``first()``.
    """

    success: bool
    status: int
    data: list[Any] = Field(default_factory=list)
    pagination: Optional[Pagination] = None
    error: Optional[ErrorKind] = None

    @property
    def count(self) -> int:
        """Total count reported by the page, 0 for non-paginated responses."""
        return self.pagination.count if self.pagination else 0

    def first(self) -> Optional[Any]:
        """Unwrap a singular resource; None on failure or empty payload."""
        if not self.success or not self.data:
            return None
        return self.data[0]
