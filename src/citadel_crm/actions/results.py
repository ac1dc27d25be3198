"""Result types returned by action functions, and envelope unwrapping."""

import logging
import math
from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from citadel_crm.models.envelope import Envelope, ErrorKind

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


@dataclass
class ActionResult(Generic[T]):
    """Single value or None; ``error`` says why it is None."""

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    @classmethod
    def fail(cls, error: ErrorKind, status: Optional[int] = None) -> "ActionResult[T]":
        return cls(value=None, error=error, status=status)


@dataclass
class PageResult(Generic[T]):
    """One page of a list endpoint. ``data`` is None on failure."""

    data: Optional[list[T]] = None
    total_count: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = 10
    error: Optional[ErrorKind] = None
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.data is not None

    @classmethod
    def fail(
        cls,
        error: ErrorKind,
        status: Optional[int] = None,
        *,
        page: int = 1,
        page_size: int = 10,
    ) -> "PageResult[T]":
        return cls(data=None, error=error, status=status, page=page, page_size=page_size)


def total_pages(total_count: int, page_size: int) -> int:
    """ceil(total_count / page_size); 0 for an empty set or a non-positive size."""
    if page_size <= 0 or total_count <= 0:
        return 0
    return math.ceil(total_count / page_size)


def _validate(model: Type[M], item: Any) -> M:
    if isinstance(item, model):
        return item
    return model.model_validate(item)


def _list_items(envelope: Envelope) -> list[Any]:
    """
    Items of a list endpoint. A page already holds them in ``data``; a bare
    JSON list arrives wrapped as the single element ``data[0]``.
    """
    if envelope.pagination is None and len(envelope.data) == 1 and isinstance(envelope.data[0], list):
        return envelope.data[0]
    return envelope.data


def unwrap_one(envelope: Envelope, model: Type[M], what: str) -> ActionResult[M]:
    """Unwrap ``data[0]`` of a singular fetch into ``model``."""
    if not envelope.success:
        logger.error("%s failed: status=%s", what, envelope.status)
        return ActionResult.fail(envelope.error or ErrorKind.REMOTE, envelope.status)
    item = envelope.first()
    if item is None:
        logger.error("%s: not found (status=%s)", what, envelope.status)
        return ActionResult.fail(ErrorKind.NOT_FOUND, envelope.status)
    try:
        return ActionResult(value=_validate(model, item), status=envelope.status)
    except ValidationError as e:
        logger.error("%s: unexpected payload: %s", what, e)
        return ActionResult.fail(ErrorKind.REMOTE, envelope.status)


def unwrap_many(envelope: Envelope, model: Type[M], what: str) -> ActionResult[list[M]]:
    """Unwrap a non-paginated list; an empty list counts as not found."""
    if not envelope.success:
        logger.error("%s failed: status=%s", what, envelope.status)
        return ActionResult.fail(envelope.error or ErrorKind.REMOTE, envelope.status)
    items = _list_items(envelope)
    if not items:
        logger.error("%s: nothing found (status=%s)", what, envelope.status)
        return ActionResult.fail(ErrorKind.NOT_FOUND, envelope.status)
    try:
        items = [_validate(model, item) for item in items]
    except ValidationError as e:
        logger.error("%s: unexpected payload: %s", what, e)
        return ActionResult.fail(ErrorKind.REMOTE, envelope.status)
    return ActionResult(value=items, status=envelope.status)


def unwrap_page(
    envelope: Envelope,
    model: Type[M],
    *,
    page: int,
    page_size: int,
    what: str,
) -> PageResult[M]:
    """Unwrap a paginated list; total pages derive from the envelope's count."""
    if not envelope.success:
        logger.error("%s failed: status=%s", what, envelope.status)
        return PageResult.fail(
            envelope.error or ErrorKind.REMOTE,
            envelope.status,
            page=page,
            page_size=page_size,
        )
    try:
        items = [_validate(model, item) for item in _list_items(envelope)]
    except ValidationError as e:
        logger.error("%s: unexpected payload: %s", what, e)
        return PageResult.fail(ErrorKind.REMOTE, envelope.status, page=page, page_size=page_size)
    count = envelope.count
    return PageResult(
        data=items,
        total_count=count,
        total_pages=total_pages(count, page_size),
        page=page,
        page_size=page_size,
        status=envelope.status,
    )


def unwrap_done(envelope: Envelope, what: str) -> ActionResult[bool]:
    """Result of a call whose payload does not matter (deletes)."""
    if not envelope.success:
        logger.error("%s failed: status=%s", what, envelope.status)
        return ActionResult.fail(envelope.error or ErrorKind.REMOTE, envelope.status)
    return ActionResult(value=True, status=envelope.status)
