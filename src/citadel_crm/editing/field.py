"""Inline edit state machine shared by every editable field.

Viewing -> Editing (begin_edit) -> Submitting (submit) -> Viewing
Editing -> Viewing (cancel: draft resets to the last confirmed value)

A submit that fails local parsing never leaves Editing and never calls the
server. Any submit that reaches the server ends in Viewing; on success the
confirmed value is whatever the server echoed back, on failure it is left
untouched. There is no retry.
"""

import logging
import math
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from citadel_crm.actions.results import ActionResult

from .notifications import LoggingNotifier, Notifier

logger = logging.getLogger(__name__)

T = TypeVar("T")

UpdateFn = Callable[[dict], ActionResult]


class FieldState(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"
    SUBMITTING = "submitting"


class InvalidTransition(RuntimeError):
    """Raised when an edit operation is called from the wrong state."""


def format_value(value: Any) -> str:
    """Text shown in the edit input for a confirmed value."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_text(draft: Any) -> str:
    return "" if draft is None else str(draft)


def parse_text(text: Any) -> str:
    return _as_text(text).strip()


def parse_required_text(text: Any) -> str:
    value = _as_text(text).strip()
    if not value:
        raise ValueError("value is required")
    return value


def parse_float(text: Any) -> float:
    """Accepts a decimal comma and thousands spaces ("1 500,5"); rejects nan and inf."""
    cleaned = _as_text(text).strip().replace(" ", "").replace("\u00a0", "").replace(",", ".")
    if not cleaned:
        raise ValueError("value is required")
    value = float(cleaned)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {cleaned}")
    return value


def parse_int(text: Any) -> int:
    cleaned = _as_text(text).strip().replace(" ", "").replace("\u00a0", "")
    if not cleaned:
        raise ValueError("value is required")
    return int(cleaned)


class EditableField(Generic[T]):
    """
    One editable attribute of an entity.

    Args:
        name: Attribute name on the entity and key in the PATCH body
        value: Last server-confirmed value
        label: Capitalized name used at the start of messages ("ARR")
        noun: Name used mid-sentence ("organisasjonsnummer")
        parse: Turns the draft text into the value to send; raises ValueError
        notifier: Where success/failure toasts go
    """

    def __init__(
        self,
        name: str,
        value: Optional[T],
        *,
        label: str,
        noun: Optional[str] = None,
        parse: Callable[[Any], T] = parse_text,
        notifier: Optional[Notifier] = None,
    ):
        self.name = name
        self.value = value
        self.label = label
        self.noun = noun or label
        self._parse = parse
        self._notifier = notifier or LoggingNotifier()
        self.state = FieldState.VIEWING
        self.draft = self._draft_for(value)

    def __repr__(self) -> str:
        return f"<EditableField {self.name}={self.value!r} state={self.state.value}>"

    @property
    def is_open(self) -> bool:
        """Popover visible (editing or waiting for the server)."""
        return self.state is not FieldState.VIEWING

    def _draft_for(self, value: Optional[T]) -> Any:
        return format_value(value)

    def to_changes(self, parsed: T) -> dict:
        """PATCH body for a parsed draft."""
        return {self.name: parsed}

    def from_entity(self, entity: Any) -> Optional[T]:
        """Confirmed value read back from the server's echo."""
        return getattr(entity, self.name, None)

    def begin_edit(self) -> None:
        if self.state is not FieldState.VIEWING:
            raise InvalidTransition(f"{self.name}: cannot edit while {self.state.value}")
        self.draft = self._draft_for(self.value)
        self.state = FieldState.EDITING

    def set_draft(self, draft: Any) -> None:
        if self.state is not FieldState.EDITING:
            raise InvalidTransition(f"{self.name}: not editing")
        self.draft = draft

    def cancel(self) -> None:
        """Discard unsaved input and close."""
        if self.state is FieldState.SUBMITTING:
            raise InvalidTransition(f"{self.name}: cannot cancel while submitting")
        self.draft = self._draft_for(self.value)
        self.state = FieldState.VIEWING

    def validation_message(self, error: ValueError) -> str:
        return f"Ugyldig verdi for {self.noun}"

    def submit(self, update: UpdateFn) -> bool:
        """
        Send the draft through ``update`` and reconcile with its result.
        Returns True when the server confirmed the change.
        """
        if self.state is not FieldState.EDITING:
            raise InvalidTransition(f"{self.name}: nothing to submit")
        try:
            parsed = self._parse(self.draft)
        except ValueError as e:
            logger.debug("%s: rejected draft %r: %s", self.name, self.draft, e)
            self._notifier.error(self.validation_message(e))
            return False

        self.state = FieldState.SUBMITTING
        try:
            result = update(self.to_changes(parsed))
        finally:
            self.state = FieldState.VIEWING

        if result.ok:
            self.value = self.from_entity(result.value)
            self.draft = self._draft_for(self.value)
            self._notifier.success(f"{self.label} oppdatert")
            return True

        logger.error("Error updating %s: %s", self.name, result.error)
        self.draft = self._draft_for(self.value)
        self._notifier.error(f"Kunne ikke oppdatere {self.noun}")
        return False
