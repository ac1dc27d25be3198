"""Response normalization: raw bodies and failures into an Envelope."""

import json
from typing import Any

from citadel_crm.models.envelope import Envelope, ErrorKind, Pagination

# Marks a response without a body (e.g. 204 after a delete)
NO_BODY = object()

# Max chars of a failed response body kept in diagnostics
BODY_PREVIEW_CHARS = 100


def parse_body(content: bytes) -> Any:
    """Decode a response body: JSON when possible, else text; NO_BODY when empty."""
    if not content or not content.strip():
        return NO_BODY
    try:
        return json.loads(content)
    except (ValueError, UnicodeDecodeError):
        return content.decode("utf-8", errors="replace")


def is_page(body: Any) -> bool:
    """A body is a page when it is a mapping exposing ``results``."""
    return isinstance(body, dict) and "results" in body


def normalize_payload(status: int, body: Any) -> Envelope:
    """
    Build the success envelope for a 2xx response.
    Pages unwrap ``results`` and carry count/next/previous; any other body,
    lists and primitives included, becomes a one-element list.
    """
    if body is NO_BODY:
        return Envelope(success=True, status=status, data=[])
    if is_page(body):
        results = body.get("results")
        if results is None:
            results = []
        elif not isinstance(results, list):
            results = [results]
        return Envelope(
            success=True,
            status=status,
            data=results,
            pagination=Pagination(
                next=body.get("next"),
                prev=body.get("previous"),
                count=body.get("count") or 0,
            ),
        )
    return Envelope(success=True, status=status, data=[body])


def failure(status: int | None, kind: ErrorKind) -> Envelope:
    """Failure envelope; status falls back to 500 when no HTTP status exists."""
    return Envelope(success=False, status=status or 500, data=[], error=kind)


def preview_body(body: Any) -> str:
    """Short diagnostic rendering of a failed response body."""
    if body is NO_BODY:
        return "Response data not available"
    if isinstance(body, (dict, list)):
        return json.dumps(body, default=str)[:BODY_PREVIEW_CHARS]
    return str(body)[:BODY_PREVIEW_CHARS]
