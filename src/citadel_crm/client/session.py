"""Explicit session context passed to every request."""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Identity:
    """User record from the identity provider (not the CRM user record)."""

    id: str
    email: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """
    Authenticated caller. The identity provider supplies both the active user
    id and a user lookup; a session missing either one is unauthorized.
    """

    user_id: Optional[str] = None
    user: Optional[Identity] = None

    @property
    def is_active(self) -> bool:
        return bool(self.user_id) and self.user is not None

    @classmethod
    def anonymous(cls) -> "Session":
        return cls()

    @classmethod
    def for_user(cls, user_id: str, email: Optional[str] = None) -> "Session":
        """Session for an already-authenticated user id."""
        return cls(user_id=user_id, user=Identity(id=user_id, email=email))

    @classmethod
    def from_env(cls) -> "Session":
        """Session from CITADEL_USER_ID (and optional CITADEL_USER_EMAIL), for CLI use."""
        user_id = (os.environ.get("CITADEL_USER_ID") or "").strip()
        if not user_id:
            return cls.anonymous()
        return cls.for_user(user_id, os.environ.get("CITADEL_USER_EMAIL") or None)
