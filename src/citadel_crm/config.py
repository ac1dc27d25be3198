"""Client settings: remote base URL and deployment credentials."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://crm.vegardenterprises.com/internal/v2/"

_ENV_KEYS = {
    "base_url": "CITADEL_BASE_URL",
    "lock": "FRONTEND_LOCK",
    "key": "FRONTEND_KEY",
    "timeout": "CITADEL_TIMEOUT",
}


class ClientSettings(BaseModel):
    """Settings fixed at deploy time and attached to every request."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Remote API root")
    lock: str = Field(default="", description="Deployment lock token (X-CITADEL-LOCK)")
    key: str = Field(default="", description="Deployment key (X-CITADEL-KEY)")
    timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Build settings from environment variables; unset ones keep defaults."""
        values = {
            field: os.environ[env]
            for field, env in _ENV_KEYS.items()
            if os.environ.get(env)
        }
        return cls.model_validate(values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ClientSettings":
        """
        Load settings from YAML. Supports keys nested under ``api:`` or flat.
        Environment variables fill anything the file leaves out.
        """
        data = yaml.safe_load(Path(path).read_text()) or {}
        nested = data.get("api", {}) or {}
        values: dict = {}
        for field, env in _ENV_KEYS.items():
            value = nested.get(field, data.get(field))
            if value is None:
                value = os.environ.get(env) or None
            if value is not None:
                values[field] = value
        return cls.model_validate(values)
