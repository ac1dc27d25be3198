"""Unit tests for ClientSettings."""

import os
from pathlib import Path
from unittest.mock import patch

from citadel_crm.config import DEFAULT_BASE_URL, ClientSettings


class TestClientSettings:
    """Tests for environment and YAML loading."""

    def test_defaults(self) -> None:
        settings = ClientSettings()
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == 30.0

    def test_from_env(self) -> None:
        env = {
            "CITADEL_BASE_URL": "https://crm.test/internal/v2/",
            "FRONTEND_LOCK": "lock",
            "FRONTEND_KEY": "key",
            "CITADEL_TIMEOUT": "5",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = ClientSettings.from_env()
        assert settings.base_url == "https://crm.test/internal/v2/"
        assert settings.lock == "lock"
        assert settings.key == "key"
        assert settings.timeout == 5.0

    def test_from_env_blank_values_keep_defaults(self) -> None:
        with patch.dict(os.environ, {"CITADEL_BASE_URL": ""}, clear=True):
            settings = ClientSettings.from_env()
        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.lock == ""

    def test_from_yaml_nested(self, tmp_path: Path) -> None:
        """Keys under ``api:`` are read; env fills what the file leaves out."""
        path = tmp_path / "settings.yaml"
        path.write_text(
            """
api:
  base_url: https://staging.crm.test/internal/v2/
  lock: file-lock
  timeout: 10
"""
        )
        with patch.dict(os.environ, {"FRONTEND_KEY": "env-key"}, clear=True):
            settings = ClientSettings.from_yaml(path)
        assert settings.base_url == "https://staging.crm.test/internal/v2/"
        assert settings.lock == "file-lock"
        assert settings.key == "env-key"
        assert settings.timeout == 10.0

    def test_from_yaml_flat(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.yaml"
        path.write_text("lock: flat-lock\nkey: flat-key\n")
        with patch.dict(os.environ, {"FRONTEND_LOCK": "ignored"}, clear=True):
            settings = ClientSettings.from_yaml(path)
        assert settings.lock == "flat-lock"
        assert settings.key == "flat-key"
        assert settings.base_url == DEFAULT_BASE_URL

    def test_from_yaml_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        with patch.dict(os.environ, {}, clear=True):
            settings = ClientSettings.from_yaml(path)
        assert settings == ClientSettings()
