from __future__ import annotations

import pytest

from pastebin.shared.config import AppConfig, PasteConfig
from pastebin.shared.config.settings import SecurityConfig


def test_defaults() -> None:
    config = AppConfig(secret_key="x" * 40)

    assert config.storage_backend == "memory"
    assert config.auth.token_ttl_seconds == 7 * 24 * 60 * 60
    assert config.paste.default_ttl_seconds is None
    assert config.paste.id_max_attempts == 5


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PASTE_DEFAULT_TTL_SECONDS", "600")
    monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example")

    assert PasteConfig().default_ttl_seconds == 600
    assert SecurityConfig().allowed_origins == ["https://a.example", "https://b.example"]


def test_production_refuses_weak_secret() -> None:
    with pytest.raises(SystemExit):
        AppConfig(app_env="production", secret_key="dev")
