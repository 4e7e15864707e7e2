from __future__ import annotations

import pytest

from core.config import DEFAULT_API_BASE_URL, Settings


def test_defaults() -> None:
    settings = Settings.from_env({})

    assert settings.api_base_url == DEFAULT_API_BASE_URL
    assert settings.timeout_seconds == 10.0
    assert settings.character_limit == 25000
    assert settings.server_name == "frankfurter-mcp-server"


def test_environment_overrides() -> None:
    settings = Settings.from_env(
        {
            "FRANKFURTER_API_URL": "http://localhost:8080/",
            "FRANKFURTER_TIMEOUT": "2.5",
            "FRANKFURTER_CHARACTER_LIMIT": "1000",
        }
    )

    assert settings.api_base_url == "http://localhost:8080"
    assert settings.timeout_seconds == 2.5
    assert settings.character_limit == 1000


@pytest.mark.parametrize(
    "environ",
    [
        {"FRANKFURTER_TIMEOUT": "0"},
        {"FRANKFURTER_CHARACTER_LIMIT": "-1"},
        {"FRANKFURTER_TIMEOUT": "soon"},
    ],
)
def test_invalid_overrides(environ) -> None:
    with pytest.raises(ValueError):
        Settings.from_env(environ)
