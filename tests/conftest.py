from __future__ import annotations

import json
import os
import sys
from datetime import date
from typing import Any

import pytest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from core.config import Settings  # noqa: E402
from core.currency_tools import CurrencyTools  # noqa: E402
from core.frankfurter import FrankfurterClient, TransportFailure  # noqa: E402

TEST_BASE_URL = "https://frankfurter.test/v1"


class FakeTransport:
    """Stands in for urllib: records every URL and replays queued answers in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, float]] = []
        self._answers: list[Any] = []

    def reply(self, payload: Any, status: int = 200, reason: str = "OK") -> "FakeTransport":
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
        self._answers.append((status, reason, body))
        return self

    def fail(self, failure: TransportFailure) -> "FakeTransport":
        self._answers.append(failure)
        return self

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.calls]

    def __call__(self, url: str, timeout: float) -> tuple[int, str, bytes]:
        self.calls.append((url, timeout))
        if not self._answers:
            raise AssertionError(f"Unexpected request: {url}")
        answer = self._answers.pop(0)
        if isinstance(answer, TransportFailure):
            raise answer
        return answer


@pytest.fixture()
def settings() -> Settings:
    return Settings(api_base_url=TEST_BASE_URL)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def client(settings: Settings, transport: FakeTransport) -> FrankfurterClient:
    return FrankfurterClient(settings, transport=transport)


@pytest.fixture()
def tools(client: FrankfurterClient, settings: Settings) -> CurrencyTools:
    return CurrencyTools(client, settings, today=lambda: date(2024, 6, 1))
