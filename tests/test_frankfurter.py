from __future__ import annotations

import io
import urllib.error
from urllib.parse import parse_qs, urlsplit

import pytest

from core.errors import (
    ConnectivityError,
    FailureKind,
    RemoteError,
    RequestTimeout,
    map_http_failure,
)
from core.frankfurter import TransportFailure, build_query, urllib_transport


# ---------------------------------------------------------------------------
# map_http_failure
# ---------------------------------------------------------------------------
@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (404, "The requested resource was not found. Please check your date range and currency codes."),
        (429, "Rate limit exceeded. Please wait a moment before making more requests."),
        (500, "The Frankfurter API is currently experiencing issues. Please try again later."),
        (503, "The Frankfurter API is currently experiencing issues. Please try again later."),
    ],
)
def test_map_http_failure_known_statuses(status: int, expected: str) -> None:
    error = map_http_failure(status=status, reason="ignored")

    assert isinstance(error, RemoteError)
    assert error.message == expected
    assert error.status == status


def test_map_http_failure_other_status_includes_reason() -> None:
    error = map_http_failure(status=418, reason="I'm a teapot")

    assert error.message == "API request failed with status 418: I'm a teapot"


def test_map_http_failure_timeout_mentions_seconds() -> None:
    error = map_http_failure(kind=FailureKind.TIMEOUT, timeout_seconds=10)

    assert isinstance(error, RequestTimeout)
    assert "did not respond within 10 seconds" in error.message


def test_map_http_failure_without_response_is_connectivity() -> None:
    assert isinstance(map_http_failure(), ConnectivityError)
    assert isinstance(map_http_failure(kind=FailureKind.CONNECTIVITY), ConnectivityError)
    assert "check your internet connection" in map_http_failure().message


# ---------------------------------------------------------------------------
# URL building
# ---------------------------------------------------------------------------
def test_build_query_joins_lists_and_drops_none() -> None:
    assert build_query({"base": "USD", "symbols": ["GBP", "JPY"], "amount": None}) == {
        "base": "USD",
        "symbols": "GBP,JPY",
    }
    assert build_query(None) == {}


def test_build_url_keeps_commas_literal(client) -> None:
    url = client.build_url("/latest", {"base": "USD", "symbols": ["GBP", "JPY"]})

    assert url == "https://frankfurter.test/v1/latest?base=USD&symbols=GBP,JPY"


def test_build_url_without_params(client) -> None:
    assert client.build_url("/currencies") == "https://frankfurter.test/v1/currencies"


# ---------------------------------------------------------------------------
# FrankfurterClient.get
# ---------------------------------------------------------------------------
def test_get_returns_decoded_json(client, transport) -> None:
    transport.reply({"base": "EUR", "date": "2024-01-02", "rates": {"USD": 1.0956}})

    data = client.get("/latest", {"symbols": ["USD"]})

    assert data["rates"] == {"USD": 1.0956}
    url, timeout = transport.calls[0]
    assert parse_qs(urlsplit(url).query) == {"symbols": ["USD"]}
    assert timeout == 10.0


def test_get_maps_error_status(client, transport) -> None:
    transport.reply({"message": "not found"}, status=404, reason="Not Found")

    with pytest.raises(RemoteError) as excinfo:
        client.get("/1990-01-01")

    assert excinfo.value.status == 404
    assert "not found" in excinfo.value.message


def test_get_maps_timeout(client, transport) -> None:
    transport.fail(TransportFailure(FailureKind.TIMEOUT))

    with pytest.raises(RequestTimeout):
        client.get("/latest")


def test_get_maps_connectivity(client, transport) -> None:
    transport.fail(TransportFailure(FailureKind.CONNECTIVITY, "Name or service not known"))

    with pytest.raises(ConnectivityError):
        client.get("/latest")


def test_get_rejects_unparseable_body(client, transport) -> None:
    transport.reply(b"<html>gateway</html>")

    with pytest.raises(RemoteError) as excinfo:
        client.get("/latest")

    assert excinfo.value.message == "The Frankfurter API returned a response that could not be parsed."


# ---------------------------------------------------------------------------
# urllib_transport
# ---------------------------------------------------------------------------
class _FakeResponse(io.BytesIO):
    status = 200
    reason = "OK"


def test_urllib_transport_returns_body_and_sends_accept_header(monkeypatch) -> None:
    seen = {}

    def fake_urlopen(request, timeout):
        seen["accept"] = request.get_header("Accept")
        seen["timeout"] = timeout
        return _FakeResponse(b'{"ok": true}')

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    assert urllib_transport("https://example.test/latest", 3.0) == (200, "OK", b'{"ok": true}')
    assert seen == {"accept": "application/json", "timeout": 3.0}


def test_urllib_transport_returns_http_errors(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise urllib.error.HTTPError(
            request.full_url, 429, "Too Many Requests", {}, io.BytesIO(b"{}")
        )

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    assert urllib_transport("https://example.test/latest", 3.0) == (429, "Too Many Requests", b"{}")


@pytest.mark.parametrize(
    ("raised", "kind"),
    [
        (TimeoutError("timed out"), FailureKind.TIMEOUT),
        (urllib.error.URLError(TimeoutError("timed out")), FailureKind.TIMEOUT),
        (urllib.error.URLError("Name or service not known"), FailureKind.CONNECTIVITY),
    ],
)
def test_urllib_transport_raises_transport_failure(monkeypatch, raised, kind) -> None:
    def fake_urlopen(request, timeout):
        raise raised

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)

    with pytest.raises(TransportFailure) as excinfo:
        urllib_transport("https://example.test/latest", 3.0)

    assert excinfo.value.kind is kind


def test_build_query_drops_empty_lists() -> None:
    assert build_query({"base": "EUR", "symbols": []}) == {"base": "EUR"}


@pytest.mark.parametrize("body", [b'{"rates": {"USD": NaN}}', b'{"rates": {"USD": Infinity}}'])
def test_get_rejects_non_standard_json_constants(client, transport, body: bytes) -> None:
    transport.reply(body)

    with pytest.raises(RemoteError) as excinfo:
        client.get("/latest")

    assert excinfo.value.message == "The Frankfurter API returned a response that could not be parsed."
