# =============================================================================
# core/frankfurter.py  —  Frankfurter API Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues one HTTP GET against the Frankfurter API and returns the parsed
#   JSON body.  Every failure comes back as an ApiError whose message is
#   ready to show to the calling agent.
#
# THE TRANSPORT SEAM:
#   FrankfurterClient does not call urllib directly.  It calls a transport:
#
#       transport(url, timeout) -> (status, reason, body_bytes)
#
#   and the transport raises TransportFailure when no response arrived at
#   all (timeout, DNS failure, refused connection).  The default transport
#   is urllib_transport() below.  Tests pass a fake one, so no test ever
#   touches the network.
#
# WHAT IT DOES NOT DO:
#   - No retries.  One call, one answer.
#   - No caching.  The same request twice means two HTTP calls.
# =============================================================================

import json
import logging
from typing import Any, Callable, Mapping, Optional, Sequence, Union
import urllib.error
import urllib.parse
import urllib.request

from core.config import Settings
from core.errors import FailureKind, RemoteError, map_http_failure

logger = logging.getLogger(__name__)

QueryValue = Union[str, Sequence[str], None]
Transport = Callable[[str, float], tuple[int, str, bytes]]


class TransportFailure(Exception):
    """No HTTP response was received."""

    def __init__(self, kind: FailureKind, detail: str = ""):
        super().__init__(detail or kind.value)
        self.kind = kind


def urllib_transport(url: str, timeout: float) -> tuple[int, str, bytes]:
    """Perform a GET with urllib.request.

    Non-2xx responses are returned, not raised, so the client can map the
    status code itself.
    """
    request = urllib.request.Request(url, headers={"Accept": "application/json"})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            return response.status, response.reason, response.read()
    except urllib.error.HTTPError as exc:
        body = exc.read() if exc.fp is not None else b""
        return exc.code, str(exc.reason), body
    except TimeoutError as exc:
        raise TransportFailure(FailureKind.TIMEOUT, str(exc)) from exc
    except urllib.error.URLError as exc:
        if isinstance(exc.reason, TimeoutError):
            raise TransportFailure(FailureKind.TIMEOUT, str(exc.reason)) from exc
        raise TransportFailure(FailureKind.CONNECTIVITY, str(exc.reason)) from exc


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are accepted by json.loads but are not JSON.
    raise ValueError(f"Non-standard JSON constant: {token}")


def build_query(params: Optional[Mapping[str, QueryValue]]) -> dict[str, str]:
    """Flatten query params: lists become comma-joined strings; None and empty values are dropped."""
    query: dict[str, str] = {}
    for key, value in (params or {}).items():
        if value is None or len(value) == 0:
            continue
        if isinstance(value, str):
            query[key] = value
        else:
            query[key] = ",".join(value)
    return query


class FrankfurterClient:
    """Thin GET-only adapter over the Frankfurter REST API."""

    def __init__(self, settings: Settings, transport: Transport = urllib_transport):
        self.settings = settings
        self._transport = transport

    def build_url(self, path: str, params: Optional[Mapping[str, QueryValue]] = None) -> str:
        url = f"{self.settings.api_base_url}{path}"
        query = build_query(params)
        if query:
            # Keep commas literal: "symbols=USD,GBP" is the API's multi-value form.
            url = f"{url}?{urllib.parse.urlencode(query, safe=',')}"
        return url

    def get(self, path: str, params: Optional[Mapping[str, QueryValue]] = None) -> Any:
        """GET ``path`` and return the decoded JSON body.

        Raises:
            RequestTimeout: No response within the configured timeout.
            ConnectivityError: No response at all.
            RemoteError: Non-2xx status, or a body that is not JSON.
        """
        url = self.build_url(path, params)
        timeout = self.settings.timeout_seconds
        logger.debug("GET %s", url)

        try:
            status, reason, body = self._transport(url, timeout)
        except TransportFailure as exc:
            logger.warning("Frankfurter request failed (%s): %s", exc.kind.value, url)
            raise map_http_failure(kind=exc.kind, timeout_seconds=timeout) from exc

        if not 200 <= status <= 299:
            logger.warning("Frankfurter returned HTTP %s for %s", status, url)
            raise map_http_failure(status=status, reason=reason, timeout_seconds=timeout)

        try:
            return json.loads(body.decode("utf-8"), parse_constant=_reject_constant)
        except ValueError as exc:
            logger.warning("Frankfurter returned an unreadable body for %s", url)
            raise RemoteError(
                "The Frankfurter API returned a response that could not be parsed.",
                status=status,
            ) from exc
