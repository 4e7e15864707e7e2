# =============================================================================
# core/errors.py  —  Error Taxonomy & Failure Messages
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines every way a tool call can fail, and turns raw HTTP failures
#   (a status code, or "no response at all") into the user-facing sentence
#   the calling agent will read.
#
# THE HIERARCHY:
#   CurrencyToolError
#   ├── ValidationError      arguments have the wrong shape
#   ├── GuidanceError        arguments are well-typed but make no sense
#   │                        (future date, inverted range)
#   ├── UnknownToolError     no tool with that name
#   └── ApiError             the upstream call failed
#       ├── RequestTimeout
#       ├── RemoteError      non-2xx status / unreadable body
#       └── ConnectivityError
#
#   None of these is retried.  They are raised inside core/ and converted to
#   flagged text responses in one place: core/currency_tools.call_tool().
#
# map_http_failure() is a PURE function: it knows nothing about urllib.
# The client adapter feeds it a status code or a FailureKind.
# =============================================================================

from enum import Enum


class CurrencyToolError(Exception):
    """Base class for every error a tool call can report."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CurrencyToolError):
    """Caller-supplied arguments failed the tool's declared schema."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        lines = "\n".join(f"- {problem}" for problem in problems)
        super().__init__(f"Invalid parameters\n{lines}")


class GuidanceError(CurrencyToolError):
    """A valid-looking request that cannot be served; the message says what to do instead."""


class UnknownToolError(CurrencyToolError):
    """The requested tool name is not in the catalogue."""

    def __init__(self, name: str, available: list[str]):
        self.name = name
        self.available = available
        super().__init__(f"Unknown tool '{name}'. Available tools: {', '.join(available)}")


class ApiError(CurrencyToolError):
    """The Frankfurter API call did not produce usable data."""


class RequestTimeout(ApiError):
    pass


class RemoteError(ApiError):
    """The API answered, but not with a usable 2xx payload."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class ConnectivityError(ApiError):
    pass


class FailureKind(str, Enum):
    """Transport failures where no HTTP response was received."""

    TIMEOUT = "timeout"
    CONNECTIVITY = "connectivity"


def map_http_failure(
    status: int | None = None,
    reason: str = "",
    kind: FailureKind | None = None,
    timeout_seconds: float = 10.0,
) -> ApiError:
    """Translate a failed request into the error the agent should see.

    Args:
        status: HTTP status code, when a response arrived.
        reason: HTTP reason phrase that came with ``status``.
        kind: Set instead of ``status`` when no response arrived.
        timeout_seconds: Used in the timeout message.

    Returns:
        An ApiError subclass instance (not raised).
    """
    if kind is FailureKind.TIMEOUT:
        return RequestTimeout(
            f"Request timeout: The Frankfurter API did not respond within "
            f"{timeout_seconds:g} seconds. Please try again."
        )

    if status is None or kind is FailureKind.CONNECTIVITY:
        return ConnectivityError(
            "Unable to connect to the Frankfurter API. Please check your internet connection."
        )

    if status == 404:
        return RemoteError(
            "The requested resource was not found. Please check your date range and currency codes.",
            status=status,
        )
    if status == 429:
        return RemoteError(
            "Rate limit exceeded. Please wait a moment before making more requests.",
            status=status,
        )
    if 500 <= status <= 599:
        return RemoteError(
            "The Frankfurter API is currently experiencing issues. Please try again later.",
            status=status,
        )
    return RemoteError(f"API request failed with status {status}: {reason}", status=status)
