# =============================================================================
# core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses describe the shapes that flow through a single tool call:
# what the Frankfurter API sends back, what we compute locally, and what we
# report about truncation.  They are created per call and thrown away after
# the response is sent.  Nothing here is cached or shared.
#
# FROM PAYLOAD, TO DICT:
#   Each upstream shape has a from_payload() constructor that reads the JSON
#   dict returned by the API.  Dict order is preserved all the way through,
#   so a rates table lists currencies in exactly the order the API sent them.
#
#   from_payload() checks the shape first.  A body that is not an object, a
#   "rates" that is not a mapping, or a rate that is not a number raises
#   RemoteError, so a malformed answer reaches the agent as a normal tool
#   error.  A null rate is kept as None and rendered "N/A".
# =============================================================================

from dataclasses import dataclass, field
from enum import Enum
import math
from typing import Any, Optional

from core.errors import RemoteError

UNEXPECTED_RESPONSE = "The Frankfurter API returned an unexpected response."


class ResponseFormat(str, Enum):
    """How a tool renders its answer."""

    JSON = "json"
    MARKDOWN = "markdown"


def _mapping(value: Any) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise RemoteError(UNEXPECTED_RESPONSE)
    return value


def _rates(value: Any) -> dict[str, Optional[float]]:
    """Validate one {code: rate} mapping.  Missing "rates" reads as empty."""
    if value is None:
        return {}
    rates: dict[str, Optional[float]] = {}
    for code, rate in _mapping(value).items():
        if rate is None:
            rates[code] = None
            continue
        # bool is an int subclass; true/false is never a rate.
        if isinstance(rate, bool) or not isinstance(rate, (int, float)) or not math.isfinite(rate):
            raise RemoteError(UNEXPECTED_RESPONSE)
        rates[code] = float(rate)
    return rates


# -----------------------------------------------------------------------------
# RateSnapshot — one day of rates for one base currency
# -----------------------------------------------------------------------------
# Returned by /latest and /{date}.  The API may answer a weekend date with
# the nearest business day, so `date` is the date the API reports, not
# necessarily the date we asked for.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RateSnapshot:
    base: str                          # "EUR"
    date: str                          # "2024-01-02"
    rates: dict[str, Optional[float]] = field(default_factory=dict)  # {"USD": 1.0956, ...}

    @classmethod
    def from_payload(cls, payload: Any) -> "RateSnapshot":
        payload = _mapping(payload)
        return cls(
            base=str(payload.get("base", "")),
            date=str(payload.get("date", "")),
            rates=_rates(payload.get("rates")),
        )


# -----------------------------------------------------------------------------
# TimeSeries — a date-indexed sequence of rate mappings
# -----------------------------------------------------------------------------
# Inner mappings can be missing symbols on some dates.  The renderer shows
# those gaps as "N/A" rather than dropping the row.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TimeSeries:
    base: str
    start_date: str
    end_date: str
    rates: dict[str, dict[str, Optional[float]]] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> "TimeSeries":
        payload = _mapping(payload)
        days = payload.get("rates")
        return cls(
            base=str(payload.get("base", "")),
            start_date=str(payload.get("start_date", "")),
            end_date=str(payload.get("end_date", "")),
            rates={day: _rates(values) for day, values in _mapping(days or {}).items()},
        )

    def first_day_symbols(self) -> list[str]:
        """Currency codes present on the first date the API returned (in its order)."""
        first = next(iter(self.rates.values()), {})
        return list(first.keys())


# -----------------------------------------------------------------------------
# CurrencyCatalog — every currency code the API knows, with its display name
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class CurrencyCatalog:
    currencies: dict[str, str] = field(default_factory=dict)  # {"EUR": "Euro", ...}

    @classmethod
    def from_payload(cls, payload: Any) -> "CurrencyCatalog":
        return cls(currencies={str(code): str(name) for code, name in _mapping(payload).items()})

    def __len__(self) -> int:
        return len(self.currencies)


# -----------------------------------------------------------------------------
# ConversionResult — computed here, never stored by the API
# -----------------------------------------------------------------------------
# The API only returns a rate.  result = amount * rate happens locally.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    amount: float
    rate: float
    result: float
    date: str

    @classmethod
    def compute(
        cls, from_currency: str, to_currency: str, amount: float, rate: float, date: str
    ) -> "ConversionResult":
        return cls(
            from_currency=from_currency,
            to_currency=to_currency,
            amount=amount,
            rate=rate,
            result=amount * rate,
            date=date,
        )

    def to_dict(self) -> dict[str, Any]:
        # Keys match the tool's parameter names ("from"/"to"), not the attributes.
        return {
            "from": self.from_currency,
            "to": self.to_currency,
            "amount": self.amount,
            "rate": self.rate,
            "result": self.result,
            "date": self.date,
        }


# -----------------------------------------------------------------------------
# TruncationOutcome — attached to every formatted text result
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class TruncationOutcome:
    truncated: bool
    message: Optional[str] = None
    original_length: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"truncated": self.truncated}
        if self.message is not None:
            data["truncation_message"] = self.message
        if self.original_length is not None:
            data["original_length"] = self.original_length
        return data
