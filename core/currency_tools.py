# =============================================================================
# core/currency_tools.py  —  The Five Currency Tools
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Declares the tool catalogue (names, descriptions, JSON input schemas)
#   and implements each tool as a method of CurrencyTools:
#
#       convert_currency       amount × rate, latest or on a date
#       get_latest_rates       today's snapshot
#       get_historical_rates   snapshot for a past date
#       get_time_series        snapshots over a date range
#       list_currencies        every supported code with its name
#
# THE FLOW OF ONE CALL (call_tool):
#   1. Look up the tool by name          → UnknownToolError
#   2. Validate arguments (strict)        → ValidationError
#   3. Local sanity checks                → GuidanceError
#   4. HTTP GET via FrankfurterClient     → ApiError
#   5. Render JSON or Markdown, truncate
#   6. Return a ToolResponse
#
#   Every CurrencyToolError raised in steps 1-4 is caught HERE and turned
#   into a ToolResponse with is_error=True.  The MCP layer never sees an
#   exception for an expected failure.
#
# This module is still framework-free: no FastMCP imports.  tools/ wraps it.
# =============================================================================

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
import logging
import math
from typing import Any, Callable, Optional

from core.config import Settings
from core.errors import CurrencyToolError, GuidanceError, RemoteError, UnknownToolError
from core.formatter import (
    ConversionSummary,
    CurrencyCatalogTable,
    FormattedResponse,
    RatesTable,
    TimeSeriesTable,
    format_response,
)
from core.frankfurter import FrankfurterClient
from core.models import (
    ConversionResult,
    CurrencyCatalog,
    RateSnapshot,
    TimeSeries,
    TruncationOutcome,
)
from core.validation import (
    ConvertCurrencyArgs,
    HistoricalRatesArgs,
    LatestRatesArgs,
    ListCurrenciesArgs,
    RatesQueryArgs,
    TimeSeriesArgs,
    ToolArguments,
    validate_arguments,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Tool catalogue
# =============================================================================
# These schemas are what tools/list advertises.  The pydantic models in
# core/validation.py enforce the same constraints at call time.
# =============================================================================
_CURRENCY_CODE = {"type": "string", "minLength": 3, "maxLength": 3}
_ISO_DATE = {"type": "string", "pattern": r"^\d{4}-\d{2}-\d{2}$"}

_RESPONSE_FORMAT = {
    "type": "string",
    "enum": ["json", "markdown"],
    "default": "markdown",
    "description": "Response format: 'json' for structured data, 'markdown' for human-readable",
}
_BASE = {
    **_CURRENCY_CODE,
    "description": "Optional: Base currency code (3-letter ISO code). Defaults to EUR.",
}


def _symbols(description: str) -> dict[str, Any]:
    return {
        "type": "array",
        "items": dict(_CURRENCY_CODE),
        "minItems": 1,
        "description": description,
    }


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: dict[str, Any]
    arguments_model: type[ToolArguments]


TOOL_SPECS: list[ToolSpec] = [
    ToolSpec(
        name="convert_currency",
        description=(
            "Convert an amount from one currency to another using real exchange rates. "
            "Supports both current (latest) and historical conversions. "
            "Example: Convert 100 EUR to USD, or convert using historical rates from a specific date. "
            "Returns the converted amount, exchange rate, and date of conversion. "
            "Note: All dates are in UTC. Historical data available from 1999-01-04 onwards."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "from": {
                    **_CURRENCY_CODE,
                    "description": "Source currency code (3-letter ISO code, e.g., EUR, USD, GBP)",
                },
                "to": {
                    **_CURRENCY_CODE,
                    "description": "Target currency code (3-letter ISO code, e.g., EUR, USD, GBP)",
                },
                "amount": {
                    "type": "number",
                    "exclusiveMinimum": 0,
                    "description": "Amount to convert (must be positive)",
                },
                "date": {
                    **_ISO_DATE,
                    "description": (
                        "Optional: Date for historical conversion (YYYY-MM-DD format). "
                        "If omitted, uses latest available rates."
                    ),
                },
                "response_format": _RESPONSE_FORMAT,
            },
            "required": ["from", "to", "amount"],
            "additionalProperties": False,
        },
        arguments_model=ConvertCurrencyArgs,
    ),
    ToolSpec(
        name="get_latest_rates",
        description=(
            "Get the latest exchange rates for a base currency. "
            "Returns current exchange rates (updated daily at 4 PM CET). "
            "You can specify a base currency (defaults to EUR) and filter specific target currencies. "
            "Example: Get latest EUR rates, or get USD rates for specific currencies like GBP and JPY. "
            "Note: Rates are updated once per day by the European Central Bank."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "base": _BASE,
                "symbols": _symbols(
                    "Optional: Array of target currency codes to filter results. "
                    "If omitted, returns rates for all available currencies."
                ),
                "response_format": _RESPONSE_FORMAT,
            },
            "additionalProperties": False,
        },
        arguments_model=LatestRatesArgs,
    ),
    ToolSpec(
        name="get_historical_rates",
        description=(
            "Get exchange rates for a specific historical date. "
            "Returns rates from any date starting from 1999-01-04. "
            "You can specify a base currency and filter specific target currencies. "
            "Example: Get EUR rates for 2020-01-15, or get USD rates against GBP for a specific date. "
            "Note: If the specified date is a weekend or holiday, the API returns rates from the "
            "nearest business day. All dates are in UTC."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "date": {
                    **_ISO_DATE,
                    "description": "Historical date in YYYY-MM-DD format (must be >= 1999-01-04)",
                },
                "base": _BASE,
                "symbols": _symbols("Optional: Array of target currency codes to filter results."),
                "response_format": _RESPONSE_FORMAT,
            },
            "required": ["date"],
            "additionalProperties": False,
        },
        arguments_model=HistoricalRatesArgs,
    ),
    ToolSpec(
        name="get_time_series",
        description=(
            "Get exchange rate time series data over a date range. "
            "Returns daily exchange rates between two dates for trend analysis and charting. "
            "You can specify a base currency and filter specific target currencies. "
            "Example: Get EUR/USD rates for January 2024, or compare EUR against multiple "
            "currencies over a month. "
            "Note: Large date ranges may be truncated. For best results, query smaller ranges "
            "(e.g., 1-3 months). All dates are in UTC. Data available from 1999-01-04 onwards."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "start_date": {
                    **_ISO_DATE,
                    "description": "Start date in YYYY-MM-DD format (must be >= 1999-01-04)",
                },
                "end_date": {
                    **_ISO_DATE,
                    "description": "End date in YYYY-MM-DD format (must be after start_date)",
                },
                "base": _BASE,
                "symbols": _symbols(
                    "Optional: Array of target currency codes to filter results. "
                    "Recommended to limit to 2-5 currencies for readability."
                ),
                "response_format": _RESPONSE_FORMAT,
            },
            "required": ["start_date", "end_date"],
            "additionalProperties": False,
        },
        arguments_model=TimeSeriesArgs,
    ),
    ToolSpec(
        name="list_currencies",
        description=(
            "List all available currencies supported by the Frankfurter API. "
            "Returns currency codes (e.g., USD, EUR, GBP) and their full names. "
            "Use this to discover valid currency codes for other tools. "
            "Example: See all supported currencies before making a conversion. "
            "The list includes major currencies and many minor ones (30+ currencies total)."
        ),
        input_schema={
            "type": "object",
            "properties": {"response_format": _RESPONSE_FORMAT},
            "additionalProperties": False,
        },
        arguments_model=ListCurrenciesArgs,
    ),
]

TOOL_NAMES = [spec.name for spec in TOOL_SPECS]


@dataclass(frozen=True)
class ToolResponse:
    """What a tool call hands back to the protocol layer."""

    text: str
    is_error: bool = False
    truncation: TruncationOutcome = field(default_factory=lambda: TruncationOutcome(truncated=False))

    @classmethod
    def from_formatted(cls, formatted: FormattedResponse) -> "ToolResponse":
        return cls(text=formatted.text, truncation=formatted.truncation)

    @classmethod
    def from_error(cls, error: CurrencyToolError) -> "ToolResponse":
        return cls(text=f"Error: {error.message}", is_error=True)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _rates_params(args: RatesQueryArgs) -> dict[str, Any]:
    return {"base": args.base, "symbols": args.symbols}


class CurrencyTools:
    """The five tool operations, bound to one client and one set of settings.

    Args:
        client: Adapter used for every upstream request.
        settings: Supplies the character limit used for truncation.
        today: Returns "today" for the future-date check (UTC by default).
    """

    def __init__(
        self,
        client: FrankfurterClient,
        settings: Optional[Settings] = None,
        today: Callable[[], date] = utc_today,
    ):
        self.client = client
        self.settings = settings or client.settings
        self.today = today
        self._handlers: dict[str, Callable[[Any], FormattedResponse]] = {
            "convert_currency": self.convert_currency,
            "get_latest_rates": self.get_latest_rates,
            "get_historical_rates": self.get_historical_rates,
            "get_time_series": self.get_time_series,
            "list_currencies": self.list_currencies,
        }
        self._specs = {spec.name: spec for spec in TOOL_SPECS}

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------
    def call_tool(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ToolResponse:
        """Run one tool call end to end and never raise for expected failures."""
        logger.info("Tool call %s with %s", name, arguments)
        try:
            spec = self._specs.get(name)
            if spec is None:
                raise UnknownToolError(name, TOOL_NAMES)
            args = validate_arguments(spec.arguments_model, arguments)
            response = ToolResponse.from_formatted(self._handlers[name](args))
        except CurrencyToolError as exc:
            logger.info("Tool %s failed: %s", name, exc.message)
            return ToolResponse.from_error(exc)

        if response.truncation.truncated:
            logger.warning(
                "Tool %s output truncated from %s characters",
                name,
                response.truncation.original_length,
            )
        return response

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------
    def convert_currency(self, args: ConvertCurrencyArgs) -> FormattedResponse:
        endpoint = f"/{args.date}" if args.date else "/latest"
        data = self.client.get(
            endpoint, {"base": args.from_currency, "symbols": [args.to_currency]}
        )
        snapshot = RateSnapshot.from_payload(data)

        rate = snapshot.rates.get(args.to_currency)
        if rate is None:
            raise RemoteError(
                f"No exchange rate available for {args.from_currency} to {args.to_currency}."
            )

        conversion = ConversionResult.compute(
            from_currency=args.from_currency,
            to_currency=args.to_currency,
            amount=args.amount,
            rate=rate,
            date=snapshot.date,
        )
        if not math.isfinite(conversion.result):
            raise GuidanceError(
                f"Amount too large to convert: {args.amount:g} {args.from_currency} "
                f"at rate {rate:g} overflows. Use a smaller amount."
            )
        return format_response(
            conversion.to_dict(),
            args.response_format,
            ConversionSummary(conversion),
            self.settings,
        )

    def get_latest_rates(self, args: LatestRatesArgs) -> FormattedResponse:
        data = self.client.get("/latest", _rates_params(args))
        return format_response(
            data, args.response_format, RatesTable(RateSnapshot.from_payload(data)), self.settings
        )

    def get_historical_rates(self, args: HistoricalRatesArgs) -> FormattedResponse:
        if date.fromisoformat(args.date) > self.today():
            raise GuidanceError(
                f"Date '{args.date}' is in the future. "
                "For current rates, use get_latest_rates instead."
            )

        data = self.client.get(f"/{args.date}", _rates_params(args))
        return format_response(
            data, args.response_format, RatesTable(RateSnapshot.from_payload(data)), self.settings
        )

    def get_time_series(self, args: TimeSeriesArgs) -> FormattedResponse:
        if date.fromisoformat(args.start_date) >= date.fromisoformat(args.end_date):
            raise GuidanceError(
                f"start_date '{args.start_date}' must be before end_date '{args.end_date}'."
            )

        data = self.client.get(f"/{args.start_date}..{args.end_date}", _rates_params(args))
        series = TimeSeries.from_payload(data)

        # Without an explicit filter the columns come from the first date in
        # the response.  Symbols missing on that date get no column at all.
        symbols = list(args.symbols) if args.symbols else series.first_day_symbols()
        return format_response(
            data, args.response_format, TimeSeriesTable(series, symbols), self.settings
        )

    def list_currencies(self, args: ListCurrenciesArgs) -> FormattedResponse:
        data = self.client.get("/currencies")
        return format_response(
            data,
            args.response_format,
            CurrencyCatalogTable(CurrencyCatalog.from_payload(data)),
            self.settings,
        )
