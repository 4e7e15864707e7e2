# =============================================================================
# core/formatter.py  —  Response Rendering & Truncation
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns a tool's data into the text the agent receives, in one of two
#   formats:
#     - JSON      → the payload, indented, key order untouched
#     - MARKDOWN  → a heading plus a table (or summary) per response shape
#
#   Then it enforces the character limit.
#
# RENDER VARIANTS:
#   There are exactly four Markdown shapes, one small dataclass each:
#
#       RatesTable            latest / historical snapshot
#       TimeSeriesTable       date × currency grid
#       ConversionSummary     "100.00 EUR = 108.00 USD"
#       CurrencyCatalogTable  code → name, sorted
#
#   render(view) picks the right renderer.  format_response() never takes a
#   callable, only one of these views.
#
# NUMBERS:
#   Rates always show 4 decimals, money amounts always 2.  Rounding is
#   whatever Python's fixed-point formatting does.
#
# TRUNCATION:
#   Anything longer than the configured limit is cut at exactly `limit`
#   characters (possibly mid-row, possibly mid-JSON-token) and a notice is
#   appended.  Truncated JSON is therefore NOT valid JSON anymore.
# =============================================================================

from dataclasses import dataclass
import json
from typing import Any, Optional, Union

from core.config import DEFAULT_CHARACTER_LIMIT, Settings
from core.models import (
    ConversionResult,
    CurrencyCatalog,
    RateSnapshot,
    ResponseFormat,
    TimeSeries,
    TruncationOutcome,
)

TRUNCATION_MESSAGE = "Response exceeded character limit and was truncated"
JSON_TRUNCATION_NOTICE = "\n\n[TRUNCATED: Response exceeded character limit]"


# =============================================================================
# Render variants
# =============================================================================
@dataclass(frozen=True)
class RatesTable:
    snapshot: RateSnapshot


@dataclass(frozen=True)
class TimeSeriesTable:
    series: TimeSeries
    symbols: list[str]                 # column order = the order requested


@dataclass(frozen=True)
class ConversionSummary:
    conversion: ConversionResult


@dataclass(frozen=True)
class CurrencyCatalogTable:
    catalog: CurrencyCatalog


MarkdownView = Union[RatesTable, TimeSeriesTable, ConversionSummary, CurrencyCatalogTable]


@dataclass(frozen=True)
class FormattedResponse:
    text: str
    truncation: TruncationOutcome


def format_rate(value: Optional[float]) -> str:
    return "N/A" if value is None else f"{value:.4f}"


def format_amount(value: float) -> str:
    return f"{value:.2f}"


def format_json(data: Any) -> str:
    """Render ``data`` as 2-space indented JSON, preserving key order.

    NaN and infinities raise ValueError instead of becoming non-JSON tokens.
    """
    return json.dumps(data, indent=2, ensure_ascii=False, allow_nan=False)


# =============================================================================
# Markdown renderers
# =============================================================================
def _render_rates(view: RatesTable) -> str:
    snapshot = view.snapshot
    lines = [
        f"## Exchange Rates for {snapshot.base}",
        "",
        f"**Date:** {snapshot.date}",
        "",
        "| Currency | Rate |",
        "|----------|------|",
    ]
    # Input order, no sorting.
    for currency, rate in snapshot.rates.items():
        lines.append(f"| {currency} | {format_rate(rate)} |")
    return "\n".join(lines) + "\n"


def _render_time_series(view: TimeSeriesTable) -> str:
    series, symbols = view.series, view.symbols
    lines = [
        f"## Time Series Exchange Rates for {series.base}",
        "",
        f"**Symbols:** {', '.join(symbols)}",
        "",
        "| Date | " + " | ".join(symbols) + " |",
        "|------|" + "|".join("------" for _ in symbols) + "|",
    ]
    # ISO dates sort chronologically as plain strings.
    for day in sorted(series.rates):
        day_rates = series.rates[day]
        cells = [format_rate(day_rates.get(symbol)) for symbol in symbols]
        lines.append(f"| {day} | " + " | ".join(cells) + " |")
    return "\n".join(lines) + "\n"


def _render_conversion(view: ConversionSummary) -> str:
    c = view.conversion
    return (
        "## Currency Conversion\n\n"
        f"**{format_amount(c.amount)} {c.from_currency} = "
        f"{format_amount(c.result)} {c.to_currency}**\n\n"
        f"- Exchange Rate: {format_rate(c.rate)}\n"
        f"- Date: {c.date}\n"
    )


def _render_catalog(view: CurrencyCatalogTable) -> str:
    entries = sorted(view.catalog.currencies.items())
    lines = [
        "## Available Currencies",
        "",
        "| Code | Name |",
        "|------|------|",
    ]
    lines.extend(f"| {code} | {name} |" for code, name in entries)
    lines.append("")
    lines.append(f"**Total: {len(entries)} currencies**")
    return "\n".join(lines) + "\n"


def render(view: MarkdownView) -> str:
    """Render one of the four Markdown views."""
    if isinstance(view, RatesTable):
        return _render_rates(view)
    if isinstance(view, TimeSeriesTable):
        return _render_time_series(view)
    if isinstance(view, ConversionSummary):
        return _render_conversion(view)
    if isinstance(view, CurrencyCatalogTable):
        return _render_catalog(view)
    raise TypeError(f"No Markdown renderer for {type(view).__name__}")


# =============================================================================
# Truncation
# =============================================================================
def truncation_notice(response_format: ResponseFormat, limit: int) -> str:
    """The text appended after a hard cut, per format."""
    if response_format is ResponseFormat.MARKDOWN:
        return (
            "\n\n---\n\n"
            f"**Note:** Response was truncated due to size limit ({limit} characters). "
            "To see more data, try:\n"
            "- Narrowing the date range\n"
            "- Filtering with the 'symbols' parameter\n"
            "- Using pagination parameters\n"
        )
    return JSON_TRUNCATION_NOTICE


def truncate(
    content: str,
    response_format: ResponseFormat,
    limit: int = DEFAULT_CHARACTER_LIMIT,
) -> tuple[str, TruncationOutcome]:
    """Cut ``content`` to ``limit`` characters and append a notice if it is too long.

    Returns:
        (final_content, outcome).  Content at or under the limit comes back
        unchanged with ``outcome.truncated == False``.
    """
    if len(content) <= limit:
        return content, TruncationOutcome(truncated=False)

    final = content[:limit] + truncation_notice(response_format, limit)
    return final, TruncationOutcome(
        truncated=True,
        message=TRUNCATION_MESSAGE,
        original_length=len(content),
    )


def format_response(
    payload: Any,
    response_format: ResponseFormat,
    view: Optional[MarkdownView] = None,
    settings: Optional[Settings] = None,
) -> FormattedResponse:
    """Render ``payload`` (JSON) or ``view`` (Markdown), then apply the character limit.

    Markdown without a view falls back to the JSON rendering.
    """
    limit = settings.character_limit if settings is not None else DEFAULT_CHARACTER_LIMIT

    if response_format is ResponseFormat.MARKDOWN and view is not None:
        content = render(view)
    else:
        content = format_json(payload)

    text, outcome = truncate(content, response_format, limit)
    return FormattedResponse(text=text, truncation=outcome)
