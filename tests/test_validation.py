from __future__ import annotations

import pytest

from core.errors import ValidationError
from core.models import ResponseFormat
from core.validation import (
    ConvertCurrencyArgs,
    HistoricalRatesArgs,
    LatestRatesArgs,
    ListCurrenciesArgs,
    TimeSeriesArgs,
    validate_arguments,
)


def test_convert_arguments_use_wire_names_and_uppercase_codes() -> None:
    args = validate_arguments(ConvertCurrencyArgs, {"from": "eur", "to": "usd", "amount": 100})

    assert args.from_currency == "EUR"
    assert args.to_currency == "USD"
    assert args.amount == 100
    assert args.date is None
    assert args.response_format is ResponseFormat.MARKDOWN


def test_symbols_are_uppercased() -> None:
    args = validate_arguments(LatestRatesArgs, {"base": "usd", "symbols": ["gbp", "jpy"]})

    assert args.base == "USD"
    assert args.symbols == ["GBP", "JPY"]


def test_none_arguments_mean_empty_object() -> None:
    args = validate_arguments(ListCurrenciesArgs, None)

    assert args.response_format is ResponseFormat.MARKDOWN


def test_unrecognized_field_is_rejected() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(LatestRatesArgs, {"base": "EUR", "limit": 5})

    assert excinfo.value.problems == ["limit: Unrecognized field"]
    assert excinfo.value.message.startswith("Invalid parameters\n- ")


@pytest.mark.parametrize("code", ["EU", "EURO", ""])
def test_currency_code_length(code: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(LatestRatesArgs, {"base": code})

    assert excinfo.value.problems == ["base: Currency code must be 3 characters"]


def test_date_format() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(HistoricalRatesArgs, {"date": "01/02/2024"})

    assert excinfo.value.problems == ["date: Date must be in YYYY-MM-DD format"]


def test_date_must_exist_on_the_calendar() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(TimeSeriesArgs, {"start_date": "2024-02-30", "end_date": "2024-03-01"})

    assert excinfo.value.problems == ["start_date: Date must be a real calendar date"]


@pytest.mark.parametrize("amount", [0, -5, "100", True])
def test_amount_must_be_a_positive_number(amount) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(ConvertCurrencyArgs, {"from": "EUR", "to": "USD", "amount": amount})

    assert len(excinfo.value.problems) == 1
    assert excinfo.value.problems[0].startswith("amount: ")


def test_missing_fields_are_all_reported() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(ConvertCurrencyArgs, {"amount": 1})

    assert excinfo.value.problems == ["from: Field required", "to: Field required"]


def test_response_format_enum() -> None:
    args = validate_arguments(ListCurrenciesArgs, {"response_format": "json"})
    assert args.response_format is ResponseFormat.JSON

    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(ListCurrenciesArgs, {"response_format": "xml"})
    assert excinfo.value.problems[0].startswith("response_format: ")


@pytest.mark.parametrize(
    ("model", "arguments", "field"),
    [
        (ConvertCurrencyArgs, {"from": "EUR", "to": "USD", "amount": 1, "date": None}, "date"),
        (LatestRatesArgs, {"base": None}, "base"),
        (LatestRatesArgs, {"symbols": None}, "symbols"),
        (ListCurrenciesArgs, {"response_format": None}, "response_format"),
    ],
)
def test_explicit_null_is_rejected(model, arguments, field: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(model, arguments)

    assert excinfo.value.problems == [f"{field}: Field may not be null"]


def test_omitted_optional_fields_read_as_none() -> None:
    args = validate_arguments(HistoricalRatesArgs, {"date": "2024-01-02"})

    assert args.base is None
    assert args.symbols is None


def test_symbols_must_not_be_empty() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_arguments(LatestRatesArgs, {"symbols": []})

    assert excinfo.value.problems == ["symbols: At least one currency code is required"]
