# =============================================================================
# core/validation.py  —  Tool Argument Schemas
# =============================================================================
#
# WHAT THIS FILE DOES:
#   One pydantic model per tool.  Each model is STRICT about shape:
#     - unknown fields are rejected (extra="forbid")
#     - currency codes must be exactly 3 characters (uppercased afterwards)
#     - dates must look like YYYY-MM-DD and be real calendar dates
#     - amount must be a positive number (strings and booleans rejected)
#
#   validate_arguments() runs a model and, on failure, raises our own
#   ValidationError with one "field: message" line per problem.  This all
#   happens BEFORE any HTTP request is built.
# =============================================================================

from datetime import date as calendar_date
from typing import Annotated, Any, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError
from core.models import ResponseFormat

DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _uppercase(value: str) -> str:
    return value.upper()


def _check_calendar_date(value: str) -> str:
    try:
        calendar_date.fromisoformat(value)
    except ValueError:
        raise ValueError("Date must be a real calendar date") from None
    return value


CurrencyCode = Annotated[
    str,
    Field(min_length=3, max_length=3, strict=True),
    AfterValidator(_uppercase),
]
IsoDate = Annotated[
    str,
    Field(pattern=DATE_PATTERN, strict=True),
    AfterValidator(_check_calendar_date),
]
PositiveAmount = Annotated[float, Field(gt=0, strict=True, allow_inf_nan=False)]
SymbolList = Annotated[list[CurrencyCode], Field(min_length=1)]


class ToolArguments(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    response_format: ResponseFormat = ResponseFormat.MARKDOWN

    @field_validator("*", mode="before")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # Optional fields may be omitted, never sent as null.  Defaults skip
        # this validator, so an absent field still reads as None.
        if value is None:
            raise ValueError("Field may not be null")
        return value


class ConvertCurrencyArgs(ToolArguments):
    from_currency: CurrencyCode = Field(alias="from")
    to_currency: CurrencyCode = Field(alias="to")
    amount: PositiveAmount
    date: Optional[IsoDate] = None


class RatesQueryArgs(ToolArguments):
    base: Optional[CurrencyCode] = None
    symbols: Optional[SymbolList] = None


class LatestRatesArgs(RatesQueryArgs):
    pass


class HistoricalRatesArgs(RatesQueryArgs):
    date: IsoDate


class TimeSeriesArgs(RatesQueryArgs):
    start_date: IsoDate
    end_date: IsoDate


class ListCurrenciesArgs(ToolArguments):
    pass


# pydantic's default wording is generic ("String should have at least 3
# characters"); these read better to an agent deciding how to retry.
_MESSAGES = {
    "string_too_short": "Currency code must be 3 characters",
    "string_too_long": "Currency code must be 3 characters",
    "string_pattern_mismatch": "Date must be in YYYY-MM-DD format",
    "greater_than": "Amount must be positive",
    "too_short": "At least one currency code is required",
    "extra_forbidden": "Unrecognized field",
    "missing": "Field required",
}


def describe_error(error: dict[str, Any]) -> str:
    """Turn one pydantic error dict into a ``field: message`` line."""
    kind = error.get("type", "")
    if kind == "value_error" and "error" in error.get("ctx", {}):
        message = str(error["ctx"]["error"])
    else:
        message = _MESSAGES.get(kind, error.get("msg", "Invalid value"))

    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {message}" if location else message


ArgsT = TypeVar("ArgsT", bound=ToolArguments)


def validate_arguments(model: type[ArgsT], arguments: Optional[dict[str, Any]]) -> ArgsT:
    """Validate raw tool arguments against ``model``.

    Raises:
        ValidationError: With one line per failing field.
    """
    try:
        return model.model_validate(arguments if arguments is not None else {})
    except PydanticValidationError as exc:
        raise ValidationError([describe_error(error) for error in exc.errors()]) from exc
