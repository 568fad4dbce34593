"""Display formatting and derived-value helpers.

Pure functions used only for presentation. None of them raise on bad
input: a render must never fail because of a single malformed field.
"""

import logging
import math
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

import pytz
from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency as babel_format_currency, is_currency
from dateutil.parser import isoparse

logger = logging.getLogger(__name__)

DEFAULT_CURRENCY = "USD"
DEFAULT_LOCALE = "en_US"
INPUT_DATE_FORMAT = "%Y-%m-%d"

DateLike = Union[date, datetime, str, None]
Number = Union[int, float]


def normalize_currency(currency: Optional[str]) -> str:
    """Return an upper-cased currency code, defaulting blank input to USD."""
    if currency is None or not str(currency).strip():
        return DEFAULT_CURRENCY
    return str(currency).strip().upper()


def is_valid_currency(currency: Optional[str]) -> bool:
    """Check whether a code is a known ISO 4217 currency."""
    if currency is None or not str(currency).strip():
        return False
    return is_currency(str(currency).strip().upper())


def format_currency(
    amount: Optional[Number],
    currency: Optional[str] = DEFAULT_CURRENCY,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """
    Format an amount as a localized currency string with 2 decimals.

    Unknown currency codes fall back to USD and log a warning. A missing
    or non-finite amount renders as zero.
    """
    if amount is None or not math.isfinite(amount):
        amount = 0

    code = normalize_currency(currency)
    if not is_currency(code):
        logger.warning("Invalid currency code: %s, using %s as fallback", code, DEFAULT_CURRENCY)
        code = DEFAULT_CURRENCY

    return babel_format_currency(
        amount,
        code,
        locale=locale,
        currency_digits=False,
    )


def _parse_date_like(value: DateLike) -> Optional[datetime]:
    """
    Parse a date-like value; None if absent.

    Strings must be ISO 8601 dates or timestamps. Anything else raises
    ValueError rather than being completed from today's date.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value).strip()
    if not text:
        return None
    try:
        return isoparse(text)
    except OverflowError as e:
        raise ValueError(str(e)) from e


def format_date(value: DateLike, locale: str = DEFAULT_LOCALE) -> str:
    """Format a date-like value as 'Mon D, YYYY' ('N/A' / 'Invalid Date' on bad input)."""
    try:
        parsed = _parse_date_like(value)
    except ValueError:
        return "Invalid Date"
    if parsed is None:
        return "N/A"
    return babel_format_date(parsed.date(), format="medium", locale=locale)


def format_date_for_input(value: DateLike) -> str:
    """
    Format a date-like value as YYYY-MM-DD for an editable date field.

    Timezone-aware values are converted to UTC first. Absent or
    unparsable input yields an empty string (an empty field).
    """
    try:
        parsed = _parse_date_like(value)
    except ValueError:
        logger.warning("Cannot convert %r to an input date", value)
        return ""
    if parsed is None:
        return ""
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(pytz.utc)
    return parsed.strftime(INPUT_DATE_FORMAT)


def today_for_input() -> str:
    """Today's date in input-field format."""
    return date.today().strftime(INPUT_DATE_FORMAT)


def calculate_profit_loss(buy_price: Number, current_value: Number, quantity: Number) -> float:
    """Profit or loss of a holding: (current - buy) * quantity."""
    return (current_value - buy_price) * quantity


def calculate_total_value(current_value: Number, quantity: Number) -> float:
    """Total current value of a holding."""
    return current_value * quantity


def format_type_label(type_code: str) -> str:
    """Human label for an enumerated type code ('credit_card' -> 'Credit Card')."""
    return type_code.replace("_", " ").title()


def badge_slug(type_code: str) -> str:
    """Class-safe slug for a type code ('credit_card' -> 'credit-card')."""
    return type_code.lower().replace("_", "-")


def badge_class(type_code: str) -> str:
    """Badge style class for a type code."""
    return f"badge {badge_slug(type_code)}"


def format_number(value: Optional[Number]) -> str:
    """Plain number without trailing zeros ('12.50' -> '12.5')."""
    if value is None:
        return "--"
    return format(Decimal(str(value)).normalize(), "f")


def format_percent(rate: Optional[Number]) -> str:
    """Interest-rate style percentage ('4.5%')."""
    if rate is None:
        return "--"
    return f"{format_number(rate)}%"
