"""
Money Formatting
================
Amounts are integer minor units (cents, pence, ...) of an ISO 4217
currency. Quantities may be fractional; line totals are rounded half up
back to whole minor units.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable, Union

from babel.core import UnknownLocaleError
from babel.numbers import (
    UnknownCurrencyError,
    format_currency,
    get_currency_precision,
    validate_currency,
)

from .errors import ConfigurationError, MalformedItemError
from .models import DEFAULT_LOCALE

Number = Union[int, float, Decimal]


def format_money(amount_minor: int, currency: str, locale: str = DEFAULT_LOCALE) -> str:
    """Format minor units for display, e.g. ``format_money(1000, "USD") == "$10.00"``."""
    code = currency.upper()
    try:
        validate_currency(code)
        amount = Decimal(amount_minor).scaleb(-get_currency_precision(code))
        return format_currency(amount, code, locale=locale)
    except UnknownCurrencyError as e:
        raise ConfigurationError(f"Unknown currency: {currency}") from e
    except (UnknownLocaleError, ValueError) as e:
        raise ConfigurationError(f"Unknown locale: {locale}") from e


def line_total(quantity: Number, unit_price: int) -> int:
    """quantity x unit price, rounded to whole minor units."""
    exact = Decimal(str(quantity)) * unit_price
    try:
        return int(exact.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation as e:
        raise MalformedItemError(
            f"Line total too large: {quantity} x {unit_price}"
        ) from e


def total(items: Iterable) -> int:
    """Sum of the (rounded) line totals."""
    return sum(item.total for item in items)
