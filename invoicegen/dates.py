"""Date handling for invoice and due dates."""

import datetime as dt
from typing import Any, Dict

from dateutil import parser as date_parser

from .errors import DateParseError


def normalize(value: Any) -> dt.date:
    """Return ``value`` as a date, parsing strings if needed."""
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, str) and value.strip():
        try:
            return date_parser.isoparse(value.strip()).date()
        except ValueError:
            pass
        try:
            return date_parser.parse(value).date()
        except (ValueError, OverflowError) as e:
            raise DateParseError(f"Invalid date: {value!r}") from e
    raise DateParseError(f"Invalid date: {value!r}")


def format_long(value: dt.date) -> str:
    """March 4, 2024"""
    return f"{value:%B} {value.day}, {value.year}"


def period_fields(today: dt.date) -> Dict[str, str]:
    """Month names and year of the run date, for item descriptions like
    "Consulting for %past_month% %year%"."""
    past = today.replace(day=1) - dt.timedelta(days=1)
    return {
        "month": f"{today:%B}",
        "past_month": f"{past:%B}",
        "year": f"{today:%Y}",
    }
