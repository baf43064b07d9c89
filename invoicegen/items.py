"""
Line Items
==========
Parses raw ``[description, quantity, unit_price]`` entries from the
defaults file and renders them as HTML table rows.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List

from .errors import MalformedItemError
from .models import DEFAULT_LOCALE
from .money import format_money, line_total


@dataclass(frozen=True)
class LineItem:
    """One invoice line; unit_price in minor units."""
    description: str
    quantity: Decimal
    unit_price: int

    @property
    def total(self) -> int:
        return line_total(self.quantity, self.unit_price)

    @classmethod
    def from_raw(cls, raw: Any) -> "LineItem":
        """Create from a ``[description, quantity, unit_price]`` sequence."""
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence) or len(raw) != 3:
            raise MalformedItemError(f"Items must have 3 values, got {raw!r}")

        description, quantity, unit_price = raw
        return cls(
            description="" if description is None else str(description),
            quantity=_to_decimal(quantity, raw),
            unit_price=_to_minor_units(unit_price, raw),
        )


def _to_decimal(value: Any, raw: Any) -> Decimal:
    if isinstance(value, bool):
        raise MalformedItemError(f"Quantity must be a number in {raw!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation as e:
        raise MalformedItemError(f"Quantity must be a number in {raw!r}") from e
    if not result.is_finite():
        raise MalformedItemError(f"Quantity must be a number in {raw!r}")
    return result


def _to_minor_units(value: Any, raw: Any) -> int:
    amount = _to_decimal(value, raw)
    if amount != amount.to_integral_value():
        raise MalformedItemError(
            f"Unit price must be a whole amount of minor units (e.g. cents) in {raw!r}"
        )
    return int(amount)


def parse_items(raw_items: Iterable[Any]) -> List[LineItem]:
    return [LineItem.from_raw(raw) for raw in raw_items]


def format_quantity(quantity: Decimal) -> str:
    # 1 -> "1", 0.50 -> "0.5"
    return format(quantity.normalize(), "f")


def render_row(item: LineItem, currency: str, locale: str = DEFAULT_LOCALE) -> str:
    cells = [
        item.description,
        format_quantity(item.quantity),
        format_money(item.unit_price, currency, locale),
        format_money(item.total, currency, locale),
    ]
    return "<tr><td>" + "</td><td>".join(cells) + "</td></tr>"


def render_rows(items: Iterable[LineItem], currency: str, locale: str = DEFAULT_LOCALE) -> str:
    """Table rows for all items, concatenated without separators."""
    return "".join(render_row(item, currency, locale) for item in items)
