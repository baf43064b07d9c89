"""
Unit Tests for invoicegen.items

Tests:
- Parsing raw [description, quantity, unit_price] entries
- Row rendering
"""

from decimal import Decimal

import pytest


class TestLineItem:
    """Tests for LineItem.from_raw."""

    def test_from_raw(self):
        from invoicegen.items import LineItem

        item = LineItem.from_raw(["Widget", 2, 500])

        assert item.description == "Widget"
        assert item.quantity == Decimal("2")
        assert item.unit_price == 500
        assert item.total == 1000

    def test_from_raw_fractional_quantity(self):
        from invoicegen.items import LineItem

        item = LineItem.from_raw(["Other item", 0.5, 100000])

        assert item.quantity == Decimal("0.5")
        assert item.total == 50000

    def test_from_raw_numeric_strings(self):
        """Numbers written as strings are accepted."""
        from invoicegen.items import LineItem

        item = LineItem.from_raw(("Widget", "1.5", "200"))

        assert item.total == 300

    @pytest.mark.parametrize("raw", [
        ["Widget", 2],
        ["Widget", 2, 500, "$10.00"],
        [],
        "Widget, 2, 500",
        {"description": "Widget", "quantity": 2, "unit_price": 500},
        None,
    ])
    def test_wrong_shape(self, raw):
        """Anything but a 3-sequence is malformed."""
        from invoicegen.errors import MalformedItemError
        from invoicegen.items import LineItem

        with pytest.raises(MalformedItemError, match="3 values"):
            LineItem.from_raw(raw)

    @pytest.mark.parametrize("raw", [
        ["Widget", "two", 500],
        ["Widget", None, 500],
        ["Widget", True, 500],
        ["Widget", 2, "five"],
    ])
    def test_non_numeric(self, raw):
        from invoicegen.errors import MalformedItemError
        from invoicegen.items import LineItem

        with pytest.raises(MalformedItemError):
            LineItem.from_raw(raw)

    def test_fractional_unit_price(self):
        """Unit prices are whole minor units."""
        from invoicegen.errors import MalformedItemError
        from invoicegen.items import LineItem

        with pytest.raises(MalformedItemError, match="minor units"):
            LineItem.from_raw(["Widget", 1, 10.5])

    def test_parse_items_keeps_order(self):
        from invoicegen.items import parse_items

        items = parse_items([["B", 1, 1], ["A", 2, 2]])

        assert [i.description for i in items] == ["B", "A"]


class TestRenderRows:
    """Tests for HTML row rendering."""

    def test_render_row(self):
        """Columns: description, quantity, unit price, line total."""
        from invoicegen.items import LineItem, render_row

        row = render_row(LineItem("Widget", Decimal("2"), 500), "USD")

        assert row == "<tr><td>Widget</td><td>2</td><td>$5.00</td><td>$10.00</td></tr>"

    def test_render_row_fractional(self):
        from invoicegen.items import LineItem, render_row

        row = render_row(LineItem("Other item", Decimal("0.50"), 100000), "GBP")

        assert row == "<tr><td>Other item</td><td>0.5</td><td>£1,000.00</td><td>£500.00</td></tr>"

    def test_render_rows_concatenated(self):
        """Rows are joined without separators, in item order."""
        from invoicegen.items import parse_items, render_rows

        html = render_rows(parse_items([["A", 1, 100], ["B", 3, 100]]), "USD")

        assert html == (
            "<tr><td>A</td><td>1</td><td>$1.00</td><td>$1.00</td></tr>"
            "<tr><td>B</td><td>3</td><td>$1.00</td><td>$3.00</td></tr>"
        )

    def test_render_rows_empty(self):
        from invoicegen.items import render_rows

        assert render_rows([], "USD") == ""

    @pytest.mark.parametrize("quantity,expected", [
        (Decimal("1"), "1"),
        (Decimal("1.0"), "1"),
        (Decimal("0.5"), "0.5"),
        (Decimal("2.50"), "2.5"),
        (Decimal("100"), "100"),
    ])
    def test_format_quantity(self, quantity, expected):
        from invoicegen.items import format_quantity

        assert format_quantity(quantity) == expected
