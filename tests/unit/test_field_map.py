"""
Unit tests for the product header alias table.

Run: pytest tests/unit/test_field_map.py -v
"""

import math

import pytest

from parsers.field_map import (
    PRODUCT_FIELDS,
    FieldSpec,
    NormalizedProduct,
    normalize_row,
    product_fields,
    resolve_field,
    is_present,
)


def spec_for(field: str) -> FieldSpec:
    return next(spec for spec in PRODUCT_FIELDS if spec.field == field)


class TestAliasPriority:
    """Header aliases are tried in declared order."""

    def test_product_name_wins_over_name(self):
        row = {"Name": "Second", "Product Name": "First", "name": "Third"}
        assert resolve_field(row, spec_for("name")) == "First"

    def test_falls_through_to_later_alias(self):
        assert resolve_field({"name": "lower"}, spec_for("name")) == "lower"

    def test_blank_cell_falls_through(self):
        row = {"Product Name": "   ", "Name": "Widget"}
        assert resolve_field(row, spec_for("name")) == "Widget"

    def test_nan_cell_falls_through(self):
        row = {"Selling Price": float("nan"), "Price": 12.5}
        assert resolve_field(row, spec_for("selling_price")) == 12.5

    def test_zero_is_a_present_value(self):
        row = {"Selling Price": 0, "Price": 99}
        assert resolve_field(row, spec_for("selling_price")) == 0

    @pytest.mark.parametrize("header", ["Stock", "Quantity", "stock_quantity"])
    def test_every_stock_alias_is_accepted(self, header):
        assert resolve_field({header: 7}, spec_for("stock_quantity")) == 7


class TestDefaults:
    """Missing fields take their declared defaults."""

    def test_missing_category_is_uncategorized(self):
        product = normalize_row({"Name": "Widget"})
        assert product.category_name == "Uncategorized"

    def test_missing_numbers_default(self):
        product = normalize_row({"Name": "Widget"})
        assert product.selling_price == 0
        assert product.cost_price == 0
        assert product.stock_quantity == 0
        assert product.low_stock_threshold == 10

    def test_custom_defaults(self):
        fields = product_fields(default_category="Misc", default_low_stock=3)
        product = normalize_row({"Name": "Widget"}, fields)
        assert product.category_name == "Misc"
        assert product.low_stock_threshold == 3


class TestCoercion:
    """Cells are coerced to the declared types."""

    def test_numeric_strings(self):
        product = normalize_row({"Name": "Widget", "Price": " 1,250.50 ", "Stock": "4"})
        assert product.selling_price == 1250.50
        assert product.stock_quantity == 4

    def test_unparseable_number_uses_default(self):
        product = normalize_row({"Name": "Widget", "Price": "free", "Low Stock": "n/a"})
        assert product.selling_price == 0
        assert product.low_stock_threshold == 10

    def test_infinite_number_uses_default(self):
        product = normalize_row({"Name": "Widget", "Cost": math.inf})
        assert product.cost_price == 0

    def test_negative_counts_clamped_to_zero(self):
        product = normalize_row({"Name": "Widget", "Stock": -5, "Low Stock Alert": -1})
        assert product.stock_quantity == 0
        assert product.low_stock_threshold == 0

    def test_whole_counts_are_ints(self):
        product = normalize_row({"Name": "Widget", "Stock": 5.0, "Low Stock Alert": "3"})
        assert product.stock_quantity == 5
        assert isinstance(product.stock_quantity, int)
        assert isinstance(product.low_stock_threshold, int)

    def test_fractional_count_kept(self):
        product = normalize_row({"Name": "Widget", "Stock": 2.5})
        assert product.stock_quantity == 2.5

    @pytest.mark.parametrize("text", ["12,50", "1,2", "1,2345.00", "12,50,0"])
    def test_ambiguous_comma_uses_default(self, text):
        product = normalize_row({"Name": "Widget", "Price": text})
        assert product.selling_price == 0

    @pytest.mark.parametrize("text,expected", [
        ("1,250", 1250),
        ("-12,000.5", -12000.5),
        ("1 250.75", 1250.75),
    ])
    def test_thousands_separators(self, text, expected):
        product = normalize_row({"Name": "Widget", "Price": text})
        assert product.selling_price == expected

    def test_negative_price_kept(self):
        product = normalize_row({"Name": "Widget", "Cost": -2})
        assert product.cost_price == -2

    def test_numeric_name_becomes_text(self):
        product = normalize_row({"Name": 1234.0})
        assert product.name == "1234"

    def test_text_is_trimmed(self):
        product = normalize_row({"Name": "  Widget ", "Category": " Tools "})
        assert product.name == "Widget"
        assert product.category_name == "Tools"


class TestNormalizeRow:
    """Whole-row normalization."""

    def test_full_row(self):
        row = {
            "Product Name": "Widget",
            "Category": "Tools",
            "Selling Price": 100,
            "Cost Price": 60,
            "Stock": 5,
            "Low Stock Alert": 2,
        }
        assert normalize_row(row) == NormalizedProduct(
            name="Widget",
            category_name="Tools",
            selling_price=100,
            cost_price=60,
            stock_quantity=5,
            low_stock_threshold=2,
        )

    @pytest.mark.parametrize("row", [
        {},
        {"Name": ""},
        {"Name": None},
        {"Product Name": "  ", "Category": "Tools", "Price": 5},
        {"Title": "Widget"},
    ])
    def test_nameless_rows_are_dropped(self, row):
        assert normalize_row(row) is None


class TestIsPresent:

    @pytest.mark.parametrize("value", [None, "", "  ", float("nan")])
    def test_absent_values(self, value):
        assert not is_present(value)

    @pytest.mark.parametrize("value", [0, "0", "x", 1.5, False])
    def test_present_values(self, value):
        assert is_present(value)
