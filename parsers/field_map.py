"""
Column-header aliases for product spreadsheets.

Each logical field lists the headers it accepts, in priority order, plus the
value used when none of them holds anything. Adding an alias is a data change:
append it to the tuple, no parsing code changes.

Numeric text is read with "." as the decimal point. Commas are accepted
only as thousands separators in full groups of three ("1,250.50"); text
such as "12,50" is ambiguous and treated as unparseable, so the field
falls back to its default. Count fields come out as int when whole.
"""

from dataclasses import dataclass
import re
from math import isfinite
from typing import Any, Literal, Optional, Union

import pandas as pd

DEFAULT_CATEGORY_NAME = "Uncategorized"
DEFAULT_LOW_STOCK_THRESHOLD = 10

FieldKind = Literal["text", "number", "count"]

# Optional sign, digits with comma thousands groups, optional decimals
THOUSANDS_PATTERN = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


@dataclass(frozen=True)
class FieldSpec:
    """One logical field: where to find it and what to use when it is absent."""
    field: str
    aliases: tuple[str, ...]
    default: Any
    kind: FieldKind = "text"


@dataclass
class NormalizedProduct:
    """A spreadsheet row in canonical product shape."""
    name: str
    category_name: str
    selling_price: float
    cost_price: float
    stock_quantity: Union[int, float]
    low_stock_threshold: Union[int, float]


def product_fields(
    default_category: str = DEFAULT_CATEGORY_NAME,
    default_low_stock: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> tuple[FieldSpec, ...]:
    """Build the product field table with the given defaults."""
    return (
        FieldSpec("name", ("Product Name", "Name", "name"), ""),
        FieldSpec("category_name", ("Category", "category"), default_category),
        FieldSpec("selling_price", ("Selling Price", "Price", "selling_price"), 0, "number"),
        FieldSpec("cost_price", ("Cost Price", "Cost", "cost_price"), 0, "number"),
        FieldSpec("stock_quantity", ("Stock", "Quantity", "stock_quantity"), 0, "count"),
        FieldSpec(
            "low_stock_threshold",
            ("Low Stock Alert", "Low Stock", "low_stock_threshold"),
            default_low_stock,
            "count",
        ),
    )


PRODUCT_FIELDS = product_fields()


def is_present(value: Any) -> bool:
    """True if a cell holds something (not missing, NaN or blank text)."""
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip() != ""
    try:
        return not pd.isna(value)
    except (TypeError, ValueError):
        return True


def resolve_field(row: dict[str, Any], spec: FieldSpec) -> Any:
    """
    Pick the value for a field from a raw row.

    The first alias whose cell is present wins; later aliases are ignored
    even if they also hold values. Falls back to the field default.
    """
    for alias in spec.aliases:
        value = row.get(alias)
        if is_present(value):
            return _coerce(value, spec)
    return spec.default


def normalize_row(
    row: dict[str, Any],
    fields: tuple[FieldSpec, ...] = PRODUCT_FIELDS,
) -> Optional[NormalizedProduct]:
    """
    Map a raw spreadsheet row to a NormalizedProduct.

    Returns None when the row has no usable product name.
    """
    values = {spec.field: resolve_field(row, spec) for spec in fields}

    if not values["name"]:
        return None

    return NormalizedProduct(**values)


# ===================
# HELPER FUNCTIONS
# ===================

def _coerce(value: Any, spec: FieldSpec) -> Any:
    if spec.kind == "text":
        return _to_text(value) or spec.default

    number = _to_number(value)
    if number is None:
        return spec.default
    if spec.kind == "count":
        number = max(number, 0.0)
        return int(number) if number.is_integer() else number
    return number


def _to_text(value: Any) -> str:
    """Cell to trimmed string; whole floats lose their '.0'."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def _to_number(value: Any) -> Optional[float]:
    """Cell to float, or None if it is not a finite number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().replace(" ", "")
        if "," in text:
            if not THOUSANDS_PATTERN.match(text):
                return None
            text = text.replace(",", "")
        try:
            number = float(text)
        except ValueError:
            return None
    return number if isfinite(number) else None
