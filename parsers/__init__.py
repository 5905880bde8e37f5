"""
Excel and field-mapping parsers.
"""

from parsers.excel_parser import (
    read_first_sheet,
    RawRow,
)
from parsers.field_map import (
    FieldSpec,
    NormalizedProduct,
    PRODUCT_FIELDS,
    product_fields,
    normalize_row,
    resolve_field,
)

__all__ = [
    "read_first_sheet",
    "RawRow",
    "FieldSpec",
    "NormalizedProduct",
    "PRODUCT_FIELDS",
    "product_fields",
    "normalize_row",
    "resolve_field",
]
