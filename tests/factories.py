"""
Test data factories.

Uses factory pattern to generate consistent test data.
"""

from datetime import datetime
from io import BytesIO
from typing import Optional
from uuid import uuid4

import pandas as pd

BUSINESS_ID = "biz-0001"
OTHER_BUSINESS_ID = "biz-0002"


class CategoryFactory:
    """
    Factory for creating test Category rows.

    Usage:
        category = CategoryFactory.create(name="Electronics")
        categories = CategoryFactory.create_batch(3)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        name: Optional[str] = None,
        business_id: str = BUSINESS_ID,
        color: str = "#64748b",
        icon: str = "Package",
        sort_order: Optional[int] = None,
    ) -> dict:
        n = cls._next_counter()
        now = datetime.utcnow().isoformat() + "Z"
        return {
            "id": id or str(uuid4()),
            "name": name or f"Category {n}",
            "business_id": business_id,
            "color": color,
            "icon": icon,
            "sort_order": sort_order,
            "created_at": now,
            "updated_at": now,
        }

    @classmethod
    def create_batch(cls, count: int, **kwargs) -> list[dict]:
        return [cls.create(**kwargs) for _ in range(count)]


class ProductFactory:
    """
    Factory for creating test Product rows.

    Usage:
        # Create with defaults
        product = ProductFactory.create()

        # Create with overrides
        product = ProductFactory.create(name="Widget", stock_quantity=3)

        # Create multiple
        products = ProductFactory.create_batch(5)
    """

    _counter = 0

    @classmethod
    def _next_counter(cls) -> int:
        cls._counter += 1
        return cls._counter

    @classmethod
    def create(
        cls,
        id: Optional[str] = None,
        name: Optional[str] = None,
        business_id: str = BUSINESS_ID,
        category_id: Optional[str] = None,
        selling_price: float = 100,
        cost_price: float = 60,
        stock_quantity: float = 25,
        low_stock_threshold: float = 10,
        is_active: bool = True,
    ) -> dict:
        n = cls._next_counter()
        now = datetime.utcnow().isoformat() + "Z"
        return {
            "id": id or str(uuid4()),
            "name": name or f"Product {n:03d}",
            "business_id": business_id,
            "category_id": category_id,
            "selling_price": selling_price,
            "cost_price": cost_price,
            "stock_quantity": stock_quantity,
            "low_stock_threshold": low_stock_threshold,
            "description": None,
            "is_active": is_active,
            "created_at": now,
            "updated_at": now,
        }

    @classmethod
    def create_batch(cls, count: int, **kwargs) -> list[dict]:
        return [cls.create(**kwargs) for _ in range(count)]


def create_excel_file(
    rows: list[dict],
    columns: Optional[list[str]] = None,
    extra_sheets: Optional[dict[str, list[dict]]] = None,
) -> BytesIO:
    """
    Build an .xlsx workbook in memory.

    The first sheet holds `rows`; `extra_sheets` are appended after it.
    """
    output = BytesIO()

    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df = pd.DataFrame(rows, columns=columns)
        df.to_excel(writer, sheet_name="Products", index=False)
        for sheet_name, sheet_rows in (extra_sheets or {}).items():
            pd.DataFrame(sheet_rows).to_excel(writer, sheet_name=sheet_name, index=False)

    output.seek(0)
    return output
