"""
Export service: catalog CSV export and the import template workbook.
"""

import csv
from dataclasses import dataclass
from io import BytesIO, StringIO
from typing import Any, Callable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
import structlog

from models.category import CategoryResponse
from models.product import ProductResponse
from parsers.field_map import PRODUCT_FIELDS

logger = structlog.get_logger(__name__)

# Excel only detects UTF-8 in a CSV when it starts with a BOM
UTF8_BOM = "\ufeff"

HEADER_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")


@dataclass(frozen=True)
class ExportColumn:
    """One output column: source key, header text and optional formatter."""
    key: str
    header: str
    format: Optional[Callable[[Any], str]] = None


def to_csv(rows: list[dict], columns: list[ExportColumn]) -> Optional[str]:
    """
    Render rows as an Excel-friendly CSV string.

    Every field is quoted and embedded quotes are doubled. Missing values
    render as empty strings.

    Returns:
        CSV text prefixed with a UTF-8 BOM, or None when there are no rows
    """
    if not rows:
        return None

    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator="\n")

    writer.writerow([col.header for col in columns])
    for row in rows:
        writer.writerow([_format_cell(row.get(col.key), col) for col in columns])

    return UTF8_BOM + output.getvalue().rstrip("\n")


def _format_cell(value: Any, column: ExportColumn) -> str:
    if column.format is not None:
        return column.format(value)
    return "" if value is None else str(value)


def _money(value: Any) -> str:
    return f"{float(value or 0):.2f}"


class ExportService:
    """Builds downloadable files from a business catalog."""

    def products_csv(
        self,
        products: list[ProductResponse],
        categories: list[CategoryResponse],
    ) -> Optional[str]:
        """
        Product list as CSV, with category names instead of ids.

        Returns:
            CSV text, or None when the business has no products
        """
        names = {c.id: c.name for c in categories}
        rows = [
            {
                **p.model_dump(),
                "category": names.get(p.category_id, ""),
                "low_stock": "Yes" if p.is_low_stock else "No",
            }
            for p in products
        ]

        columns = [
            ExportColumn("name", "Product Name"),
            ExportColumn("category", "Category"),
            ExportColumn("selling_price", "Selling Price", _money),
            ExportColumn("cost_price", "Cost Price", _money),
            ExportColumn("stock_quantity", "Stock", _quantity),
            ExportColumn("low_stock_threshold", "Low Stock Alert", _quantity),
            ExportColumn("low_stock", "Low Stock"),
            ExportColumn("is_active", "Active", lambda v: "Yes" if v else "No"),
        ]

        logger.info("exporting_products_csv", count=len(rows))
        return to_csv(rows, columns)

    def import_template_xlsx(self) -> BytesIO:
        """
        Empty workbook whose header row the importer accepts.

        Uses the first (preferred) alias of every product field.
        """
        wb = Workbook()
        ws = wb.active
        ws.title = "Products"

        headers = [spec.aliases[0] for spec in PRODUCT_FIELDS]
        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = Font(bold=True)
            cell.fill = HEADER_FILL
            ws.column_dimensions[cell.column_letter].width = max(len(header) + 4, 14)

        ws.freeze_panes = "A2"

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output


def _quantity(value: Any) -> str:
    number = float(value or 0)
    return str(int(number)) if number.is_integer() else str(number)


def get_export_service() -> ExportService:
    return ExportService()
