"""
Spreadsheet product import.

Turns the first sheet of an uploaded workbook into product rows for one
business, creating any category referenced by name that the business does
not have yet.

Flow:
    1. parse the sheet (empty -> EmptyImportFileError, nothing written)
    2. normalize rows through the header alias table
    3. drop rows without a name (none left -> NoValidRowsError)
    4. collect the category names the rows reference
    5. load existing categories into a CategoryResolutionMap
    6. create unknown categories one at a time; a failed create is logged
       and its rows end up uncategorized
    7. resolve every row's category_id (lower-case, exact, else None)
    8. insert all products in one request (failure -> ProductImportError)
    9. invalidate the cached product and category views

Categories created in step 6 stay even if step 8 fails. Re-importing the
same file creates duplicate products.
"""

from contextlib import contextmanager
from threading import Lock
from typing import Any, Iterator, Optional, Union
from io import BytesIO
from pathlib import Path
import structlog

from config import settings as app_settings, Settings
from exceptions import (
    AppError,
    DatabaseError,
    EmptyImportFileError,
    NoValidRowsError,
    ProductImportError,
    ImportInProgressError,
)
from models.category import CategoryCreate
from models.imports import ImportResult
from parsers.excel_parser import read_first_sheet, RawRow
from parsers.field_map import NormalizedProduct, normalize_row, product_fields
from services import query_cache_service
from services.query_cache_service import PRODUCTS, CATEGORIES
from services.category_resolution import CategoryResolutionMap
from services.category_service import CategoryService, get_category_service
from services.product_service import ProductService, get_product_service
from services.notification_service import Notifier, CollectingNotifier

logger = structlog.get_logger(__name__)


# ===================
# BUSY FLAG
# ===================

_active_imports: set[str] = set()
_active_lock = Lock()


@contextmanager
def import_slot(business_id: str) -> Iterator[None]:
    """
    Hold the import slot of a business for the duration of a run.

    Raises:
        ImportInProgressError: If the business already has an import running
    """
    with _active_lock:
        if business_id in _active_imports:
            raise ImportInProgressError(business_id)
        _active_imports.add(business_id)
    try:
        yield
    finally:
        with _active_lock:
            _active_imports.discard(business_id)


def is_import_running(business_id: str) -> bool:
    with _active_lock:
        return business_id in _active_imports


# ===================
# IMPORTER
# ===================

class ProductImporter:
    """Reconciles spreadsheet rows into a business's catalog."""

    def __init__(
        self,
        product_service: Optional[ProductService] = None,
        category_service: Optional[CategoryService] = None,
        settings: Optional[Settings] = None,
    ):
        self.products = product_service or get_product_service()
        self.categories = category_service or get_category_service()
        self.settings = settings or app_settings
        self.fields = product_fields(
            default_category=self.settings.import_default_category,
            default_low_stock=self.settings.import_low_stock_threshold,
        )

    def import_file(
        self,
        business_id: str,
        file: Union[str, Path, bytes, BytesIO],
        filename: Optional[str] = None,
        notifier: Optional[Notifier] = None,
    ) -> ImportResult:
        """
        Import products from an Excel workbook (first sheet only).

        Args:
            business_id: Tenant UUID
            file: Workbook path, bytes or file-like object
            filename: Upload name, used to pick the Excel engine
            notifier: Receives user-facing progress messages

        Returns:
            ImportResult with counts and the messages sent

        Raises:
            ImportInProgressError: Another import is running for this business
            ExcelParseError: The workbook cannot be read
            EmptyImportFileError: The sheet has no data rows
            NoValidRowsError: No row has a product name
            ProductImportError: The product insert failed
        """
        notifier = notifier or CollectingNotifier(business_id=business_id)

        with import_slot(business_id):
            try:
                rows = read_first_sheet(file, filename=filename)
            except AppError as e:
                notifier.error(f"Import failed: {e.message}")
                raise
            return self._reconcile(business_id, rows, notifier)

    def import_rows(
        self,
        business_id: str,
        rows: list[RawRow],
        notifier: Optional[Notifier] = None,
    ) -> ImportResult:
        """Import already-parsed rows (header -> value dicts)."""
        notifier = notifier or CollectingNotifier(business_id=business_id)

        with import_slot(business_id):
            return self._reconcile(business_id, rows, notifier)

    # ===================
    # RECONCILIATION
    # ===================

    def _reconcile(
        self,
        business_id: str,
        rows: list[RawRow],
        notifier: Notifier,
    ) -> ImportResult:
        log = logger.bind(business_id=business_id)

        if not rows:
            error = EmptyImportFileError()
            notifier.error(error.message)
            raise error

        log.info("import_started", row_count=len(rows))
        notifier.info(f"Processing {len(rows)} rows...")

        normalized = self.normalize(rows)
        if not normalized:
            error = NoValidRowsError(len(rows))
            notifier.error(error.message)
            raise error

        skipped = len(rows) - len(normalized)
        if skipped:
            log.info("import_rows_skipped", skipped=skipped)

        try:
            resolution, created, failed = self.resolve_categories(business_id, normalized)
        except AppError as e:
            notifier.error(f"Import failed: {e.message}")
            raise

        records = self.build_records(normalized, resolution)

        try:
            self.products.bulk_create(business_id, records)
        except DatabaseError as e:
            reason = e.details.get("reason", e.message)
            log.error(
                "import_insert_failed",
                reason=reason,
                categories_created=created
            )
            error = ProductImportError(reason, categories_created=created)
            notifier.error(error.message)
            raise error from e

        query_cache_service.invalidate(business_id, PRODUCTS, CATEGORIES)
        notifier.success(f"Successfully imported {len(records)} products!")

        log.info(
            "import_completed",
            imported=len(records),
            skipped=skipped,
            categories_created=len(created),
            categories_failed=len(failed)
        )

        return ImportResult(
            imported_count=len(records),
            total_rows=len(rows),
            skipped_rows=skipped,
            categories_created=created,
            categories_failed=failed,
            messages=getattr(notifier, "messages", []),
        )

    def normalize(self, rows: list[RawRow]) -> list[NormalizedProduct]:
        """Normalize raw rows, dropping those without a product name."""
        products = []
        for row in rows:
            product = normalize_row(row, self.fields)
            if product is not None:
                products.append(product)
        return products

    def resolve_categories(
        self,
        business_id: str,
        products: list[NormalizedProduct],
    ) -> tuple[CategoryResolutionMap, list[str], list[str]]:
        """
        Build the resolution map, creating categories the business lacks.

        Creation is sequential and a failed create does not stop the run.

        Returns:
            (resolution map, names created, names that failed to create)

        Raises:
            DatabaseError: If the existing categories cannot be read
        """
        referenced = list(dict.fromkeys(p.category_name for p in products))

        resolution = CategoryResolutionMap()
        resolution.seed(self.categories.fetch_all(business_id))

        created: list[str] = []
        failed: list[str] = []

        for name in referenced:
            if resolution.knows(name):
                continue

            try:
                category = self.categories.create(
                    business_id,
                    CategoryCreate(
                        name=name,
                        color=self.settings.import_category_color,
                        icon=self.settings.import_category_icon,
                    )
                )
            except (AppError, ValueError) as e:
                # ValueError covers pydantic rejecting the name (e.g. too long)
                logger.warning(
                    "import_category_create_failed",
                    business_id=business_id,
                    name=name,
                    error=str(e)
                )
                failed.append(name)
                continue

            resolution.add(name, category.id)
            created.append(name)

        return resolution, created, failed

    def build_records(
        self,
        products: list[NormalizedProduct],
        resolution: CategoryResolutionMap,
    ) -> list[dict[str, Any]]:
        """Product column dicts for the batch insert (business_id added by the service)."""
        return [
            {
                "name": p.name,
                "category_id": resolution.resolve(p.category_name),
                "selling_price": p.selling_price,
                "cost_price": p.cost_price,
                "stock_quantity": p.stock_quantity,
                "low_stock_threshold": p.low_stock_threshold,
                "is_active": True,
            }
            for p in products
        ]


def get_product_importer() -> ProductImporter:
    """Build a ProductImporter wired to the shared services."""
    return ProductImporter()
