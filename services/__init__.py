"""
Business logic services.

Each service handles one domain area.
"""

from services.product_service import ProductService, get_product_service
from services.category_service import CategoryService, get_category_service
from services.category_resolution import CategoryResolutionMap
from services.product_import_service import (
    ProductImporter,
    get_product_importer,
    import_slot,
)
from services.seed_service import SeedService, get_seed_service
from services.export_service import ExportService, get_export_service
from services.notification_service import Notifier, CollectingNotifier

__all__ = [
    "ProductService",
    "get_product_service",
    "CategoryService",
    "get_category_service",
    "CategoryResolutionMap",
    "ProductImporter",
    "get_product_importer",
    "import_slot",
    "SeedService",
    "get_seed_service",
    "ExportService",
    "get_export_service",
    "Notifier",
    "CollectingNotifier",
]
