"""
Random demo data for a business catalog.

Generates a handful of categories and products for testing and
development, and wipes a business's catalog on request.
"""

import random
from typing import Optional
import structlog

from exceptions import AppError, SeedError
from models.category import CategoryCreate
from models.imports import SeedResult, DeleteAllResult
from services.category_service import CategoryService, get_category_service
from services.product_service import ProductService, get_product_service
from services.notification_service import Notifier, CollectingNotifier

logger = structlog.get_logger(__name__)

CATEGORY_NAMES = [
    "Electronics", "Clothing", "Groceries", "Home & Garden", "Toys",
    "Books", "Sports", "Beauty", "Automotive", "Pets",
]
PRODUCT_ADJECTIVES = [
    "Premium", "Budget", "Deluxe", "Standard", "Pro",
    "Ultra", "Smart", "Eco", "Super", "Mega",
]
PRODUCT_NOUNS = [
    "Widget", "Gadget", "Device", "Tool", "Kit",
    "Pack", "Bundle", "Unit", "System", "Set",
]

MIN_CATEGORIES, MAX_CATEGORIES = 3, 5
MIN_PRODUCTS, MAX_PRODUCTS = 15, 20
SEED_ICON = "Package"
SEED_LOW_STOCK_THRESHOLD = 10


class SeedService:
    """Bulk demo data generation and removal."""

    def __init__(
        self,
        product_service: Optional[ProductService] = None,
        category_service: Optional[CategoryService] = None,
        rng: Optional[random.Random] = None,
    ):
        self.products = product_service or get_product_service()
        self.categories = category_service or get_category_service()
        self.rng = rng or random.Random()

    def seed(self, business_id: str, notifier: Optional[Notifier] = None) -> SeedResult:
        """
        Create 3-5 random categories and 15-20 products spread across them.

        Category names get a random numeric suffix so repeated runs rarely
        collide. A category that fails to create is skipped.

        Raises:
            SeedError: If no category could be created or the product insert fails
        """
        notifier = notifier or CollectingNotifier(business_id=business_id)
        log = logger.bind(business_id=business_id)

        count = self.rng.randint(MIN_CATEGORIES, MAX_CATEGORIES)
        names = self.rng.sample(CATEGORY_NAMES, count)

        category_ids: list[str] = []
        for base_name in names:
            name = f"{base_name} {self.rng.randint(0, 999)}"
            try:
                category = self.categories.create(
                    business_id,
                    CategoryCreate(name=name, color=self.random_color(), icon=SEED_ICON)
                )
            except AppError as e:
                log.error("seed_category_failed", name=name, error=e.message)
                continue
            category_ids.append(category.id)

        if not category_ids:
            error = SeedError("Failed to create any categories")
            notifier.error(error.message)
            raise error

        records = [
            self.random_product(category_ids)
            for _ in range(self.rng.randint(MIN_PRODUCTS, MAX_PRODUCTS))
        ]

        try:
            self.products.bulk_create(business_id, records)
        except AppError as e:
            error = SeedError(e.details.get("reason", e.message))
            notifier.error(error.message)
            raise error from e

        notifier.success(
            f"Added {len(category_ids)} categories and {len(records)} products!"
        )
        log.info(
            "seed_completed",
            categories=len(category_ids),
            products=len(records)
        )

        return SeedResult(
            categories_created=len(category_ids),
            products_created=len(records),
            messages=getattr(notifier, "messages", []),
        )

    def delete_all(
        self,
        business_id: str,
        notifier: Optional[Notifier] = None
    ) -> DeleteAllResult:
        """
        Delete every product, then every category, of a business.

        Products go first because they reference categories.
        """
        notifier = notifier or CollectingNotifier(business_id=business_id)

        try:
            products_deleted = self.products.delete_all(business_id)
            categories_deleted = self.categories.delete_all(business_id)
        except AppError as e:
            notifier.error(f"Failed to delete data: {e.message}")
            raise

        notifier.success("All inventory data deleted.")

        return DeleteAllResult(
            products_deleted=products_deleted,
            categories_deleted=categories_deleted,
            messages=getattr(notifier, "messages", []),
        )

    # ===================
    # GENERATORS
    # ===================

    def random_color(self) -> str:
        return f"#{self.rng.randint(0, 0xFFFFFF):06x}"

    def random_product(self, category_ids: list[str]) -> dict:
        """One product with a 20-70% markup over a 10-509 cost."""
        cost_price = self.rng.randint(10, 509)
        markup = 1.2 + self.rng.random() * 0.5
        return {
            "name": (
                f"{self.rng.choice(PRODUCT_ADJECTIVES)} "
                f"{self.rng.choice(PRODUCT_NOUNS)} "
                f"{self.rng.randint(0, 999)}"
            ),
            "category_id": self.rng.choice(category_ids),
            "cost_price": cost_price,
            "selling_price": int(cost_price * markup),
            "stock_quantity": self.rng.randint(0, 99),
            "low_stock_threshold": SEED_LOW_STOCK_THRESHOLD,
            "is_active": True,
        }


def get_seed_service() -> SeedService:
    """Build a SeedService wired to the shared services."""
    return SeedService()
