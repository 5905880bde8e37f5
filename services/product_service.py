"""
Product service for business logic operations.

Every query is scoped to a single business via business_id.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse
)
from exceptions import (
    ProductNotFoundError,
    DatabaseError
)
from services import query_cache_service
from services.query_cache_service import PRODUCTS
from services.category_service import get_category_service

logger = structlog.get_logger(__name__)


class ProductService:
    """
    Product business logic.

    Handles CRUD operations and batch inserts for products.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "products"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, business_id: str) -> list[ProductResponse]:
        """
        Get all products for a business (cached list view).

        Args:
            business_id: Tenant UUID

        Returns:
            Products ordered by name
        """
        return query_cache_service.get_or_load(
            PRODUCTS,
            business_id,
            lambda: self.fetch_all(business_id)
        )

    def fetch_all(self, business_id: str) -> list[ProductResponse]:
        """
        Read all products for a business straight from the store.

        Raises:
            DatabaseError: If the query fails
        """
        logger.info("getting_products", business_id=business_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("business_id", business_id)
                .order("name")
                .execute()
            )

            products = [ProductResponse(**row) for row in result.data]

            logger.info("products_retrieved", count=len(products))

            return products

        except Exception as e:
            logger.error(
                "get_products_failed",
                business_id=business_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def get_by_id(self, business_id: str, product_id: str) -> ProductResponse:
        """
        Get a single product by ID.

        Args:
            business_id: Tenant UUID
            product_id: Product UUID

        Returns:
            ProductResponse

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.debug("getting_product", product_id=product_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", product_id)
                .eq("business_id", business_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            raise ProductNotFoundError(product_id)

        return ProductResponse(**result.data[0])

    def count(self, business_id: str, active_only: bool = True) -> int:
        """Count products of a business."""
        try:
            query = (
                self.db.table(self.table)
                .select("id", count="exact")
                .eq("business_id", business_id)
            )
            if active_only:
                query = query.eq("is_active", True)
            result = query.execute()
            return result.count or 0
        except Exception as e:
            logger.error("count_products_failed", error=str(e))
            raise DatabaseError("count", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, business_id: str, data: ProductCreate) -> ProductResponse:
        """
        Create a new product.

        Returns:
            Created ProductResponse

        Raises:
            CategoryNotFoundError: If category_id is not a category of this business
            DatabaseError: If the insert fails
        """
        logger.info("creating_product", business_id=business_id, name=data.name)

        self._check_category(business_id, data.category_id)

        insert_data = data.model_dump()
        insert_data["business_id"] = business_id

        try:
            result = (
                self.db.table(self.table)
                .insert(insert_data)
                .execute()
            )
        except Exception as e:
            logger.error(
                "create_product_failed",
                name=data.name,
                error=str(e)
            )
            raise DatabaseError("insert", str(e))

        product = ProductResponse(**result.data[0])
        query_cache_service.invalidate(business_id, PRODUCTS)

        logger.info(
            "product_created",
            product_id=product.id,
            name=product.name
        )

        return product

    def update(
        self,
        business_id: str,
        product_id: str,
        data: ProductUpdate
    ) -> ProductResponse:
        """
        Update an existing product.

        Only provided fields are written.

        Raises:
            ProductNotFoundError: If product doesn't exist
            CategoryNotFoundError: If category_id is not a category of this business
        """
        logger.info("updating_product", product_id=product_id)

        existing = self.get_by_id(business_id, product_id)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            # Nothing to update, return existing
            return existing

        self._check_category(business_id, update_data.get("category_id"))

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", product_id)
                .eq("business_id", business_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "update_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

        query_cache_service.invalidate(business_id, PRODUCTS)

        logger.info(
            "product_updated",
            product_id=product_id,
            fields=list(update_data.keys())
        )

        return ProductResponse(**result.data[0])

    def _check_category(self, business_id: str, category_id: Optional[str]) -> None:
        """A product may only reference a category of its own business."""
        if category_id is not None:
            get_category_service().get_by_id(business_id, category_id)

    def delete(self, business_id: str, product_id: str) -> bool:
        """
        Delete a product.

        Raises:
            ProductNotFoundError: If product doesn't exist
        """
        logger.info("deleting_product", product_id=product_id)

        self.get_by_id(business_id, product_id)

        try:
            self.db.table(self.table).delete().eq(
                "id", product_id
            ).eq("business_id", business_id).execute()
        except Exception as e:
            logger.error(
                "delete_product_failed",
                product_id=product_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))

        query_cache_service.invalidate(business_id, PRODUCTS)

        logger.info("product_deleted", product_id=product_id)

        return True

    # ===================
    # BULK OPERATIONS
    # ===================

    def bulk_create(self, business_id: str, records: list[dict]) -> int:
        """
        Insert many products in a single request.

        The store applies the batch as one unit; there is no per-row
        success accounting and no retry.

        Args:
            business_id: Tenant UUID, stamped on every record
            records: Product column dicts

        Returns:
            Number of records submitted

        Raises:
            DatabaseError: If the insert fails
        """
        if not records:
            return 0

        logger.info("bulk_create_products", business_id=business_id, count=len(records))

        rows = [{**record, "business_id": business_id} for record in records]

        try:
            self.db.table(self.table).insert(rows).execute()
        except Exception as e:
            logger.error(
                "bulk_create_products_failed",
                business_id=business_id,
                count=len(rows),
                error=str(e)
            )
            reason = _store_message(e)
            raise DatabaseError("insert", reason, {"reason": reason})

        query_cache_service.invalidate(business_id, PRODUCTS)

        logger.info("bulk_create_products_complete", count=len(rows))
        return len(rows)

    def delete_all(self, business_id: str) -> int:
        """
        Delete every product of a business.

        Returns:
            Number of products deleted
        """
        logger.warning("deleting_all_products", business_id=business_id)

        try:
            result = (
                self.db.table(self.table)
                .delete()
                .eq("business_id", business_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "delete_all_products_failed",
                business_id=business_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))

        query_cache_service.invalidate(business_id, PRODUCTS)

        deleted = len(result.data or [])
        logger.info("all_products_deleted", business_id=business_id, count=deleted)
        return deleted


def _store_message(error: Exception) -> str:
    """Error text as reported by the store (PostgREST APIError carries .message)."""
    return getattr(error, "message", None) or str(error)


# Singleton instance for convenience
_product_service: Optional[ProductService] = None

def get_product_service() -> ProductService:
    """Get or create ProductService instance."""
    global _product_service
    if _product_service is None:
        _product_service = ProductService()
    return _product_service
