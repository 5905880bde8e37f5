"""
Category service for business logic operations.

Every query is scoped to a single business via business_id.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse
)
from exceptions import (
    CategoryNotFoundError,
    DatabaseError
)
from services import query_cache_service
from services.query_cache_service import CATEGORIES, PRODUCTS

logger = structlog.get_logger(__name__)


class CategoryService:
    """
    Category business logic.

    Handles CRUD operations for categories.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "categories"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(self, business_id: str) -> list[CategoryResponse]:
        """
        Get all categories for a business (cached list view).

        Args:
            business_id: Tenant UUID

        Returns:
            Categories ordered by sort_order
        """
        return query_cache_service.get_or_load(
            CATEGORIES,
            business_id,
            lambda: self.fetch_all(business_id)
        )

    def fetch_all(self, business_id: str) -> list[CategoryResponse]:
        """
        Read all categories for a business straight from the store.

        Raises:
            DatabaseError: If the query fails
        """
        logger.info("getting_categories", business_id=business_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("business_id", business_id)
                .order("sort_order")
                .execute()
            )

            categories = [CategoryResponse(**row) for row in result.data]

            logger.info("categories_retrieved", count=len(categories))

            return categories

        except Exception as e:
            logger.error(
                "get_categories_failed",
                business_id=business_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

    def get_by_id(self, business_id: str, category_id: str) -> CategoryResponse:
        """
        Get a single category by ID.

        Raises:
            CategoryNotFoundError: If category doesn't exist for this business
        """
        logger.debug("getting_category", category_id=category_id)

        try:
            result = (
                self.db.table(self.table)
                .select("*")
                .eq("id", category_id)
                .eq("business_id", business_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "get_category_failed",
                category_id=category_id,
                error=str(e)
            )
            raise DatabaseError("select", str(e))

        if not result.data:
            raise CategoryNotFoundError(category_id)

        return CategoryResponse(**result.data[0])

    # ===================
    # WRITE OPERATIONS
    # ===================

    def create(self, business_id: str, data: CategoryCreate) -> CategoryResponse:
        """
        Create a new category.

        Returns:
            Created CategoryResponse

        Raises:
            DatabaseError: If the insert fails
        """
        logger.info("creating_category", business_id=business_id, name=data.name)

        insert_data = data.model_dump(exclude_none=True)
        insert_data["business_id"] = business_id

        try:
            result = (
                self.db.table(self.table)
                .insert(insert_data)
                .execute()
            )
        except Exception as e:
            logger.error(
                "create_category_failed",
                name=data.name,
                error=str(e)
            )
            raise DatabaseError("insert", str(e))

        if not result.data:
            raise DatabaseError("insert", "no row returned", {"name": data.name})

        category = CategoryResponse(**result.data[0])
        query_cache_service.invalidate(business_id, CATEGORIES)

        logger.info(
            "category_created",
            category_id=category.id,
            name=category.name
        )

        return category

    def update(
        self,
        business_id: str,
        category_id: str,
        data: CategoryUpdate
    ) -> CategoryResponse:
        """
        Update an existing category.

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        logger.info("updating_category", category_id=category_id)

        existing = self.get_by_id(business_id, category_id)

        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            # Nothing to update, return existing
            return existing

        try:
            result = (
                self.db.table(self.table)
                .update(update_data)
                .eq("id", category_id)
                .eq("business_id", business_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "update_category_failed",
                category_id=category_id,
                error=str(e)
            )
            raise DatabaseError("update", str(e))

        query_cache_service.invalidate(business_id, CATEGORIES)

        logger.info(
            "category_updated",
            category_id=category_id,
            fields=list(update_data.keys())
        )

        return CategoryResponse(**result.data[0])

    def delete(self, business_id: str, category_id: str) -> bool:
        """
        Delete a category.

        Products referencing it become uncategorized (store-side FK rule).

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        logger.info("deleting_category", category_id=category_id)

        self.get_by_id(business_id, category_id)

        try:
            self.db.table(self.table).delete().eq(
                "id", category_id
            ).eq("business_id", business_id).execute()
        except Exception as e:
            logger.error(
                "delete_category_failed",
                category_id=category_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))

        query_cache_service.invalidate(business_id, CATEGORIES, PRODUCTS)

        logger.info("category_deleted", category_id=category_id)

        return True

    def delete_all(self, business_id: str) -> int:
        """
        Delete every category of a business.

        Returns:
            Number of categories deleted
        """
        logger.warning("deleting_all_categories", business_id=business_id)

        try:
            result = (
                self.db.table(self.table)
                .delete()
                .eq("business_id", business_id)
                .execute()
            )
        except Exception as e:
            logger.error(
                "delete_all_categories_failed",
                business_id=business_id,
                error=str(e)
            )
            raise DatabaseError("delete", str(e))

        query_cache_service.invalidate(business_id, CATEGORIES, PRODUCTS)

        deleted = len(result.data or [])
        logger.info("all_categories_deleted", business_id=business_id, count=deleted)
        return deleted


# Singleton instance for convenience
_category_service: Optional[CategoryService] = None

def get_category_service() -> CategoryService:
    """Get or create CategoryService instance."""
    global _category_service
    if _category_service is None:
        _category_service = CategoryService()
    return _category_service
