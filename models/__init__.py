"""
Pydantic models for validation and serialization.
"""

from models.base import (
    BaseSchema,
    TimestampMixin,
    ListResponse
)
from models.product import (
    ProductCreate,
    ProductUpdate,
    ProductResponse,
    ProductListResponse
)
from models.category import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    CategoryListResponse
)
from models.imports import (
    NotificationMessage,
    ImportResult,
    SeedResult,
    DeleteAllResult
)

__all__ = [
    # Base
    "BaseSchema",
    "TimestampMixin",
    "ListResponse",

    # Product
    "ProductCreate",
    "ProductUpdate",
    "ProductResponse",
    "ProductListResponse",

    # Category
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "CategoryListResponse",

    # Import / bulk
    "NotificationMessage",
    "ImportResult",
    "SeedResult",
    "DeleteAllResult",
]
