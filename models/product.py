"""
Product schemas for validation and serialization.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin, ListResponse


class ProductCreate(BaseSchema):
    """
    Create a new product.

    Required: name
    Optional: everything else (store defaults apply)
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Product name",
        examples=["Premium Widget 42"]
    )
    category_id: Optional[str] = Field(
        None,
        description="Category UUID, None for uncategorized"
    )
    selling_price: float = Field(0, ge=0, description="Unit selling price")
    cost_price: float = Field(0, ge=0, description="Unit cost price")
    stock_quantity: float = Field(0, ge=0, description="Units in stock")
    low_stock_threshold: float = Field(10, ge=0, description="Low stock alert level")
    description: Optional[str] = None
    is_active: bool = True


class ProductUpdate(BaseSchema):
    """
    Update existing product.

    All fields optional - only provided fields are updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    category_id: Optional[str] = None
    selling_price: Optional[float] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)
    stock_quantity: Optional[float] = Field(None, ge=0)
    low_stock_threshold: Optional[float] = Field(None, ge=0)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class ProductResponse(BaseSchema, TimestampMixin):
    """
    Product response with all fields.

    Used for GET responses.
    """

    id: str = Field(..., description="Product UUID")
    name: str
    category_id: Optional[str] = None
    selling_price: float = 0
    cost_price: float = 0
    stock_quantity: float = 0
    low_stock_threshold: float = 10
    description: Optional[str] = None
    is_active: bool = True
    business_id: Optional[str] = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock_quantity <= self.low_stock_threshold


class ProductListResponse(ListResponse):
    """List of products."""

    data: list[ProductResponse]
