"""
Category schemas for validation and serialization.
"""

from pydantic import Field
from typing import Optional

from models.base import BaseSchema, TimestampMixin, ListResponse


HEX_COLOR_PATTERN = "^#[0-9a-fA-F]{6}$"


class CategoryCreate(BaseSchema):
    """
    Create a new category.

    Required: name
    Optional: color, icon, sort_order
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category name (unique per business, case-insensitive)",
        examples=["Electronics", "Home & Garden"]
    )
    color: str = Field(
        "#64748b",
        pattern=HEX_COLOR_PATTERN,
        description="Display color"
    )
    icon: str = Field("Package", description="Display icon name")
    sort_order: Optional[int] = Field(None, ge=0, description="Display order")


class CategoryUpdate(BaseSchema):
    """
    Update existing category.

    All fields optional - only provided fields are updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    color: Optional[str] = Field(None, pattern=HEX_COLOR_PATTERN)
    icon: Optional[str] = None
    sort_order: Optional[int] = Field(None, ge=0)


class CategoryResponse(BaseSchema, TimestampMixin):
    """Category as stored."""

    id: str = Field(..., description="Category UUID")
    name: str
    color: Optional[str] = None
    icon: Optional[str] = None
    sort_order: Optional[int] = None
    business_id: Optional[str] = None


class CategoryListResponse(ListResponse):
    """List of categories."""

    data: list[CategoryResponse]
