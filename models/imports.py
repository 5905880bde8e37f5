"""
Import and bulk-data schemas.
"""

from typing import Literal
from pydantic import BaseModel, Field


class NotificationMessage(BaseModel):
    """User-facing message produced while a bulk operation runs."""

    level: Literal["info", "success", "error"]
    message: str


class ImportResult(BaseModel):
    """Outcome of a spreadsheet product import."""

    imported_count: int = Field(..., ge=0, description="Products inserted")
    total_rows: int = Field(..., ge=0, description="Data rows in the first sheet")
    skipped_rows: int = Field(0, ge=0, description="Rows dropped for having no name")
    categories_created: list[str] = Field(default_factory=list)
    categories_failed: list[str] = Field(default_factory=list)
    messages: list[NotificationMessage] = Field(default_factory=list)


class SeedResult(BaseModel):
    """Outcome of random demo-data generation."""

    categories_created: int = Field(..., ge=0)
    products_created: int = Field(..., ge=0)
    messages: list[NotificationMessage] = Field(default_factory=list)


class DeleteAllResult(BaseModel):
    """Outcome of wiping a business's catalog."""

    products_deleted: int = Field(..., ge=0)
    categories_deleted: int = Field(..., ge=0)
    messages: list[NotificationMessage] = Field(default_factory=list)
