"""
Custom exception classes for the application.

Every error carries a machine code, a user-facing message and an HTTP status.
"""

from typing import Optional, Any
from datetime import datetime


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with current state (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# TENANT ERRORS
# ===================

class MissingTenantError(AppError):
    """Request did not identify a business."""

    def __init__(self):
        super().__init__(
            code="MISSING_BUSINESS_ID",
            message="X-Business-Id header is required",
            status_code=400
        )


# ===================
# PRODUCT / CATEGORY ERRORS
# ===================

class ProductNotFoundError(NotFoundError):
    """Product not found."""

    def __init__(self, product_id: str):
        super().__init__(
            resource="Product",
            identifier=product_id,
            code="PRODUCT_NOT_FOUND"
        )


class CategoryNotFoundError(NotFoundError):
    """Category not found."""

    def __init__(self, category_id: str):
        super().__init__(
            resource="Category",
            identifier=category_id,
            code="CATEGORY_NOT_FOUND"
        )


# ===================
# EXCEL PARSER ERRORS
# ===================

class ExcelParseError(ValidationError):
    """Excel file parsing failed."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="EXCEL_PARSE_ERROR",
            message=message,
            details=details
        )


class UnsupportedFileTypeError(ValidationError):
    """Uploaded file is not an Excel workbook."""

    def __init__(self, filename: str):
        super().__init__(
            code="UNSUPPORTED_FILE_TYPE",
            message="Only .xlsx and .xls files can be imported",
            details={"filename": filename}
        )


class FileTooLargeError(ValidationError):
    """Uploaded file exceeds the configured size limit."""

    def __init__(self, size_bytes: int, max_bytes: int):
        super().__init__(
            code="FILE_TOO_LARGE",
            message=f"File exceeds the {max_bytes // (1024 * 1024)} MB upload limit",
            details={"size_bytes": size_bytes, "max_bytes": max_bytes}
        )


# ===================
# IMPORT ERRORS
# ===================

class EmptyImportFileError(ValidationError):
    """The first sheet has no data rows."""

    def __init__(self):
        super().__init__(
            code="IMPORT_EMPTY_FILE",
            message="The file appears to be empty."
        )


class NoValidRowsError(ValidationError):
    """No row yielded a product name."""

    def __init__(self, row_count: int):
        super().__init__(
            code="IMPORT_NO_VALID_ROWS",
            message=(
                "No valid product definition found. "
                "Check headers (Product Name, Category, Price, Stock)."
            ),
            details={"row_count": row_count}
        )


class ProductImportError(AppError):
    """The product batch insert failed."""

    def __init__(
        self,
        reason: str,
        categories_created: Optional[list[str]] = None
    ):
        super().__init__(
            code="IMPORT_INSERT_FAILED",
            message=f"Import failed: {reason}",
            status_code=502,
            details={
                "reason": reason,
                "categories_created": categories_created or []
            }
        )


class ImportInProgressError(ConflictError):
    """Another import is running for the same business."""

    def __init__(self, business_id: str):
        super().__init__(
            code="IMPORT_IN_PROGRESS",
            message="An import is already running for this business",
            details={"business_id": business_id}
        )


# ===================
# SEED ERRORS
# ===================

class SeedError(AppError):
    """Demo data generation failed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="SEED_FAILED",
            message=f"Failed to generate data: {message}",
            status_code=500,
            details=details
        )
