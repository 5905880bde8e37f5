"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    DatabaseError,

    # Tenant
    MissingTenantError,

    # Products / categories
    ProductNotFoundError,
    CategoryNotFoundError,

    # Excel parser
    ExcelParseError,
    UnsupportedFileTypeError,
    FileTooLargeError,

    # Import
    EmptyImportFileError,
    NoValidRowsError,
    ProductImportError,
    ImportInProgressError,

    # Seed
    SeedError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "DatabaseError",

    # Tenant
    "MissingTenantError",

    # Products / categories
    "ProductNotFoundError",
    "CategoryNotFoundError",

    # Excel parser
    "ExcelParseError",
    "UnsupportedFileTypeError",
    "FileTooLargeError",

    # Import
    "EmptyImportFileError",
    "NoValidRowsError",
    "ProductImportError",
    "ImportInProgressError",

    # Seed
    "SeedError",
]
