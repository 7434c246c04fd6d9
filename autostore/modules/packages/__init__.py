"""Catalog domain services and models."""

from .exceptions import (
    PackageAssetMissingError,
    PackageError,
    PackageNotFoundError,
    PackageStoreError,
    PackageValidationError,
)
from .models import (
    PackageCategory,
    PackageDownload,
    PackageRecord,
    PackageStatus,
    PackageUpdateInput,
    PackageUploadInput,
)
from .service import (
    FIELD_LIMITS,
    CatalogService,
    check_field_lengths,
    filter_by_category,
    format_size,
    parse_category,
)

__all__ = [
    "FIELD_LIMITS",
    "CatalogService",
    "PackageAssetMissingError",
    "PackageCategory",
    "PackageDownload",
    "PackageError",
    "PackageNotFoundError",
    "PackageRecord",
    "PackageStatus",
    "PackageStoreError",
    "PackageUpdateInput",
    "PackageUploadInput",
    "PackageValidationError",
    "check_field_lengths",
    "filter_by_category",
    "format_size",
    "parse_category",
]
