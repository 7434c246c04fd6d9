"""Catalog domain specific exceptions."""


class PackageError(Exception):
    """Base class for catalog errors."""


class PackageNotFoundError(PackageError):
    """Raised when no catalog record exists for the requested id."""


class PackageAssetMissingError(PackageError):
    """Raised when a record exists but its binary can no longer be resolved."""


class PackageValidationError(PackageError):
    """Raised when submitted metadata is missing or not acceptable."""


class PackageStoreError(PackageError):
    """Raised when the catalog or asset store fails underneath an operation."""
