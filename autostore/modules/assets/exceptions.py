"""Asset storage errors."""


class AssetError(Exception):
    """Base class for asset storage errors."""


class AssetValidationError(AssetError):
    """Raised when an upload cannot be accepted (missing name, empty body)."""


class AssetStoreError(AssetError):
    """Raised when the binary could not be written durably."""


class AssetNotFoundError(AssetError):
    """Raised when a reference does not resolve to a stored file."""
