"""Binary asset storage exports."""

from .exceptions import AssetError, AssetNotFoundError, AssetStoreError, AssetValidationError
from .storage import FileAssetStore, StoredAsset, original_name, sanitize_filename

__all__ = [
    "AssetError",
    "AssetNotFoundError",
    "AssetStoreError",
    "AssetValidationError",
    "FileAssetStore",
    "StoredAsset",
    "original_name",
    "sanitize_filename",
]
