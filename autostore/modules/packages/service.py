"""Catalog use cases binding the package table to the asset store."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import PurePath
from typing import Callable, Iterable, Sequence
from urllib.parse import quote

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from autostore.modules.assets import (
    AssetNotFoundError,
    AssetStoreError,
    AssetValidationError,
    FileAssetStore,
    original_name,
)
from autostore.modules.assets.storage import AsyncReadable

from .exceptions import (
    PackageAssetMissingError,
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
from .repository import PackageRepository

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = PackageCategory.UTILITIES
IDENTICON_URL = "https://api.dicebear.com/7.x/identicon/svg?seed={seed}"
# Widths of the apps table columns.
FIELD_LIMITS = {"name": 150, "version": 50, "developer": 150, "size": 30, "icon_url": 500}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CatalogService:
    """Upload, list, edit, delete and download catalog packages."""

    def __init__(
        self,
        repository: PackageRepository,
        asset_store: FileAssetStore,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._assets = asset_store
        self._clock = clock

    @classmethod
    def with_session(cls, session: AsyncSession, asset_store: FileAssetStore) -> "CatalogService":
        from autostore.infrastructure.database.repositories import SqlPackageRepository

        return cls(SqlPackageRepository(session), asset_store)

    async def list_packages(self) -> Sequence[PackageRecord]:
        return await self._repository.list_packages()

    async def get_package(self, package_id: str) -> PackageRecord:
        record = await self._repository.get_by_id(package_id)
        if record is None:
            raise PackageNotFoundError(package_id)
        return record

    async def upload_package(
        self,
        *,
        stream: AsyncReadable,
        filename: str | None,
        metadata: PackageUploadInput,
        uploader: str,
    ) -> PackageRecord:
        version = _clean(metadata.version)
        if not version:
            raise PackageValidationError("version is required")
        category = parse_category(metadata.category) if _clean(metadata.category) else DEFAULT_CATEGORY
        name = _clean(metadata.name)
        developer = _clean(metadata.developer) or uploader
        size = _clean(metadata.size)
        icon_url = _clean(metadata.icon_url)
        check_field_lengths(name=name, version=version, developer=developer, size=size, icon_url=icon_url)

        # The binary must be durable before any row can reference it.
        try:
            stored = await self._assets.put(stream, filename)
        except AssetValidationError as exc:
            raise PackageValidationError(str(exc)) from exc
        except AssetStoreError as exc:
            logger.error("Asset write failed for upload %r: %s", filename, exc)
            raise PackageStoreError("Failed to store package file") from exc

        display_name = _display_name(stored.original_name)
        try:
            record = await self._repository.create_package(
                name=name or display_name[: FIELD_LIMITS["name"]],
                version=version,
                developer=developer,
                category=category,
                description=_clean(metadata.description),
                size=size or format_size(stored.size_bytes),
                icon_url=icon_url or IDENTICON_URL.format(seed=quote(stored.original_name[:64])),
                status=PackageStatus.VERIFIED,
                upload_date=self._clock(),
                asset_ref=stored.ref,
            )
            await self._repository.commit()
        except SQLAlchemyError as exc:
            logger.error("Catalog insert failed; orphaned asset left at %s: %s", stored.ref, exc)
            raise PackageStoreError("Failed to record package") from exc

        logger.info("Package %s uploaded by %s (asset %s)", record.id, uploader, stored.ref)
        return record

    async def update_package(self, package_id: str, payload: PackageUpdateInput) -> PackageRecord:
        category = parse_category(payload.category)
        check_field_lengths(
            name=payload.name,
            version=payload.version,
            developer=payload.developer,
            size=payload.size,
            icon_url=payload.icon_url,
        )
        try:
            record = await self._repository.update_package(
                package_id,
                name=payload.name,
                version=payload.version,
                developer=payload.developer,
                category=category,
                description=payload.description,
                size=payload.size,
                icon_url=payload.icon_url,
            )
            if record is None:
                raise PackageNotFoundError(package_id)
            await self._repository.commit()
        except SQLAlchemyError as exc:
            logger.error("Catalog update failed for %s: %s", package_id, exc)
            raise PackageStoreError("Failed to update package") from exc
        return record

    async def delete_package(self, package_id: str) -> None:
        """Remove the catalog row; the stored binary is left in place."""
        try:
            deleted = await self._repository.delete_package(package_id)
            if not deleted:
                raise PackageNotFoundError(package_id)
            await self._repository.commit()
        except SQLAlchemyError as exc:
            logger.error("Catalog delete failed for %s: %s", package_id, exc)
            raise PackageStoreError("Failed to delete package") from exc
        logger.info("Package %s deleted", package_id)

    async def resolve_download(self, package_id: str) -> PackageDownload:
        record = await self.get_package(package_id)
        try:
            path = self._assets.resolve(record.asset_ref)
        except AssetNotFoundError as exc:
            logger.warning("Package %s references missing asset %s", package_id, record.asset_ref)
            raise PackageAssetMissingError(package_id) from exc
        return PackageDownload(record=record, path=str(path), filename=original_name(record.asset_ref))


def check_field_lengths(**values: str) -> None:
    for field_name, value in values.items():
        limit = FIELD_LIMITS.get(field_name)
        if limit is not None and len(value) > limit:
            raise PackageValidationError(f"{field_name} must be at most {limit} characters")


def parse_category(value: str | None) -> PackageCategory:
    try:
        return PackageCategory((value or "").strip())
    except ValueError as exc:
        allowed = ", ".join(PackageCategory.values())
        raise PackageValidationError(f"category must be one of: {allowed}") from exc


def filter_by_category(
    records: Iterable[PackageRecord], category: str | None
) -> list[PackageRecord]:
    """Client-side category filter over the full catalog listing."""
    if not category:
        return list(records)
    return [record for record in records if record.category.value == category]


def format_size(size_bytes: int) -> str:
    return f"{size_bytes / (1024 * 1024):.1f} MB"


def _display_name(filename: str) -> str:
    path = PurePath(filename)
    return path.stem if path.suffix.lower() == ".apk" else filename


def _clean(value: str | None) -> str:
    return (value or "").strip()
