"""SQLAlchemy implementation of the catalog package repository."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from autostore.db.models import App as AppModel
from autostore.modules.packages.exceptions import PackageStoreError
from autostore.modules.packages.models import PackageCategory, PackageRecord, PackageStatus
from autostore.modules.packages.repository import PackageRepository

logger = logging.getLogger(__name__)


class SqlPackageRepository(PackageRepository):
    """Catalog repository backed by the ``apps`` table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_packages(self) -> Sequence[PackageRecord]:
        stmt = select(AppModel).order_by(AppModel.upload_date.desc())
        result = await self._session.execute(stmt)
        records: list[PackageRecord] = []
        for model in result.scalars().all():
            try:
                records.append(self._to_domain(model))
            except ValueError as exc:
                logger.warning("Skipping malformed catalog row %s: %s", model.id, exc)
        return records

    async def get_by_id(self, package_id: str) -> PackageRecord | None:
        model = await self._get_model(package_id)
        if model is None:
            return None
        try:
            return self._to_domain(model)
        except ValueError as exc:
            logger.error("Catalog row %s is malformed: %s", package_id, exc)
            raise PackageStoreError(f"Catalog row {package_id} is malformed") from exc

    async def create_package(
        self,
        *,
        name: str,
        version: str,
        developer: str,
        category: PackageCategory,
        description: str,
        size: str,
        icon_url: str,
        status: PackageStatus,
        upload_date: datetime,
        asset_ref: str,
    ) -> PackageRecord:
        model = AppModel(
            name=name,
            version=version,
            developer=developer,
            category=category.value,
            description=description,
            size=size,
            icon_url=icon_url,
            status=status.value,
            upload_date=upload_date,
            asset_ref=asset_ref,
        )
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def update_package(
        self,
        package_id: str,
        *,
        name: str,
        version: str,
        developer: str,
        category: PackageCategory,
        description: str,
        size: str,
        icon_url: str,
    ) -> PackageRecord | None:
        model = await self._get_model(package_id)
        if model is None:
            return None

        model.name = name
        model.version = version
        model.developer = developer
        model.category = category.value
        model.description = description
        model.size = size
        model.icon_url = icon_url

        await self._session.flush()
        await self._session.refresh(model)
        return self._to_domain(model)

    async def delete_package(self, package_id: str) -> bool:
        stmt = delete(AppModel).where(AppModel.id == package_id)
        result = await self._session.execute(stmt)
        return bool(result.rowcount)

    async def commit(self) -> None:
        await self._session.commit()

    async def _get_model(self, package_id: str) -> AppModel | None:
        stmt = select(AppModel).where(AppModel.id == package_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    def _to_domain(model: AppModel) -> PackageRecord:
        upload_date = model.upload_date
        # SQLite hands timestamps back without tzinfo.
        if upload_date is not None and upload_date.tzinfo is None:
            upload_date = upload_date.replace(tzinfo=timezone.utc)
        if upload_date is None:
            raise ValueError("missing upload date")
        return PackageRecord(
            id=str(model.id),
            name=model.name,
            version=model.version,
            developer=model.developer or "",
            category=PackageCategory(model.category),
            description=model.description or "",
            size=model.size or "",
            upload_date=upload_date,
            status=PackageStatus(model.status),
            icon_url=model.icon_url or "",
            asset_ref=model.asset_ref,
        )
