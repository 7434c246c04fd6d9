"""Repository protocol for catalog packages."""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .models import PackageCategory, PackageRecord, PackageStatus


class PackageRepository(Protocol):
    async def list_packages(self) -> Sequence[PackageRecord]:
        ...

    async def get_by_id(self, package_id: str) -> PackageRecord | None:
        ...

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
        ...

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
        ...

    async def delete_package(self, package_id: str) -> bool:
        ...

    async def commit(self) -> None:
        ...
