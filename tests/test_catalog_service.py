"""Tests for the catalog service against a real SQLite store."""

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from autostore.db.models import App as AppModel
from autostore.infrastructure.database.repositories import SqlPackageRepository
from autostore.modules.assets import AssetStoreError, FileAssetStore
from autostore.modules.packages import (
    CatalogService,
    PackageAssetMissingError,
    PackageCategory,
    PackageNotFoundError,
    PackageStatus,
    PackageStoreError,
    PackageUpdateInput,
    PackageUploadInput,
    PackageValidationError,
    filter_by_category,
    format_size,
)

from conftest import make_upload

T0 = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class SteppingClock:
    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


class FailingAssetStore(FileAssetStore):
    async def put(self, stream, original_name):
        raise AssetStoreError("disk full")


class FailingInsertRepository(SqlPackageRepository):
    async def create_package(self, **kwargs):
        raise OperationalError("INSERT INTO apps", {}, Exception("database is locked"))


@pytest.fixture
def service(db_session, asset_store):
    return CatalogService(SqlPackageRepository(db_session), asset_store, clock=SteppingClock())


async def _upload(service, data=b"apk-bytes", filename="maps-pro.apk", uploader="admin", **metadata):
    metadata.setdefault("version", "1.0.0")
    return await service.upload_package(
        stream=make_upload(data, filename),
        filename=filename,
        metadata=PackageUploadInput(**metadata),
        uploader=uploader,
    )


class TestUpload:
    @pytest.mark.asyncio
    async def test_upload_is_listed_as_verified(self, service):
        record = await _upload(service, name="Maps Pro", category="Navigation", version="1.0.3")

        listed = await service.list_packages()
        assert [item.id for item in listed] == [record.id]
        assert listed[0].status is PackageStatus.VERIFIED
        assert listed[0].category is PackageCategory.NAVIGATION
        assert listed[0].version == "1.0.3"

    @pytest.mark.asyncio
    async def test_download_returns_uploaded_bytes(self, service):
        payload = b"\x00\x01binary" * 1000
        record = await _upload(service, data=payload)

        download = await service.resolve_download(record.id)
        assert Path(download.path).read_bytes() == payload
        assert download.filename == "maps-pro.apk"

    @pytest.mark.asyncio
    async def test_missing_metadata_is_filled_from_the_file(self, service):
        record = await _upload(service, data=b"x" * (2 * 1024 * 1024), filename="Maps Pro.apk", uploader="alice")

        assert record.name == "Maps Pro"
        assert record.developer == "alice"
        assert record.category is PackageCategory.UTILITIES
        assert record.size == "2.0 MB"
        assert record.description == ""
        assert "seed=Maps%20Pro.apk" in record.icon_url

    @pytest.mark.asyncio
    async def test_explicit_metadata_wins(self, service):
        record = await _upload(
            service,
            name="Radio",
            developer="Acme",
            category="Entertainment",
            description="FM radio",
            size="12 MB",
            icon_url="https://example.com/icon.png",
        )
        assert (record.name, record.developer, record.size) == ("Radio", "Acme", "12 MB")
        assert record.icon_url == "https://example.com/icon.png"
        assert record.description == "FM radio"

    @pytest.mark.asyncio
    async def test_missing_version_is_rejected_before_storing(self, service, asset_store):
        with pytest.raises(PackageValidationError):
            await _upload(service, version="  ")
        assert list(asset_store.storage_dir.iterdir()) == []
        assert await service.list_packages() == []

    @pytest.mark.asyncio
    async def test_unknown_category_is_rejected_before_storing(self, service, asset_store):
        with pytest.raises(PackageValidationError):
            await _upload(service, category="Games")
        assert list(asset_store.storage_dir.iterdir()) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [("name", "n" * 151), ("version", "1" * 51), ("size", "9" * 31), ("icon_url", "u" * 501)],
    )
    async def test_oversized_field_is_rejected_before_storing(self, service, asset_store, field, value):
        with pytest.raises(PackageValidationError, match=field):
            await _upload(service, **{field: value})
        assert list(asset_store.storage_dir.iterdir()) == []
        assert await service.list_packages() == []

    @pytest.mark.asyncio
    async def test_uploaded_record_can_be_saved_back_unchanged(self, service):
        record = await _upload(service, name="n" * 150, size="s" * 30)

        updated = await service.update_package(
            record.id,
            PackageUpdateInput(
                name=record.name,
                version=record.version,
                developer=record.developer,
                category=record.category.value,
                description=record.description,
                size=record.size,
                icon_url=record.icon_url,
            ),
        )
        assert updated.name == record.name

    @pytest.mark.asyncio
    async def test_long_file_name_yields_a_storable_default_name(self, service):
        record = await _upload(service, filename="a" * 190 + ".apk")
        assert len(record.name) == 150
        assert len(record.icon_url) <= 500

    @pytest.mark.asyncio
    async def test_unicode_file_name_is_kept(self, service):
        record = await _upload(service, filename="导航地图.apk")

        assert record.name == "导航地图"
        download = await service.resolve_download(record.id)
        assert download.filename == "导航地图.apk"

    @pytest.mark.asyncio
    async def test_empty_file_creates_no_row(self, service):
        with pytest.raises(PackageValidationError):
            await _upload(service, data=b"")
        assert await service.list_packages() == []

    @pytest.mark.asyncio
    async def test_asset_failure_creates_no_row(self, db_session, tmp_path):
        failing = CatalogService(SqlPackageRepository(db_session), FailingAssetStore(tmp_path / "x"))
        with pytest.raises(PackageStoreError):
            await _upload(failing)
        assert await failing.list_packages() == []

    @pytest.mark.asyncio
    async def test_catalog_failure_leaves_logged_orphan(self, db_session, asset_store, caplog):
        failing = CatalogService(FailingInsertRepository(db_session), asset_store)
        with pytest.raises(PackageStoreError):
            await _upload(failing)

        orphans = list(asset_store.storage_dir.iterdir())
        assert len(orphans) == 1
        assert orphans[0].name in caplog.text
        assert "orphaned asset" in caplog.text


class TestListing:
    @pytest.mark.asyncio
    async def test_newest_upload_first(self, service):
        first = await _upload(service, name="t1")
        second = await _upload(service, name="t2")
        third = await _upload(service, name="t3")

        listed = await service.list_packages()
        assert [item.id for item in listed] == [third.id, second.id, first.id]
        assert listed[0].upload_date > listed[1].upload_date > listed[2].upload_date

    @pytest.mark.asyncio
    async def test_malformed_row_does_not_hide_the_rest(self, service, db_session):
        good = await _upload(service, name="Good")
        db_session.add(
            AppModel(
                name="Legacy",
                version="0.1",
                developer="",
                category="Games",
                description="",
                size="",
                upload_date=T0 + timedelta(days=1),
                status="Verified",
                icon_url="",
                asset_ref="1-abc-legacy.apk",
            )
        )
        await db_session.commit()

        listed = await service.list_packages()
        assert [item.id for item in listed] == [good.id]

    @pytest.mark.asyncio
    async def test_filter_by_category(self, service):
        nav = await _upload(service, category="Navigation")
        await _upload(service, category="Diagnostics")
        records = await service.list_packages()

        assert [item.id for item in filter_by_category(records, "Navigation")] == [nav.id]
        assert len(filter_by_category(records, None)) == 2
        assert filter_by_category(records, "Games") == []


class TestUpdate:
    @pytest.mark.asyncio
    async def test_full_replacement_keeps_identity_fields(self, service):
        record = await _upload(service, name="Old", category="Utilities")
        payload = PackageUpdateInput(
            name="New",
            version="2.0",
            developer="Acme",
            category="Smart Home",
            description="Updated",
            size="3.1 MB",
            icon_url="https://example.com/new.png",
        )

        updated = await service.update_package(record.id, payload)
        fetched = await service.get_package(record.id)

        for item in (updated, fetched):
            assert item.id == record.id
            assert item.status is PackageStatus.VERIFIED
            assert item.upload_date == record.upload_date
            assert item.asset_ref == record.asset_ref
            assert item.name == "New"
            assert item.version == "2.0"
            assert item.developer == "Acme"
            assert item.category is PackageCategory.SMART_HOME
            assert item.description == "Updated"
            assert item.size == "3.1 MB"
            assert item.icon_url == "https://example.com/new.png"

    @pytest.mark.asyncio
    async def test_unknown_category_is_rejected(self, service):
        record = await _upload(service, category="Navigation")
        payload = PackageUpdateInput("n", "v", "d", "Games", "", "", "")

        with pytest.raises(PackageValidationError):
            await service.update_package(record.id, payload)
        assert (await service.get_package(record.id)).category is PackageCategory.NAVIGATION

    @pytest.mark.asyncio
    async def test_unknown_id(self, service):
        payload = PackageUpdateInput("n", "v", "d", "Utilities", "", "", "")
        with pytest.raises(PackageNotFoundError):
            await service.update_package("missing", payload)


class TestDeleteAndDownload:
    @pytest.mark.asyncio
    async def test_delete_twice(self, service):
        record = await _upload(service)

        await service.delete_package(record.id)
        with pytest.raises(PackageNotFoundError):
            await service.delete_package(record.id)
        with pytest.raises(PackageNotFoundError):
            await service.get_package(record.id)

    @pytest.mark.asyncio
    async def test_delete_keeps_the_stored_file(self, service, asset_store):
        record = await _upload(service)
        await service.delete_package(record.id)
        assert asset_store.resolve(record.asset_ref).exists()

    @pytest.mark.asyncio
    async def test_download_unknown_id(self, service):
        with pytest.raises(PackageNotFoundError):
            await service.resolve_download("missing")

    @pytest.mark.asyncio
    async def test_download_with_missing_file(self, service, asset_store):
        record = await _upload(service)
        asset_store.resolve(record.asset_ref).unlink()

        with pytest.raises(PackageAssetMissingError):
            await service.resolve_download(record.id)


@pytest.mark.asyncio
async def test_rows_are_committed(service, session_factory):
    record = await _upload(service)
    async with session_factory() as other:
        result = await other.execute(select(AppModel.id))
        assert result.scalars().all() == [record.id]


def test_format_size():
    assert format_size(2 * 1024 * 1024) == "2.0 MB"
    assert format_size(1536 * 1024) == "1.5 MB"
