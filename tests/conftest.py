"""Shared fixtures: isolated settings, app client, async sessions."""

from __future__ import annotations

import io
from typing import Callable, Optional

import pytest
import pytest_asyncio
from fastapi import UploadFile
from fastapi.testclient import TestClient

from autostore.core.config import DatabaseSettings, SecuritySettings, Settings, StorageSettings
from autostore.infrastructure.database import build_engine, build_session_factory, init_db
from autostore.main import create_app
from autostore.modules.advisory import SafetyReport
from autostore.modules.assets import FileAssetStore

TEST_SECRET = "test-secret-key-0123456789"
APK_MEDIA_TYPE = "application/vnd.android.package-archive"
ADMIN_CREDENTIALS = {"username": "admin", "password": "admin123"}


class StubAdvisor:
    """Records calls and returns a canned report (or ``None``)."""

    def __init__(self, report: Optional[SafetyReport] = None) -> None:
        self.report = report
        self.calls: list[tuple[str, str]] = []

    async def analyze(self, name: str, description: str) -> Optional[SafetyReport]:
        self.calls.append((name, description))
        return self.report


def make_upload(data: bytes, filename: str = "maps-pro.apk") -> UploadFile:
    return UploadFile(file=io.BytesIO(data), filename=filename)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment="test",
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'autostore-test.db'}"),
        security=SecuritySettings(secret_key=TEST_SECRET),
        storage=StorageSettings(upload_dir=tmp_path / "uploads"),
    )


@pytest.fixture
def advisor() -> StubAdvisor:
    return StubAdvisor()


@pytest.fixture
def client(settings, advisor):
    app = create_app(settings, advisor=advisor)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client) -> dict[str, str]:
    response = client.post("/api/auth/login", json=ADMIN_CREDENTIALS)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def upload_app(client, auth_headers) -> Callable[..., object]:
    """POST a package; extra keyword arguments become form fields."""

    def _upload(
        content: bytes = b"PK\x03\x04fake apk content",
        filename: str = "maps-pro.apk",
        headers: Optional[dict[str, str]] = None,
        **fields: str,
    ):
        data = {"version": "1.0.0", **fields}
        return client.post(
            "/api/apps/upload",
            headers=auth_headers if headers is None else headers,
            files={"apk": (filename, content, APK_MEDIA_TYPE)},
            data=data,
        )

    return _upload


@pytest.fixture
def asset_store(tmp_path) -> FileAssetStore:
    store = FileAssetStore(tmp_path / "assets", chunk_size=1024)
    store.ensure_storage()
    return store


@pytest_asyncio.fixture
async def session_factory(settings):
    engine = build_engine(settings.database)
    await init_db(engine)
    try:
        yield build_session_factory(engine)
    finally:
        await engine.dispose()


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session
