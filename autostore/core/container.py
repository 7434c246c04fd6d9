"""Simple dependency container for wiring core services."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from autostore.core.config import Settings
from autostore.core.security import SessionIssuer
from autostore.infrastructure.database import build_engine, build_session_factory, init_db
from autostore.modules.accounts import AccountService
from autostore.modules.advisory import SafetyAdvisor, build_advisor
from autostore.modules.assets import FileAssetStore

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplicationContainer:
    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    asset_store: FileAssetStore
    session_issuer: SessionIssuer
    advisor: SafetyAdvisor

    @classmethod
    def build(cls, settings: Settings, *, advisor: SafetyAdvisor | None = None) -> "ApplicationContainer":
        engine = build_engine(settings.database, debug=settings.debug)
        return cls(
            settings=settings,
            engine=engine,
            session_factory=build_session_factory(engine),
            asset_store=FileAssetStore(
                settings.upload_storage_dir.resolve(),
                chunk_size=settings.storage.chunk_size,
            ),
            session_issuer=SessionIssuer.from_settings(settings.security),
            advisor=advisor or build_advisor(settings.advisory),
        )

    async def init_infrastructure(self) -> None:
        """Create tables and storage, then seed the bootstrap admin."""
        if self.settings.uses_insecure_secret:
            logger.warning("Using the built-in session signing secret; set SECURITY__SECRET_KEY")

        await init_db(self.engine)
        self.asset_store.ensure_storage()

        async with self.session_factory() as session:
            service = AccountService.with_session(session)
            await service.ensure_default_admin(
                self.settings.bootstrap.admin_username,
                self.settings.bootstrap.admin_password,
            )
            await session.commit()

    async def dispose(self) -> None:
        await self.engine.dispose()


__all__ = ["ApplicationContainer"]
