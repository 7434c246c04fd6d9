"""Database session dependency."""

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from autostore.infrastructure.database import open_session

from .container import get_container


async def get_db_session(container=Depends(get_container)) -> AsyncGenerator[AsyncSession, None]:
    async for session in open_session(container.session_factory):
        yield session


__all__ = ["get_db_session"]
