"""Catalog and advisory dependency providers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from autostore.modules.advisory import SafetyAdvisor
from autostore.modules.packages import CatalogService

from .container import get_container
from .database import get_db_session


def get_catalog_service(
    db: AsyncSession = Depends(get_db_session),
    container=Depends(get_container),
) -> CatalogService:
    return CatalogService.with_session(db, container.asset_store)


def get_safety_advisor(container=Depends(get_container)) -> SafetyAdvisor:
    return container.advisor


__all__ = [
    "get_catalog_service",
    "get_safety_advisor",
]
