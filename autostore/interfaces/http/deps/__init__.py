"""Reusable FastAPI dependencies."""

from .container import get_container
from .database import get_db_session
from .account import get_account_repository, get_account_service
from .packages import get_catalog_service, get_safety_advisor

__all__ = [
    "get_container",
    "get_db_session",
    "get_account_repository",
    "get_account_service",
    "get_catalog_service",
    "get_safety_advisor",
]
