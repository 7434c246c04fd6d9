"""SQLAlchemy-backed repository implementations."""

from .account_repository import SqlAccountRepository
from .package_repository import SqlPackageRepository

__all__ = [
    "SqlAccountRepository",
    "SqlPackageRepository",
]
