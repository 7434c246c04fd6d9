"""Domain models for catalog packages."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class PackageCategory(str, Enum):
    ENTERTAINMENT = "Entertainment"
    NAVIGATION = "Navigation"
    UTILITIES = "Utilities"
    SMART_HOME = "Smart Home"
    DIAGNOSTICS = "Diagnostics"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


class PackageStatus(str, Enum):
    # Only VERIFIED is ever assigned; the others are reserved for a review workflow.
    PENDING = "Pending"
    VERIFIED = "Verified"
    REJECTED = "Rejected"


@dataclass(slots=True)
class PackageRecord:
    id: str
    name: str
    version: str
    developer: str
    category: PackageCategory
    description: str
    size: str
    upload_date: datetime
    status: PackageStatus
    icon_url: str
    asset_ref: str


@dataclass(slots=True)
class PackageUploadInput:
    """Metadata sent alongside an upload; blanks are filled from the file."""

    version: Optional[str] = None
    name: Optional[str] = None
    developer: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    size: Optional[str] = None
    icon_url: Optional[str] = None


@dataclass(slots=True)
class PackageUpdateInput:
    name: str
    version: str
    developer: str
    category: str
    description: str
    size: str
    icon_url: str


@dataclass(slots=True, frozen=True)
class PackageDownload:
    record: PackageRecord
    path: str
    filename: str
