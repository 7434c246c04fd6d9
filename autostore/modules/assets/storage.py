"""File-system backed storage for uploaded package binaries."""

from __future__ import annotations

import asyncio
import hashlib
import logging
import os
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .exceptions import AssetNotFoundError, AssetStoreError, AssetValidationError

logger = logging.getLogger(__name__)

# Control characters and characters reserved on common file systems.
_UNSAFE_CHARS = re.compile(r"[\x00-\x1f\x7f<>:\"|?*]+")
# Leaves room for the reference prefix within a 255-byte file name.
_MAX_NAME_BYTES = 200


class AsyncReadable(Protocol):
    async def read(self, size: int = -1) -> bytes:
        ...


@dataclass(slots=True, frozen=True)
class StoredAsset:
    ref: str
    original_name: str
    size_bytes: int
    checksum_sha256: str


class FileAssetStore:
    """Writes binaries under ``<millis>-<random>-<original name>`` references.

    The time prefix keeps references ordered on disk, the random token keeps
    concurrent uploads of the same file apart and makes references
    unguessable from catalog metadata.
    """

    def __init__(self, storage_dir: Path, *, chunk_size: int = 1024 * 1024) -> None:
        self._storage_dir = storage_dir
        self._chunk_size = chunk_size

    @property
    def storage_dir(self) -> Path:
        return self._storage_dir

    def ensure_storage(self) -> None:
        """Create the storage directory if it does not exist."""
        self._storage_dir.mkdir(parents=True, exist_ok=True)

    async def put(self, stream: AsyncReadable, original_name: str | None) -> StoredAsset:
        safe_name = sanitize_filename(original_name)
        if not safe_name:
            raise AssetValidationError("Uploaded file must have a name")

        await asyncio.to_thread(self.ensure_storage)
        ref = f"{int(time.time() * 1000)}-{secrets.token_hex(8)}-{safe_name}"
        target_path = self._storage_dir / ref
        temp_path = target_path.with_name(ref + ".upload")

        hasher = hashlib.sha256()
        total_size = 0
        try:
            buffer = await asyncio.to_thread(temp_path.open, "wb")
            try:
                while True:
                    chunk = await stream.read(self._chunk_size)
                    if not chunk:
                        break
                    await asyncio.to_thread(buffer.write, chunk)
                    hasher.update(chunk)
                    total_size += len(chunk)
                await asyncio.to_thread(_flush_and_sync, buffer)
            finally:
                await asyncio.to_thread(buffer.close)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise AssetStoreError(f"Failed to store {safe_name}") from exc

        if total_size == 0:
            temp_path.unlink(missing_ok=True)
            raise AssetValidationError("Uploaded file is empty")

        try:
            await asyncio.to_thread(temp_path.replace, target_path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise AssetStoreError(f"Failed to store {safe_name}") from exc

        logger.debug("Stored asset %s (%d bytes)", ref, total_size)
        return StoredAsset(
            ref=ref,
            original_name=safe_name,
            size_bytes=total_size,
            checksum_sha256=hasher.hexdigest(),
        )

    def resolve(self, ref: str) -> Path:
        """Return the path of a stored binary or raise ``AssetNotFoundError``."""
        if not ref or Path(ref).name != ref:
            raise AssetNotFoundError(f"Invalid asset reference: {ref!r}")
        file_path = self._storage_dir / ref
        if not file_path.is_file():
            raise AssetNotFoundError(f"Asset file does not exist: {ref}")
        return file_path


def sanitize_filename(filename: str | None) -> str | None:
    if not filename:
        return None
    name = os.path.basename(filename.replace("\\", "/"))
    name = _UNSAFE_CHARS.sub("_", name).strip(" .")
    if len(name.encode("utf-8")) > _MAX_NAME_BYTES:
        stem, suffix = os.path.splitext(name)
        budget = _MAX_NAME_BYTES - len(suffix.encode("utf-8"))
        name = stem.encode("utf-8")[:budget].decode("utf-8", "ignore").rstrip(" .") + suffix
    return name or None


def original_name(ref: str) -> str:
    """Recover the sanitized upload name from an asset reference."""
    parts = ref.split("-", 2)
    if len(parts) == 3 and parts[0].isdigit():
        return parts[2]
    return ref


def _flush_and_sync(buffer) -> None:
    buffer.flush()
    os.fsync(buffer.fileno())
