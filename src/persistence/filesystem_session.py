"""Filesystem-backed object session.

This module stages an object's header and content files inside a local
directory, one directory per storage object. Version commits are left
to the storage engine that consumes the directory.
"""

from __future__ import annotations

import hashlib
from pathlib import Path, PurePosixPath

from core.constants import DEFAULT_DIGEST_ALGORITHM, OBJECTS_DIR_NAME
from core.errors import HeaderNotFoundError, StorageAccessError
from core.logging_config import get_logger
from core.types import ResourceHeader, WriteOutcome
from persistence.header_codec import decode_header, encode_header
from persistence.session import Clock, compute_digests, utc_now

_LOGGER = get_logger(__name__)


def object_directory(staging_root: Path, object_id: str) -> Path:
    """Return the staging directory for a storage object.

    Args:
        staging_root: Root directory for all staged objects.
        object_id: Identifier of the storage object.

    Returns:
        Directory named by the SHA-256 of the object identifier.
    """
    digest = hashlib.sha256(object_id.encode("utf-8")).hexdigest()
    return staging_root / OBJECTS_DIR_NAME / digest[:3] / digest


class FilesystemObjectSession:
    """Session that writes headers and content as files."""

    def __init__(
        self,
        object_dir: Path,
        digest_algorithm: str = DEFAULT_DIGEST_ALGORITHM,
        clock: Clock = utc_now,
    ) -> None:
        self._object_dir = object_dir
        self._digest_algorithm = digest_algorithm
        self._clock = clock

    @property
    def object_dir(self) -> Path:
        """Directory holding this object's staged files."""
        return self._object_dir

    def read_header(self, path: str) -> ResourceHeader:
        """Read a header file.

        Raises:
            HeaderNotFoundError: If no header file exists at path.
            StorageAccessError: If the file cannot be read or parsed.
        """
        target = self._resolve(path)
        if not target.is_file():
            raise HeaderNotFoundError(f"No header at {path} in {self._object_dir}.")
        return decode_header(self._read_bytes(target), path)

    def write_header(self, path: str, header: ResourceHeader) -> None:
        """Write a header file, replacing any staged copy."""
        self._write_bytes(self._resolve(path), encode_header(header))
        _LOGGER.debug("header_written", object_dir=str(self._object_dir), path=path)

    def write_content(self, path: str, data: bytes) -> WriteOutcome:
        """Write a content file and report size, digests and timestamp."""
        self._write_bytes(self._resolve(path), data)
        _LOGGER.debug(
            "content_written",
            object_dir=str(self._object_dir),
            path=path,
            content_size=len(data),
        )
        return WriteOutcome(
            time_written=self._clock(),
            content_size=len(data),
            digests=compute_digests(data, self._digest_algorithm),
        )

    def read_content(self, path: str) -> bytes:
        """Read a content file.

        Raises:
            StorageAccessError: If the file is missing or unreadable.
        """
        target = self._resolve(path)
        if not target.is_file():
            raise StorageAccessError(f"No content at {path} in {self._object_dir}.")
        return self._read_bytes(target)

    def contains(self, path: str) -> bool:
        """Return whether a file exists at path."""
        return self._resolve(path).is_file()

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts or not relative.parts:
            raise StorageAccessError(
                f"Refusing path '{path}': object paths must be relative and stay "
                "inside the object directory."
            )
        return self._object_dir.joinpath(*relative.parts)

    def _read_bytes(self, target: Path) -> bytes:
        try:
            return target.read_bytes()
        except OSError as error:
            raise StorageAccessError(f"Failed to read {target}: {error}.") from error

    def _write_bytes(self, target: Path, data: bytes) -> None:
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as error:
            raise StorageAccessError(
                f"Failed to write {target}: {error}. "
                "Check staging directory permissions and free space."
            ) from error
