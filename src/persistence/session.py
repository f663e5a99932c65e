"""Object session contract and in-memory staging session.

A session is bound to one storage object. It stages header and content
writes and serves reads from its own staged writes before falling back
to previously committed state. Sessions are not safe for concurrent
use; callers serialize operations per session.
"""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Callable, Mapping, Protocol

from core.constants import DEFAULT_DIGEST_ALGORITHM, DIGEST_URN_LABELS
from core.errors import HeaderNotFoundError, StorageAccessError
from core.types import ResourceHeader, WriteOutcome

Clock = Callable[[], datetime]


class ObjectSession(Protocol):
    """Read and write access to one storage object."""

    def read_header(self, path: str) -> ResourceHeader:
        """Return the header at path or raise HeaderNotFoundError."""
        ...

    def write_header(self, path: str, header: ResourceHeader) -> None:
        """Stage a header write."""
        ...

    def write_content(self, path: str, data: bytes) -> WriteOutcome:
        """Stage a content write and report its outcome."""
        ...

    def read_content(self, path: str) -> bytes:
        """Return content bytes at path or raise StorageAccessError."""
        ...

    def contains(self, path: str) -> bool:
        """Return whether a header or content file exists at path."""
        ...


def utc_now() -> datetime:
    """Return the current UTC time."""
    return datetime.now(timezone.utc)


def compute_digests(data: bytes, algorithm: str = DEFAULT_DIGEST_ALGORITHM) -> tuple[str, ...]:
    """Compute fixity URNs for written bytes.

    Args:
        data: Written bytes.
        algorithm: hashlib algorithm name.

    Returns:
        Single-element tuple holding a ``urn:<label>:<hex>`` digest.
    """
    digest = hashlib.new(algorithm, data).hexdigest()
    label = DIGEST_URN_LABELS.get(algorithm, algorithm)
    return (f"urn:{label}:{digest}",)


class StagingObjectSession:
    """In-memory session with read-your-own-writes semantics."""

    def __init__(
        self,
        object_id: str,
        committed_headers: Mapping[str, ResourceHeader] | None = None,
        committed_content: Mapping[str, bytes] | None = None,
        digest_algorithm: str = DEFAULT_DIGEST_ALGORITHM,
        clock: Clock = utc_now,
    ) -> None:
        """Create a staging session.

        Args:
            object_id: Identifier of the storage object.
            committed_headers: Headers from the latest committed version.
            committed_content: Content from the latest committed version.
            digest_algorithm: Algorithm used for content fixity.
            clock: Source of write timestamps.
        """
        self.object_id = object_id
        self._committed_headers = dict(committed_headers or {})
        self._committed_content = dict(committed_content or {})
        self._staged_headers: dict[str, ResourceHeader] = {}
        self._staged_content: dict[str, bytes] = {}
        self._write_log: list[str] = []
        self._digest_algorithm = digest_algorithm
        self._clock = clock

    @property
    def write_log(self) -> tuple[str, ...]:
        """Paths written in this session, in write order."""
        return tuple(self._write_log)

    def read_header(self, path: str) -> ResourceHeader:
        """Return the staged header at path, falling back to the committed one."""
        if path in self._staged_headers:
            return self._staged_headers[path]
        if path in self._committed_headers:
            return self._committed_headers[path]
        raise HeaderNotFoundError(
            f"No header at {path} in object '{self.object_id}'."
        )

    def write_header(self, path: str, header: ResourceHeader) -> None:
        """Stage a header, replacing any earlier staged header at path."""
        self._staged_headers[path] = header
        self._write_log.append(path)

    def write_content(self, path: str, data: bytes) -> WriteOutcome:
        """Stage content bytes and report their size and digests."""
        self._staged_content[path] = bytes(data)
        self._write_log.append(path)
        return WriteOutcome(
            time_written=self._clock(),
            content_size=len(data),
            digests=compute_digests(data, self._digest_algorithm),
        )

    def read_content(self, path: str) -> bytes:
        """Return staged content at path, falling back to committed content."""
        if path in self._staged_content:
            return self._staged_content[path]
        if path in self._committed_content:
            return self._committed_content[path]
        raise StorageAccessError(
            f"No content at {path} in object '{self.object_id}'."
        )

    def contains(self, path: str) -> bool:
        """Return whether path holds a staged or committed file."""
        return any(
            path in store
            for store in (
                self._staged_headers,
                self._committed_headers,
                self._staged_content,
                self._committed_content,
            )
        )
