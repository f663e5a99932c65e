"""Unit tests for the in-memory staging session."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone

import pytest

from core.errors import HeaderNotFoundError, StorageAccessError
from core.types import InteractionModel, ResourceHeader
from persistence.session import StagingObjectSession, compute_digests

WRITTEN_AT = datetime(2024, 3, 1, tzinfo=timezone.utc)


def _header(resource_id: str) -> ResourceHeader:
    return ResourceHeader(
        resource_id=resource_id,
        parent_id=None,
        interaction_model=InteractionModel.BASIC_CONTAINER,
    )


def test_staged_header_is_visible_before_commit() -> None:
    """Reads should observe writes made earlier in the same session."""
    session = StagingObjectSession("info:fedora/obj")
    session.write_header(".fcrepo/fcr-root.json", _header("info:fedora/obj"))

    header = session.read_header(".fcrepo/fcr-root.json")

    assert header.resource_id == "info:fedora/obj"


def test_staged_header_shadows_committed_header() -> None:
    """Staged writes should take precedence over committed state."""
    committed = {".fcrepo/a.json": _header("info:fedora/old")}
    session = StagingObjectSession("info:fedora/obj", committed_headers=committed)
    session.write_header(".fcrepo/a.json", _header("info:fedora/new"))

    assert session.read_header(".fcrepo/a.json").resource_id == "info:fedora/new"


def test_missing_header_raises_not_found() -> None:
    """Absent headers should raise the session's not-found error."""
    session = StagingObjectSession("info:fedora/obj")

    with pytest.raises(HeaderNotFoundError):
        session.read_header(".fcrepo/fcr-root.json")


def test_write_content_reports_clock_size_and_digest() -> None:
    """Content writes should report their timestamp, size, and fixity."""
    session = StagingObjectSession("info:fedora/obj", clock=lambda: WRITTEN_AT)

    outcome = session.write_content("bin", b"hello")

    expected_digest = hashlib.sha512(b"hello").hexdigest()
    assert outcome.time_written == WRITTEN_AT and outcome.content_size == 5
    assert outcome.digests == (f"urn:sha-512:{expected_digest}",)


def test_missing_content_raises_storage_error() -> None:
    """Reading absent content should fail with a storage access error."""
    session = StagingObjectSession("info:fedora/obj")

    with pytest.raises(StorageAccessError):
        session.read_content("missing")


def test_compute_digests_supports_sha256() -> None:
    """Digest URNs should carry the algorithm label."""
    assert compute_digests(b"", "sha256")[0].startswith("urn:sha-256:")
