"""Unit tests for binary source persistence."""

from __future__ import annotations

import hashlib
from datetime import datetime, timezone

import pytest

from core.errors import MissingPriorHeaderError, UnsupportedOperationError
from core.types import BinaryPayload, InteractionModel, OperationKind, ResourceOperation
from persistence.non_rdf_persister import persist_non_rdf_source
from persistence.session import StagingObjectSession

ROOT_ID = "info:fedora/obj"
BINARY_ID = "info:fedora/obj/files/report.pdf"
WRITTEN_AT = datetime(2024, 4, 1, tzinfo=timezone.utc)


def _binary_create(content: bytes = b"%PDF-1.7") -> ResourceOperation:
    return ResourceOperation(
        kind=OperationKind.CREATE,
        resource_id=BINARY_ID,
        user_principal="alice",
        payload=BinaryPayload(content, "application/pdf", "report.pdf"),
        parent_id=f"{ROOT_ID}/files",
    )


def test_binary_content_stored_at_subpath() -> None:
    """Binary bytes should be written at the binary's subpath."""
    session = StagingObjectSession(ROOT_ID)

    persist_non_rdf_source(session, _binary_create(), ROOT_ID)

    assert session.read_content("files/report.pdf") == b"%PDF-1.7"


def test_binary_header_records_fixity() -> None:
    """The binary header should carry size, digest, and media details."""
    session = StagingObjectSession(ROOT_ID, clock=lambda: WRITTEN_AT)

    header = persist_non_rdf_source(session, _binary_create(), ROOT_ID)

    expected = f"urn:sha-512:{hashlib.sha512(b'%PDF-1.7').hexdigest()}"
    assert header.interaction_model is InteractionModel.NON_RDF_SOURCE
    assert (header.content_size, header.digests) == (8, (expected,))
    assert (header.mime_type, header.filename) == ("application/pdf", "report.pdf")


def test_binary_update_replaces_fixity() -> None:
    """Updating content should refresh size and digest."""
    session = StagingObjectSession(ROOT_ID)
    persist_non_rdf_source(session, _binary_create(), ROOT_ID)
    update = ResourceOperation(
        kind=OperationKind.UPDATE,
        resource_id=BINARY_ID,
        user_principal="bob",
        payload=BinaryPayload(b"%PDF-2.0 revised"),
    )

    header = persist_non_rdf_source(session, update, ROOT_ID)

    assert header.content_size == 16 and header.created_by == "alice"


def test_binary_update_without_header_fails() -> None:
    """A binary update needs an existing header."""
    update = ResourceOperation(
        kind=OperationKind.UPDATE,
        resource_id=BINARY_ID,
        user_principal="bob",
        payload=BinaryPayload(b"x"),
    )

    with pytest.raises(MissingPriorHeaderError):
        persist_non_rdf_source(StagingObjectSession(ROOT_ID), update, ROOT_ID)


def test_binary_payload_on_acl_is_rejected() -> None:
    """ACLs cannot hold binary content."""
    operation = ResourceOperation(
        kind=OperationKind.CREATE,
        resource_id=f"{BINARY_ID}/fcr:acl",
        user_principal="alice",
        payload=BinaryPayload(b"x"),
    )

    with pytest.raises(UnsupportedOperationError):
        persist_non_rdf_source(StagingObjectSession(ROOT_ID), operation, ROOT_ID)
