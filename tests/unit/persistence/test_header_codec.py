"""Unit tests for header JSON serialization."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from core.errors import StorageAccessError
from core.types import InteractionModel, ResourceHeader
from persistence.header_codec import decode_header, encode_header, header_to_payload


def _binary_header() -> ResourceHeader:
    return ResourceHeader(
        resource_id="info:fedora/obj/bin",
        parent_id="info:fedora/obj",
        interaction_model=InteractionModel.NON_RDF_SOURCE,
        created_by="alice",
        created_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
        last_modified_by="bob",
        last_modified_date=datetime(2024, 2, 1, tzinfo=timezone.utc),
        content_path="bin",
        content_size=3,
        mime_type="text/plain",
        digests=("urn:sha-512:abc",),
    )


def test_payload_uses_persisted_field_names() -> None:
    """Payload keys should follow the stored header schema."""
    payload = header_to_payload(_binary_header())

    assert payload["interactionModel"] == "http://www.w3.org/ns/ldp#NonRDFSource"
    assert payload["lastModifiedDate"] == "2024-02-01T00:00:00+00:00"


def test_encoded_header_decodes_unchanged() -> None:
    """Fields should survive a write and a read through the codec."""
    header = _binary_header()

    assert decode_header(encode_header(header), ".fcrepo/bin.json") == header


def test_decode_rejects_invalid_json() -> None:
    """Corrupt header files should surface as storage access errors."""
    with pytest.raises(StorageAccessError):
        decode_header(b"{not json", ".fcrepo/fcr-root.json")


def test_decode_rejects_unknown_interaction_model() -> None:
    """Headers with an unknown resource kind should be rejected."""
    raw = b'{"id": "info:fedora/obj", "interactionModel": "urn:unknown"}'

    with pytest.raises(StorageAccessError):
        decode_header(raw, ".fcrepo/fcr-root.json")
