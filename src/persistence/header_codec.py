"""JSON serialization for ResourceHeader records.

This module centralizes the persisted header schema. It is reused by
every session that stores headers as files.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from core.constants import HEADERS_VERSION
from core.errors import StorageAccessError
from core.types import InteractionModel, ResourceHeader


def header_to_payload(header: ResourceHeader) -> dict[str, object]:
    """Serialize a header into a JSON-safe payload.

    Args:
        header: Header record.

    Returns:
        Dictionary payload keyed by the persisted field names.
    """
    return {
        "id": header.resource_id,
        "parent": header.parent_id,
        "interactionModel": header.interaction_model.value,
        "createdBy": header.created_by,
        "createdDate": _format_datetime(header.created_date),
        "lastModifiedBy": header.last_modified_by,
        "lastModifiedDate": _format_datetime(header.last_modified_date),
        "archivalGroup": header.archival_group,
        "objectRoot": header.object_root,
        "contentPath": header.content_path,
        "stateToken": header.state_token,
        "contentSize": header.content_size,
        "mimeType": header.mime_type,
        "filename": header.filename,
        "digests": list(header.digests),
        "headersVersion": header.headers_version,
    }


def header_from_payload(payload: dict[str, Any]) -> ResourceHeader:
    """Deserialize a payload into a header.

    Args:
        payload: Serialized header payload.

    Returns:
        Parsed header.

    Raises:
        ValueError: If required fields are missing or malformed.
    """
    if "id" not in payload or "interactionModel" not in payload:
        raise ValueError("header payload requires 'id' and 'interactionModel'")
    content_size = payload.get("contentSize")
    return ResourceHeader(
        resource_id=str(payload["id"]),
        parent_id=_optional_str(payload.get("parent")),
        interaction_model=InteractionModel(str(payload["interactionModel"])),
        created_by=_optional_str(payload.get("createdBy")),
        created_date=_parse_datetime(payload.get("createdDate")),
        last_modified_by=_optional_str(payload.get("lastModifiedBy")),
        last_modified_date=_parse_datetime(payload.get("lastModifiedDate")),
        archival_group=bool(payload.get("archivalGroup", False)),
        object_root=bool(payload.get("objectRoot", False)),
        content_path=_optional_str(payload.get("contentPath")),
        state_token=_optional_str(payload.get("stateToken")),
        content_size=int(content_size) if content_size is not None else None,
        mime_type=_optional_str(payload.get("mimeType")),
        filename=_optional_str(payload.get("filename")),
        digests=tuple(str(digest) for digest in payload.get("digests") or ()),
        headers_version=str(payload.get("headersVersion") or HEADERS_VERSION),
    )


def encode_header(header: ResourceHeader) -> bytes:
    """Render a header as a JSON document."""
    return (json.dumps(header_to_payload(header), indent=2) + "\n").encode("utf-8")


def decode_header(raw: bytes, source: str) -> ResourceHeader:
    """Parse a JSON header document.

    Args:
        raw: Encoded header bytes.
        source: Path the bytes were read from, for error messages.

    Returns:
        Parsed header.

    Raises:
        StorageAccessError: If the document is not a valid header.
    """
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise StorageAccessError(
            f"Failed to parse resource header at {source}: {error}. "
            "Restore the header from a previous object version."
        ) from error
    if not isinstance(payload, dict):
        raise StorageAccessError(
            f"Failed to parse resource header at {source}: "
            "expected JSON object at top level."
        )
    try:
        return header_from_payload(payload)
    except ValueError as error:
        raise StorageAccessError(
            f"Invalid resource header at {source}: {error}."
        ) from error


def _format_datetime(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_datetime(value: object) -> datetime | None:
    if value is None or value == "":
        return None
    return datetime.fromisoformat(str(value))


def _optional_str(value: object) -> str | None:
    return str(value) if value is not None else None
