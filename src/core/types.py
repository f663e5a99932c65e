"""Shared typed models.

This module defines immutable data models used by path derivation,
header building, sessions, and persisters to keep interfaces explicit.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from core.constants import HEADERS_VERSION


class InteractionModel(str, Enum):
    """Resource kinds, valued by their LDP or Fedora URI."""

    BASIC_CONTAINER = "http://www.w3.org/ns/ldp#BasicContainer"
    DIRECT_CONTAINER = "http://www.w3.org/ns/ldp#DirectContainer"
    INDIRECT_CONTAINER = "http://www.w3.org/ns/ldp#IndirectContainer"
    RDF_SOURCE = "http://www.w3.org/ns/ldp#RDFSource"
    NON_RDF_SOURCE = "http://www.w3.org/ns/ldp#NonRDFSource"
    NON_RDF_DESCRIPTION = "http://fedora.info/definitions/v4/repository#NonRdfSourceDescription"
    ACL = "http://fedora.info/definitions/v4/webac#Acl"

    @property
    def is_structured(self) -> bool:
        """Whether resources of this kind carry RDF content."""
        return self is not InteractionModel.NON_RDF_SOURCE


class OperationKind(str, Enum):
    """Resource operation variants issued by the outer dispatcher."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    PURGE = "purge"
    FOLLOW = "follow"
    REINDEX = "reindex"


@dataclass(frozen=True)
class RdfPayload:
    """Structured content for an RDF source.

    Attributes:
        triples: Serialized N-Triples statements, one per entry.
    """

    triples: tuple[str, ...] = ()

    def to_bytes(self) -> bytes:
        """Render the statements as an N-Triples document."""
        if not self.triples:
            return b""
        return ("\n".join(self.triples) + "\n").encode("utf-8")


@dataclass(frozen=True)
class BinaryPayload:
    """Opaque content for a binary (NonRDF) source.

    Attributes:
        content: Raw bytes to store.
        mime_type: Optional declared media type.
        filename: Optional original file name.
    """

    content: bytes
    mime_type: str | None = None
    filename: str | None = None


@dataclass(frozen=True)
class ResourceOperation:
    """A single resource operation, tagged by kind.

    Attributes:
        kind: Operation variant.
        resource_id: Target resource identifier.
        user_principal: Principal performing the operation.
        payload: RDF or binary content to persist.
        parent_id: Parent identifier, create only.
        interaction_model: Resource kind, create only.
        archival_group: Archival group flag, create only.
        last_modified_by: Relaxed-mode override.
        last_modified_date: Relaxed-mode override.
        created_by: Relaxed-mode override.
        created_date: Relaxed-mode override.
    """

    kind: OperationKind
    resource_id: str
    user_principal: str
    payload: RdfPayload | BinaryPayload | None = None
    parent_id: str | None = None
    interaction_model: InteractionModel | None = None
    archival_group: bool = False
    last_modified_by: str | None = None
    last_modified_date: datetime | None = None
    created_by: str | None = None
    created_date: datetime | None = None


@dataclass(frozen=True)
class WriteOutcome:
    """Result of a content write.

    Attributes:
        time_written: Timestamp recorded by the session for the write.
        content_size: Number of bytes written.
        digests: Fixity URNs computed over the written bytes.
    """

    time_written: datetime
    content_size: int = 0
    digests: tuple[str, ...] = ()


@dataclass(frozen=True)
class PersistencePaths:
    """Relative locations of a resource inside its storage object.

    Attributes:
        content_path: Path holding the resource's content bytes.
        header_path: Path holding the resource's header record.
    """

    content_path: str
    header_path: str


@dataclass(frozen=True)
class ResourceHeader:
    """Persisted header record, versioned alongside content.

    Attributes:
        resource_id: Resource identifier.
        parent_id: Parent identifier, fixed at creation.
        interaction_model: Resource kind, fixed at creation.
        created_by: Principal of the first version.
        created_date: Timestamp of the first version.
        last_modified_by: Principal of the current version.
        last_modified_date: Timestamp of the current version.
        archival_group: Archival group flag, fixed at creation.
        object_root: Whether the resource anchors its storage object.
        content_path: Relative path of the resource's content.
        state_token: Digest of the last-modified timestamp.
        content_size: Binary size in bytes, binaries only.
        mime_type: Binary media type, binaries only.
        filename: Binary file name, binaries only.
        digests: Binary fixity URNs, binaries only.
        headers_version: Header schema version.
    """

    resource_id: str
    parent_id: str | None
    interaction_model: InteractionModel
    created_by: str | None = None
    created_date: datetime | None = None
    last_modified_by: str | None = None
    last_modified_date: datetime | None = None
    archival_group: bool = False
    object_root: bool = False
    content_path: str | None = None
    state_token: str | None = None
    content_size: int | None = None
    mime_type: str | None = None
    filename: str | None = None
    digests: tuple[str, ...] = ()
    headers_version: str = HEADERS_VERSION
