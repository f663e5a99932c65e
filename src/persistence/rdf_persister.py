"""Persistence of RDF sources.

This module writes the statements of a container, binary description,
or ACL into its storage object and records the matching header.
"""

from __future__ import annotations

from core.errors import UnsupportedOperationError
from core.logging_config import get_logger
from core.types import RdfPayload, ResourceHeader, ResourceOperation
from persistence.headers import build_header, check_content_kind, load_prior_header
from persistence.paths import resolve_rdf_paths
from persistence.session import ObjectSession

_LOGGER = get_logger(__name__)


def persist_rdf_source(
    session: ObjectSession,
    operation: ResourceOperation,
    root_id: str,
) -> ResourceHeader:
    """Persist an RDF source operation.

    Content is always written before the header that references it. An update is
    checked against the stored header before anything is written.

    Args:
        session: Session bound to the object anchored at root_id.
        operation: Create or update operation with an RDF payload.
        root_id: Identifier anchoring the storage object.

    Returns:
        The header written for this version.

    Raises:
        MissingParentHeaderError: If an ACL's parent header is unavailable.
        MissingPriorHeaderError: If an update finds no existing header.
        UnsupportedOperationError: If the resource is a binary.
        StorageAccessError: If any session read or write fails.
    """
    payload = operation.payload if operation.payload is not None else RdfPayload()
    if not isinstance(payload, RdfPayload):
        raise UnsupportedOperationError(
            f"Operation on '{operation.resource_id}' carries a binary payload. "
            "Persist binaries with persist_non_rdf_source."
        )
    _LOGGER.debug(
        "rdf_source_persisting",
        resource_id=operation.resource_id,
        operation=operation.kind.value,
    )
    paths = resolve_rdf_paths(session.read_header, root_id, operation.resource_id)
    prior = load_prior_header(session, paths.header_path, operation)
    check_content_kind(operation, prior, binary=False)
    outcome = session.write_content(paths.content_path, payload.to_bytes())
    header = build_header(
        prior,
        operation,
        outcome,
        operation.resource_id == root_id,
        paths.content_path,
    )
    session.write_header(paths.header_path, header)
    _LOGGER.info(
        "rdf_source_persisted",
        resource_id=operation.resource_id,
        operation=operation.kind.value,
        content_path=paths.content_path,
        header_path=paths.header_path,
        triple_count=len(payload.triples),
    )
    return header
