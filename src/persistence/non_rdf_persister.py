"""Persistence of binary (NonRDF) sources."""

from __future__ import annotations

from core.errors import UnsupportedOperationError
from core.logging_config import get_logger
from core.types import BinaryPayload, ResourceHeader, ResourceOperation
from persistence.headers import build_header, check_content_kind, load_prior_header
from persistence.identifiers import is_acl, is_description
from persistence.paths import derive_paths
from persistence.session import ObjectSession

_LOGGER = get_logger(__name__)


def persist_non_rdf_source(
    session: ObjectSession,
    operation: ResourceOperation,
    root_id: str,
) -> ResourceHeader:
    """Persist a binary create or update.

    The header records size and fixity as reported by the content write.

    Args:
        session: Session bound to the object anchored at root_id.
        operation: Create or update operation with a binary payload.
        root_id: Identifier anchoring the storage object.

    Returns:
        The header written for this version.

    Raises:
        UnsupportedOperationError: If the payload, identifier, or stored
            interaction model is not a binary.
        MissingPriorHeaderError: If an update finds no existing header.
        StorageAccessError: If any session read or write fails.
    """
    payload = operation.payload
    if not isinstance(payload, BinaryPayload):
        raise UnsupportedOperationError(
            f"Operation on '{operation.resource_id}' has no binary payload."
        )
    if is_acl(operation.resource_id) or is_description(operation.resource_id):
        raise UnsupportedOperationError(
            f"'{operation.resource_id}' is an RDF resource and cannot hold binary content."
        )
    paths = derive_paths(root_id, operation.resource_id, binary=True)
    prior = load_prior_header(session, paths.header_path, operation)
    check_content_kind(operation, prior, binary=True)
    outcome = session.write_content(paths.content_path, payload.content)
    header = build_header(
        prior,
        operation,
        outcome,
        operation.resource_id == root_id,
        paths.content_path,
    )
    session.write_header(paths.header_path, header)
    _LOGGER.info(
        "non_rdf_source_persisted",
        resource_id=operation.resource_id,
        operation=operation.kind.value,
        content_path=paths.content_path,
        header_path=paths.header_path,
        content_size=outcome.content_size,
    )
    return header
