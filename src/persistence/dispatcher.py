"""Operation dispatch onto resource persisters.

This module routes each operation by its kind and payload onto the
RDF or binary persister.
"""

from __future__ import annotations

from core.errors import UnsupportedOperationError
from core.types import (
    BinaryPayload,
    OperationKind,
    RdfPayload,
    ResourceHeader,
    ResourceOperation,
)
from persistence.non_rdf_persister import persist_non_rdf_source
from persistence.rdf_persister import persist_rdf_source
from persistence.session import ObjectSession

PERSISTED_KINDS = (OperationKind.CREATE, OperationKind.UPDATE)


def persist_operation(
    session: ObjectSession,
    operation: ResourceOperation,
    root_id: str,
) -> ResourceHeader:
    """Persist one operation within its storage object.

    Args:
        session: Session bound to the object anchored at root_id.
        operation: Operation to persist.
        root_id: Identifier anchoring the storage object.

    Returns:
        The header written for this version.

    Raises:
        UnsupportedOperationError: For kinds other than create and update.
    """
    if operation.kind not in PERSISTED_KINDS:
        raise UnsupportedOperationError(
            f"Operation kind '{operation.kind.value}' on '{operation.resource_id}' "
            "is handled by the session layer, not by resource persisters."
        )
    if isinstance(operation.payload, BinaryPayload):
        return persist_non_rdf_source(session, operation, root_id)
    if operation.payload is None or isinstance(operation.payload, RdfPayload):
        return persist_rdf_source(session, operation, root_id)
    raise UnsupportedOperationError(
        f"Unsupported payload type {type(operation.payload).__name__} "
        f"for '{operation.resource_id}'."
    )
