"""Resource header construction and merging.

Headers are immutable values. Builders return a new header for each
step: creation stamping, modification stamping, binary details, and
finally any relaxed-mode provenance overrides carried by the operation.
"""

from __future__ import annotations

import hashlib
from dataclasses import replace
from datetime import datetime

from core.errors import HeaderNotFoundError, MissingPriorHeaderError, UnsupportedOperationError
from core.types import (
    BinaryPayload,
    InteractionModel,
    OperationKind,
    ResourceHeader,
    ResourceOperation,
    WriteOutcome,
)
from persistence.identifiers import is_acl, is_description
from persistence.session import ObjectSession


def new_resource_header(
    parent_id: str | None,
    resource_id: str,
    interaction_model: InteractionModel,
) -> ResourceHeader:
    """Create an unstamped header for a new resource."""
    return ResourceHeader(
        resource_id=resource_id,
        parent_id=parent_id,
        interaction_model=interaction_model,
    )


def touch_creation(
    header: ResourceHeader,
    user_principal: str,
    time_written: datetime,
) -> ResourceHeader:
    """Stamp creation provenance."""
    return replace(header, created_by=user_principal, created_date=time_written)


def touch_modification(
    header: ResourceHeader,
    user_principal: str,
    time_written: datetime,
) -> ResourceHeader:
    """Stamp modification provenance and refresh the state token."""
    return replace(
        header,
        last_modified_by=user_principal,
        last_modified_date=time_written,
        state_token=state_token_for(time_written),
    )


def state_token_for(last_modified_date: datetime | None) -> str | None:
    """Derive the state token from a last-modified timestamp."""
    if last_modified_date is None:
        return None
    return hashlib.md5(last_modified_date.isoformat().encode("utf-8")).hexdigest()


def apply_relaxed_overrides(header: ResourceHeader, operation: ResourceOperation) -> ResourceHeader:
    """Replace provenance fields with values supplied by the operation.

    Overrides win whenever present, whatever the operation kind. This is
    how migrations reproduce historical provenance.

    Args:
        header: Header after stamping.
        operation: Operation possibly carrying override values.

    Returns:
        Header with overrides applied.
    """
    if operation.last_modified_by:
        header = replace(header, last_modified_by=operation.last_modified_by)
    if operation.last_modified_date is not None:
        header = replace(
            header,
            last_modified_date=operation.last_modified_date,
            state_token=state_token_for(operation.last_modified_date),
        )
    if operation.created_by:
        header = replace(header, created_by=operation.created_by)
    if operation.created_date is not None:
        header = replace(header, created_date=operation.created_date)
    return header


def build_header(
    prior: ResourceHeader | None,
    operation: ResourceOperation,
    outcome: WriteOutcome,
    object_root: bool,
    content_path: str,
) -> ResourceHeader:
    """Build the header for the version being written.

    Args:
        prior: Existing header, required for updates and ignored on create.
        operation: Operation being persisted.
        outcome: Outcome of the content write for this version.
        object_root: Whether the resource anchors its storage object.
        content_path: Relative path of the written content.

    Returns:
        Header to persist.

    Raises:
        MissingPriorHeaderError: If an update has no prior header.
    """
    if operation.kind is OperationKind.CREATE:
        header = new_resource_header(
            operation.parent_id,
            operation.resource_id,
            creation_interaction_model(operation),
        )
        header = touch_creation(header, operation.user_principal, outcome.time_written)
        header = replace(
            header,
            archival_group=operation.archival_group,
            object_root=object_root,
            content_path=content_path,
        )
    elif prior is None:
        raise MissingPriorHeaderError(
            f"Cannot update '{operation.resource_id}': no existing header. "
            "Create the resource before updating it."
        )
    else:
        header = prior
    header = touch_modification(header, operation.user_principal, outcome.time_written)
    if isinstance(operation.payload, BinaryPayload):
        header = _apply_binary_details(header, operation.payload, outcome)
    return apply_relaxed_overrides(header, operation)


def load_prior_header(
    session: ObjectSession,
    header_path: str,
    operation: ResourceOperation,
) -> ResourceHeader | None:
    """Read the header an update merges into, or None for a create.

    Raises:
        MissingPriorHeaderError: If an update finds no header at header_path.
        StorageAccessError: If the session read fails otherwise.
    """
    if operation.kind is OperationKind.CREATE:
        return None
    try:
        return session.read_header(header_path)
    except HeaderNotFoundError as error:
        raise MissingPriorHeaderError(
            f"Cannot update '{operation.resource_id}': no header at {header_path}. "
            "Create the resource before updating it."
        ) from error


def check_content_kind(
    operation: ResourceOperation,
    prior: ResourceHeader | None,
    binary: bool,
) -> None:
    """Reject content whose kind contradicts the resource's interaction model.

    Updates are checked against the stored model, creates against the
    model they establish.

    Raises:
        UnsupportedOperationError: If binary content targets a structured
            resource or RDF content targets a binary.
    """
    if prior is not None:
        model = prior.interaction_model
    else:
        model = creation_interaction_model(operation)
    if (model is InteractionModel.NON_RDF_SOURCE) == binary:
        return
    content_kind = "binary" if binary else "RDF"
    raise UnsupportedOperationError(
        f"Cannot write {content_kind} content to '{operation.resource_id}' "
        f"with interaction model {model.value}. Send content matching the resource kind."
    )


def creation_interaction_model(operation: ResourceOperation) -> InteractionModel:
    """Return the interaction model a create operation establishes."""
    if operation.interaction_model is not None:
        return operation.interaction_model
    if is_acl(operation.resource_id):
        return InteractionModel.ACL
    if is_description(operation.resource_id):
        return InteractionModel.NON_RDF_DESCRIPTION
    if isinstance(operation.payload, BinaryPayload):
        return InteractionModel.NON_RDF_SOURCE
    return InteractionModel.BASIC_CONTAINER


def _apply_binary_details(
    header: ResourceHeader,
    payload: BinaryPayload,
    outcome: WriteOutcome,
) -> ResourceHeader:
    return replace(
        header,
        content_size=outcome.content_size,
        digests=outcome.digests,
        mime_type=payload.mime_type or header.mime_type,
        filename=payload.filename or header.filename,
    )
