"""Storage layout for resources inside a versioned object.

Every function here is pure: the same root and resource identifiers
always produce the same relative paths, so content written on create is
found again on every later update.
"""

from __future__ import annotations

from typing import Callable

from core.constants import (
    ACL_PATH_SUFFIX,
    CONTAINER_CONTENT_STEM,
    DESCRIPTION_PATH_SUFFIX,
    HEADER_DIR_NAME,
    HEADER_EXTENSION,
    RDF_EXTENSION,
    ROOT_HEADER_STEM,
)
from core.errors import MissingParentHeaderError, StorageAccessError
from core.types import InteractionModel, PersistencePaths, ResourceHeader
from persistence.identifiers import (
    base_id,
    is_acl,
    is_description,
    last_segment,
    relative_subpath,
)

HeaderReader = Callable[[str], ResourceHeader]


def header_path(root_id: str, resource_id: str) -> str:
    """Return the header path of a resource.

    The header location never depends on the resource kind.

    Args:
        root_id: Identifier anchoring the storage object.
        resource_id: Resource identifier.

    Returns:
        Relative header path.
    """
    stem = relative_subpath(root_id, resource_id) or ROOT_HEADER_STEM
    return f"{HEADER_DIR_NAME}/{stem}{_reserved_suffix(resource_id)}{HEADER_EXTENSION}"


def rdf_content_path(root_id: str, resource_id: str) -> str:
    """Return the content path of a container or binary description.

    Args:
        root_id: Identifier anchoring the storage object.
        resource_id: Non-ACL resource identifier.

    Returns:
        Relative N-Triples path.

    Raises:
        ValueError: If called with an ACL identifier.
    """
    if is_acl(resource_id):
        raise ValueError(f"ACL '{resource_id}' requires acl_content_path")
    if is_description(resource_id):
        described_path = non_rdf_content_path(root_id, base_id(resource_id))
        return f"{described_path}{DESCRIPTION_PATH_SUFFIX}{RDF_EXTENSION}"
    directory = _container_directory(relative_subpath(root_id, resource_id))
    return f"{directory}{CONTAINER_CONTENT_STEM}{RDF_EXTENSION}"


def non_rdf_content_path(root_id: str, resource_id: str) -> str:
    """Return the content path of a binary.

    A binary that is its own object root is stored under its last
    identifier segment.

    Raises:
        ValueError: If called with an ACL or description identifier.
    """
    if is_acl(resource_id) or is_description(resource_id):
        raise ValueError(f"'{resource_id}' does not address binary content")
    return relative_subpath(root_id, resource_id) or last_segment(root_id)


def acl_content_path(parent_is_structured: bool, root_id: str, resource_id: str) -> str:
    """Return the content path of an ACL.

    An ACL on a structured resource sits beside the resource's container
    file. An ACL on a binary follows the binary description naming.

    Args:
        parent_is_structured: Whether the ACL's parent carries RDF content.
        root_id: Identifier anchoring the storage object.
        resource_id: ACL identifier.

    Returns:
        Relative N-Triples path.

    Raises:
        ValueError: If the identifier is not an ACL.
    """
    if not is_acl(resource_id):
        raise ValueError(f"'{resource_id}' is not an ACL identifier")
    parent_id = base_id(resource_id)
    if parent_is_structured:
        directory = _container_directory(relative_subpath(root_id, parent_id))
        return f"{directory}{CONTAINER_CONTENT_STEM}{ACL_PATH_SUFFIX}{RDF_EXTENSION}"
    binary_path = non_rdf_content_path(root_id, parent_id)
    return f"{binary_path}{ACL_PATH_SUFFIX}{RDF_EXTENSION}"


def derive_paths(
    root_id: str,
    resource_id: str,
    parent_interaction_model: InteractionModel | None = None,
    binary: bool = False,
) -> PersistencePaths:
    """Derive content and header paths for a resource.

    Args:
        root_id: Identifier anchoring the storage object.
        resource_id: Resource identifier.
        parent_interaction_model: Parent kind, required for ACLs.
        binary: Whether the resource itself is a binary.

    Returns:
        Content and header paths.

    Raises:
        ValueError: If an ACL is derived without its parent's kind.
    """
    if is_acl(resource_id):
        if parent_interaction_model is None:
            raise ValueError(f"ACL '{resource_id}' requires its parent's interaction model")
        content_path = acl_content_path(
            parent_interaction_model.is_structured, root_id, resource_id
        )
    elif binary:
        content_path = non_rdf_content_path(root_id, resource_id)
    else:
        content_path = rdf_content_path(root_id, resource_id)
    return PersistencePaths(
        content_path=content_path,
        header_path=header_path(root_id, resource_id),
    )


def resolve_rdf_paths(
    read_header: HeaderReader,
    root_id: str,
    resource_id: str,
) -> PersistencePaths:
    """Derive paths for an RDF source, reading the ACL parent when needed.

    Args:
        read_header: Lookup of a header by relative path.
        root_id: Identifier anchoring the storage object.
        resource_id: Resource identifier.

    Returns:
        Content and header paths.

    Raises:
        MissingParentHeaderError: If an ACL's parent header is unreadable.
    """
    if not is_acl(resource_id):
        return derive_paths(root_id, resource_id)
    parent_header_path = header_path(root_id, base_id(resource_id))
    try:
        parent_header = read_header(parent_header_path)
    except StorageAccessError as error:
        raise MissingParentHeaderError(
            f"Cannot place ACL '{resource_id}': parent header at {parent_header_path} "
            f"is unavailable ({error}). Persist the parent resource first."
        ) from error
    return derive_paths(root_id, resource_id, parent_header.interaction_model)


def _reserved_suffix(resource_id: str) -> str:
    if is_acl(resource_id):
        return ACL_PATH_SUFFIX
    if is_description(resource_id):
        return DESCRIPTION_PATH_SUFFIX
    return ""


def _container_directory(subpath: str) -> str:
    return f"{subpath}/" if subpath else ""
