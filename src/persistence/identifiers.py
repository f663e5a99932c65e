"""Resource identifier helpers.

Identifiers are hierarchical strings such as ``info:fedora/a/b``.
ACLs and binary descriptions are addressed by appending a reserved
segment to the identifier of the resource they belong to.
"""

from __future__ import annotations

from core.constants import ACL_ID_SEGMENT, DESCRIPTION_ID_SEGMENT, HEADER_DIR_NAME
from core.errors import InvalidResourceIdError

_ACL_SUFFIX = f"/{ACL_ID_SEGMENT}"
_DESCRIPTION_SUFFIX = f"/{DESCRIPTION_ID_SEGMENT}"
# Segment forms that collide with storage layout names.
_RESERVED_SEGMENT_PREFIXES = ("fcr-", "fcr:")
_RESERVED_SEGMENT_MARKER = "~fcr-"


def is_acl(resource_id: str) -> bool:
    """Return whether the identifier addresses an ACL."""
    return resource_id.endswith(_ACL_SUFFIX)


def is_description(resource_id: str) -> bool:
    """Return whether the identifier addresses a binary description."""
    return resource_id.endswith(_DESCRIPTION_SUFFIX)


def base_id(resource_id: str) -> str:
    """Strip a trailing ACL or description segment.

    Args:
        resource_id: Resource identifier.

    Returns:
        Identifier of the resource the ACL or description belongs to,
        or the identifier itself for ordinary resources.
    """
    for suffix in (_ACL_SUFFIX, _DESCRIPTION_SUFFIX):
        if resource_id.endswith(suffix):
            return resource_id[: -len(suffix)]
    return resource_id


def last_segment(resource_id: str) -> str:
    """Return the final path segment of an identifier."""
    return resource_id.rstrip("/").rsplit("/", 1)[-1]


def relative_subpath(root_id: str, resource_id: str) -> str:
    """Resolve a resource's base identifier relative to its object root.

    Args:
        root_id: Identifier anchoring the storage object.
        resource_id: Resource identifier, possibly an ACL or description.

    Returns:
        Slash-separated subpath, empty when the base is the root itself.

    Raises:
        InvalidResourceIdError: If the resource does not live under the root,
            or a segment uses a name reserved by the storage layout.
    """
    base = base_id(resource_id)
    if base == root_id:
        return ""
    prefix = root_id.rstrip("/") + "/"
    if not base.startswith(prefix):
        raise InvalidResourceIdError(
            f"Resource '{resource_id}' is not contained by object root '{root_id}'. "
            "Resolve the owning root from the index before persisting."
        )
    subpath = base[len(prefix):]
    segments = subpath.split("/")
    if any(segment in ("", ".", "..") for segment in segments):
        raise InvalidResourceIdError(
            f"Resource '{resource_id}' contains an empty or relative path segment. "
            "Normalize the identifier before persisting."
        )
    reserved = [segment for segment in segments if _is_reserved_segment(segment)]
    if reserved:
        raise InvalidResourceIdError(
            f"Resource '{resource_id}' uses reserved path segment '{reserved[0]}'. "
            "Rename the resource so it cannot collide with header or content files."
        )
    return subpath


def _is_reserved_segment(segment: str) -> bool:
    return (
        segment == HEADER_DIR_NAME
        or segment.startswith(_RESERVED_SEGMENT_PREFIXES)
        or _RESERVED_SEGMENT_MARKER in segment
    )
