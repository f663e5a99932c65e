"""Unit tests for storage path derivation."""

from __future__ import annotations

import pytest

from core.errors import MissingParentHeaderError
from core.types import InteractionModel, ResourceHeader
from persistence.paths import derive_paths, header_path, resolve_rdf_paths
from persistence.session import StagingObjectSession

ROOT_ID = "info:fedora/obj"
CHILD_ID = "info:fedora/obj/a/b"


def test_derive_paths_is_deterministic() -> None:
    """Deriving paths twice should give identical results."""
    first = derive_paths(ROOT_ID, CHILD_ID)
    second = derive_paths(ROOT_ID, CHILD_ID)

    assert first == second


def test_root_container_paths() -> None:
    """The root container should use the root header and top-level content."""
    paths = derive_paths(ROOT_ID, ROOT_ID)

    assert (paths.content_path, paths.header_path) == ("fcr-container.nt", ".fcrepo/fcr-root.json")


def test_nested_container_paths() -> None:
    """Nested containers should live in their own subdirectory."""
    paths = derive_paths(ROOT_ID, CHILD_ID)

    assert (paths.content_path, paths.header_path) == ("a/b/fcr-container.nt", ".fcrepo/a/b.json")


def test_nested_binary_content_path() -> None:
    """Binary content should be stored at the binary's subpath."""
    assert derive_paths(ROOT_ID, CHILD_ID, binary=True).content_path == "a/b"


def test_root_binary_content_path_uses_last_segment() -> None:
    """A binary that is its own root should be stored under its name."""
    assert derive_paths(ROOT_ID, ROOT_ID, binary=True).content_path == "obj"


def test_description_paths_follow_binary() -> None:
    """Binary descriptions should sit beside the described binary."""
    paths = derive_paths(ROOT_ID, f"{CHILD_ID}/fcr:metadata")

    assert (paths.content_path, paths.header_path) == ("a/b~fcr-desc.nt", ".fcrepo/a/b~fcr-desc.json")


def test_acl_paths_differ_by_parent_kind() -> None:
    """ACLs on binaries and on containers should use distinct content paths."""
    acl_id = f"{CHILD_ID}/fcr:acl"

    on_container = derive_paths(ROOT_ID, acl_id, InteractionModel.BASIC_CONTAINER)
    on_binary = derive_paths(ROOT_ID, acl_id, InteractionModel.NON_RDF_SOURCE)

    assert on_container.content_path == "a/b/fcr-container~fcr-acl.nt"
    assert on_binary.content_path == "a/b~fcr-acl.nt"


def test_acl_header_path_ignores_parent_kind() -> None:
    """The ACL header path should not depend on the parent kind."""
    acl_id = f"{ROOT_ID}/fcr:acl"

    on_container = derive_paths(ROOT_ID, acl_id, InteractionModel.BASIC_CONTAINER)
    on_binary = derive_paths(ROOT_ID, acl_id, InteractionModel.NON_RDF_SOURCE)

    assert on_container.header_path == on_binary.header_path == ".fcrepo/fcr-root~fcr-acl.json"


def test_acl_without_parent_model_is_rejected() -> None:
    """ACL derivation should require the parent's interaction model."""
    with pytest.raises(ValueError):
        derive_paths(ROOT_ID, f"{ROOT_ID}/fcr:acl")


def test_resolve_rdf_paths_reads_parent_header() -> None:
    """ACL resolution should use the stored parent's interaction model."""
    parent = ResourceHeader(
        resource_id=CHILD_ID,
        parent_id=ROOT_ID,
        interaction_model=InteractionModel.NON_RDF_SOURCE,
    )
    session = StagingObjectSession(
        ROOT_ID, committed_headers={header_path(ROOT_ID, CHILD_ID): parent}
    )

    paths = resolve_rdf_paths(session.read_header, ROOT_ID, f"{CHILD_ID}/fcr:acl")

    assert paths.content_path == "a/b~fcr-acl.nt"


def test_resolve_rdf_paths_raises_without_parent_header() -> None:
    """ACL resolution should fail when the parent header is missing."""
    session = StagingObjectSession(ROOT_ID)

    with pytest.raises(MissingParentHeaderError):
        resolve_rdf_paths(session.read_header, ROOT_ID, f"{CHILD_ID}/fcr:acl")

    assert session.write_log == ()
