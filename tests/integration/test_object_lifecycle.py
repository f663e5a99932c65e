"""Integration tests for resource lifecycles inside one storage object."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

from core.config import PersistenceConfig
from core.types import (
    BinaryPayload,
    InteractionModel,
    OperationKind,
    RdfPayload,
    ResourceOperation,
)
from persistence.client import PersistenceClient
from persistence.dispatcher import persist_operation
from persistence.filesystem_session import object_directory
from persistence.session import StagingObjectSession

START = datetime(2024, 6, 1, tzinfo=timezone.utc)


def _ticking_clock():
    ticks = iter(range(1000))
    return lambda: START + timedelta(seconds=next(ticks))


def test_parent_and_acl_in_one_session() -> None:
    """An ACL should see its parent written earlier in the same session."""
    root_id = "info:fedora/r0"
    session = StagingObjectSession(root_id, clock=_ticking_clock())
    binary = ResourceOperation(
        kind=OperationKind.CREATE,
        resource_id=f"{root_id}/data.bin",
        user_principal="alice",
        payload=BinaryPayload(b"\x00\x01", "application/octet-stream"),
        parent_id=root_id,
    )
    acl = ResourceOperation(
        kind=OperationKind.CREATE,
        resource_id=f"{root_id}/data.bin/fcr:acl",
        user_principal="alice",
        payload=RdfPayload(),
        interaction_model=InteractionModel.ACL,
    )

    persist_operation(session, binary, root_id)
    header = persist_operation(session, acl, root_id)

    assert header.content_path == "data.bin~fcr-acl.nt"
    assert session.write_log == (
        "data.bin",
        ".fcrepo/data.bin.json",
        "data.bin~fcr-acl.nt",
        ".fcrepo/data.bin~fcr-acl.json",
    )


def test_create_update_cycle_on_disk(tmp_path) -> None:
    """Create then update should keep creation provenance in the staged header."""
    config = replace(PersistenceConfig.from_env(), staging_root=tmp_path)
    client = PersistenceClient(config, clock=_ticking_clock())
    root_id = "info:fedora/r1"
    client.persist(
        ResourceOperation(
            kind=OperationKind.CREATE,
            resource_id=root_id,
            user_principal="alice",
            payload=RdfPayload(triples=(f'<{root_id}> <http://purl.org/dc/terms/title> "v1" .',)),
            interaction_model=InteractionModel.BASIC_CONTAINER,
        )
    )

    client.persist(
        ResourceOperation(
            kind=OperationKind.UPDATE,
            resource_id=root_id,
            user_principal="bob",
            payload=RdfPayload(triples=(f'<{root_id}> <http://purl.org/dc/terms/title> "v2" .',)),
        )
    )
    header = client.read_header(root_id)
    content = (object_directory(tmp_path, root_id) / "fcr-container.nt").read_text(encoding="utf-8")

    assert (header.created_by, header.last_modified_by) == ("alice", "bob")
    assert header.created_date < header.last_modified_date
    assert '"v2"' in content
