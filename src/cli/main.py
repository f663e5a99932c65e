"""Persistence CLI entry points.

This module exposes commands for deriving storage paths, persisting
resource operations into staged objects, and inspecting headers.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import json
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence

from core.config import PersistenceConfig
from core.errors import PersistenceError
from core.types import (
    BinaryPayload,
    InteractionModel,
    OperationKind,
    RdfPayload,
    ResourceOperation,
)
from persistence.client import PersistenceClient
from persistence.header_codec import header_to_payload
from persistence.paths import derive_paths

_PARENT_MODELS = {
    "rdf": InteractionModel.BASIC_CONTAINER,
    "binary": InteractionModel.NON_RDF_SOURCE,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="ocfl-persist",
        description="Resource persistence into versioned storage objects",
    )
    parser.add_argument(
        "--staging-root",
        help="Override OCFL_PERSIST_STAGING_ROOT for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_paths_command(subparsers)
    _add_persist_command(subparsers)
    _add_header_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the persistence CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        if args.command == "paths":
            return _run_paths_command(args)
        if args.command == "persist":
            return _run_persist_command(_build_client(args.staging_root), args)
        if args.command == "header":
            return _run_header_command(_build_client(args.staging_root), args)
    except (PersistenceError, ValueError) as error:
        print(f"error={error}")
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(staging_root: str | None) -> PersistenceClient:
    """Build SDK client with optional staging-root override.

    Args:
        staging_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = PersistenceConfig.from_env()
    if staging_root:
        config = replace(config, staging_root=Path(staging_root).expanduser().resolve())
    return PersistenceClient(config)


def _run_paths_command(args: argparse.Namespace) -> int:
    """Handle paths command.

    Args:
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    parent_model = _PARENT_MODELS[args.parent_model] if args.parent_model else None
    paths = derive_paths(
        args.root_id,
        args.resource_id,
        parent_interaction_model=parent_model,
        binary=args.binary,
    )
    print(f"content_path={paths.content_path}")
    print(f"header_path={paths.header_path}")
    return 0


def _run_persist_command(client: PersistenceClient, args: argparse.Namespace) -> int:
    """Handle persist command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    operation = ResourceOperation(
        kind=OperationKind(args.kind),
        resource_id=args.resource_id,
        user_principal=args.user,
        payload=_read_payload(args),
        parent_id=args.parent_id,
        interaction_model=_parse_interaction_model(args.interaction_model),
        archival_group=args.archival_group,
        last_modified_by=args.last_modified_by,
        last_modified_date=_parse_timestamp(args.last_modified_date),
        created_by=args.created_by,
        created_date=_parse_timestamp(args.created_date),
    )
    header = client.persist(operation)
    print(f"resource_id={header.resource_id}")
    print(f"content_path={header.content_path}")
    modified = header.last_modified_date
    print(f"last_modified_date={modified.isoformat() if modified else '-'}")
    return 0


def _run_header_command(client: PersistenceClient, args: argparse.Namespace) -> int:
    """Handle header command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    header = client.read_header(args.resource_id)
    print(json.dumps(header_to_payload(header), indent=2))
    return 0


def _read_payload(args: argparse.Namespace) -> RdfPayload | BinaryPayload:
    """Load the operation payload named by CLI flags."""
    if args.binary_file:
        binary_path = Path(args.binary_file)
        return BinaryPayload(
            content=binary_path.read_bytes(),
            mime_type=args.mime_type,
            filename=args.filename or binary_path.name,
        )
    if args.triples_file:
        lines = Path(args.triples_file).read_text(encoding="utf-8").splitlines()
        return RdfPayload(triples=tuple(line for line in lines if line.strip()))
    return RdfPayload()


def _parse_interaction_model(raw_value: str | None) -> InteractionModel | None:
    """Map an interaction model flag onto its enum member."""
    return InteractionModel[raw_value] if raw_value else None


def _parse_timestamp(raw_value: str | None) -> datetime | None:
    """Parse an optional ISO-8601 timestamp flag."""
    if not raw_value:
        return None
    return datetime.fromisoformat(raw_value)


def _add_paths_command(subparsers: Any) -> None:
    """Register paths subcommand."""
    parser = subparsers.add_parser("paths", help="Derive content and header paths")
    parser.add_argument("--root-id", required=True, help="Object root identifier")
    parser.add_argument("--resource-id", required=True, help="Resource identifier")
    parser.add_argument(
        "--parent-model",
        choices=tuple(_PARENT_MODELS),
        help="Kind of the ACL's parent resource",
    )
    parser.add_argument("--binary", action="store_true", help="Resource is a binary")


def _add_persist_command(subparsers: Any) -> None:
    """Register persist subcommand."""
    parser = subparsers.add_parser("persist", help="Persist a create or update operation")
    parser.add_argument("kind", choices=("create", "update"), help="Operation kind")
    parser.add_argument("resource_id", help="Resource identifier")
    parser.add_argument("--user", required=True, help="Principal performing the operation")
    parser.add_argument("--parent-id", help="Parent identifier, create only")
    parser.add_argument(
        "--interaction-model",
        choices=tuple(model.name for model in InteractionModel),
        help="Resource kind, create only",
    )
    parser.add_argument("--archival-group", action="store_true", help="Mark as archival group")
    content = parser.add_mutually_exclusive_group()
    content.add_argument("--triples-file", help="N-Triples file with the resource statements")
    content.add_argument("--binary-file", help="File with binary content")
    parser.add_argument("--mime-type", help="Binary media type")
    parser.add_argument("--filename", help="Binary file name, defaults to the file's name")
    parser.add_argument("--created-by", help="Relaxed-mode creator override")
    parser.add_argument("--created-date", help="Relaxed-mode creation timestamp override")
    parser.add_argument("--last-modified-by", help="Relaxed-mode modifier override")
    parser.add_argument("--last-modified-date", help="Relaxed-mode modification timestamp override")


def _add_header_command(subparsers: Any) -> None:
    """Register header subcommand."""
    parser = subparsers.add_parser("header", help="Print the stored header of a resource")
    parser.add_argument("resource_id", help="Resource identifier")
