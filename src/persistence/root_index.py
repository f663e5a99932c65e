"""Resource-to-object root index.

The production index is an external service. This module defines the
contract persisters rely on and a dictionary-backed implementation.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Protocol

from core.errors import RootMappingNotFoundError, StorageAccessError
from persistence.identifiers import base_id


class RootIndex(Protocol):
    """Lookup of the storage object root owning a resource."""

    def resolve_root(self, resource_id: str) -> str:
        """Return the root identifier or raise RootMappingNotFoundError."""
        ...

    def add_mapping(self, resource_id: str, root_id: str) -> None:
        """Record that a resource lives in the object anchored at root_id."""
        ...


class InMemoryRootIndex:
    """Dictionary-backed root index."""

    def __init__(self, mappings: dict[str, str] | None = None) -> None:
        self._mappings: dict[str, str] = dict(mappings or {})

    def resolve_root(self, resource_id: str) -> str:
        """Resolve the root of a resource.

        ACLs and descriptions resolve through the resource they belong to.

        Raises:
            RootMappingNotFoundError: If the resource is not indexed.
        """
        lookup_id = base_id(resource_id)
        root_id = self._mappings.get(lookup_id)
        if root_id is None:
            raise RootMappingNotFoundError(
                f"No object root indexed for '{resource_id}'. "
                "Create the resource before updating it."
            )
        return root_id

    def add_mapping(self, resource_id: str, root_id: str) -> None:
        self._mappings[base_id(resource_id)] = root_id

    def mappings(self) -> dict[str, str]:
        """Return a copy of all mappings."""
        return dict(self._mappings)


def save_index(index: InMemoryRootIndex, index_path: Path) -> None:
    """Write index mappings to a JSON file.

    Raises:
        StorageAccessError: If the file cannot be written.
    """
    try:
        index_path.parent.mkdir(parents=True, exist_ok=True)
        index_path.write_text(
            json.dumps(index.mappings(), indent=2, sort_keys=True) + "\n",
            encoding="utf-8",
        )
    except OSError as error:
        raise StorageAccessError(f"Failed to write root index {index_path}: {error}.") from error


def load_index(index_path: Path) -> InMemoryRootIndex:
    """Load index mappings from a JSON file, empty when absent.

    Raises:
        StorageAccessError: If the file is unreadable or malformed.
    """
    if not index_path.exists():
        return InMemoryRootIndex()
    try:
        payload = json.loads(index_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as error:
        raise StorageAccessError(
            f"Failed to read root index {index_path}: {error}. "
            "Rebuild the index from stored object headers."
        ) from error
    if not isinstance(payload, dict):
        raise StorageAccessError(
            f"Failed to read root index {index_path}: expected JSON object at top level."
        )
    return InMemoryRootIndex({str(key): str(value) for key, value in payload.items()})
