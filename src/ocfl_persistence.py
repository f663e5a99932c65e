"""Public SDK surface for OCFL resource persistence.

This module provides a stable import path for library users.
It re-exports the client, persisters, and typed models.
"""

from __future__ import annotations

from core.config import PersistenceConfig
from core.errors import (
    HeaderNotFoundError,
    InvalidResourceIdError,
    MissingParentHeaderError,
    MissingPriorHeaderError,
    PersistenceError,
    RootMappingNotFoundError,
    StorageAccessError,
    UnsupportedOperationError,
)
from core.types import (
    BinaryPayload,
    InteractionModel,
    OperationKind,
    PersistencePaths,
    RdfPayload,
    ResourceHeader,
    ResourceOperation,
    WriteOutcome,
)
from persistence.client import PersistenceClient
from persistence.dispatcher import persist_operation
from persistence.headers import build_header
from persistence.paths import derive_paths
from persistence.root_index import InMemoryRootIndex, RootIndex
from persistence.session import ObjectSession, StagingObjectSession

__all__ = [
    "BinaryPayload",
    "HeaderNotFoundError",
    "InMemoryRootIndex",
    "InteractionModel",
    "InvalidResourceIdError",
    "MissingParentHeaderError",
    "MissingPriorHeaderError",
    "ObjectSession",
    "OperationKind",
    "PersistenceClient",
    "PersistenceConfig",
    "PersistenceError",
    "PersistencePaths",
    "RdfPayload",
    "ResourceHeader",
    "ResourceOperation",
    "RootIndex",
    "RootMappingNotFoundError",
    "StagingObjectSession",
    "StorageAccessError",
    "UnsupportedOperationError",
    "WriteOutcome",
    "build_header",
    "derive_paths",
    "persist_operation",
]
