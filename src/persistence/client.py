"""Persistence client for filesystem-staged objects.

This module exposes high-level APIs that resolve a resource's object
root, open a session on that object's staging directory, and persist
or inspect resources.
"""

from __future__ import annotations

from core.config import PersistenceConfig
from core.constants import OBJECT_INDEX_FILE_NAME
from core.errors import InvalidResourceIdError, RootMappingNotFoundError
from core.logging_config import get_logger
from core.types import (
    InteractionModel,
    OperationKind,
    PersistencePaths,
    ResourceHeader,
    ResourceOperation,
)
from persistence.dispatcher import persist_operation
from persistence.filesystem_session import FilesystemObjectSession, object_directory
from persistence.identifiers import is_acl, is_description
from persistence.paths import derive_paths, header_path, resolve_rdf_paths
from persistence.root_index import load_index, save_index
from persistence.session import Clock, utc_now

_LOGGER = get_logger(__name__)


class PersistenceClient:
    """Primary SDK entry point for persisting resource operations.

    Calls are sequential. One client must not persist concurrently into
    the same object.
    """

    def __init__(self, config: PersistenceConfig | None = None, clock: Clock = utc_now) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
            clock: Source of write timestamps.
        """
        self._config = config or PersistenceConfig.from_env()
        self._clock = clock
        self._index_path = self._config.staging_root / OBJECT_INDEX_FILE_NAME
        self._index = load_index(self._index_path)

    def persist(self, operation: ResourceOperation) -> ResourceHeader:
        """Persist a create or update operation.

        Args:
            operation: Operation to persist.

        Returns:
            The header written for this version.

        Raises:
            InvalidResourceIdError: If the identifier lacks the configured prefix.
            RootMappingNotFoundError: If the resource's object is unknown.
            PersistenceError: If persistence fails.
        """
        self._check_prefix(operation.resource_id)
        root_id = self.resolve_root(operation)
        header = persist_operation(self.open_session(root_id), operation, root_id)
        save_index(self._index, self._index_path)
        return header

    def resolve_root(self, operation: ResourceOperation) -> str:
        """Return the root of the object that owns the operation's resource.

        A created resource without an index entry anchors a new object and
        is registered under its own identifier. ACLs and descriptions live
        in the object of the resource they belong to.

        Raises:
            RootMappingNotFoundError: If an update or an ACL/description
                targets a resource that is not indexed.
        """
        try:
            return self._index.resolve_root(operation.resource_id)
        except RootMappingNotFoundError:
            reserved = is_acl(operation.resource_id) or is_description(operation.resource_id)
            if operation.kind is not OperationKind.CREATE or reserved:
                raise
        self._index.add_mapping(operation.resource_id, operation.resource_id)
        _LOGGER.info("object_root_registered", root_id=operation.resource_id)
        return operation.resource_id

    def add_to_object(self, resource_id: str, root_id: str) -> None:
        """Place a resource inside an existing object, such as an archival group."""
        self._index.add_mapping(resource_id, root_id)
        save_index(self._index, self._index_path)

    def open_session(self, root_id: str) -> FilesystemObjectSession:
        """Open a session on the staging directory of an object."""
        return FilesystemObjectSession(
            object_directory(self._config.staging_root, root_id),
            digest_algorithm=self._config.digest_algorithm,
            clock=self._clock,
        )

    def read_header(self, resource_id: str) -> ResourceHeader:
        """Read the current header of a persisted resource.

        Raises:
            RootMappingNotFoundError: If the resource is not indexed.
            HeaderNotFoundError: If the resource has no header.
        """
        root_id = self._index.resolve_root(resource_id)
        return self.open_session(root_id).read_header(header_path(root_id, resource_id))

    def paths(self, resource_id: str) -> PersistencePaths:
        """Return the paths a persisted resource occupies in its object.

        The content path is the one recorded in the stored header.

        Raises:
            RootMappingNotFoundError: If the resource is not indexed.
            HeaderNotFoundError: If the resource has no header.
        """
        root_id = self._index.resolve_root(resource_id)
        session = self.open_session(root_id)
        stored_header_path = header_path(root_id, resource_id)
        header = session.read_header(stored_header_path)
        if header.content_path:
            return PersistencePaths(header.content_path, stored_header_path)
        if header.interaction_model is InteractionModel.NON_RDF_SOURCE:
            return derive_paths(root_id, resource_id, binary=True)
        return resolve_rdf_paths(session.read_header, root_id, resource_id)

    def _check_prefix(self, resource_id: str) -> None:
        if not resource_id.startswith(f"{self._config.id_prefix}/"):
            raise InvalidResourceIdError(
                f"Resource '{resource_id}' is outside identifier scheme "
                f"'{self._config.id_prefix}'. Set OCFL_PERSIST_ID_PREFIX to match."
            )
