"""Persistence exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each layer raises a specific error type so callers can decide whether
the surrounding transaction should be rolled back.
"""

from __future__ import annotations


class PersistenceError(Exception):
    """Base exception for all persistence failures."""


class PersistenceConfigError(PersistenceError):
    """Raised for invalid runtime configuration."""


class StorageAccessError(PersistenceError):
    """Raised when reading or writing through an object session fails."""


class HeaderNotFoundError(StorageAccessError):
    """Raised by a session when no header exists at the requested path."""


class MissingParentHeaderError(StorageAccessError):
    """Raised when an ACL's parent header cannot be read."""


class MissingPriorHeaderError(StorageAccessError):
    """Raised when an update targets a resource without a header."""


class InvalidResourceIdError(PersistenceError):
    """Raised for identifiers that cannot be placed inside an object."""


class RootMappingNotFoundError(PersistenceError):
    """Raised when the root index has no entry for a resource."""


class UnsupportedOperationError(PersistenceError):
    """Raised for operation kinds or payloads this layer does not persist."""
