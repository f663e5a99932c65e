"""Core constants used across persistence modules.

This module centralizes storage layout names and identifier markers.
Keeping values here avoids magic literals in path derivation.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_STAGING_ROOT = Path(".ocfl-staging")
DEFAULT_ID_PREFIX = "info:fedora"
DEFAULT_DIGEST_ALGORITHM = "sha512"
SUPPORTED_DIGEST_ALGORITHMS = ("sha512", "sha256")
DIGEST_URN_LABELS = {"sha512": "sha-512", "sha256": "sha-256"}
HEADERS_VERSION = "1.0"
HEADER_DIR_NAME = ".fcrepo"
HEADER_EXTENSION = ".json"
RDF_EXTENSION = ".nt"
ROOT_HEADER_STEM = "fcr-root"
CONTAINER_CONTENT_STEM = "fcr-container"
ACL_ID_SEGMENT = "fcr:acl"
DESCRIPTION_ID_SEGMENT = "fcr:metadata"
ACL_PATH_SUFFIX = "~fcr-acl"
DESCRIPTION_PATH_SUFFIX = "~fcr-desc"
OBJECTS_DIR_NAME = "objects"
OBJECT_INDEX_FILE_NAME = "root-index.json"
