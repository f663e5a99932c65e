"""Runtime configuration model for the persistence layer.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_DIGEST_ALGORITHM,
    DEFAULT_ID_PREFIX,
    DEFAULT_STAGING_ROOT,
    SUPPORTED_DIGEST_ALGORITHMS,
)
from core.errors import PersistenceConfigError


@dataclass(frozen=True)
class PersistenceConfig:
    """Validated runtime configuration.

    Attributes:
        staging_root: Local root directory for filesystem object sessions.
        digest_algorithm: Fixity algorithm applied to binary content writes.
        id_prefix: Identifier scheme prefix shared by every resource id.
    """

    staging_root: Path
    digest_algorithm: str
    id_prefix: str

    @classmethod
    def from_env(cls) -> "PersistenceConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            PersistenceConfigError: If environment values are invalid.
        """
        staging_root_value = os.getenv("OCFL_PERSIST_STAGING_ROOT", str(DEFAULT_STAGING_ROOT))
        digest_algorithm = _parse_digest_algorithm(
            os.getenv("OCFL_PERSIST_DIGEST_ALGORITHM", DEFAULT_DIGEST_ALGORITHM)
        )
        id_prefix = _parse_id_prefix(os.getenv("OCFL_PERSIST_ID_PREFIX", DEFAULT_ID_PREFIX))
        return cls(
            staging_root=Path(staging_root_value).expanduser().resolve(),
            digest_algorithm=digest_algorithm,
            id_prefix=id_prefix,
        )


def _parse_digest_algorithm(raw_value: str) -> str:
    """Validate the digest algorithm environment value.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Normalized algorithm name.

    Raises:
        PersistenceConfigError: If the algorithm is not supported.
    """
    normalized = raw_value.strip().lower().replace("-", "")
    if normalized not in SUPPORTED_DIGEST_ALGORITHMS:
        supported = ", ".join(SUPPORTED_DIGEST_ALGORITHMS)
        raise PersistenceConfigError(
            "Invalid OCFL_PERSIST_DIGEST_ALGORITHM value: "
            f"expected one of {supported}, got '{raw_value}'. "
            "Set OCFL_PERSIST_DIGEST_ALGORITHM to a supported algorithm."
        )
    return normalized


def _parse_id_prefix(raw_value: str) -> str:
    """Validate the identifier prefix environment value.

    Raises:
        PersistenceConfigError: If the prefix is blank.
    """
    prefix = raw_value.strip().rstrip("/")
    if not prefix:
        raise PersistenceConfigError(
            "Invalid OCFL_PERSIST_ID_PREFIX value: expected a non-empty scheme prefix. "
            "Unset OCFL_PERSIST_ID_PREFIX to use the default."
        )
    return prefix
