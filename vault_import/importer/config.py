"""
Import Configuration — validated settings for the import pipeline.

Reads optional overrides from environment variables:
    VAULT_IMPORT_STRICT_RELATIONSHIPS = 1|true|yes|on
    VAULT_IMPORT_MAX_FOLDERS = <integer>
    VAULT_IMPORT_MAX_CIPHERS = <integer>
    VAULT_IMPORT_MAX_BODY_SIZE = <bytes>
"""
import os
import logging

from pydantic import BaseModel, Field

logger = logging.getLogger("vault.import")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    """Read an integer env var.

    Raises:
        ValueError: If the value is not a valid integer.
    """
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


class ImportConfig(BaseModel):
    """Validated import configuration."""

    strict_relationships: bool = False
    max_folders: int = Field(default=5000, ge=1, le=100000)
    max_ciphers: int = Field(default=5000, ge=1, le=100000)
    # request body limit of the HTTP endpoint, in bytes
    max_body_size: int = Field(default=64 * 1024 * 1024, ge=1024)

    @classmethod
    def from_env(cls) -> "ImportConfig":
        """Create ImportConfig by loading values from environment.

        Returns:
            Populated ImportConfig instance.
        """
        config = cls(
            strict_relationships=_env_bool(
                "VAULT_IMPORT_STRICT_RELATIONSHIPS", False
            ),
            max_folders=_env_int("VAULT_IMPORT_MAX_FOLDERS", 5000),
            max_ciphers=_env_int("VAULT_IMPORT_MAX_CIPHERS", 5000),
            max_body_size=_env_int(
                "VAULT_IMPORT_MAX_BODY_SIZE", 64 * 1024 * 1024
            ),
        )
        logger.debug(
            "Import config: strict_relationships=%s max_folders=%d "
            "max_ciphers=%d max_body_size=%d",
            config.strict_relationships, config.max_folders,
            config.max_ciphers, config.max_body_size,
        )
        return config
