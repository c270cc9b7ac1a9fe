"""Vault Import — Bulk import of client-encrypted folders and ciphers.

Security Note (Threat Model):
    The server never sees plaintext: every cipher payload is encrypted by the
    client before upload and stored as an opaque blob. The only checks done
    here are ownership, bundle shape and relationship indices.
"""

from .pipeline import VaultImporter, import_bundle
from .config import ImportConfig
from .materialize import (
    materialize_ciphers,
    materialize_folders,
    resolve_relationships,
)
from .batch import persist_batch

__all__ = [
    "VaultImporter",
    "import_bundle",
    "ImportConfig",
    "materialize_folders",
    "materialize_ciphers",
    "resolve_relationships",
    "persist_batch",
]
