"""Vault Import.

Reconciles client-encrypted bulk import bundles into durable vault storage.
"""
from .version import __version__
from .errors import (
    VaultImportError,
    OwnershipError,
    BundleValidationError,
    RelationshipError,
    SerializationError,
    StorageError,
)
from .models import (
    CipherType,
    FolderEntry,
    CipherEntry,
    FolderRelationship,
    ImportBundle,
    ImportResult,
    Folder,
    Cipher,
)
from .importer import VaultImporter, ImportConfig, import_bundle

__all__ = [
    "__version__",
    "VaultImportError",
    "OwnershipError",
    "BundleValidationError",
    "RelationshipError",
    "SerializationError",
    "StorageError",
    "CipherType",
    "FolderEntry",
    "CipherEntry",
    "FolderRelationship",
    "ImportBundle",
    "ImportResult",
    "Folder",
    "Cipher",
    "VaultImporter",
    "ImportConfig",
    "import_bundle",
]
