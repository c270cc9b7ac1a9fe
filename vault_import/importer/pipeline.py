"""
VaultImporter — reconcile a client import bundle into vault storage.

Runs the whole import as one sequential flow:

1. materialize folder rows (client-chosen ids, insert-if-absent)
2. resolve folder relationships onto the in-memory cipher entries
3. validate ownership and materialize cipher rows (fresh ids)
4. persist the folder batch, then the cipher batch

Every entry is validated and built before the first write, so a rejected
bundle leaves no rows behind. The two batches are still independent units of
work: if the cipher batch fails, folders already committed stay committed.
Re-running the import is safe for folders, and only duplicates ciphers.
"""
import logging
from datetime import datetime
from typing import Any, Optional

from ..errors import BundleValidationError
from ..models import ImportBundle, ImportResult
from .batch import persist_ciphers, persist_folders
from .config import ImportConfig
from .materialize import (
    materialize_ciphers,
    materialize_folders,
    resolve_relationships,
)
from .payload import format_timestamp

logger = logging.getLogger("vault.import")


class VaultImporter:
    """Bulk importer bound to a storage pool and a configuration.

    The importer holds no per-request state; one instance can serve
    concurrent imports for different callers.
    """

    def __init__(self, db_pool: Any, config: Optional[ImportConfig] = None):
        self._db = db_pool
        self._config = config or ImportConfig()

    def _check_limits(self, bundle: ImportBundle) -> None:
        if len(bundle.folders) > self._config.max_folders:
            raise BundleValidationError(
                f"Too many folders in import ({len(bundle.folders)} > "
                f"{self._config.max_folders})"
            )
        if len(bundle.ciphers) > self._config.max_ciphers:
            raise BundleValidationError(
                f"Too many ciphers in import ({len(bundle.ciphers)} > "
                f"{self._config.max_ciphers})"
            )

    async def import_bundle(
        self,
        bundle: ImportBundle,
        subject: str,
        now: Optional[datetime] = None,
    ) -> ImportResult:
        """Persist a bundle under the caller's identity.

        Args:
            bundle: Parsed import bundle; its cipher entries receive resolved
                folder ids in place.
            subject: Verified identity of the caller.
            now: Request timestamp; defaults to the current UTC time.

        Returns:
            ImportResult with the number of submitted rows.

        Raises:
            BundleValidationError: If the bundle exceeds configured limits or
                (in strict mode) holds an out-of-range relationship.
            OwnershipError: If any cipher was encrypted for another user.
            SerializationError: If a cipher payload cannot be encoded.
            StorageError: If either bulk write fails.
        """
        self._check_limits(bundle)
        timestamp = format_timestamp(now)

        if bundle.empty:
            logger.debug("Empty import for user=%s, nothing to write", subject)
            return ImportResult(timestamp=timestamp)

        types = ", ".join(
            f"{name}={count}" for name, count in sorted(bundle.cipher_types().items())
        )
        logger.info(
            "Import started for user=%s: %d folder(s), %d cipher(s) [%s], "
            "%d relationship(s)",
            subject, len(bundle.folders), len(bundle.ciphers), types,
            len(bundle.folder_relationships),
        )

        folders = materialize_folders(bundle.folders, subject, timestamp)
        skipped = resolve_relationships(
            bundle.ciphers,
            bundle.folders,
            bundle.folder_relationships,
            strict=self._config.strict_relationships,
        )
        ciphers = materialize_ciphers(bundle.ciphers, subject, timestamp)

        folder_count = await persist_folders(self._db, folders)
        cipher_count = await persist_ciphers(self._db, ciphers)

        result = ImportResult(
            folders=folder_count,
            ciphers=cipher_count,
            skipped_relationships=skipped,
            timestamp=timestamp,
        )
        logger.info(
            "Import finished for user=%s: %d folder(s), %d cipher(s), "
            "%d skipped relationship(s)",
            subject, result.folders, result.ciphers, skipped,
        )
        return result


async def import_bundle(
    db_pool: Any,
    bundle: ImportBundle,
    subject: str,
    config: Optional[ImportConfig] = None,
    now: Optional[datetime] = None,
) -> ImportResult:
    """Shortcut for ``VaultImporter(db_pool, config).import_bundle(...)``."""
    return await VaultImporter(db_pool, config).import_bundle(
        bundle, subject, now=now,
    )
