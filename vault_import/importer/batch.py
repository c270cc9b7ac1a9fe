"""
Batch Persistence — bulk submission of prepared rows, one entity type at a time.

Each batch runs in its own transaction and reports a single outcome: either
every row was submitted, or the whole batch is rolled back and a
``StorageError`` is raised. Empty batches never reach the database.
"""
import logging
from collections.abc import Sequence
from typing import Any

from ..errors import StorageError
from ..models import Cipher, Folder

logger = logging.getLogger("vault.import")

# SQL statements
_INSERT_FOLDER = """
INSERT INTO vault.folders (id, user_id, name, created_at, updated_at)
VALUES ($1, $2, $3, $4, $5)
ON CONFLICT (id) DO NOTHING
"""

_INSERT_CIPHER = """
INSERT INTO vault.ciphers (
    id, user_id, organization_id, type, data, favorite,
    folder_id, created_at, updated_at
)
VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
ON CONFLICT (id) DO NOTHING
"""


async def persist_batch(
    db_pool: Any,
    statement: str,
    records: Sequence[tuple],
    entity: str,
) -> int:
    """Submit all records with one ``executemany`` inside one transaction.

    Args:
        db_pool: asyncpg-compatible connection pool.
        statement: Parameterized insert statement.
        records: Positional parameter tuples, one per row.
        entity: Entity name used in logs and errors.

    Returns:
        Number of records submitted (0 when the batch was empty).

    Raises:
        StorageError: If acquiring a connection or writing the batch fails.
    """
    if not records:
        return 0

    logger.debug("Submitting %s batch (%d rows)", entity, len(records))
    try:
        async with db_pool.acquire() as conn:
            tx = conn.transaction()
            await tx.start()
            try:
                await conn.executemany(statement, records)
            except Exception:
                await tx.rollback()
                raise
            await tx.commit()
    except Exception as err:
        logger.error(
            "Failed to persist %s batch (%d rows): %s",
            entity, len(records), err,
        )
        raise StorageError() from err
    return len(records)


async def persist_folders(db_pool: Any, folders: Sequence[Folder]) -> int:
    return await persist_batch(
        db_pool,
        _INSERT_FOLDER,
        [folder.as_record() for folder in folders],
        "folder",
    )


async def persist_ciphers(db_pool: Any, ciphers: Sequence[Cipher]) -> int:
    return await persist_batch(
        db_pool,
        _INSERT_CIPHER,
        [cipher.as_record() for cipher in ciphers],
        "cipher",
    )
