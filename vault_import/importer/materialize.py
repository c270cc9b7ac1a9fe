"""
Materializers — turn bundle entries into durable rows.

All functions here are pure with respect to storage: they build rows and
mutate the in-memory bundle, but never touch the database. The caller's
verified subject and the request-wide timestamp are passed in explicitly.
"""
import logging
from collections.abc import Sequence

from ..errors import OwnershipError, RelationshipError
from ..models import (
    Cipher,
    CipherEntry,
    Folder,
    FolderEntry,
    FolderRelationship,
)
from .payload import build_payload, new_cipher_id, serialize_payload

logger = logging.getLogger("vault.import")


def materialize_folders(
    folders: Sequence[FolderEntry],
    subject: str,
    timestamp: str,
) -> list[Folder]:
    """Build one folder row per entry, keeping the client-chosen id."""
    return [
        Folder(
            id=entry.id,
            owner_id=subject,
            name=entry.name,
            created_at=timestamp,
            updated_at=timestamp,
        )
        for entry in folders
    ]


def resolve_relationships(
    ciphers: Sequence[CipherEntry],
    folders: Sequence[FolderEntry],
    relationships: Sequence[FolderRelationship],
    strict: bool = False,
) -> int:
    """Assign folder ids to cipher entries, in submission order.

    A later pair for the same cipher overwrites an earlier one. Pairs whose
    indices fall outside the bundle are skipped, or rejected when ``strict``.

    Returns:
        Number of skipped relationship pairs.

    Raises:
        RelationshipError: On an out-of-range pair when ``strict`` is set.
    """
    skipped = 0
    for position, rel in enumerate(relationships):
        if rel.key >= len(ciphers) or rel.value >= len(folders):
            if strict:
                raise RelationshipError(
                    f"Folder relationship #{position} references "
                    f"cipher {rel.key} / folder {rel.value} outside the bundle"
                )
            logger.debug(
                "Skipping folder relationship #%d (cipher=%d folder=%d)",
                position, rel.key, rel.value,
            )
            skipped += 1
            continue
        ciphers[rel.key].folder_id = folders[rel.value].id
    return skipped


def materialize_ciphers(
    ciphers: Sequence[CipherEntry],
    subject: str,
    timestamp: str,
) -> list[Cipher]:
    """Validate ownership and build one cipher row per entry.

    Every row gets a freshly generated id, so importing the same bundle twice
    creates two rows per entry.

    Raises:
        OwnershipError: If any entry was encrypted for another user.
        SerializationError: If a payload cannot be encoded.
    """
    rows: list[Cipher] = []
    for position, entry in enumerate(ciphers):
        if entry.encrypted_for != subject:
            logger.warning(
                "Rejecting import for user=%s: cipher #%d encrypted for another user",
                subject, position,
            )
            raise OwnershipError("Cipher encrypted for wrong user")
        data = serialize_payload(build_payload(entry))
        rows.append(
            Cipher(
                id=new_cipher_id(),
                owner_id=subject,
                organization_id=entry.organization_id,
                type=entry.type,
                data=data,
                favorite=entry.favorite,
                folder_id=entry.folder_id,
                created_at=timestamp,
                updated_at=timestamp,
            )
        )
    return rows
