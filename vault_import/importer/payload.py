"""
Import Payload Core — identifiers, timestamps and payload serialization.

Security Note:
    Cipher payloads arrive already encrypted by the client and are never
    decrypted here. Never log payload contents.
"""
import uuid
import logging
from datetime import datetime, timezone
from typing import Optional

import orjson

from ..conf import TIMESTAMP_FORMAT
from ..errors import SerializationError
from ..models import CipherData, CipherEntry

logger = logging.getLogger("vault.import")


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a UTC timestamp with millisecond precision.

    Args:
        moment: Timezone-aware datetime; defaults to the current UTC time.

    Returns:
        Timestamp string, e.g. ``2024-01-31T09:15:02.123Z``.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)[:-3] + "Z"


def new_cipher_id() -> str:
    """Return a fresh random 128-bit identifier (UUID4 string form)."""
    return str(uuid.uuid4())


def build_payload(entry: CipherEntry) -> CipherData:
    """Copy the opaque payload fields of a cipher entry, nothing more."""
    return CipherData(
        name=entry.name,
        notes=entry.notes,
        login=entry.login,
        card=entry.card,
        identity=entry.identity,
        secure_note=entry.secure_note,
        fields=entry.fields,
        password_history=entry.password_history,
        reprompt=entry.reprompt,
    )


def serialize_payload(data: CipherData) -> str:
    """Encode a cipher payload for the ``data`` column.

    Returns:
        orjson-encoded JSON text with camelCase keys.

    Raises:
        SerializationError: If the payload cannot be encoded.
    """
    try:
        return orjson.dumps(data.model_dump(by_alias=True)).decode("utf-8")
    except (TypeError, ValueError) as err:
        logger.error("Failed to serialize cipher payload: %s", err)
        raise SerializationError() from err
