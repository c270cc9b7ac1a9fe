"""
Import bundle and durable row models.

The bundle mirrors the client wire format (camelCase keys); positions in
``folders`` and ``ciphers`` are the indices that ``folder_relationships``
refer to. Everything inside a cipher apart from ownership, type, favorite and
the folder/organization links is already encrypted by the client and carried
opaquely.
"""
from collections import Counter
from enum import IntEnum
from typing import Any, Optional, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from .errors import BundleValidationError


class CipherType(IntEnum):
    """Known cipher variants. Other values pass through untouched."""
    LOGIN = 1
    SECURE_NOTE = 2
    CARD = 3
    IDENTITY = 4


class WireModel(BaseModel):
    """Base for models parsed from client JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class FolderEntry(WireModel):
    id: str
    name: str


class FolderRelationship(WireModel):
    """Links ``ciphers[key]`` to ``folders[value]``."""
    key: int = Field(ge=0)
    value: int = Field(ge=0)


class CipherEntry(WireModel):
    encrypted_for: str
    type: int
    name: Optional[str] = None
    notes: Optional[str] = None
    login: Any = None
    card: Any = None
    identity: Any = None
    secure_note: Any = None
    fields: Any = None
    password_history: Any = None
    reprompt: Optional[int] = None
    favorite: bool = False
    organization_id: Optional[str] = None
    folder_id: Optional[str] = None


class CipherData(WireModel):
    """Opaque payload persisted in the ``data`` column of a cipher."""
    name: Optional[str] = None
    notes: Optional[str] = None
    login: Any = None
    card: Any = None
    identity: Any = None
    secure_note: Any = None
    fields: Any = None
    password_history: Any = None
    reprompt: Optional[int] = None


class ImportBundle(WireModel):
    folders: list[FolderEntry] = Field(default_factory=list)
    ciphers: list[CipherEntry] = Field(default_factory=list)
    folder_relationships: list[FolderRelationship] = Field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not (
            self.folders or self.ciphers or self.folder_relationships
        )

    def cipher_types(self) -> Counter:
        """Count ciphers per declared type; unknown types count as ``other``."""
        counts: Counter = Counter()
        for entry in self.ciphers:
            try:
                counts[CipherType(entry.type).name.lower()] += 1
            except ValueError:
                counts["other"] += 1
        return counts

    @classmethod
    def from_json(cls, raw: Union[bytes, str]) -> "ImportBundle":
        """Parse a raw request body into a bundle.

        Raises:
            BundleValidationError: If the body is not valid JSON or does not
                match the bundle shape.
        """
        try:
            payload = orjson.loads(raw)
        except orjson.JSONDecodeError as err:
            raise BundleValidationError(
                "Invalid import payload: malformed JSON"
            ) from err
        try:
            return cls.model_validate(payload)
        except ValidationError as err:
            raise BundleValidationError(
                f"Invalid import payload: {err.error_count()} invalid field(s)"
            ) from err


# ---------------------------------------------------------------------------
# Durable rows
# ---------------------------------------------------------------------------

class Folder(BaseModel):
    id: str
    owner_id: str
    name: str
    created_at: str
    updated_at: str

    def as_record(self) -> tuple:
        return (
            self.id, self.owner_id, self.name,
            self.created_at, self.updated_at,
        )


class Cipher(BaseModel):
    id: str
    owner_id: str
    type: int
    data: str
    created_at: str
    updated_at: str
    organization_id: Optional[str] = None
    favorite: bool = False
    folder_id: Optional[str] = None
    deleted_at: Optional[str] = None
    # presentation flags, fixed at creation
    object: str = "cipher"
    organization_use_totp: bool = False
    edit: bool = True
    view_password: bool = True
    collection_ids: Optional[list[str]] = None

    def as_record(self) -> tuple:
        return (
            self.id, self.owner_id, self.organization_id, self.type,
            self.data, self.favorite, self.folder_id,
            self.created_at, self.updated_at,
        )


class ImportResult(BaseModel):
    """Outcome of a successful import call."""
    folders: int = 0
    ciphers: int = 0
    skipped_relationships: int = 0
    timestamp: str
