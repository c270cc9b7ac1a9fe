"""Tests for the folder/cipher materializers and the relationship resolver."""
import uuid

import orjson
import pytest

from vault_import.errors import OwnershipError, RelationshipError, SerializationError
from vault_import.importer import (
    materialize_ciphers,
    materialize_folders,
    resolve_relationships,
)
from vault_import.models import CipherEntry, FolderRelationship

from tests.support import SUBJECT, make_bundle

TS = "2024-01-31T09:15:02.123Z"


def _rels(*pairs):
    return [FolderRelationship(key=k, value=v) for k, v in pairs]


class TestFolderMaterializer:

    def test_keeps_client_ids_and_sets_owner(self, bundle):
        rows = materialize_folders(bundle.folders, SUBJECT, TS)

        assert [row.id for row in rows] == ["f-0", "f-1"]
        assert all(row.owner_id == SUBJECT for row in rows)
        assert all(row.created_at == row.updated_at == TS for row in rows)
        assert rows[1].name == "2.enc-home"

    def test_empty_input(self):
        assert materialize_folders([], SUBJECT, TS) == []


class TestRelationshipResolver:

    def test_assigns_folder_to_cipher(self, bundle):
        skipped = resolve_relationships(
            bundle.ciphers, bundle.folders, _rels((1, 0)),
        )
        assert skipped == 0
        assert bundle.ciphers[1].folder_id == "f-0"
        assert bundle.ciphers[0].folder_id is None

    def test_last_pair_wins(self, bundle):
        resolve_relationships(
            bundle.ciphers, bundle.folders, _rels((0, 0), (0, 1)),
        )
        assert bundle.ciphers[0].folder_id == "f-1"

    def test_out_of_range_folder_is_skipped(self, bundle):
        bundle.ciphers[0].folder_id = "preset"
        skipped = resolve_relationships(
            bundle.ciphers, bundle.folders, _rels((0, 5), (1, 1)),
        )
        assert skipped == 1
        assert bundle.ciphers[0].folder_id == "preset"
        assert bundle.ciphers[1].folder_id == "f-1"

    def test_out_of_range_cipher_is_skipped(self, bundle):
        skipped = resolve_relationships(
            bundle.ciphers, bundle.folders, _rels((7, 0)),
        )
        assert skipped == 1
        assert all(c.folder_id is None for c in bundle.ciphers)

    def test_strict_mode_rejects_out_of_range(self, bundle):
        with pytest.raises(RelationshipError) as exc:
            resolve_relationships(
                bundle.ciphers, bundle.folders, _rels((0, 5)), strict=True,
            )
        assert exc.value.client_fault is True


class TestCipherMaterializer:

    def test_builds_rows(self, bundle):
        bundle.ciphers[1].folder_id = "f-0"
        bundle.ciphers[1].organization_id = "org-1"
        rows = materialize_ciphers(bundle.ciphers, SUBJECT, TS)

        assert len(rows) == 2
        first, second = rows
        assert first.owner_id == SUBJECT
        assert first.type == 1
        assert first.favorite is True
        assert first.folder_id is None
        assert second.folder_id == "f-0"
        assert second.organization_id == "org-1"
        assert all(row.created_at == row.updated_at == TS for row in rows)
        assert all(row.deleted_at is None for row in rows)

    def test_ids_are_fresh_uuid4(self, bundle):
        rows = materialize_ciphers(bundle.ciphers, SUBJECT, TS)
        again = materialize_ciphers(bundle.ciphers, SUBJECT, TS)

        ids = {row.id for row in rows + again}
        assert len(ids) == 4
        for row in rows:
            assert uuid.UUID(row.id).version == 4

    def test_payload_is_exactly_the_client_fields(self, bundle):
        rows = materialize_ciphers(bundle.ciphers, SUBJECT, TS)
        data = orjson.loads(rows[0].data)

        assert set(data) == {
            "name", "notes", "login", "card", "identity",
            "secureNote", "fields", "passwordHistory", "reprompt",
        }
        assert data["name"] == "2.enc-github"
        assert data["login"] == {"username": "2.enc-u", "password": "2.enc-p"}
        assert orjson.loads(rows[1].data)["secureNote"] == {"type": 0}

    def test_wrong_owner_rejects_all(self):
        bundle = make_bundle()
        bundle.ciphers.append(
            CipherEntry(encrypted_for="someone-else", type=1)
        )
        with pytest.raises(OwnershipError) as exc:
            materialize_ciphers(bundle.ciphers, SUBJECT, TS)
        assert exc.value.client_fault is True
        assert exc.value.status == 400
        assert "wrong user" in exc.value.public_message

    def test_unencodable_payload_is_internal_fault(self):
        entry = CipherEntry(
            encrypted_for=SUBJECT, type=1, login={"counter": 2 ** 70},
        )
        with pytest.raises(SerializationError) as exc:
            materialize_ciphers([entry], SUBJECT, TS)
        assert exc.value.client_fault is False
        assert exc.value.status == 500
        assert "2 ** 70" not in exc.value.public_message
