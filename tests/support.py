"""Test support: an in-memory asyncpg-style pool and sample bundles."""

from vault_import.models import ImportBundle


class FakeTransaction:
    def __init__(self, conn):
        self._conn = conn

    async def start(self):
        self._conn.pending = []

    async def commit(self):
        for table, row in self._conn.pending:
            # ON CONFLICT (id) DO NOTHING
            self._conn.pool.tables[table].setdefault(row[0], row)
        self._conn.pending = []
        self._conn.pool.commits += 1

    async def rollback(self):
        self._conn.pending = []
        self._conn.pool.rollbacks += 1


class FakeConnection:
    def __init__(self, pool):
        self.pool = pool
        self.pending = []

    def transaction(self):
        return FakeTransaction(self)

    async def executemany(self, statement, records):
        table = "folders" if "vault.folders" in statement else "ciphers"
        self.pool.batches.append((table, list(records)))
        if table in self.pool.fail_on:
            raise ConnectionError(f"{table} table unavailable")
        for record in records:
            self.pending.append((table, record))


class _Acquire:
    def __init__(self, pool):
        self._pool = pool

    async def __aenter__(self):
        self._pool.acquired += 1
        return FakeConnection(self._pool)

    async def __aexit__(self, *exc):
        return False


class FakePool:
    """Records every batch and keeps committed rows keyed by id."""

    def __init__(self, fail_on=()):
        self.tables = {"folders": {}, "ciphers": {}}
        self.batches = []
        self.fail_on = set(fail_on)
        self.acquired = 0
        self.commits = 0
        self.rollbacks = 0

    def acquire(self):
        return _Acquire(self)

    @property
    def folders(self):
        return list(self.tables["folders"].values())

    @property
    def ciphers(self):
        return list(self.tables["ciphers"].values())


SUBJECT = "user-1"


def make_bundle(**overrides) -> ImportBundle:
    payload = {
        "folders": [
            {"id": "f-0", "name": "2.enc-work"},
            {"id": "f-1", "name": "2.enc-home"},
        ],
        "ciphers": [
            {
                "encryptedFor": SUBJECT,
                "type": 1,
                "name": "2.enc-github",
                "notes": None,
                "login": {"username": "2.enc-u", "password": "2.enc-p"},
                "favorite": True,
            },
            {
                "encryptedFor": SUBJECT,
                "type": 2,
                "name": "2.enc-note",
                "secureNote": {"type": 0},
                "reprompt": 0,
            },
        ],
        "folderRelationships": [{"key": 1, "value": 0}],
    }
    payload.update(overrides)
    return ImportBundle.model_validate(payload)
