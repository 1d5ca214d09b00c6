"""
Pytest configuration and shared fakes.

The fakes stand in for a psycopg2 connection so repository and transaction
behaviour can be exercised without a running PostgreSQL. Each connection
replays a script of outcomes, one per `execute` call: a `Result` (rows and
rowcount) or an exception to raise.
"""
import os
from dataclasses import dataclass, field

import pytest

from db.connection import Database


@dataclass
class Result:
    rows: list = field(default_factory=list)
    rowcount: int = -1


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self.conn = conn
        self.rowcount = -1
        self._rows: list = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def execute(self, sql, params=None):
        self.conn.executed.append((sql, params))
        outcome = self.conn.script.pop(0) if self.conn.script else Result()
        if isinstance(outcome, BaseException):
            raise outcome
        self._rows = list(outcome.rows)
        self.rowcount = outcome.rowcount if outcome.rowcount != -1 else len(outcome.rows)

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)


class FakeConnection:
    def __init__(self, script=None):
        self.script = list(script or [])
        self.executed: list = []
        self.commits = 0
        self.rollbacks = 0
        self.commit_error = None

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        if self.commit_error is not None:
            raise self.commit_error
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakeDatabase(Database):
    """Database handing out a single FakeConnection and counting check-outs."""

    def __init__(self, *script):
        self.conn = FakeConnection(script)
        self.acquired = 0
        self.released = 0
        super().__init__(acquire=self._checkout, release=self._checkin)

    def _checkout(self):
        self.acquired += 1
        return self.conn

    def _checkin(self, conn):
        assert conn is self.conn
        self.released += 1


@pytest.fixture
def fake_db():
    """Factory: fake_db(Result(...), SomeError(), ...)."""
    return FakeDatabase


@pytest.fixture(scope="session")
def pg_dsn():
    """DSN of a reachable test database, or skip."""
    dsn = os.getenv("TEST_DATABASE_URL", "")
    if not dsn:
        pytest.skip("TEST_DATABASE_URL not set; skipping PostgreSQL tests")
    try:
        import psycopg2
        psycopg2.connect(dsn, connect_timeout=2).close()
    except Exception:
        pytest.skip("Database not reachable via TEST_DATABASE_URL")
    return dsn
