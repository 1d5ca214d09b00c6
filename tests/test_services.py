"""AuthService, AccountService and CourseService."""
import uuid

import pytest
from psycopg2 import OperationalError

from conftest import FakeDatabase, Result
from db.transaction import ExecutionContext, TransactionManager
from repositories.account_repo import AccountRepository
from repositories.course_repo import CourseRepository
from repositories.errors import InvalidFieldError, NotFoundError, UnknownError
from security.secrets import PlaintextSecretVerifier
from services.account_service import AccountService
from services.auth_service import AuthService
from services.course_service import CourseService


@pytest.fixture
def ctx():
    return ExecutionContext.background()


def test_plaintext_verifier_compares_exactly():
    verifier = PlaintextSecretVerifier()
    assert verifier.verify("pw", "pw")
    assert not verifier.verify("pw", "PW")
    assert not verifier.verify("", "pw")


def test_register_assigns_fresh_identifier(ctx):
    db = FakeDatabase(Result(rowcount=1))
    account = AuthService(AccountRepository(db)).register(ctx, "ada@example.com", "pw", True)
    assert isinstance(account.id, uuid.UUID)
    assert account.role is True
    assert db.conn.executed[0][1][0] == account.id


def test_sign_in_accepts_matching_secret(ctx):
    account_id = uuid.uuid4()
    db = FakeDatabase(Result(rows=[(account_id, "ada@example.com", "pw", False)]))
    account = AuthService(AccountRepository(db)).sign_in(ctx, "ada@example.com", "pw")
    assert account.id == account_id


def test_sign_in_rejects_wrong_secret(ctx):
    db = FakeDatabase(Result(rows=[(uuid.uuid4(), "ada@example.com", "pw", False)]))
    with pytest.raises(InvalidFieldError, match="Invalid email or password"):
        AuthService(AccountRepository(db)).sign_in(ctx, "ada@example.com", "nope")


def test_sign_in_unknown_email_is_not_found(ctx):
    db = FakeDatabase(Result(rows=[]))
    with pytest.raises(NotFoundError):
        AuthService(AccountRepository(db)).sign_in(ctx, "ghost@example.com", "pw")


def test_sign_in_uses_injected_verifier(ctx):
    class AlwaysNo:
        def verify(self, supplied, stored):
            return False

    db = FakeDatabase(Result(rows=[(uuid.uuid4(), "ada@example.com", "pw", False)]))
    with pytest.raises(InvalidFieldError):
        AuthService(AccountRepository(db), AlwaysNo()).sign_in(ctx, "ada@example.com", "pw")


def test_account_change_keeps_secret_when_only_email_given(ctx):
    account_id = uuid.uuid4()
    db = FakeDatabase(
        Result(rows=[(account_id, "old@example.com", "pw", True)]),
        Result(rowcount=1),
    )
    service = AccountService(AccountRepository(db), TransactionManager(db))
    changed = service.change(ctx, account_id, email="new@example.com")
    assert changed.email == "new@example.com"
    assert changed.secret == "pw"
    assert changed.role is True
    assert db.conn.executed[1][1] == ("new@example.com", "pw", account_id)
    assert db.acquired == 1
    assert db.conn.commits == 1


def test_account_change_missing_rolls_back(ctx):
    db = FakeDatabase(Result(rows=[]))
    service = AccountService(AccountRepository(db), TransactionManager(db))
    with pytest.raises(NotFoundError):
        service.change(ctx, uuid.uuid4(), email="x@example.com")
    assert db.conn.rollbacks == 1
    assert len(db.conn.executed) == 1


def test_course_change_overwrites_given_fields(ctx):
    course_id = uuid.uuid4()
    db = FakeDatabase(
        Result(rows=[(course_id, "algo-101", "https://x/algo", "intro")]),
        Result(rowcount=1),
    )
    service = CourseService(CourseRepository(db), TransactionManager(db))
    changed = service.change(ctx, course_id, name="algo-101-v2")
    assert (changed.name, changed.url, changed.text) == ("algo-101-v2", "https://x/algo", "intro")


def test_account_change_commit_failure_is_unknown(ctx):
    account_id = uuid.uuid4()
    db = FakeDatabase(
        Result(rows=[(account_id, "old@example.com", "pw", False)]),
        Result(rowcount=1),
    )
    db.conn.commit_error = OperationalError("server closed the connection unexpectedly")
    service = AccountService(AccountRepository(db), TransactionManager(db))
    with pytest.raises(UnknownError):
        service.change(ctx, account_id, email="new@example.com")
    assert db.conn.rollbacks == 1
