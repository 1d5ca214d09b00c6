"""AccountRepository against scripted store outcomes."""
import uuid

import pytest
from psycopg2 import errors as pg_errors

from conftest import FakeDatabase, Result
from db.transaction import ExecutionContext, TransactionManager
from models.account import Account
from repositories.account_repo import AccountRepository
from repositories.errors import AlreadyExistsError, NotFoundError, UnknownError


@pytest.fixture
def ctx():
    return ExecutionContext.background()


def _account(**overrides):
    values = {"id": uuid.uuid4(), "email": "ada@example.com", "secret": "s3cret", "role": False}
    values.update(overrides)
    return Account(**values)


def _row(account):
    return (account.id, account.email, account.secret, account.role)


def test_create_returns_input_unchanged(ctx):
    db = FakeDatabase(Result(rowcount=1))
    account = _account()
    assert AccountRepository(db).create(ctx, account) is account
    sql, params = db.conn.executed[0]
    assert sql.startswith("INSERT INTO users")
    assert params == (account.id, "ada@example.com", "s3cret", False)
    assert db.conn.commits == 1


def test_create_duplicate_email_is_already_exists(ctx):
    db = FakeDatabase(pg_errors.UniqueViolation("duplicate key value violates unique constraint"))
    with pytest.raises(AlreadyExistsError):
        AccountRepository(db).create(ctx, _account())
    assert db.conn.rollbacks == 1


def test_create_other_store_error_is_unknown_with_cause(ctx):
    failure = pg_errors.NotNullViolation("null value")
    db = FakeDatabase(failure)
    with pytest.raises(UnknownError) as info:
        AccountRepository(db).create(ctx, _account())
    assert info.value.cause is failure
    assert info.value.__cause__ is failure


def test_get_returns_stored_account(ctx):
    stored = _account(role=True)
    db = FakeDatabase(Result(rows=[_row(stored)]))
    assert AccountRepository(db).get(ctx, stored.id) == stored


def test_get_missing_is_not_found(ctx):
    db = FakeDatabase(Result(rows=[]))
    with pytest.raises(NotFoundError):
        AccountRepository(db).get(ctx, uuid.uuid4())


def test_get_by_email_returns_full_record(ctx):
    stored = _account()
    db = FakeDatabase(Result(rows=[_row(stored)]))
    found = AccountRepository(db).get_by_email(ctx, "ada@example.com")
    assert found.secret == "s3cret"
    assert db.conn.executed[0][1] == ("ada@example.com",)


def test_get_by_email_missing_is_not_found(ctx):
    db = FakeDatabase(Result(rows=[]))
    with pytest.raises(NotFoundError):
        AccountRepository(db).get_by_email(ctx, "nobody@example.com")


def test_update_writes_email_and_secret_only(ctx):
    db = FakeDatabase(Result(rowcount=1))
    account = _account(email="new@example.com")
    assert AccountRepository(db).update(ctx, account) is account
    sql, params = db.conn.executed[0]
    assert "SET email = %s, password = %s WHERE user_id = %s" in sql
    assert "role" not in sql
    assert params == ("new@example.com", "s3cret", account.id)


def test_update_zero_rows_is_not_found(ctx):
    db = FakeDatabase(Result(rowcount=0))
    with pytest.raises(NotFoundError):
        AccountRepository(db).update(ctx, _account())


def test_update_store_not_found_signal_is_not_found(ctx):
    db = FakeDatabase(pg_errors.NoDataFound("no data"))
    with pytest.raises(NotFoundError):
        AccountRepository(db).update(ctx, _account())


def test_delete_returns_row_reported_by_store(ctx):
    stored = _account(email="stored@example.com", role=True)
    db = FakeDatabase(Result(rows=[_row(stored)]))
    deleted = AccountRepository(db).delete(ctx, stored.id)
    assert deleted == stored
    assert "RETURNING" in db.conn.executed[0][0]


def test_delete_missing_is_not_found(ctx):
    db = FakeDatabase(Result(rows=[]))
    with pytest.raises(NotFoundError):
        AccountRepository(db).delete(ctx, uuid.uuid4())


def test_cancelled_context_never_reaches_store():
    db = FakeDatabase()
    ctx = ExecutionContext.background()
    ctx.cancel()
    with pytest.raises(UnknownError):
        AccountRepository(db).get(ctx, uuid.uuid4())
    assert db.conn.executed == []
    assert db.acquired == 0


def test_operations_inside_transaction_share_one_connection(ctx):
    db = FakeDatabase(Result(rowcount=1), Result(rowcount=1))
    repo = AccountRepository(db)
    with TransactionManager(db).transaction(ctx) as tx_ctx:
        repo.create(tx_ctx, _account(email="a@example.com"))
        repo.create(tx_ctx, _account(email="b@example.com"))
    assert db.acquired == 1
    assert db.conn.commits == 1
    assert len(db.conn.executed) == 2


def test_failure_inside_transaction_rolls_back_everything(ctx):
    db = FakeDatabase(Result(rowcount=1), pg_errors.UniqueViolation("dup"))
    repo = AccountRepository(db)
    with pytest.raises(AlreadyExistsError):
        with TransactionManager(db).transaction(ctx) as tx_ctx:
            repo.create(tx_ctx, _account())
            repo.create(tx_ctx, _account())
    assert db.conn.commits == 0
    assert db.conn.rollbacks == 1
