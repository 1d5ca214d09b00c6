"""
db/transaction.py
-----------------
Ambient transactions carried by an explicit execution context.

Every repository call receives an `ExecutionContext`. A caller that wants
several calls to commit or roll back together opens
`TransactionManager.transaction(ctx)` and passes the context it yields to
each call. Repositories resolve their store handle with
`CtxGetter.default_tx_or_db`: the transaction bound to the context when
there is one, the default `Database` otherwise.

Usage:
    with tx_manager.transaction(ctx) as tx_ctx:
        account_repo.create(tx_ctx, account)
        course_repo.create(tx_ctx, course)
"""

import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional, TypeVar

from db.connection import Database
from repositories.errors import translate
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ContextDone(Exception):
    """Raised when work is attempted on a cancelled or expired context."""


class CancelToken:
    """Cancellation flag shared by a context and everything derived from it."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


@dataclass(frozen=True)
class ExecutionContext:
    """
    Immutable per-request context.

    Attributes:
        values: Read-only key/value association (ambient transaction lives here).
        token: Cancellation token, shared with derived contexts.
        deadline: Optional `time.monotonic()` instant after which work stops.
    """
    values: Mapping[Any, Any] = field(default_factory=lambda: MappingProxyType({}))
    token: CancelToken = field(default_factory=CancelToken)
    deadline: Optional[float] = None

    @classmethod
    def background(cls) -> "ExecutionContext":
        """A fresh root context with no values and no deadline."""
        return cls()

    def with_value(self, key: Any, value: Any) -> "ExecutionContext":
        """Return a derived context where `key` maps to `value`."""
        merged = dict(self.values)
        merged[key] = value
        return replace(self, values=MappingProxyType(merged))

    def with_timeout(self, seconds: float) -> "ExecutionContext":
        """Return a derived context that expires `seconds` from now."""
        deadline = time.monotonic() + seconds
        if self.deadline is not None:
            deadline = min(deadline, self.deadline)
        return replace(self, deadline=deadline)

    def value(self, key: Any) -> Any:
        return self.values.get(key)

    def cancel(self) -> None:
        self.token.cancel()

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def raise_if_done(self) -> None:
        """Raise `ContextDone` if the context was cancelled or its deadline passed."""
        if self.cancelled:
            raise ContextDone("context canceled")
        if self.expired:
            raise ContextDone("context deadline exceeded")


class Transaction:
    """
    Store handle bound to one open database transaction.

    `cursor()` reuses the held connection and never commits; the owning
    `TransactionManager` decides the outcome.
    """

    def __init__(self, conn):
        self.conn = conn
        self.closed = False

    @contextmanager
    def cursor(self) -> Iterator:
        if self.closed:
            raise RuntimeError("Transaction already finished.")
        with self.conn.cursor() as cur:
            yield cur

    def commit(self) -> None:
        self.conn.commit()
        self.closed = True

    def rollback(self) -> None:
        self.conn.rollback()
        self.closed = True


class CtxKey:
    """Identity-compared key under which a transaction is stored in a context."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"CtxKey({self.name!r})"


DEFAULT_CTX_KEY = CtxKey("default_tx")


class CtxGetter:
    """Resolves the store handle an operation should use."""

    def __init__(self, key: CtxKey = DEFAULT_CTX_KEY):
        self.key = key

    def tx(self, ctx: ExecutionContext) -> Optional[Transaction]:
        """Transaction bound to `ctx` under this getter's key, if any."""
        tx = ctx.value(self.key)
        return tx if isinstance(tx, Transaction) else None

    def default_tx_or_db(self, ctx: ExecutionContext, db: Database):
        """
        Pick the handle for the current operation.

        Pure lookup: never begins, commits or rolls back anything.

        Returns:
            The ambient Transaction when the context carries one, else `db`.
        """
        tx = self.tx(ctx)
        return tx if tx is not None else db


DEFAULT_CTX_GETTER = CtxGetter()


class TransactionManager:
    """
    Owns transaction lifecycle: begin, commit, rollback.

    Injected wherever a caller composes several repository calls into one
    atomic unit. Uses the same key as the `CtxGetter` handed to the
    repositories so they find the transaction it opens.
    """

    def __init__(self, db: Database, getter: CtxGetter = DEFAULT_CTX_GETTER):
        self.db = db
        self.getter = getter

    @contextmanager
    def transaction(self, ctx: ExecutionContext) -> Iterator[ExecutionContext]:
        """
        Run a block inside one database transaction.

        Joins the transaction already carried by `ctx` if there is one.
        Otherwise commits when the block exits normally and rolls back on
        any exception, which is re-raised. Failures of the store itself
        (checkout, commit, rollback, a finished context) leave as
        RepositoryError.

        Yields:
            A derived ExecutionContext carrying the transaction.
        """
        if self.getter.tx(ctx) is not None:
            yield ctx
            return

        try:
            ctx.raise_if_done()
            conn = self.db.acquire()
        except Exception as e:
            raise translate(e) from e

        tx = Transaction(conn)
        try:
            try:
                yield ctx.with_value(self.getter.key, tx)
            except BaseException:
                self._finish(tx.rollback)
                logger.debug("Transaction rolled back.")
                raise
            try:
                tx.commit()
            except Exception as e:
                self._finish(tx.rollback)
                raise translate(e) from e
        finally:
            self.db.release(conn)

    @staticmethod
    def _finish(action: Callable[[], None]) -> None:
        try:
            action()
        except Exception as e:
            raise translate(e) from e

    def do(self, ctx: ExecutionContext, fn: Callable[[ExecutionContext], T]) -> T:
        """Call `fn` with a transactional context and return its result."""
        with self.transaction(ctx) as tx_ctx:
            return fn(tx_ctx)
