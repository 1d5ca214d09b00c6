"""
repositories/base.py
--------------------
Shared plumbing for the repositories: resolve the store handle for the
current execution context and translate store failures into the error
taxonomy.
"""

from contextlib import contextmanager
from typing import Iterator

from db.connection import Database
from db.transaction import CtxGetter, DEFAULT_CTX_GETTER, ExecutionContext
from repositories.errors import RepositoryError, StoreCondition, classify, translate


class BaseRepository:
    """
    Base class for table repositories.

    Args:
        db: Default store handle, used when the context carries no transaction.
        getter: Resolver that finds the ambient transaction in a context.
    """

    def __init__(self, db: Database | None = None, getter: CtxGetter = DEFAULT_CTX_GETTER):
        self.db = db or Database()
        self.getter = getter

    @contextmanager
    def _cursor(self, ctx: ExecutionContext) -> Iterator:
        """
        Yield a cursor on the handle resolved for `ctx`.

        The handle is resolved exactly once per call. Anything raised by the
        store (or by a cancelled context) leaves as a RepositoryError.
        """
        handle = self.getter.default_tx_or_db(ctx, self.db)
        try:
            ctx.raise_if_done()
            with handle.cursor() as cur:
                yield cur
        except RepositoryError:
            raise
        except Exception as e:
            raise translate(e) from e

    @staticmethod
    def _not_found() -> RepositoryError:
        return classify(StoreCondition.NOT_FOUND)
