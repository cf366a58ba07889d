from contextlib import contextmanager

from django.db import DEFAULT_DB_ALIAS, transaction


class UnitOfWork:
    """Handle on one open database transaction.

    Isolation and commit durability come from the connection settings
    (``LEDGER_DB_ISOLATION_LEVEL`` / ``LEDGER_DB_SYNCHRONOUS_COMMIT``).
    """

    def __init__(self, using):
        self.using = using

    def abort(self):
        transaction.set_rollback(True, using=self.using)

    def on_commit(self, func):
        transaction.on_commit(func, using=self.using)


@contextmanager
def unit_of_work(using=None):
    """Open a unit of work that commits on normal exit and rolls back otherwise.

    Exceptions propagate after the rollback. ``abort()`` rolls back without
    raising.
    """
    alias = using or DEFAULT_DB_ALIAS
    with transaction.atomic(using=alias):
        yield UnitOfWork(alias)
