"""InMemoryTransaction — snapshot/restore scope for the in-memory executor."""

from __future__ import annotations

import copy
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING, Any

from ...ports.unit_of_work import UnitOfWork

if TYPE_CHECKING:
    import asyncio

#: Transactions opened by the current task (and tasks spawned from it).
_open: ContextVar[tuple[InMemoryTransaction, ...]] = ContextVar(
    "in_memory_transactions", default=()
)


def holds_lock(lock: asyncio.Lock) -> bool:
    """Return True if a transaction open in this context owns *lock*."""
    return any(tx._lock is lock for tx in _open.get())


class InMemoryTransaction(UnitOfWork):
    """Transaction over a dict-of-tables store.

    Snapshots the tables on entry and restores them on rollback. The store's
    *lock* is held for the whole block, so single calls from other tasks wait
    until the transaction ends instead of writing into a state that a
    rollback would discard. Records commit/rollback calls for assertions.
    """

    def __init__(
        self, tables: dict[str, dict[Any, dict[str, Any]]], lock: asyncio.Lock
    ) -> None:
        self._tables = tables
        self._lock = lock
        self._snapshot: dict[str, dict[Any, dict[str, Any]]] | None = None
        self._token: Token[tuple[InMemoryTransaction, ...]] | None = None
        self.committed: bool = False
        self.rolled_back: bool = False

    async def commit(self) -> None:
        if self.committed or self.rolled_back:
            return
        self._snapshot = None
        self.committed = True

    async def rollback(self) -> None:
        if self.committed or self.rolled_back:
            return
        if self._snapshot is not None:
            self._tables.clear()
            self._tables.update(self._snapshot)
            self._snapshot = None
        self.rolled_back = True

    async def __aenter__(self) -> InMemoryTransaction:
        await self._lock.acquire()
        try:
            self._snapshot = copy.deepcopy(self._tables)
        except BaseException:
            self._lock.release()
            raise
        self._token = _open.set((*_open.get(), self))
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        try:
            await super().__aexit__(exc_type, exc_val, exc_tb)
        finally:
            if self._token is not None:
                _open.reset(self._token)
                self._token = None
            self._lock.release()
