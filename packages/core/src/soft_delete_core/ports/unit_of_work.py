"""UnitOfWork — abstract base class for executor transactions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class UnitOfWork(ABC):
    """
    Abstract base class for executor transaction scopes.

    Used as an async context manager: a block that exits normally is
    committed, a block that raises is rolled back and the error keeps
    propagating.

    Example:
        ```python
        class SnapshotUnitOfWork(UnitOfWork):
            def __init__(self, tables):
                self._tables = tables
                self._saved = copy.deepcopy(tables)

            async def commit(self):
                self._saved = None

            async def rollback(self):
                self._tables.clear()
                self._tables.update(self._saved)
        ```
    """

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction. Must be implemented by subclasses."""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the transaction. Must be implemented by subclasses."""
        ...

    async def __aenter__(self) -> UnitOfWork:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if exc_type is None:
            await self.commit()
        else:
            await self.rollback()
