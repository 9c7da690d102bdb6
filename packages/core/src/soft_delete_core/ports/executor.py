"""IExecutor — the terminal link of every middleware chain."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from contextlib import AbstractAsyncContextManager

    from ..operations.descriptor import OperationDescriptor


@runtime_checkable
class IExecutor(Protocol):
    """Protocol for the storage call a middleware chain ultimately reaches.

    The executor interprets ``descriptor.action`` and ``descriptor.args``
    according to its own storage protocol. Singular actions return a record
    (or ``None``), batch actions return a list or a ``{"count": n}`` payload.
    Failures are raised, never returned.
    """

    async def __call__(self, descriptor: OperationDescriptor) -> Any:
        """Run *descriptor* against storage and return its result."""
        ...

    def transaction(self) -> AbstractAsyncContextManager[Any]:
        """Return an async context manager grouping the calls made inside it."""
        ...
