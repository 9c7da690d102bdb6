"""IMiddleware — one interceptor in front of the executor."""

from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Protocol,
    runtime_checkable,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..operations.descriptor import OperationDescriptor


@runtime_checkable
class IMiddleware(Protocol):
    """Anything awaitable as ``middleware(descriptor, next_handler)``.

    A plain ``async def`` qualifies as well as a class with ``__call__``.
    """

    async def __call__(
        self,
        descriptor: OperationDescriptor,
        next_handler: Callable[[OperationDescriptor], Awaitable[Any]],
    ) -> Any:
        """Handle one operation.

        *descriptor* may be rewritten in place before it is handed on.
        Awaiting ``next_handler(descriptor)`` runs the later middleware and
        then the executor; its result (or error) should normally be returned
        as is. Not calling it answers the operation without touching storage.
        """
        ...
