"""DataClient — explicit entry point that routes operations through middleware."""

from __future__ import annotations

import logging
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any

from .middleware.registry import MiddlewareRegistry
from .operations.descriptor import Action, OperationDescriptor

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

    from .ports.executor import IExecutor

logger = logging.getLogger("soft_delete.client")

#: Executors whose transaction is open in the current task. A nested
#: ``transaction()`` call reuses the outer scope only when it belongs to the
#: same executor.
_open_transactions: ContextVar[tuple[Any, ...]] = ContextVar(
    "open_transactions", default=()
)


class PendingOperation:
    """A built but not yet executed operation.

    Awaiting it sends its descriptor through the client's middleware chain.
    It can also be handed to :meth:`DataClient.transaction` to run grouped
    with others. Each pending operation runs at most once.
    """

    def __init__(self, client: DataClient, descriptor: OperationDescriptor) -> None:
        self._client = client
        self.descriptor = descriptor
        self._started = False

    def __await__(self) -> Generator[Any, None, Any]:
        if self._started:
            raise RuntimeError(f"{self.descriptor} has already been executed")
        self._started = True
        return self._client.invoke(self.descriptor).__await__()

    def __repr__(self) -> str:
        return f"PendingOperation({self.descriptor})"


class ModelDelegate:
    """Builds operations against one model, e.g. ``client.model("Post")``."""

    def __init__(self, client: DataClient, model: str) -> None:
        self._client = client
        self.model = model

    def _op(self, action: Action, **args: Any) -> PendingOperation:
        descriptor = OperationDescriptor(
            model=self.model,
            action=action,
            args={k: v for k, v in args.items() if v is not None},
        )
        return PendingOperation(self._client, descriptor)

    def create(self, *, data: dict[str, Any], **extra: Any) -> PendingOperation:
        return self._op(Action.CREATE, data=data, **extra)

    def create_many(
        self, *, data: list[dict[str, Any]], **extra: Any
    ) -> PendingOperation:
        return self._op(Action.CREATE_MANY, data=data, **extra)

    def find_unique(self, *, where: Any, **extra: Any) -> PendingOperation:
        return self._op(Action.FIND_UNIQUE, where=where, **extra)

    def find_first(self, *, where: Any = None, **extra: Any) -> PendingOperation:
        return self._op(Action.FIND_FIRST, where=where, **extra)

    def find_many(self, *, where: Any = None, **extra: Any) -> PendingOperation:
        return self._op(Action.FIND_MANY, where=where, **extra)

    def count(self, *, where: Any = None, **extra: Any) -> PendingOperation:
        return self._op(Action.COUNT, where=where, **extra)

    def update(
        self, *, where: Any, data: dict[str, Any], **extra: Any
    ) -> PendingOperation:
        return self._op(Action.UPDATE, where=where, data=data, **extra)

    def update_many(
        self, *, data: dict[str, Any], where: Any = None, **extra: Any
    ) -> PendingOperation:
        return self._op(Action.UPDATE_MANY, where=where, data=data, **extra)

    def upsert(
        self,
        *,
        where: Any,
        create: dict[str, Any],
        update: dict[str, Any],
        **extra: Any,
    ) -> PendingOperation:
        return self._op(
            Action.UPSERT, where=where, create=create, update=update, **extra
        )

    def delete(self, *, where: Any, **extra: Any) -> PendingOperation:
        return self._op(Action.DELETE, where=where, **extra)

    def delete_many(self, *, where: Any = None, **extra: Any) -> PendingOperation:
        return self._op(Action.DELETE_MANY, where=where, **extra)


class DataClient:
    """Owns a middleware registry and the terminal executor behind it.

    Construct one explicitly and pass it to whatever issues operations; its
    lifecycle belongs to the caller::

        async with DataClient(executor) as client:
            client.use(SoftDeleteMiddleware("Post"))
            post = await client.model("Post").create(data={"title": "Hi"})

    Parameters
    ----------
    executor:
        The :class:`~soft_delete_core.ports.executor.IExecutor` every chain
        ends in.
    registry:
        Optional pre-populated
        :class:`~soft_delete_core.middleware.registry.MiddlewareRegistry`.
    """

    def __init__(
        self,
        executor: IExecutor,
        *,
        registry: MiddlewareRegistry | None = None,
    ) -> None:
        self._executor = executor
        self._registry = registry if registry is not None else MiddlewareRegistry()

    @property
    def registry(self) -> MiddlewareRegistry:
        return self._registry

    # ── Public API ───────────────────────────────────────────────

    def use(self, handler: Any, *, priority: int = 0, **kwargs: object) -> None:
        """Register middleware. Call during setup, before issuing operations."""
        self._registry.register(handler, priority=priority, **kwargs)

    def model(self, name: str) -> ModelDelegate:
        return ModelDelegate(self, name)

    async def invoke(self, descriptor: OperationDescriptor) -> Any:
        """Send *descriptor* through the middleware chain to the executor."""
        return await self._registry.invoke(descriptor, self._executor)

    async def transaction(self, operations: Sequence[PendingOperation]) -> list[Any]:
        """Run *operations* in order inside one executor transaction.

        Returns their results in the same order. If any operation fails the
        executor rolls the group back and the error propagates. Calls made
        while a transaction on the same executor is already open in this task
        join it; other executors open their own.
        """
        for operation in operations:
            operation.descriptor.run_in_transaction = True

        open_executors = _open_transactions.get()
        if any(executor is self._executor for executor in open_executors):
            return [await operation for operation in operations]

        logger.debug("Opening transaction for %d operation(s)", len(operations))
        async with self._executor.transaction():
            token = _open_transactions.set((*open_executors, self._executor))
            try:
                return [await operation for operation in operations]
            finally:
                _open_transactions.reset(token)

    # ── Lifecycle ────────────────────────────────────────────────

    async def connect(self) -> None:
        connect = getattr(self._executor, "connect", None)
        if connect is not None:
            await connect()

    async def disconnect(self) -> None:
        disconnect = getattr(self._executor, "disconnect", None)
        if disconnect is not None:
            await disconnect()

    async def __aenter__(self) -> DataClient:
        await self.connect()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.disconnect()
