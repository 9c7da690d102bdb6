"""build_pipeline — nest middleware around the executor call."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Sequence

    from ..operations.descriptor import OperationDescriptor
    from ..ports.middleware import IMiddleware

    Handler = Callable[[OperationDescriptor], Awaitable[Any]]


def _link(middleware: IMiddleware, continuation: Handler) -> Handler:
    async def step(descriptor: OperationDescriptor) -> Any:
        return await middleware(descriptor, continuation)

    return step


def build_pipeline(
    middlewares: Sequence[IMiddleware],
    handler_fn: Handler,
) -> Handler:
    """Return one callable that runs *middlewares* in order, then *handler_fn*.

    ``middlewares[0]`` sees the descriptor first and the result last. Each
    entry receives as its continuation the step built from the entries after
    it; the last entry's continuation is *handler_fn* itself. An empty
    sequence yields *handler_fn* unchanged.
    """
    pipeline: Handler = handler_fn
    for middleware in reversed(middlewares):
        pipeline = _link(middleware, pipeline)
    return pipeline
