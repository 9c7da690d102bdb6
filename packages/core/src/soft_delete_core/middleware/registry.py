"""MiddlewareRegistry — ordered registration and chain invocation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .definition import MiddlewareDefinition
from .pipeline import build_pipeline

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..operations.descriptor import OperationDescriptor
    from ..ports.middleware import IMiddleware

logger = logging.getLogger("soft_delete.registry")


class MiddlewareRegistry:
    """Collects middleware and threads descriptors through them.

    Middleware runs in registration order: the first registered is the
    outermost wrapper and sees the descriptor exactly as the caller built it.
    An optional ``priority`` reorders registrations (lower values execute
    first); equal priorities keep registration order.

    Registration is expected to finish before invocations run concurrently.
    Each :meth:`invoke` snapshots the chain when it starts, so registering
    later only affects later invocations.
    """

    def __init__(self) -> None:
        self._definitions: list[MiddlewareDefinition] = []
        self._instances: list[IMiddleware] | None = None  # cache

    # ── Registration ─────────────────────────────────────────────

    def register(
        self,
        handler: Any,
        *,
        priority: int = 0,
        factory: Callable[..., IMiddleware] | None = None,
        **kwargs: object,
    ) -> None:
        """Append a middleware to the chain.

        Parameters
        ----------
        handler:
            An ``IMiddleware`` instance, an ``async def (descriptor, next_handler)``
            function, or a middleware class to be instantiated lazily.
        priority:
            Lower = outermost in pipe.  Default ``0``.
        factory:
            Optional custom constructor (class registrations only).
        **kwargs:
            Passed to the constructor or factory.
        """
        if isinstance(handler, type):
            defn = MiddlewareDefinition(
                middleware_cls=handler,
                priority=priority,
                factory=factory,
                kwargs=kwargs,
            )
        else:
            defn = MiddlewareDefinition(handler=handler, priority=priority)
        self._definitions.append(defn)
        self._instances = None  # invalidate cache
        logger.debug("Registered middleware %s (priority=%d)", defn.name, priority)

    def add(
        self,
        handler: Any = None,
        *,
        priority: int = 0,
        factory: Callable[..., IMiddleware] | None = None,
        **kwargs: object,
    ) -> Any:
        """Decorator-style registration.

        Usage::

            @registry.add
            async def audit(descriptor, next_handler): ...

            @registry.add(priority=10, model="Post")
            class ScopedMiddleware: ...
        """
        if handler is None:
            # Called as @registry.add(priority=...)
            def wrapper(target: Any) -> Any:
                self.register(target, priority=priority, factory=factory, **kwargs)
                return target

            return wrapper

        # Called as @registry.add
        self.register(handler, priority=priority, factory=factory, **kwargs)
        return handler

    # ── Retrieval ────────────────────────────────────────────────

    def get_ordered_middlewares(self) -> list[IMiddleware]:
        """Return middleware instances sorted by priority (stable)."""
        if self._instances is None:
            sorted_defs = sorted(self._definitions, key=lambda d: d.priority)
            self._instances = [d.build() for d in sorted_defs]
        return list(self._instances)

    # ── Invocation ───────────────────────────────────────────────

    async def invoke(
        self,
        descriptor: OperationDescriptor,
        executor: Callable[[OperationDescriptor], Awaitable[Any]],
    ) -> Any:
        """Run *descriptor* through every middleware, then *executor*.

        Returns whatever the executor (or a short-circuiting middleware)
        returns. Exceptions from any link propagate unchanged.
        """
        pipeline = build_pipeline(self.get_ordered_middlewares(), executor)
        return await pipeline(descriptor)

    # ── Cleanup ──────────────────────────────────────────────────

    def clear(self) -> None:
        """Remove all registrations (testing utility)."""
        self._definitions.clear()
        self._instances = None

    def __len__(self) -> int:
        return len(self._definitions)
