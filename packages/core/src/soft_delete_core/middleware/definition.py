"""MiddlewareDefinition — descriptor for middleware in pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..ports.middleware import IMiddleware


@dataclass
class MiddlewareDefinition:
    """Descriptor for a middleware in the pipeline.

    Holds either a ready *handler* (an ``IMiddleware`` instance or a plain
    ``async def handler(descriptor, next_handler)``) or, for **deferred
    instantiation**, a *middleware_cls* with optional *factory* and *kwargs*.
    """

    handler: IMiddleware | None = None
    middleware_cls: type[Any] | None = None
    priority: int = 0
    factory: Callable[..., IMiddleware] | None = None
    kwargs: dict[str, object] = field(default_factory=dict)

    @property
    def name(self) -> str:
        target: Any = self.handler if self.handler is not None else self.middleware_cls
        return getattr(target, "__name__", type(target).__name__)

    def build(self) -> IMiddleware:
        """Return the middleware instance, constructing it if deferred."""
        if self.handler is not None:
            return self.handler
        if self.factory is not None:
            return self.factory(**self.kwargs)
        if self.middleware_cls is None:
            raise TypeError("MiddlewareDefinition needs a handler or a class")
        return self.middleware_cls(**self.kwargs)  # type: ignore[no-any-return]
