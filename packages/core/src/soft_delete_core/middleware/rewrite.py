"""RewriteMiddleware — middleware driven by a returned control signal."""

from __future__ import annotations

import logging
from abc import abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..operations.descriptor import OperationDescriptor

logger = logging.getLogger("soft_delete.middleware")


@dataclass(frozen=True)
class Continue:
    """Hand the (possibly mutated) descriptor to the rest of the chain."""


@dataclass(frozen=True)
class ShortCircuit:
    """Stop the chain here and answer the caller with *result*."""

    result: Any = None


Decision = Union[Continue, ShortCircuit]

CONTINUE = Continue()


class RewriteMiddleware(IMiddleware):
    """Base for middleware that transforms descriptors before execution.

    Subclasses implement :meth:`apply`, which may mutate the descriptor in
    place and returns a :class:`Continue` or :class:`ShortCircuit` decision.
    The downstream result is returned untouched.
    """

    @abstractmethod
    def apply(self, descriptor: OperationDescriptor) -> Decision:
        """Inspect/mutate *descriptor* and decide whether to continue."""
        ...

    async def __call__(
        self,
        descriptor: OperationDescriptor,
        next_handler: Callable[[OperationDescriptor], Awaitable[Any]],
    ) -> Any:
        decision = self.apply(descriptor)
        if isinstance(decision, ShortCircuit):
            logger.debug("%s short-circuited %s", type(self).__name__, descriptor)
            return decision.result
        return await next_handler(descriptor)
