"""LoggingMiddleware — logs operation execution details."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..operations.descriptor import OperationDescriptor

logger = logging.getLogger("soft_delete.middleware")


class LoggingMiddleware(IMiddleware):
    """Logs operation execution — model, action, duration.

    Register it first to log what the caller asked for, last to log what
    the executor actually receives.
    """

    async def __call__(
        self,
        descriptor: OperationDescriptor,
        next_handler: Callable[[OperationDescriptor], Awaitable[Any]],
    ) -> Any:
        """Log the operation execution."""
        name = str(descriptor)
        logger.info(
            "Invoking %s (in_transaction=%s)",
            name,
            descriptor.run_in_transaction,
        )
        start = time.perf_counter()
        try:
            result = await next_handler(descriptor)
            elapsed = (time.perf_counter() - start) * 1000
            logger.info("%s completed in %.2fms", name, elapsed)
            return result
        except Exception:
            elapsed = (time.perf_counter() - start) * 1000
            logger.exception("%s failed after %.2fms", name, elapsed)
            raise
