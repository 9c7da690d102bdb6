"""DescriptorValidatorMiddleware — checks descriptors before execution."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ..operations.requests import parse_request
from ..ports.middleware import IMiddleware

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from ..operations.descriptor import OperationDescriptor


class DescriptorValidatorMiddleware(IMiddleware):
    """Validates the final descriptor against the shape its action requires.

    Register it last (innermost) so it sees the descriptor exactly as the
    executor will. If validation fails, raises DescriptorContractError.
    """

    async def __call__(
        self,
        descriptor: OperationDescriptor,
        next_handler: Callable[[OperationDescriptor], Awaitable[Any]],
    ) -> Any:
        """Validate the descriptor before passing to next handler."""
        parse_request(descriptor)
        return await next_handler(descriptor)
