"""SoftDeleteMiddleware — rewrites deletes into flag updates."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, cast

from ..operations.descriptor import Action
from ..operations.requests import parse_request, soft_delete, soft_delete_many
from .rewrite import CONTINUE, Decision, RewriteMiddleware

if TYPE_CHECKING:
    from ..operations.descriptor import OperationDescriptor
    from ..operations.requests import (
        DeleteManyRequest,
        DeleteRequest,
        OperationRequest,
    )

logger = logging.getLogger("soft_delete.middleware")


class SoftDeleteMiddleware(RewriteMiddleware):
    """Turns ``delete``/``deleteMany`` on one model into flag updates.

    * ``delete`` becomes ``update`` with ``data = {field: True}``.
    * ``deleteMany`` becomes ``updateMany``; existing ``data`` is merged
      into, otherwise ``data = {field: True}``.
    * ``where`` is never touched.

    Every other model and action passes through unchanged, so the rule is
    safe to register globally. Model matching is exact and case-sensitive;
    register one instance per model to cover several.

    Raises:
        DescriptorContractError: If a ``deleteMany`` carries non-mapping
            ``data`` (or a ``delete`` has no ``where``). Raised before the
            executor runs.
    """

    def __init__(self, model: str, *, field: str = "deleted") -> None:
        self.model = model
        self.field = field

    def apply(self, descriptor: OperationDescriptor) -> Decision:
        if descriptor.model != self.model:
            return CONTINUE

        if descriptor.action is Action.DELETE:
            request = cast("DeleteRequest", parse_request(descriptor))
            self._rewrite(
                descriptor, Action.UPDATE, soft_delete(request, field=self.field)
            )
        elif descriptor.action is Action.DELETE_MANY:
            many = cast("DeleteManyRequest", parse_request(descriptor))
            self._rewrite(
                descriptor,
                Action.UPDATE_MANY,
                soft_delete_many(many, field=self.field),
            )
        return CONTINUE

    @staticmethod
    def _rewrite(
        descriptor: OperationDescriptor,
        action: Action,
        request: OperationRequest,
    ) -> None:
        logger.debug(
            "Soft delete: %s rewritten to %s.%s",
            descriptor,
            descriptor.model,
            action.value,
        )
        descriptor.action = action
        descriptor.args.update(request.to_args())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(model={self.model!r}, field={self.field!r})"
