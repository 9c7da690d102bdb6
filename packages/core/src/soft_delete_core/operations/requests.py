"""Typed request shapes for each recognised action.

The untyped ``args`` bag of an :class:`OperationDescriptor` is validated
into one of these models before it is rewritten, so "is ``data`` present
and is it a mapping" is answered by Pydantic instead of ad-hoc checks.

``where`` is typed as ``Any`` on purpose: the selection predicate is opaque
to this layer and is carried by reference, never copied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..primitives.exceptions import DescriptorContractError
from .descriptor import Action

if TYPE_CHECKING:
    from .descriptor import OperationDescriptor


class OperationRequest(BaseModel):
    """Base for typed requests.

    Unknown roles (``select``, ``include``...) are kept and passed through.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    def to_args(self) -> dict[str, Any]:
        """Return the argument roles that were explicitly bound, plus extras."""
        args = {name: getattr(self, name) for name in self.model_fields_set}
        args.update(self.model_extra or {})
        return args


class CreateRequest(OperationRequest):
    data: dict[str, Any]


class CreateManyRequest(OperationRequest):
    data: list[dict[str, Any]]


class FindRequest(OperationRequest):
    where: Any = None


class FindUniqueRequest(OperationRequest):
    where: Any


class UpdateRequest(OperationRequest):
    where: Any
    data: dict[str, Any]


class UpdateManyRequest(OperationRequest):
    where: Any = None
    data: dict[str, Any]


class UpsertRequest(OperationRequest):
    where: Any
    create: dict[str, Any]
    update: dict[str, Any]


class DeleteRequest(OperationRequest):
    where: Any


class DeleteManyRequest(OperationRequest):
    where: Any = None
    data: dict[str, Any] | None = None


REQUEST_TYPES: dict[Action, type[OperationRequest]] = {
    Action.CREATE: CreateRequest,
    Action.CREATE_MANY: CreateManyRequest,
    Action.FIND_UNIQUE: FindUniqueRequest,
    Action.FIND_UNIQUE_OR_THROW: FindUniqueRequest,
    Action.FIND_FIRST: FindRequest,
    Action.FIND_FIRST_OR_THROW: FindRequest,
    Action.FIND_MANY: FindRequest,
    Action.COUNT: FindRequest,
    Action.UPDATE: UpdateRequest,
    Action.UPDATE_MANY: UpdateManyRequest,
    Action.UPSERT: UpsertRequest,
    Action.DELETE: DeleteRequest,
    Action.DELETE_MANY: DeleteManyRequest,
}


def _errors_from(exc: PydanticValidationError) -> dict[str, list[str]]:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ())) or "__root__"
        msg = error.get("msg", "validation error")
        errors.setdefault(loc, []).append(msg)
    return errors


def parse_request(descriptor: OperationDescriptor) -> OperationRequest:
    """Validate *descriptor.args* against the shape its action requires.

    Actions without a dedicated shape (aggregates, raw queries) only need a
    mapping of arguments.

    Raises:
        DescriptorContractError: If the arguments do not fit the shape.
    """
    request_type = REQUEST_TYPES.get(descriptor.action, OperationRequest)
    if not isinstance(descriptor.args, dict):
        raise DescriptorContractError(
            f"{descriptor}: args must be a mapping, "
            f"got {type(descriptor.args).__name__}"
        )
    try:
        return request_type.model_validate(descriptor.args)
    except PydanticValidationError as exc:
        raise DescriptorContractError(_errors_from(exc)) from exc


def soft_delete(request: DeleteRequest, *, field: str = "deleted") -> UpdateRequest:
    """Turn a single delete into an update that only sets the deletion flag.

    Any prior ``data`` is discarded; a raw delete carries none.
    """
    extras = {k: v for k, v in (request.model_extra or {}).items() if k != "data"}
    return UpdateRequest(where=request.where, data={field: True}, **extras)


def soft_delete_many(
    request: DeleteManyRequest, *, field: str = "deleted"
) -> UpdateManyRequest:
    """Turn a batch delete into a batch update that sets the deletion flag.

    Existing ``data`` (an empty mapping included) is merged into, keeping its
    other keys; otherwise a fresh ``{field: True}`` is used.
    """
    data = dict(request.data) if request.data is not None else {}
    data[field] = True
    fields: dict[str, Any] = {"data": data}
    if "where" in request.model_fields_set:
        fields["where"] = request.where
    return UpdateManyRequest(**fields, **(request.model_extra or {}))
