"""Operation descriptors and their typed request shapes."""

from __future__ import annotations

from .descriptor import Action, OperationDescriptor
from .requests import (
    CreateManyRequest,
    CreateRequest,
    DeleteManyRequest,
    DeleteRequest,
    FindRequest,
    FindUniqueRequest,
    OperationRequest,
    UpdateManyRequest,
    UpdateRequest,
    UpsertRequest,
    parse_request,
    soft_delete,
    soft_delete_many,
)

__all__ = [
    "Action",
    "CreateManyRequest",
    "CreateRequest",
    "DeleteManyRequest",
    "DeleteRequest",
    "FindRequest",
    "FindUniqueRequest",
    "OperationDescriptor",
    "OperationRequest",
    "UpdateManyRequest",
    "UpdateRequest",
    "UpsertRequest",
    "parse_request",
    "soft_delete",
    "soft_delete_many",
]
