"""Tests for descriptor parsing and the typed delete transforms."""

from __future__ import annotations

import pytest

from soft_delete_core.operations.descriptor import Action, OperationDescriptor
from soft_delete_core.operations.requests import (
    DeleteManyRequest,
    DeleteRequest,
    FindRequest,
    OperationRequest,
    UpdateManyRequest,
    UpdateRequest,
    parse_request,
    soft_delete,
    soft_delete_many,
)
from soft_delete_core.primitives.exceptions import DescriptorContractError


def test_parse_request_picks_shape_for_action() -> None:
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE, args={"where": {"id": 1}}
    )

    request = parse_request(descriptor)

    assert isinstance(request, DeleteRequest)
    assert request.where == {"id": 1}


def test_parse_request_keeps_where_by_reference() -> None:
    where = {"id": {"in": [1, 2]}}
    descriptor = OperationDescriptor(
        model="Post", action=Action.FIND_MANY, args={"where": where}
    )

    request = parse_request(descriptor)

    assert isinstance(request, FindRequest)
    assert request.where is where


def test_parse_request_update_requires_data() -> None:
    descriptor = OperationDescriptor(
        model="Post", action=Action.UPDATE, args={"where": {"id": 1}}
    )

    with pytest.raises(DescriptorContractError) as exc_info:
        parse_request(descriptor)

    assert "data" in exc_info.value.errors


def test_parse_request_rejects_non_mapping_args() -> None:
    descriptor = OperationDescriptor(model="Post", action=Action.FIND_MANY)
    descriptor.args = ["where"]  # type: ignore[assignment]

    with pytest.raises(DescriptorContractError, match="args must be a mapping"):
        parse_request(descriptor)


def test_soft_delete_builds_update() -> None:
    where = {"id": 3}
    update = soft_delete(DeleteRequest(where=where))

    assert isinstance(update, UpdateRequest)
    assert update.where is where
    assert update.to_args() == {"where": {"id": 3}, "data": {"deleted": True}}


def test_soft_delete_many_without_data() -> None:
    update = soft_delete_many(DeleteManyRequest(where={"id": 1}))

    assert isinstance(update, UpdateManyRequest)
    assert update.data == {"deleted": True}


def test_soft_delete_many_without_where_omits_it() -> None:
    update = soft_delete_many(DeleteManyRequest())

    assert update.to_args() == {"data": {"deleted": True}}


def test_soft_delete_many_merges_and_does_not_mutate_input() -> None:
    request = DeleteManyRequest(data={"featured": False})

    update = soft_delete_many(request, field="archived")

    assert update.data == {"featured": False, "archived": True}
    assert request.data == {"featured": False}


def test_delete_many_rejects_scalar_data() -> None:
    with pytest.raises(DescriptorContractError):
        parse_request(
            OperationDescriptor(
                model="Post", action=Action.DELETE_MANY, args={"data": 5}
            )
        )


def test_to_args_carries_extras() -> None:
    request = DeleteRequest.model_validate({"where": {"id": 1}, "select": {"id": True}})

    assert request.to_args() == {"where": {"id": 1}, "select": {"id": True}}


def test_null_data_on_delete_many_counts_as_absent() -> None:
    request = parse_request(
        OperationDescriptor(
            model="Post", action=Action.DELETE_MANY, args={"data": None}
        )
    )

    update = soft_delete_many(request)  # type: ignore[arg-type]

    assert update.to_args() == {"data": {"deleted": True}}


def test_parse_request_accepts_actions_without_dedicated_shape() -> None:
    args = {"_count": True, "where": {"deleted": True}}

    request = parse_request(
        OperationDescriptor(model="Post", action=Action.AGGREGATE, args=args)
    )

    assert type(request) is OperationRequest
    assert request.to_args() == args
