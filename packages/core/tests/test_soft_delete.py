"""Tests for the soft-delete rewrite rule."""

from __future__ import annotations

import logging
from unittest.mock import AsyncMock

import pytest

from soft_delete_core.middleware.soft_delete import SoftDeleteMiddleware
from soft_delete_core.operations.descriptor import Action, OperationDescriptor
from soft_delete_core.primitives.exceptions import DescriptorContractError


@pytest.fixture
def middleware() -> SoftDeleteMiddleware:
    return SoftDeleteMiddleware("Post")


@pytest.fixture
def next_handler() -> AsyncMock:
    return AsyncMock(return_value="downstream")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("model", "action", "args"),
    [
        ("User", Action.DELETE, {"where": {"id": 1}}),
        ("User", Action.DELETE_MANY, {"where": {"id": {"in": [1, 2]}}}),
        ("post", Action.DELETE, {"where": {"id": 1}}),
        ("Posts", Action.DELETE_MANY, {"data": "not-a-mapping"}),
        ("Post", Action.CREATE, {"data": {"title": "t"}}),
        ("Post", Action.FIND_MANY, {"where": {"deleted": True}}),
        ("Post", Action.UPDATE, {"where": {"id": 1}, "data": {"title": "t"}}),
        ("Post", Action.UPDATE_MANY, {"data": {"title": "t"}}),
        ("Post", Action.UPSERT, {"where": {"id": 1}, "create": {}, "update": {}}),
        ("Post", Action.AGGREGATE, {"_count": True, "where": {"deleted": True}}),
        ("Post", Action.GROUP_BY, {"by": ["deleted"]}),
        ("Post", Action.FIND_UNIQUE_OR_THROW, {"where": {"id": 1}}),
    ],
)
async def test_passthrough_is_identity(
    middleware, next_handler, model, action, args
) -> None:
    descriptor = OperationDescriptor(model=model, action=action, args=args)
    before = descriptor.copy()

    result = await middleware(descriptor, next_handler)

    assert result == "downstream"
    next_handler.assert_awaited_once_with(descriptor)
    assert descriptor == before
    assert descriptor.args is args


@pytest.mark.asyncio
async def test_delete_becomes_update_with_flag(middleware, next_handler) -> None:
    where = {"id": 7}
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE, args={"where": where}
    )

    await middleware(descriptor, next_handler)

    assert descriptor.action is Action.UPDATE
    assert descriptor.args == {"where": {"id": 7}, "data": {"deleted": True}}
    assert descriptor.args["where"] is where


@pytest.mark.asyncio
async def test_delete_overwrites_prior_data(middleware, next_handler) -> None:
    descriptor = OperationDescriptor(
        model="Post",
        action=Action.DELETE,
        args={"where": {"id": 1}, "data": {"title": "ignored"}},
    )

    await middleware(descriptor, next_handler)

    assert descriptor.args["data"] == {"deleted": True}


@pytest.mark.asyncio
async def test_delete_keeps_extra_roles(middleware, next_handler) -> None:
    descriptor = OperationDescriptor(
        model="Post",
        action=Action.DELETE,
        args={"where": {"id": 1}, "select": {"id": True}},
    )

    await middleware(descriptor, next_handler)

    assert descriptor.args["select"] == {"id": True}


@pytest.mark.asyncio
async def test_delete_many_without_data(middleware, next_handler) -> None:
    where = {"id": {"in": [2, 3]}}
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE_MANY, args={"where": where}
    )

    await middleware(descriptor, next_handler)

    assert descriptor.action is Action.UPDATE_MANY
    assert descriptor.args["data"] == {"deleted": True}
    assert descriptor.args["where"] is where


@pytest.mark.asyncio
async def test_delete_many_merges_existing_data(middleware, next_handler) -> None:
    descriptor = OperationDescriptor(
        model="Post",
        action=Action.DELETE_MANY,
        args={"where": {"id": 1}, "data": {"featured": False}},
    )

    await middleware(descriptor, next_handler)

    assert descriptor.action is Action.UPDATE_MANY
    assert descriptor.args["data"] == {"featured": False, "deleted": True}


@pytest.mark.asyncio
async def test_delete_many_merges_into_empty_mapping(middleware, next_handler) -> None:
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE_MANY, args={"data": {}}
    )

    await middleware(descriptor, next_handler)

    assert descriptor.args == {"data": {"deleted": True}}
    assert "where" not in descriptor.args


@pytest.mark.asyncio
async def test_delete_many_with_null_data_uses_fresh_flag(
    middleware, next_handler
) -> None:
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE_MANY, args={"data": None}
    )

    await middleware(descriptor, next_handler)

    assert descriptor.action is Action.UPDATE_MANY
    assert descriptor.args == {"data": {"deleted": True}}


@pytest.mark.asyncio
async def test_delete_many_with_non_mapping_data_fails_fast(
    middleware, next_handler
) -> None:
    descriptor = OperationDescriptor(
        model="Post",
        action=Action.DELETE_MANY,
        args={"where": {"id": 1}, "data": ["featured"]},
    )

    with pytest.raises(DescriptorContractError) as exc_info:
        await middleware(descriptor, next_handler)

    assert "data" in exc_info.value.errors
    assert isinstance(exc_info.value, TypeError)
    next_handler.assert_not_awaited()
    assert descriptor.action is Action.DELETE_MANY


@pytest.mark.asyncio
async def test_custom_flag_field(next_handler) -> None:
    middleware = SoftDeleteMiddleware("Post", field="is_deleted")
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE, args={"where": {"id": 1}}
    )

    await middleware(descriptor, next_handler)

    assert descriptor.args["data"] == {"is_deleted": True}


@pytest.mark.asyncio
async def test_result_returned_verbatim(middleware) -> None:
    sentinel = object()
    next_handler = AsyncMock(return_value=sentinel)
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE, args={"where": {"id": 1}}
    )

    assert await middleware(descriptor, next_handler) is sentinel


@pytest.mark.asyncio
async def test_downstream_errors_propagate(middleware) -> None:
    next_handler = AsyncMock(side_effect=ConnectionError("db down"))
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE, args={"where": {"id": 1}}
    )

    with pytest.raises(ConnectionError, match="db down"):
        await middleware(descriptor, next_handler)
    next_handler.assert_awaited_once()


@pytest.mark.asyncio
async def test_rewrite_is_logged(middleware, next_handler, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="soft_delete.middleware")
    descriptor = OperationDescriptor(
        model="Post", action=Action.DELETE, args={"where": {"id": 1}}
    )

    await middleware(descriptor, next_handler)

    assert "Post.delete rewritten to Post.update" in caplog.text
