"""OperationDescriptor — one requested data-access call."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Action(str, Enum):
    """Action kinds understood by the interception layer.

    Values are the wire names executors receive. Only ``delete`` and
    ``deleteMany`` are ever rewritten; every other kind passes through.
    """

    CREATE = "create"
    CREATE_MANY = "createMany"
    FIND_UNIQUE = "findUnique"
    FIND_UNIQUE_OR_THROW = "findUniqueOrThrow"
    FIND_FIRST = "findFirst"
    FIND_FIRST_OR_THROW = "findFirstOrThrow"
    FIND_MANY = "findMany"
    COUNT = "count"
    AGGREGATE = "aggregate"
    GROUP_BY = "groupBy"
    UPDATE = "update"
    UPDATE_MANY = "updateMany"
    UPSERT = "upsert"
    DELETE = "delete"
    DELETE_MANY = "deleteMany"
    QUERY_RAW = "queryRaw"
    EXECUTE_RAW = "executeRaw"
    FIND_RAW = "findRaw"
    AGGREGATE_RAW = "aggregateRaw"
    RUN_COMMAND_RAW = "runCommandRaw"


@dataclass
class OperationDescriptor:
    """Mutable record of a single call flowing through the middleware chain.

    Built by the caller for one invocation, passed by reference to every
    middleware and finally to the terminal executor. Never reused.
    """

    model: str
    action: Action
    args: dict[str, Any] = field(default_factory=dict)
    run_in_transaction: bool = False

    def __post_init__(self) -> None:
        self.action = Action(self.action)

    def copy(self) -> OperationDescriptor:
        """Deep copy, used to capture snapshots of a descriptor mid-chain."""
        return copy.deepcopy(self)

    def __str__(self) -> str:
        return f"{self.model}.{self.action.value}"
