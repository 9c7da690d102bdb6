"""InMemoryExecutor — dict-backed terminal executor for tests and demos."""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import TYPE_CHECKING, Any

from ...operations.descriptor import Action
from ...primitives.exceptions import (
    ExecutorError,
    RecordNotFoundError,
    UnsupportedOperationError,
)
from .unit_of_work import InMemoryTransaction, holds_lock
from .where import WhereEvaluator

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from ...operations.descriptor import OperationDescriptor

logger = logging.getLogger("soft_delete.executor")

Record = dict[str, Any]


class InMemoryExecutor:
    """In-memory implementation of ``IExecutor``.

    Keeps one table per model, keyed by an auto-incremented integer ``id``.
    *models* maps each known model to the field defaults applied on create,
    e.g. ``{"Post": {"deleted": False}}``.

    Deletes here are physical; soft deletion is the middleware's job.
    Records handed back are copies, the store itself is never exposed.
    """

    def __init__(
        self,
        models: Mapping[str, Mapping[str, Any]],
        *,
        evaluator: WhereEvaluator | None = None,
    ) -> None:
        self._defaults: dict[str, Record] = {m: dict(d) for m, d in models.items()}
        self._tables: dict[str, dict[Any, Record]] = {m: {} for m in models}
        self._sequences = {m: itertools.count(1) for m in models}
        self._evaluator = evaluator or WhereEvaluator()
        self._lock = asyncio.Lock()
        self._handlers: dict[Action, Callable[[str, dict[str, Any]], Any]] = {
            Action.CREATE: self._create,
            Action.CREATE_MANY: self._create_many,
            Action.FIND_UNIQUE: self._find_first,
            Action.FIND_FIRST: self._find_first,
            Action.FIND_UNIQUE_OR_THROW: self._find_first_or_throw,
            Action.FIND_FIRST_OR_THROW: self._find_first_or_throw,
            Action.FIND_MANY: self._find_many,
            Action.COUNT: self._count,
            Action.UPDATE: self._update,
            Action.UPDATE_MANY: self._update_many,
            Action.UPSERT: self._upsert,
            Action.DELETE: self._delete,
            Action.DELETE_MANY: self._delete_many,
        }

    async def __call__(self, descriptor: OperationDescriptor) -> Any:
        if descriptor.model not in self._tables:
            raise UnsupportedOperationError(f"Unknown model {descriptor.model!r}")
        handler = self._handlers.get(descriptor.action)
        if handler is None:
            raise UnsupportedOperationError(f"Unsupported action {descriptor}")
        logger.debug("Executing %s with %r", descriptor, descriptor.args)
        if holds_lock(self._lock):
            return handler(descriptor.model, descriptor.args)
        async with self._lock:
            return handler(descriptor.model, descriptor.args)

    def transaction(self) -> InMemoryTransaction:
        return InMemoryTransaction(self._tables, self._lock)

    # ── Reads ────────────────────────────────────────────────────

    def _matching(self, model: str, where: Any) -> Iterator[Record]:
        for record in self._tables[model].values():
            if self._evaluator.matches(record, where):
                yield record

    def _find_first(self, model: str, args: dict[str, Any]) -> Record | None:
        record = next(self._matching(model, args.get("where")), None)
        return dict(record) if record is not None else None

    def _find_first_or_throw(self, model: str, args: dict[str, Any]) -> Record:
        record = self._find_first(model, args)
        if record is None:
            raise RecordNotFoundError(model, args.get("where"))
        return record

    def _find_many(self, model: str, args: dict[str, Any]) -> list[Record]:
        return [dict(r) for r in self._matching(model, args.get("where"))]

    def _count(self, model: str, args: dict[str, Any]) -> int:
        return sum(1 for _ in self._matching(model, args.get("where")))

    # ── Writes ───────────────────────────────────────────────────

    def _create(self, model: str, args: dict[str, Any]) -> Record:
        record: Record = {**self._defaults[model], **args["data"]}
        if "id" not in record:
            record["id"] = next(self._sequences[model])
        table = self._tables[model]
        if record["id"] in table:
            raise ExecutorError(f"{model} with id={record['id']!r} already exists")
        table[record["id"]] = record
        return dict(record)

    def _create_many(self, model: str, args: dict[str, Any]) -> dict[str, int]:
        for data in args["data"]:
            self._create(model, {"data": data})
        return {"count": len(args["data"])}

    def _update(self, model: str, args: dict[str, Any]) -> Record:
        where = args.get("where")
        record = next(self._matching(model, where), None)
        if record is None:
            raise RecordNotFoundError(model, where)
        record.update(args["data"])
        return dict(record)

    def _update_many(self, model: str, args: dict[str, Any]) -> dict[str, int]:
        records = list(self._matching(model, args.get("where")))
        for record in records:
            record.update(args["data"])
        return {"count": len(records)}

    def _upsert(self, model: str, args: dict[str, Any]) -> Record:
        record = next(self._matching(model, args.get("where")), None)
        if record is None:
            return self._create(model, {"data": args["create"]})
        record.update(args["update"])
        return dict(record)

    def _delete(self, model: str, args: dict[str, Any]) -> Record:
        where = args.get("where")
        record = next(self._matching(model, where), None)
        if record is None:
            raise RecordNotFoundError(model, where)
        return self._tables[model].pop(record["id"])

    def _delete_many(self, model: str, args: dict[str, Any]) -> dict[str, int]:
        table = self._tables[model]
        ids = [r["id"] for r in self._matching(model, args.get("where"))]
        for record_id in ids:
            del table[record_id]
        return {"count": len(ids)}

    # ── Test helpers ─────────────────────────────────────────────

    def rows(self, model: str) -> list[Record]:
        """Return copies of every stored record of *model*, flags included."""
        return [dict(r) for r in self._tables[model].values()]

    def clear(self) -> None:
        for table in self._tables.values():
            table.clear()
