"""
In-memory ``where`` evaluation.

A ``where`` mapping binds field names either to a literal (equality) or to
a mapping of filter operators (``{"id": {"in": [1, 2]}}``). The combinators
``AND``, ``OR`` and ``NOT`` take a mapping or a list of mappings.

New operators are added by subclassing FilterOperator and registering it
on a FilterOperatorRegistry.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from ...primitives.exceptions import UnsupportedOperationError


class FilterOperator(ABC):
    """
    Strategy interface for in-memory operator evaluation.

    Each operator is an isolated class with a single ``evaluate`` method.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The operator key this strategy handles."""
        ...

    @abstractmethod
    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        """
        Evaluate the operator against concrete values.

        Args:
            field_value: The value stored on the record.
            condition_value: The value given in the filter.

        Returns:
            True if the condition is satisfied.
        """
        ...


class EqualsOperator(FilterOperator):
    @property
    def name(self) -> str:
        return "equals"

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value == condition_value)


class NotEqualsOperator(FilterOperator):
    @property
    def name(self) -> str:
        return "not"

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value != condition_value)


class InOperator(FilterOperator):
    @property
    def name(self) -> str:
        return "in"

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return field_value in condition_value


class NotInOperator(FilterOperator):
    @property
    def name(self) -> str:
        return "notIn"

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return field_value not in condition_value


class _OrderingOperator(FilterOperator):
    """Comparisons against ``None`` never match."""

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        if field_value is None:
            return False
        return self.compare(field_value, condition_value)

    @abstractmethod
    def compare(self, field_value: Any, condition_value: Any) -> bool: ...


class LessThanOperator(_OrderingOperator):
    @property
    def name(self) -> str:
        return "lt"

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value < condition_value)


class LessEqualOperator(_OrderingOperator):
    @property
    def name(self) -> str:
        return "lte"

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value <= condition_value)


class GreaterThanOperator(_OrderingOperator):
    @property
    def name(self) -> str:
        return "gt"

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value > condition_value)


class GreaterEqualOperator(_OrderingOperator):
    @property
    def name(self) -> str:
        return "gte"

    def compare(self, field_value: Any, condition_value: Any) -> bool:
        return bool(field_value >= condition_value)


class ContainsOperator(FilterOperator):
    @property
    def name(self) -> str:
        return "contains"

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return isinstance(field_value, str) and str(condition_value) in field_value


class StartsWithOperator(FilterOperator):
    @property
    def name(self) -> str:
        return "startsWith"

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return isinstance(field_value, str) and field_value.startswith(
            str(condition_value)
        )


class EndsWithOperator(FilterOperator):
    @property
    def name(self) -> str:
        return "endsWith"

    def evaluate(self, field_value: Any, condition_value: Any) -> bool:
        return isinstance(field_value, str) and field_value.endswith(
            str(condition_value)
        )


class FilterOperatorRegistry:
    """
    Registry of FilterOperator instances keyed by operator name.

    Usage::

        registry = FilterOperatorRegistry()
        registry.register(EqualsOperator())

        result = registry.evaluate("equals", actual, expected)
    """

    def __init__(self) -> None:
        self._operators: dict[str, FilterOperator] = {}

    def register(self, operator: FilterOperator) -> None:
        """Register an operator strategy instance."""
        self._operators[operator.name] = operator

    def register_all(self, *operators: FilterOperator) -> None:
        for op in operators:
            self.register(op)

    def get(self, name: str) -> FilterOperator | None:
        return self._operators.get(name)

    def evaluate(self, name: str, field_value: Any, condition_value: Any) -> bool:
        """
        Look up the operator and evaluate.

        Raises:
            UnsupportedOperationError: If the operator is not registered.
        """
        op = self.get(name)
        if op is None:
            raise UnsupportedOperationError(f"Unsupported filter operator: {name!r}")
        return op.evaluate(field_value, condition_value)


def build_default_registry() -> FilterOperatorRegistry:
    registry = FilterOperatorRegistry()
    registry.register_all(
        EqualsOperator(),
        NotEqualsOperator(),
        InOperator(),
        NotInOperator(),
        LessThanOperator(),
        LessEqualOperator(),
        GreaterThanOperator(),
        GreaterEqualOperator(),
        ContainsOperator(),
        StartsWithOperator(),
        EndsWithOperator(),
    )
    return registry


def _as_list(condition: Any) -> list[Any]:
    if isinstance(condition, Mapping):
        return [condition]
    return list(condition)


class WhereEvaluator:
    """Decides whether a stored record satisfies a ``where`` mapping."""

    def __init__(self, registry: FilterOperatorRegistry | None = None) -> None:
        self._registry = registry or build_default_registry()

    def matches(self, record: Mapping[str, Any], where: Any) -> bool:
        if where is None:
            return True
        if not isinstance(where, Mapping):
            raise UnsupportedOperationError(
                f"where must be a mapping, got {type(where).__name__}"
            )
        return all(
            self._matches_clause(record, key, condition)
            for key, condition in where.items()
        )

    def _matches_clause(
        self, record: Mapping[str, Any], key: str, condition: Any
    ) -> bool:
        if key == "AND":
            return all(self.matches(record, w) for w in _as_list(condition))
        if key == "OR":
            return any(self.matches(record, w) for w in _as_list(condition))
        if key == "NOT":
            return not any(self.matches(record, w) for w in _as_list(condition))
        value = record.get(key)
        if isinstance(condition, Mapping):
            return self._matches_field(value, condition)
        return bool(value == condition)

    def _matches_field(self, value: Any, conditions: Mapping[str, Any]) -> bool:
        for op, expected in conditions.items():
            if op == "not" and isinstance(expected, Mapping):
                if self._matches_field(value, expected):
                    return False
                continue
            if not self._registry.evaluate(op, value, expected):
                return False
        return True
