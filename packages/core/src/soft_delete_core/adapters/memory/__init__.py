from .executor import InMemoryExecutor
from .unit_of_work import InMemoryTransaction
from .where import FilterOperator, FilterOperatorRegistry, WhereEvaluator

__all__ = [
    "FilterOperator",
    "FilterOperatorRegistry",
    "InMemoryExecutor",
    "InMemoryTransaction",
    "WhereEvaluator",
]
