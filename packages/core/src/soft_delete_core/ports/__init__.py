from soft_delete_core.ports.executor import IExecutor
from soft_delete_core.ports.middleware import IMiddleware
from soft_delete_core.ports.unit_of_work import UnitOfWork

__all__ = [
    "IExecutor",
    "IMiddleware",
    "UnitOfWork",
]
