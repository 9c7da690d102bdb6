"""soft-delete-core — transparent soft-delete interception for data-access clients.

Delete-shaped operations against configured models are rewritten into
flag updates by a middleware chain that sits in front of the storage
executor. Pydantic validates the operation shapes being rewritten.
"""

from __future__ import annotations

# ── Adapters ────────────────────────────────────────────────────
from .adapters.memory import InMemoryExecutor, InMemoryTransaction, WhereEvaluator

# ── Client ───────────────────────────────────────────────────────
from .client import DataClient, ModelDelegate, PendingOperation

# ── Middleware ───────────────────────────────────────────────────
from .middleware import (
    CONTINUE,
    Continue,
    DescriptorValidatorMiddleware,
    LoggingMiddleware,
    MiddlewareRegistry,
    RewriteMiddleware,
    ShortCircuit,
    SoftDeleteMiddleware,
    build_pipeline,
)

# ── Operations ───────────────────────────────────────────────────
from .operations import (
    Action,
    OperationDescriptor,
    parse_request,
    soft_delete,
    soft_delete_many,
)

# ── Ports ────────────────────────────────────────────────────────
from .ports import IExecutor, IMiddleware, UnitOfWork

# ── Primitives ───────────────────────────────────────────────────
from .primitives import (
    DescriptorContractError,
    ExecutorError,
    RecordNotFoundError,
    SoftDeleteError,
    UnsupportedOperationError,
)

__all__ = [
    "CONTINUE",
    "Action",
    "Continue",
    "DataClient",
    "DescriptorContractError",
    "DescriptorValidatorMiddleware",
    "ExecutorError",
    "IExecutor",
    "IMiddleware",
    "InMemoryExecutor",
    "InMemoryTransaction",
    "LoggingMiddleware",
    "MiddlewareRegistry",
    "ModelDelegate",
    "OperationDescriptor",
    "PendingOperation",
    "RecordNotFoundError",
    "RewriteMiddleware",
    "ShortCircuit",
    "SoftDeleteError",
    "SoftDeleteMiddleware",
    "UnitOfWork",
    "UnsupportedOperationError",
    "WhereEvaluator",
    "build_pipeline",
    "parse_request",
    "soft_delete",
    "soft_delete_many",
]
