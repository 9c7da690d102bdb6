"""Primitives: exceptions."""

from __future__ import annotations

from .exceptions import (
    DescriptorContractError,
    ExecutorError,
    RecordNotFoundError,
    SoftDeleteError,
    UnsupportedOperationError,
)

__all__ = [
    "DescriptorContractError",
    "ExecutorError",
    "RecordNotFoundError",
    "SoftDeleteError",
    "UnsupportedOperationError",
]
