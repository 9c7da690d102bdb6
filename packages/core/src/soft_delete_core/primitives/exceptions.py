"""Exceptions raised by the soft-delete interception layer."""

from __future__ import annotations

from typing import Any


class SoftDeleteError(Exception):
    """Root exception for the soft-delete toolkit."""


class DescriptorContractError(SoftDeleteError, TypeError):
    """Raised when an operation descriptor does not fit the shape its action requires.

    Carries structured errors: ``{argument: [messages]}``.
    """

    def __init__(self, errors: dict[str, list[str]] | str | None = None) -> None:
        if isinstance(errors, str):
            self.errors: dict[str, list[str]] = {"__root__": [errors]}
        elif errors is None:
            self.errors = {}
        else:
            self.errors = errors
        super().__init__(str(self.errors))


class ExecutorError(SoftDeleteError):
    """Base class for errors raised by terminal executors."""


class RecordNotFoundError(ExecutorError):
    """Raised when a singular write targets a record that does not exist."""

    def __init__(self, model: str, where: Any) -> None:
        self.model = model
        self.where = where
        super().__init__(f"{model} matching {where!r} not found")


class UnsupportedOperationError(ExecutorError):
    """Raised when an executor cannot run the requested model, action or filter."""
