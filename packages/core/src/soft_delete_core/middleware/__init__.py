"""Middleware components."""

from .definition import MiddlewareDefinition
from .logging import LoggingMiddleware
from .pipeline import build_pipeline
from .registry import MiddlewareRegistry
from .rewrite import CONTINUE, Continue, Decision, RewriteMiddleware, ShortCircuit
from .soft_delete import SoftDeleteMiddleware
from .validation import DescriptorValidatorMiddleware

__all__ = [
    "CONTINUE",
    "Continue",
    "Decision",
    "DescriptorValidatorMiddleware",
    "LoggingMiddleware",
    "MiddlewareDefinition",
    "MiddlewareRegistry",
    "RewriteMiddleware",
    "ShortCircuit",
    "SoftDeleteMiddleware",
    "build_pipeline",
]
