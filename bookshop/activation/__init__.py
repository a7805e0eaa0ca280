"""
Startup activation: launch context, handlers and the pipeline that picks one.
"""
from bookshop.activation.context import LaunchContext, LaunchKind
from bookshop.activation.handlers import (
    ActivationHandler,
    CommandLineActivationHandler,
    DefaultActivationHandler,
)
from bookshop.activation.pipeline import ActivationPipeline, ActivationState

__all__ = [
    "LaunchContext",
    "LaunchKind",
    "ActivationHandler",
    "DefaultActivationHandler",
    "CommandLineActivationHandler",
    "ActivationPipeline",
    "ActivationState",
]
