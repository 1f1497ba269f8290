"""Core — Context, engine and logging shared by every pass."""

from htmlval.core.context import ValidationContext, ValidationRequest
from htmlval.core.engine import Engine, Pipeline, PipelineNotFoundError, get_engine, validate

__all__ = [
    "ValidationContext",
    "ValidationRequest",
    "Engine",
    "Pipeline",
    "PipelineNotFoundError",
    "get_engine",
    "validate",
]
