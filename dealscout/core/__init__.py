# dealscout/core/__init__.py
from .errors import (
    ClassificationError,
    ConfigurationError,
    DealScoutError,
    ModelOutputError,
    PipelineTimeoutError,
    RequestCancelledError,
)

__all__ = [
    "DealScoutError",
    "ConfigurationError",
    "ClassificationError",
    "ModelOutputError",
    "PipelineTimeoutError",
    "RequestCancelledError",
]
