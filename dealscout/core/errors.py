# dealscout/core/errors.py
"""
Typed errors for the query-to-deal pipeline.

Only total-failure conditions are exceptions. Per-item degradations
(expansion/discovery/scrape/analysis fallbacks) are recorded on the run
instead of raised; see `dealscout.orchestrator.pipeline`.
"""

from __future__ import annotations


class DealScoutError(RuntimeError):
    """Base class for pipeline failures that escape to the caller."""


class ConfigurationError(DealScoutError):
    """A required credential or service endpoint is missing or invalid."""


class ModelOutputError(DealScoutError):
    """Generative model output could not be parsed into the expected JSON shape."""


class ClassificationError(DealScoutError):
    """The intent step produced no usable classification (no fallback exists)."""


class PipelineTimeoutError(DealScoutError):
    """The request-level deadline elapsed before the pipeline finished."""


class RequestCancelledError(DealScoutError):
    """The caller abandoned the request; remaining per-item work was skipped."""


__all__ = [
    "DealScoutError",
    "ConfigurationError",
    "ModelOutputError",
    "ClassificationError",
    "PipelineTimeoutError",
    "RequestCancelledError",
]
