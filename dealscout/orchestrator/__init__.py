# dealscout/orchestrator/__init__.py
from .pipeline import DealPipeline, PipelineRun, filter_and_rank

__all__ = ["DealPipeline", "PipelineRun", "filter_and_rank"]
