"""Pipeline orchestration of multiple agents."""

from agent_orchestrator.pipelines.orchestrator import (
    Pipeline,
    create_pipeline,
    merge_context,
)
from agent_orchestrator.pipelines.types import PipelineConfig, PipelineResult

__all__ = [
    "Pipeline",
    "PipelineConfig",
    "PipelineResult",
    "create_pipeline",
    "merge_context",
]
