"""Pydantic models for pipeline API responses."""

from typing import Any

from pydantic import BaseModel, Field

from agent_orchestrator.models.agents import ResultResponse
from agent_orchestrator.pipelines import PipelineResult


class PipelineResponse(BaseModel):
    """Summary of a registered pipeline."""

    key: str
    strategy: str
    stages: list[str] = Field(..., description="Agent names in execution order")


class PipelineListResponse(BaseModel):
    """Response model for listing pipelines."""

    pipelines: list[PipelineResponse]


class PipelineResultResponse(BaseModel):
    """Outcome of a pipeline run."""

    status: str
    stage_results: list[ResultResponse]
    final_context: dict[str, Any]
    failed_at: int | None = None
    error: ResultResponse | None = None

    @classmethod
    def from_result(cls, result: PipelineResult) -> "PipelineResultResponse":
        return cls(
            status=result.status.value,
            stage_results=[ResultResponse.from_result(r) for r in result.stage_results],
            final_context=result.final_context,
            failed_at=result.failed_at,
            error=ResultResponse.from_result(result.error) if result.error else None,
        )
