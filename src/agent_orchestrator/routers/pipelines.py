"""Pipelines router for listing, executing and auditing registered pipelines."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from agent_orchestrator.agents import AgentRegistry
from agent_orchestrator.dependencies import get_history_limit, get_registry
from agent_orchestrator.models.agents import (
    ExecuteRequest,
    HistoryEntryResponse,
    HistoryResponse,
)
from agent_orchestrator.models.pipelines import (
    PipelineListResponse,
    PipelineResponse,
    PipelineResultResponse,
)
from agent_orchestrator.pipelines import Pipeline

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/pipelines", tags=["pipelines"])


def _lookup_pipeline(registry: AgentRegistry, name: str) -> Pipeline:
    try:
        return registry.get_pipeline(name)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Pipeline '{name}' not found",
        )


@router.get("", response_model=PipelineListResponse, summary="List all pipelines")
async def list_pipelines(
    registry: Annotated[AgentRegistry, Depends(get_registry)],
) -> PipelineListResponse:
    """List every registered pipeline with its stages."""
    return PipelineListResponse(
        pipelines=[
            PipelineResponse(
                key=key,
                strategy=pipeline.config.strategy,
                stages=[agent.name for agent in pipeline.agents],
            )
            for key, pipeline in registry.pipelines().items()
        ]
    )


@router.post(
    "/{name}/execute",
    response_model=PipelineResultResponse,
    summary="Execute a pipeline",
)
async def execute_pipeline(
    name: str,
    request: ExecuteRequest,
    registry: Annotated[AgentRegistry, Depends(get_registry)],
) -> PipelineResultResponse:
    """Run a pipeline to completion or to its first failing stage.

    Raises:
        HTTPException: 404 if the pipeline doesn't exist
    """
    pipeline = _lookup_pipeline(registry, name)
    result = await pipeline.execute(request.input, request.context)
    if result.failed_at is not None:
        logger.warning(f"Pipeline {name} failed at stage {result.failed_at}")
    return PipelineResultResponse.from_result(result)


@router.get(
    "/{name}/history",
    response_model=HistoryResponse,
    summary="Read a pipeline's audit trail",
)
async def get_pipeline_history(
    name: str,
    registry: Annotated[AgentRegistry, Depends(get_registry)],
    limit: Annotated[int, Depends(get_history_limit)],
) -> HistoryResponse:
    """Return the last ``limit`` stage records of a pipeline, oldest first.

    Raises:
        HTTPException: 404 if the pipeline doesn't exist
    """
    pipeline = _lookup_pipeline(registry, name)
    entries = pipeline.history.read(limit=limit)
    return HistoryResponse(
        kind=pipeline.history.kind.value,
        total=len(pipeline.history),
        entries=[HistoryEntryResponse.from_entry(e) for e in entries],
    )
