"""Pydantic models for API request and response schemas.

This package contains all Pydantic models used for validating and
serializing API requests and responses across all endpoints.
"""

from agent_orchestrator.models.agents import (
    AgentListResponse,
    AgentResponse,
    CapabilityResponse,
    ExecuteRequest,
    HistoryEntryResponse,
    HistoryResponse,
    ResultResponse,
)
from agent_orchestrator.models.pipelines import (
    PipelineListResponse,
    PipelineResponse,
    PipelineResultResponse,
)

__all__ = [
    "AgentListResponse",
    "AgentResponse",
    "CapabilityResponse",
    "ExecuteRequest",
    "HistoryEntryResponse",
    "HistoryResponse",
    "PipelineListResponse",
    "PipelineResponse",
    "PipelineResultResponse",
    "ResultResponse",
]
