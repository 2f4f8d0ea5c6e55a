"""Pydantic models for agent API requests and responses."""

from typing import Any

from pydantic import BaseModel, Field

from agent_orchestrator.agents import HistoryEntry, Result


class ExecuteRequest(BaseModel):
    """Request body for executing an agent or a pipeline."""

    input: Any = Field(..., description="Raw input passed to the agent(s)")
    context: dict[str, Any] = Field(
        default_factory=dict, description="Initial context"
    )


class ResultResponse(BaseModel):
    """A capability or agent result envelope."""

    status: str
    value: Any = None
    context_delta: dict[str, Any] = Field(default_factory=dict)
    used_capability: str | None = None
    message: str | None = None

    @classmethod
    def from_result(cls, result: Result) -> "ResultResponse":
        return cls(
            status=result.status.value,
            value=result.value,
            context_delta=result.context_delta,
            used_capability=result.used_capability,
            message=result.message,
        )


class CapabilityResponse(BaseModel):
    """A capability as listed on its agent."""

    name: str
    description: str
    sub_agent: bool = Field(False, description="Whether it wraps a nested agent")


class AgentResponse(BaseModel):
    """Summary of a registered agent."""

    key: str = Field(..., description="Registry key")
    name: str
    description: str
    kind: str
    strategy: str | None = None
    capabilities: list[CapabilityResponse]


class AgentListResponse(BaseModel):
    """Response model for listing agents."""

    agents: list[AgentResponse]


class HistoryEntryResponse(BaseModel):
    """A single history entry."""

    agent_name: str
    input: Any = None
    result: ResultResponse
    timestamp: str

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> "HistoryEntryResponse":
        return cls(
            agent_name=entry.agent_name,
            input=entry.input,
            result=ResultResponse.from_result(entry.result),
            timestamp=entry.timestamp.isoformat().replace("+00:00", "Z"),
        )


class HistoryResponse(BaseModel):
    """Response model for reading a history store."""

    kind: str
    total: int = Field(..., description="Number of entries in the store")
    entries: list[HistoryEntryResponse]
