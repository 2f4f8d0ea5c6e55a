"""Agents router for listing, executing and inspecting registered agents.

This module provides REST API endpoints for:
- Listing registered agents
- Executing an agent
- Reading and clearing an agent's history
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from agent_orchestrator.agents import Agent, AgentRegistry
from agent_orchestrator.dependencies import get_history_limit, get_registry
from agent_orchestrator.models.agents import (
    AgentListResponse,
    AgentResponse,
    CapabilityResponse,
    ExecuteRequest,
    HistoryEntryResponse,
    HistoryResponse,
    ResultResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/agents", tags=["agents"])


def _lookup_agent(registry: AgentRegistry, name: str) -> Agent:
    try:
        return registry.get_agent(name)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent '{name}' not found",
        )


def _agent_response(key: str, agent: Agent) -> AgentResponse:
    summary = agent.describe()
    return AgentResponse(
        key=key,
        name=summary["name"],
        description=summary["description"],
        kind=summary["kind"],
        strategy=summary["strategy"],
        capabilities=[CapabilityResponse(**c) for c in summary["capabilities"]],
    )


@router.get("", response_model=AgentListResponse, summary="List all agents")
async def list_agents(
    registry: Annotated[AgentRegistry, Depends(get_registry)],
) -> AgentListResponse:
    """List every registered agent with its capabilities."""
    agents = registry.agents()
    logger.debug(f"Listing {len(agents)} agents")
    return AgentListResponse(
        agents=[_agent_response(key, agent) for key, agent in agents.items()]
    )


@router.get("/{name}", response_model=AgentResponse, summary="Get an agent")
async def get_agent(
    name: str,
    registry: Annotated[AgentRegistry, Depends(get_registry)],
) -> AgentResponse:
    """Get a single agent by registry key.

    Raises:
        HTTPException: 404 if the agent doesn't exist
    """
    return _agent_response(name, _lookup_agent(registry, name))


@router.post(
    "/{name}/execute",
    response_model=ResultResponse,
    summary="Execute an agent",
)
async def execute_agent(
    name: str,
    request: ExecuteRequest,
    registry: Annotated[AgentRegistry, Depends(get_registry)],
) -> ResultResponse:
    """Execute an agent once.

    A failed execution is returned as a normal response with
    ``status == "failure"``; it is a value, not a server error.

    Args:
        name: Registry key of the agent
        request: Input and initial context
        registry: Injected AgentRegistry

    Returns:
        The agent's result envelope

    Raises:
        HTTPException: 404 if the agent doesn't exist
    """
    agent = _lookup_agent(registry, name)
    result = await agent.execute(request.input, request.context)
    logger.info(f"Agent {name} finished with status {result.status.value}")
    return ResultResponse.from_result(result)


@router.get(
    "/{name}/history",
    response_model=HistoryResponse,
    summary="Read an agent's history",
)
async def get_agent_history(
    name: str,
    registry: Annotated[AgentRegistry, Depends(get_registry)],
    limit: Annotated[int, Depends(get_history_limit)],
) -> HistoryResponse:
    """Return the last ``limit`` history entries of an agent, oldest first.

    Raises:
        HTTPException: 404 if the agent doesn't exist or keeps no history
    """
    agent = _lookup_agent(registry, name)
    if agent.history is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent '{name}' has no history store",
        )

    entries = agent.history.read(limit=limit)
    return HistoryResponse(
        kind=agent.history.kind.value,
        total=len(agent.history),
        entries=[HistoryEntryResponse.from_entry(e) for e in entries],
    )


@router.delete(
    "/{name}/history",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear an agent's history",
)
async def clear_agent_history(
    name: str,
    registry: Annotated[AgentRegistry, Depends(get_registry)],
) -> None:
    """Clear an agent's history store.

    Raises:
        HTTPException: 404 if the agent doesn't exist or keeps no history
    """
    agent = _lookup_agent(registry, name)
    if agent.history is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Agent '{name}' has no history store",
        )
    agent.history.clear()
    logger.info(f"Cleared history of agent {name}")
