"""Dependency injection providers for FastAPI endpoints.

This module provides FastAPI dependency functions that are used across
routers to inject settings and the agent registry.
"""

from functools import lru_cache

from fastapi import HTTPException, Request

from agent_orchestrator.agents import AgentRegistry
from agent_orchestrator.config import AgentOrchestratorSettings


@lru_cache
def get_settings() -> AgentOrchestratorSettings:
    """Get the application settings instance.

    This function is cached so that the same settings instance is reused
    across all requests. Settings are loaded from environment variables
    with the AGENT_ORCH_ prefix.

    Returns:
        AgentOrchestratorSettings: The application configuration settings.
    """
    return AgentOrchestratorSettings()


def get_registry(request: Request) -> AgentRegistry:
    """Get the caller-owned agent registry from app state."""
    return request.app.state.registry


def get_history_limit(request: Request, limit: int | None = None) -> int:
    """Resolve the ``limit`` query parameter, defaulting from settings.

    Raises:
        HTTPException: 400 if limit is negative
    """
    if limit is None:
        return request.app.state.settings.default_history_limit
    if limit < 0:
        raise HTTPException(status_code=400, detail="limit must be >= 0")
    return limit
