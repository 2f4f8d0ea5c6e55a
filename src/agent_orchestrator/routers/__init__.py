"""FastAPI routers for API endpoints.

This package contains all route handlers organized by resource type.
"""

from agent_orchestrator.routers import agents, pipelines

__all__ = [
    "agents",
    "pipelines",
]
