"""Agent core: capabilities, history, selection and the agent controller.

This package provides everything needed to build an agent from named
capabilities, choose a capability per request, and nest agents inside one
another through sub-agent capabilities.
"""

from agent_orchestrator.agents.agent import (
    Agent,
    create_agent,
    create_database_agent,
    create_llm_agent,
    resolve_config,
)
from agent_orchestrator.agents.capability import (
    Capability,
    FunctionBody,
    SubAgentBody,
    create_capability,
    create_sub_agent_capability,
    invoke_capability,
)
from agent_orchestrator.agents.history import History
from agent_orchestrator.agents.registry import AgentRegistry
from agent_orchestrator.agents.selection import (
    build_selection_prompt,
    select_capability,
)
from agent_orchestrator.agents.types import (
    AgentConfig,
    AgentKind,
    Context,
    HistoryEntry,
    HistoryKind,
    Result,
    SelectionStrategy,
    Status,
)

__all__ = [
    # Core classes
    "Agent",
    "AgentRegistry",
    "Capability",
    "History",
    # Factories
    "create_agent",
    "create_llm_agent",
    "create_database_agent",
    "create_capability",
    "create_sub_agent_capability",
    # Operations
    "invoke_capability",
    "select_capability",
    "build_selection_prompt",
    "resolve_config",
    # Capability bodies
    "FunctionBody",
    "SubAgentBody",
    # Types
    "AgentConfig",
    "AgentKind",
    "Context",
    "HistoryEntry",
    "HistoryKind",
    "Result",
    "SelectionStrategy",
    "Status",
]
