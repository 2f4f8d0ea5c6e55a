"""agent-orchestrator: compose capability-driven agents into pipelines.

Agents own named capabilities (plain functions or nested agents), choose one
per request with a selection strategy, and record their interactions.
Pipelines run agents in order over a shared, accumulating context.
"""

from agent_orchestrator.agents import (
    Agent,
    AgentConfig,
    AgentKind,
    AgentRegistry,
    Capability,
    History,
    HistoryEntry,
    HistoryKind,
    Result,
    SelectionStrategy,
    Status,
    create_agent,
    create_capability,
    create_database_agent,
    create_llm_agent,
    create_sub_agent_capability,
    invoke_capability,
    select_capability,
)
from agent_orchestrator.app import create_app
from agent_orchestrator.pipelines import (
    Pipeline,
    PipelineConfig,
    PipelineResult,
    create_pipeline,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "create_app",
    "Agent",
    "AgentConfig",
    "AgentKind",
    "AgentRegistry",
    "Capability",
    "History",
    "HistoryEntry",
    "HistoryKind",
    "Pipeline",
    "PipelineConfig",
    "PipelineResult",
    "Result",
    "SelectionStrategy",
    "Status",
    "create_agent",
    "create_capability",
    "create_database_agent",
    "create_llm_agent",
    "create_pipeline",
    "create_sub_agent_capability",
    "invoke_capability",
    "select_capability",
]
