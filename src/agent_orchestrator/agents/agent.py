"""Agent controller and its built-in flavors.

An Agent owns a fixed capability set, a selection configuration and an
optional history store. Each call to ``execute`` selects one capability,
invokes it, records the interaction, and returns a Result.
"""

import logging
from dataclasses import replace
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from agent_orchestrator.agents.capability import Capability, invoke_capability
from agent_orchestrator.agents.history import History
from agent_orchestrator.agents.selection import select_capability
from agent_orchestrator.agents.types import (
    AgentConfig,
    AgentKind,
    Context,
    HistoryEntry,
    HistoryKind,
    Result,
    SelectionStrategy,
)
from agent_orchestrator.ollama.types import InferenceClient

logger = logging.getLogger(__name__)

EXECUTION_MODES = {
    "autonomous": SelectionStrategy.LLM_ROUTED,
    "sequential": SelectionStrategy.PRIMARY,
}

# Sentinel telling the factories to build a default history store.
DEFAULT_HISTORY: Any = object()


def resolve_config(config: AgentConfig | None) -> AgentConfig:
    """Resolve the selection strategy from the strategy or execution mode.

    An explicit strategy wins. Otherwise "autonomous" maps to LLM routing and
    "sequential" to primary. Unknown modes log a warning and map to primary,
    so LLM routing is never picked implicitly.
    """
    config = config or AgentConfig()

    if config.strategy is not None:
        return replace(config, strategy=SelectionStrategy(config.strategy))

    mode = config.execution_mode
    if mode is None:
        return replace(config, strategy=SelectionStrategy.PRIMARY)

    strategy = EXECUTION_MODES.get(str(mode).lower())
    if strategy is None:
        logger.warning(f"Unknown execution mode: {mode!r} - defaulting to primary selection")
        strategy = SelectionStrategy.PRIMARY
    return replace(config, strategy=strategy)


def _capability_map(
    capabilities: Mapping[str, Capability] | Iterable[Capability],
) -> dict[str, Capability]:
    if isinstance(capabilities, Mapping):
        return dict(capabilities)

    result: dict[str, Capability] = {}
    for capability in capabilities:
        if capability.name in result:
            raise ValueError(f"Duplicate capability name: {capability.name}")
        result[capability.name] = capability
    return result


class Agent:
    """A controller exposing a single ``execute`` entry point.

    Attributes:
        name: Agent identifier
        description: What this agent does
        capabilities: Read-only mapping of capability name to Capability
        config: Resolved selection configuration
        history: History store, or None for a historyless agent
        kind: Built-in flavor this agent was created as
        inference: Backend for LLM routing (and for capability bodies that need it)
    """

    def __init__(
        self,
        name: str,
        description: str,
        capabilities: Mapping[str, Capability] | Iterable[Capability],
        config: AgentConfig | None = None,
        history: History | None = None,
        kind: AgentKind = AgentKind.GENERIC,
        inference: InferenceClient | None = None,
    ) -> None:
        capability_map = _capability_map(capabilities)
        if not capability_map:
            raise ValueError(f"Agent '{name}' needs at least one capability")

        resolved = resolve_config(config)
        if resolved.strategy is SelectionStrategy.LLM_ROUTED:
            missing = [n for n, c in capability_map.items() if not c.description.strip()]
            if missing:
                raise ValueError(
                    f"Agent '{name}' uses LLM routing but these capabilities "
                    f"have no description: {missing}"
                )

        self.name = name
        self.description = description
        self.capabilities: Mapping[str, Capability] = MappingProxyType(capability_map)
        self.config = resolved
        self.history = history
        self.kind = AgentKind(kind)
        self.inference = inference

    async def execute(self, input: Any, context: Context | None = None) -> Result:
        """Run one capability for the given input.

        Args:
            input: Raw input for the selected capability
            context: The running context (default: empty)

        Returns:
            Result: The capability's result tagged with ``used_capability``,
            or a FAILURE result when no capability could be selected.
        """
        context = context if context is not None else {}
        logger.info(f"{self.kind.value} agent executing: {self.name}")

        try:
            capability = await select_capability(
                self.capabilities, input, context, self.config, self.inference
            )
        except Exception as e:
            logger.error(f"Capability selection failed for agent {self.name}: {e}", exc_info=True)
            capability = None

        if not isinstance(capability, Capability):
            if capability is not None:
                logger.error(
                    f"Selector for agent {self.name} returned {type(capability).__name__}, "
                    "expected a Capability"
                )
            result = Result.failure(
                message=(
                    f"No capability found for agent {self.name}. "
                    f"Available capabilities: {list(self.capabilities)}"
                )
            )
        else:
            result = await invoke_capability(capability, input, context)
            result = replace(result, used_capability=capability.name)

        if self.history is not None:
            self.history.append(
                HistoryEntry(
                    input=input,
                    result=result.snapshot(),
                    timestamp=datetime.now(timezone.utc),
                    agent_name=self.name,
                )
            )

        if not result.ok:
            logger.warning(f"Agent {self.name} failed: {result.message}")
        return result

    def describe(self) -> dict[str, Any]:
        """Return a plain summary of this agent."""
        return {
            "name": self.name,
            "description": self.description,
            "kind": self.kind.value,
            "strategy": self.config.strategy.value if self.config.strategy else None,
            "capabilities": [
                {
                    "name": capability.name,
                    "description": capability.description,
                    "sub_agent": capability.is_sub_agent,
                }
                for capability in self.capabilities.values()
            ],
        }

    def __repr__(self) -> str:
        return f"Agent(name={self.name!r}, kind={self.kind.value!r}, capabilities={list(self.capabilities)!r})"


def create_agent(
    name: str,
    description: str,
    capabilities: Mapping[str, Capability] | Iterable[Capability],
    config: AgentConfig | None = None,
    history: History | None = DEFAULT_HISTORY,
    inference: InferenceClient | None = None,
) -> Agent:
    """Create a generic agent.

    Args:
        name: Agent identifier
        description: What this agent does
        capabilities: Mapping of name to Capability, or a sequence of capabilities
        config: Selection configuration (default: primary strategy)
        history: History store (default: a new conversation store; None disables)
        inference: Backend for LLM routing

    Returns:
        Agent: The new agent

    Raises:
        ValueError: If the capability set is empty or invalid for the strategy
    """
    if history is DEFAULT_HISTORY:
        history = History(HistoryKind.CONVERSATION)
    return Agent(name, description, capabilities, config, history, AgentKind.GENERIC, inference)


def create_llm_agent(
    name: str,
    description: str,
    capabilities: Mapping[str, Capability] | Iterable[Capability],
    config: AgentConfig | None = None,
    history: History | None = DEFAULT_HISTORY,
    inference: InferenceClient | None = None,
) -> Agent:
    """Create an agent whose capability bodies delegate to an inference backend.

    Typical use sets ``execution_mode="autonomous"`` so the agent routes with
    the LLM, or ``"sequential"`` for deterministic primary selection.
    """
    if history is DEFAULT_HISTORY:
        history = History(HistoryKind.CONVERSATION)
    return Agent(name, description, capabilities, config, history, AgentKind.LLM, inference)


def create_database_agent(
    name: str,
    description: str,
    capabilities: Mapping[str, Capability] | Iterable[Capability],
    config: AgentConfig | None = None,
    history: History | None = DEFAULT_HISTORY,
    inference: InferenceClient | None = None,
) -> Agent:
    """Create an agent whose capability bodies delegate to a data-access layer.

    Data access is deterministic, so the default configuration is primary
    selection with a working-memory history store.
    """
    if history is DEFAULT_HISTORY:
        history = History(HistoryKind.WORKING)
    if config is None:
        config = AgentConfig(strategy=SelectionStrategy.PRIMARY)
    return Agent(name, description, capabilities, config, history, AgentKind.DATABASE, inference)
