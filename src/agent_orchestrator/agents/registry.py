"""Caller-owned registry of constructed agents and pipelines.

Agents keep history state, so callers usually build them once and reuse
them across requests. The registry memoizes construction by key and is
passed around explicitly instead of living in module-level globals.
"""

import logging
import threading
from typing import TYPE_CHECKING, Callable

from agent_orchestrator.agents.agent import Agent

if TYPE_CHECKING:
    from agent_orchestrator.pipelines.orchestrator import Pipeline

logger = logging.getLogger(__name__)


class AgentRegistry:
    """Named store of agents and pipelines.

    Unknown keys raise KeyError.
    """

    def __init__(self) -> None:
        self._agents: dict[str, Agent] = {}
        self._pipelines: dict[str, "Pipeline"] = {}
        self._lock = threading.RLock()

    def get_or_create(self, key: str, factory: Callable[[], Agent]) -> Agent:
        """Return the agent stored under key, building it with factory on first use."""
        with self._lock:
            agent = self._agents.get(key)
            if agent is None:
                agent = factory()
                self._agents[key] = agent
                logger.debug(f"Created and cached agent under key: {key}")
            return agent

    def register_agent(self, agent: Agent, key: str | None = None) -> Agent:
        """Store an agent under key (default: the agent's name), replacing any previous one."""
        with self._lock:
            self._agents[key or agent.name] = agent
        logger.debug(f"Registered agent: {key or agent.name}")
        return agent

    def register_pipeline(self, key: str, pipeline: "Pipeline") -> "Pipeline":
        """Store a pipeline under key, replacing any previous one."""
        with self._lock:
            self._pipelines[key] = pipeline
        logger.debug(f"Registered pipeline: {key}")
        return pipeline

    def get_agent(self, key: str) -> Agent:
        with self._lock:
            if key not in self._agents:
                raise KeyError(f"Agent '{key}' not found")
            return self._agents[key]

    def get_pipeline(self, key: str) -> "Pipeline":
        with self._lock:
            if key not in self._pipelines:
                raise KeyError(f"Pipeline '{key}' not found")
            return self._pipelines[key]

    def agents(self) -> dict[str, Agent]:
        with self._lock:
            return dict(self._agents)

    def pipelines(self) -> dict[str, "Pipeline"]:
        with self._lock:
            return dict(self._pipelines)

    def remove(self, key: str) -> None:
        """Remove the agent and/or pipeline stored under key.

        Raises:
            KeyError: If nothing is stored under key
        """
        with self._lock:
            removed_agent = self._agents.pop(key, None)
            removed_pipeline = self._pipelines.pop(key, None)
        if removed_agent is None and removed_pipeline is None:
            raise KeyError(f"Nothing registered under '{key}'")
        logger.debug(f"Removed registry entry: {key}")
