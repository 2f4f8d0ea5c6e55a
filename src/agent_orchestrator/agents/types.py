"""Data types shared by capabilities, agents and pipelines.

This module defines the uniform result envelope returned by every capability
and agent invocation, the history entry type, and agent configuration.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Callable

# Open key/value map threaded through a pipeline. Values are JSON-like
# (str, int, float, bool, None, list, dict) by convention.
Context = dict[str, Any]


class Status(str, Enum):
    """Outcome of a capability, agent or pipeline invocation."""

    SUCCESS = "success"
    FAILURE = "failure"


class SelectionStrategy(str, Enum):
    """How an agent chooses the capability to invoke."""

    PRIMARY = "primary"
    KEYWORD = "keyword"
    LLM_ROUTED = "llm-routed"
    CUSTOM = "custom"


class AgentKind(str, Enum):
    """Built-in agent flavors. They differ only in default configuration."""

    GENERIC = "generic"
    LLM = "llm"
    DATABASE = "database"


class HistoryKind(str, Enum):
    """Tag describing what a history store is used for."""

    CONVERSATION = "conversation"
    SEMANTIC = "semantic"
    WORKING = "working"


@dataclass
class Result:
    """Result envelope returned by capabilities and agents.

    Attributes:
        status: SUCCESS or FAILURE
        value: The produced value (any type)
        context_delta: Keys to merge into the running pipeline context
        used_capability: Name of the capability that produced the result
        message: Human readable failure description
    """

    status: Status
    value: Any = None
    context_delta: Context = field(default_factory=dict)
    used_capability: str | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        """True when the status is SUCCESS."""
        return self.status is Status.SUCCESS

    @classmethod
    def success(
        cls,
        value: Any = None,
        context_delta: Context | None = None,
        used_capability: str | None = None,
    ) -> "Result":
        """Build a successful result."""
        return cls(
            status=Status.SUCCESS,
            value=value,
            context_delta=dict(context_delta or {}),
            used_capability=used_capability,
        )

    @classmethod
    def failure(
        cls,
        message: str,
        value: Any = None,
        context_delta: Context | None = None,
        used_capability: str | None = None,
    ) -> "Result":
        """Build a failed result carrying an explanatory message."""
        return cls(
            status=Status.FAILURE,
            value=value,
            context_delta=dict(context_delta or {}),
            used_capability=used_capability,
            message=message,
        )

    def snapshot(self) -> "Result":
        """Return a copy whose context_delta is not shared with this result."""
        return replace(self, context_delta=dict(self.context_delta))


@dataclass(frozen=True)
class HistoryEntry:
    """A single recorded interaction."""

    input: Any
    result: Result
    timestamp: datetime
    agent_name: str


@dataclass
class AgentConfig:
    """Configuration fixing how an agent selects capabilities.

    Attributes:
        strategy: Selection strategy. None means "derive from execution_mode,
                  or PRIMARY when no mode is given".
        primary: Name of the fallback capability (first capability if unset)
        selector_fn: Selection function for the CUSTOM strategy
        temperature: Sampling temperature for LLM routing
        execution_mode: "autonomous" or "sequential" alias for the strategy
    """

    strategy: SelectionStrategy | None = None
    primary: str | None = None
    selector_fn: Callable[..., Any] | None = None
    temperature: float = 0.1
    execution_mode: str | None = None
