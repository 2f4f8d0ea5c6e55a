"""Capability creation and invocation.

A capability is a named, described unit an agent can invoke. Its body is
either a plain function (a passive executable) or a wrapper that delegates
to a nested agent, which is how agents are composed hierarchically.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Union

from agent_orchestrator.agents.types import Context, Result

if TYPE_CHECKING:
    from agent_orchestrator.agents.agent import Agent

logger = logging.getLogger(__name__)

CapabilityFn = Callable[[Any, Context], Any]


@dataclass(frozen=True)
class FunctionBody:
    """Body that runs a caller-supplied function.

    The function may be sync or async and may return a Result or any other
    value, which is wrapped as a successful Result.
    """

    fn: CapabilityFn

    async def run(self, input: Any, context: Context) -> Result:
        value = self.fn(input, context)
        if inspect.isawaitable(value):
            value = await value
        if isinstance(value, Result):
            return value
        return Result.success(value)


@dataclass(frozen=True)
class SubAgentBody:
    """Body that delegates to a nested agent's execute."""

    agent: "Agent"

    async def run(self, input: Any, context: Context) -> Result:
        return await self.agent.execute(input, context)


CapabilityBody = Union[FunctionBody, SubAgentBody]


@dataclass(frozen=True)
class Capability:
    """A named, described, invocable unit.

    Attributes:
        name: Identifier, unique within the capability set holding it
        description: What the capability does (routing evidence for LLM selection)
        body: FunctionBody or SubAgentBody
    """

    name: str
    description: str
    body: CapabilityBody

    @property
    def is_sub_agent(self) -> bool:
        return isinstance(self.body, SubAgentBody)


def create_capability(name: str, description: str, fn: CapabilityFn) -> Capability:
    """Create a capability backed by a plain function.

    Args:
        name: Unique identifier for the capability
        description: What the capability does
        fn: Callable taking (input, context)

    Returns:
        Capability: The new capability

    Raises:
        ValueError: If fn is not callable
    """
    if not callable(fn):
        raise ValueError(f"Capability '{name}' needs a callable body")
    return Capability(name=name, description=description, body=FunctionBody(fn))


def create_sub_agent_capability(
    name: str, description: str, agent: "Agent | None"
) -> Capability:
    """Create a capability that delegates to a nested agent.

    Invoking the capability produces exactly the Result that calling
    ``agent.execute(input, context)`` directly would produce.

    Args:
        name: Unique identifier for the capability
        description: What the nested agent does
        agent: The agent to delegate to

    Returns:
        Capability: The wrapping capability

    Raises:
        ValueError: If agent is None
    """
    if agent is None:
        raise ValueError(f"Sub-agent capability '{name}' requires an agent, got None")
    return Capability(name=name, description=description, body=SubAgentBody(agent))


async def invoke_capability(
    capability: Capability, input: Any, context: Context
) -> Result:
    """Invoke a capability, converting any raised error into a failure Result.

    Args:
        capability: The capability to run
        input: Raw input passed to the body
        context: The running context

    Returns:
        Result: The body's result, or a FAILURE result naming the capability
    """
    name = getattr(capability, "name", None)
    try:
        return await capability.body.run(input, context)
    except Exception as e:
        logger.error(f"Error invoking capability '{name}': {e}", exc_info=True)
        return Result.failure(message=str(e) or type(e).__name__, used_capability=name)
