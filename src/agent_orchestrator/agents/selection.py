"""Capability selection strategies for agents.

Given an agent's capability set, the current input and the running context,
pick exactly one capability to invoke:

- primary: the configured primary capability (or the first one)
- keyword: the first capability whose name or a description word appears in
  the input, else primary
- llm-routed: ask the inference backend to name a capability, else primary
- custom: a caller-supplied selection function, returned verbatim
"""

import inspect
import logging
from typing import Any, Mapping

from agent_orchestrator.agents.capability import Capability
from agent_orchestrator.agents.types import AgentConfig, Context, SelectionStrategy
from agent_orchestrator.ollama.types import InferenceClient

logger = logging.getLogger(__name__)

Capabilities = Mapping[str, Capability]


def build_selection_prompt(capabilities: Capabilities, input: Any) -> str:
    """Create the prompt asking the LLM to choose one capability.

    The prompt lists every capability with its description, the raw input,
    and instructions to answer with the capability name only.
    """
    listing = "\n".join(
        f"- {name}: {capability.description}"
        for name, capability in capabilities.items()
    )
    return (
        "You are a tool selection assistant. Your job is to choose the most "
        "appropriate tool for the given user input.\n\n"
        f"Available tools:\n{listing}\n\n"
        f"User input: {input}\n\n"
        "Instructions:\n"
        "1. Analyze the user input carefully\n"
        "2. Choose the SINGLE most appropriate tool from the list above\n"
        "3. Respond with ONLY the tool name, nothing else\n"
        "4. Do not include explanations, punctuation, or additional text\n\n"
        "Selected tool:"
    )


def select_primary(
    capabilities: Capabilities, config: AgentConfig
) -> Capability | None:
    """Return the configured primary capability, or the first one."""
    if not capabilities:
        return None
    if config.primary is not None:
        capability = capabilities.get(config.primary)
        if capability is not None:
            return capability
        logger.warning(
            f"Primary capability '{config.primary}' not found, using first capability"
        )
    return next(iter(capabilities.values()))


def select_by_keyword(
    capabilities: Capabilities, input: Any, config: AgentConfig
) -> Capability | None:
    """Return the first capability whose name or description words occur in the input."""
    text = str(input).lower()
    for name, capability in capabilities.items():
        if name.lower() in text:
            logger.debug(f"Keyword match on capability name: {name}")
            return capability
        for word in capability.description.lower().split():
            if word in text:
                logger.debug(f"Keyword match on description word '{word}': {name}")
                return capability
    logger.debug("No keyword match, using primary capability")
    return select_primary(capabilities, config)


def resolve_capability_name(
    capabilities: Capabilities, response: str
) -> Capability | None:
    """Match an LLM response against capability names.

    Exact match wins; otherwise the first case-insensitive match in
    iteration order.
    """
    selected = response.strip().lower()
    if not selected:
        return None
    if selected in capabilities:
        return capabilities[selected]
    for name, capability in capabilities.items():
        if name.lower() == selected:
            return capability
    return None


async def select_with_llm(
    capabilities: Capabilities,
    input: Any,
    config: AgentConfig,
    inference: InferenceClient | None,
) -> Capability | None:
    """Ask the inference backend to choose a capability.

    Inference failure and unparseable responses degrade to the primary
    capability; nothing is raised.
    """
    if not capabilities:
        return None

    if inference is None:
        logger.warning("LLM capability selection unavailable (no inference client), using primary")
        return select_primary(capabilities, config)

    logger.info(f"Using LLM to select capability for input: {input}")
    prompt = build_selection_prompt(capabilities, input)
    try:
        completion = await inference.complete(prompt, temperature=config.temperature)
    except Exception as e:
        logger.warning(f"LLM capability selection failed, using primary. Error: {e}")
        return select_primary(capabilities, config)

    if not completion.ok:
        logger.warning(
            f"LLM capability selection failed, using primary. Error: {completion.error_message}"
        )
        return select_primary(capabilities, config)

    text = completion.text if isinstance(completion.text, str) else ""
    capability = resolve_capability_name(capabilities, text)
    if capability is None:
        logger.warning(
            f"LLM response '{text.strip()}' matched no capability, using primary"
        )
        return select_primary(capabilities, config)

    logger.info(f"LLM selected capability: {capability.name}")
    return capability


async def select_capability(
    capabilities: Capabilities,
    input: Any,
    context: Context,
    config: AgentConfig,
    inference: InferenceClient | None = None,
) -> Capability | None:
    """Select the capability to invoke for this input.

    Args:
        capabilities: The agent's capability set (iteration order matters)
        input: Raw input
        context: The running context
        config: Agent configuration (strategy may be an enum member or its value)
        inference: Backend used by the llm-routed strategy

    Returns:
        Capability | None: The chosen capability. None only for an empty
        capability set or when a custom selector returns None.
    """
    try:
        strategy = SelectionStrategy(config.strategy or SelectionStrategy.PRIMARY)
    except ValueError:
        logger.warning(f"Unknown selection strategy {config.strategy!r}, using primary")
        return select_primary(capabilities, config)

    if strategy is SelectionStrategy.PRIMARY:
        return select_primary(capabilities, config)

    if strategy is SelectionStrategy.KEYWORD:
        return select_by_keyword(capabilities, input, config)

    if strategy is SelectionStrategy.LLM_ROUTED:
        return await select_with_llm(capabilities, input, config, inference)

    if strategy is SelectionStrategy.CUSTOM:
        if config.selector_fn is None:
            logger.warning("Custom selection configured without selector_fn, using primary")
            return select_primary(capabilities, config)
        selected = config.selector_fn(capabilities, input, context)
        if inspect.isawaitable(selected):
            selected = await selected
        return selected

    return select_primary(capabilities, config)
