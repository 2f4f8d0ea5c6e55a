"""Unit tests for capability selection strategies."""

import logging
from unittest.mock import AsyncMock

import pytest

from agent_orchestrator.agents import (
    AgentConfig,
    SelectionStrategy,
    build_selection_prompt,
    create_capability,
    select_capability,
)
from agent_orchestrator.agents.selection import resolve_capability_name
from agent_orchestrator.ollama import Completion


def _identity(input, context):
    return input


@pytest.fixture
def math_capabilities():
    """Ordered capability set for arithmetic."""
    return {
        "add": create_capability("add", "Adds two numbers together", _identity),
        "multiply": create_capability("multiply", "Computes the product", _identity),
        "divide": create_capability("divide", "Splits a quantity into parts", _identity),
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["", "add 2 and 3", "multiply please", "anything"])
async def test_primary_is_independent_of_input(math_capabilities, text):
    """Test that primary selection ignores the input."""
    config = AgentConfig(strategy=SelectionStrategy.PRIMARY, primary="multiply")

    selected = await select_capability(math_capabilities, text, {}, config)

    assert selected.name == "multiply"


@pytest.mark.asyncio
async def test_primary_defaults_to_first_capability(math_capabilities):
    """Test that an unset primary picks the first capability."""
    config = AgentConfig(strategy=SelectionStrategy.PRIMARY)

    selected = await select_capability(math_capabilities, "x", {}, config)

    assert selected.name == "add"


@pytest.mark.asyncio
async def test_primary_with_unknown_name_uses_first(math_capabilities, caplog):
    """Test that a missing primary name falls back to the first capability."""
    config = AgentConfig(strategy=SelectionStrategy.PRIMARY, primary="subtract")

    with caplog.at_level(logging.WARNING):
        selected = await select_capability(math_capabilities, "x", {}, config)

    assert selected.name == "add"
    assert "subtract" in caplog.text


@pytest.mark.asyncio
async def test_empty_capability_set_selects_nothing():
    """Test that no strategy invents a capability for an empty set."""
    for strategy in (
        SelectionStrategy.PRIMARY,
        SelectionStrategy.KEYWORD,
        SelectionStrategy.LLM_ROUTED,
    ):
        config = AgentConfig(strategy=strategy)
        assert await select_capability({}, "x", {}, config) is None


@pytest.mark.asyncio
async def test_keyword_matches_capability_name(math_capabilities):
    """Test that the capability name appearing in the input is selected."""
    config = AgentConfig(strategy=SelectionStrategy.KEYWORD)

    selected = await select_capability(math_capabilities, "Please MULTIPLY 3 by 4", {}, config)

    assert selected.name == "multiply"


@pytest.mark.asyncio
async def test_keyword_matches_description_word(math_capabilities):
    """Test that a description word appearing in the input is selected."""
    config = AgentConfig(strategy=SelectionStrategy.KEYWORD)

    selected = await select_capability(math_capabilities, "what is the product?", {}, config)

    assert selected.name == "multiply"


@pytest.mark.asyncio
async def test_keyword_prefers_earlier_match(math_capabilities):
    """Test that the first matching capability in iteration order wins."""
    config = AgentConfig(strategy=SelectionStrategy.KEYWORD)

    selected = await select_capability(
        math_capabilities, "split the product into parts", {}, config
    )

    assert selected.name == "multiply"


@pytest.mark.asyncio
async def test_keyword_falls_back_to_primary(math_capabilities):
    """Test that no match falls back to the primary capability."""
    config = AgentConfig(strategy=SelectionStrategy.KEYWORD, primary="divide")

    selected = await select_capability(math_capabilities, "zzz", {}, config)

    assert selected.name == "divide"


@pytest.mark.asyncio
async def test_keyword_never_returns_non_matching_when_match_exists():
    """Test that a matching capability beats a non-matching primary."""
    capabilities = {
        "logger": create_capability("logger", "Writes logs", _identity),
        "summarize": create_capability("summarize", "Condenses text", _identity),
    }
    config = AgentConfig(strategy=SelectionStrategy.KEYWORD, primary="logger")

    selected = await select_capability(capabilities, "condenses this", {}, config)

    assert selected.name == "summarize"


def test_build_selection_prompt_lists_capabilities(math_capabilities):
    """Test that the prompt lists every name and description plus the input."""
    prompt = build_selection_prompt(math_capabilities, "add 1 and 2")

    assert "- add: Adds two numbers together" in prompt
    assert "- multiply: Computes the product" in prompt
    assert "- divide: Splits a quantity into parts" in prompt
    assert "User input: add 1 and 2" in prompt
    assert prompt.rstrip().endswith("Selected tool:")


@pytest.mark.asyncio
async def test_llm_routed_uses_inference_response(math_capabilities, fake_inference):
    """Test that the named capability is selected with low temperature."""
    inference = fake_inference(text="  Multiply\n")
    config = AgentConfig(strategy=SelectionStrategy.LLM_ROUTED, temperature=0.1)

    selected = await select_capability(math_capabilities, "3 times 4", {}, config, inference)

    assert selected.name == "multiply"
    assert inference.temperatures == [0.1]
    assert "User input: 3 times 4" in inference.prompts[0]


@pytest.mark.asyncio
async def test_llm_routed_falls_back_on_inference_failure(math_capabilities, fake_inference, caplog):
    """Test that a failed inference call returns the primary capability."""
    inference = fake_inference(ok=False, error_message="connection refused")
    config = AgentConfig(strategy=SelectionStrategy.LLM_ROUTED, primary="divide")

    with caplog.at_level(logging.WARNING):
        selected = await select_capability(math_capabilities, "x", {}, config, inference)

    assert selected.name == "divide"
    assert "connection refused" in caplog.text


@pytest.mark.asyncio
async def test_llm_routed_falls_back_when_inference_raises(math_capabilities):
    """Test that an exception from the backend never escapes selection."""
    inference = AsyncMock()
    inference.complete.side_effect = ConnectionError("boom")
    config = AgentConfig(strategy=SelectionStrategy.LLM_ROUTED, primary="add")

    selected = await select_capability(math_capabilities, "x", {}, config, inference)

    assert selected.name == "add"


@pytest.mark.asyncio
async def test_llm_routed_falls_back_on_unparseable_response(math_capabilities, fake_inference):
    """Test that a response naming no capability returns the primary."""
    inference = fake_inference(text="I think you should use the calculator.")
    config = AgentConfig(strategy=SelectionStrategy.LLM_ROUTED)

    selected = await select_capability(math_capabilities, "x", {}, config, inference)

    assert selected.name == "add"


@pytest.mark.asyncio
async def test_llm_routed_falls_back_on_missing_text(math_capabilities):
    """Test that a successful completion without text returns the primary."""
    inference = AsyncMock()
    inference.complete.return_value = Completion(text=None, ok=True)
    config = AgentConfig(strategy=SelectionStrategy.LLM_ROUTED, primary="divide")

    selected = await select_capability(math_capabilities, "x", {}, config, inference)

    assert selected.name == "divide"


@pytest.mark.asyncio
async def test_strategy_given_as_string(math_capabilities):
    """Test that plain string strategies are honored."""
    config = AgentConfig(strategy="keyword")

    selected = await select_capability(math_capabilities, "what is the product?", {}, config)

    assert selected.name == "multiply"


@pytest.mark.asyncio
async def test_unknown_strategy_uses_primary(math_capabilities, caplog):
    """Test that an unrecognized strategy warns and selects the primary."""
    config = AgentConfig(strategy="round-robin", primary="divide")

    with caplog.at_level(logging.WARNING):
        selected = await select_capability(math_capabilities, "x", {}, config)

    assert selected.name == "divide"
    assert "round-robin" in caplog.text


@pytest.mark.asyncio
async def test_llm_routed_without_inference_uses_primary(math_capabilities):
    """Test that missing inference degrades to the primary capability."""
    config = AgentConfig(strategy=SelectionStrategy.LLM_ROUTED, primary="multiply")

    selected = await select_capability(math_capabilities, "x", {}, config, None)

    assert selected.name == "multiply"


def test_resolve_capability_name_prefers_exact_match():
    """Test exact match first, then the first case-insensitive match."""
    capabilities = {
        "Search": create_capability("Search", "Upper", _identity),
        "search": create_capability("search", "Lower", _identity),
    }

    assert resolve_capability_name(capabilities, "search").description == "Lower"
    assert resolve_capability_name(capabilities, "SEARCH").description == "Lower"
    assert resolve_capability_name(capabilities, "") is None


def test_resolve_capability_name_case_insensitive():
    """Test that mixed-case names are matched case-insensitively."""
    capabilities = {"TextProcessing": create_capability("TextProcessing", "Text", _identity)}

    assert resolve_capability_name(capabilities, "textprocessing").name == "TextProcessing"


@pytest.mark.asyncio
async def test_custom_selector_result_is_returned_verbatim(math_capabilities):
    """Test that the custom selector decides, receiving the context."""

    def by_context(capabilities, input, context):
        return capabilities[context["op"]]

    config = AgentConfig(strategy=SelectionStrategy.CUSTOM, selector_fn=by_context)

    selected = await select_capability(math_capabilities, "x", {"op": "divide"}, config)

    assert selected.name == "divide"


@pytest.mark.asyncio
async def test_custom_selector_may_return_none(math_capabilities):
    """Test that None from a custom selector is not replaced."""
    config = AgentConfig(
        strategy=SelectionStrategy.CUSTOM, selector_fn=lambda caps, i, c: None
    )

    assert await select_capability(math_capabilities, "x", {}, config) is None


@pytest.mark.asyncio
async def test_custom_selector_can_be_async(math_capabilities):
    """Test that async selector functions are awaited."""

    async def pick(capabilities, input, context):
        return capabilities["multiply"]

    config = AgentConfig(strategy=SelectionStrategy.CUSTOM, selector_fn=pick)

    selected = await select_capability(math_capabilities, "x", {}, config)

    assert selected.name == "multiply"


@pytest.mark.asyncio
async def test_custom_without_selector_uses_primary(math_capabilities):
    """Test that a custom strategy without a function falls back to primary."""
    config = AgentConfig(strategy=SelectionStrategy.CUSTOM, primary="divide")

    selected = await select_capability(math_capabilities, "x", {}, config)

    assert selected.name == "divide"
