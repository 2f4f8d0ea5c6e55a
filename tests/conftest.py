"""Pytest configuration and shared fixtures for agent-orchestrator tests.

This module provides common fixtures used across all test modules,
including fake inference backends, sample agents, and async client setup.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from agent_orchestrator import create_app
from agent_orchestrator.agents import (
    AgentConfig,
    AgentRegistry,
    Result,
    create_agent,
    create_capability,
)
from agent_orchestrator.config import AgentOrchestratorSettings
from agent_orchestrator.ollama import Completion
from agent_orchestrator.pipelines import create_pipeline


class FakeInference:
    """Inference backend returning canned completions and recording prompts."""

    def __init__(self, text: str = "", ok: bool = True, error_message: str = ""):
        self.text = text
        self.ok = ok
        self.error_message = error_message
        self.prompts: list[str] = []
        self.temperatures: list[float] = []

    async def complete(self, prompt: str, temperature: float = 0.1) -> Completion:
        self.prompts.append(prompt)
        self.temperatures.append(temperature)
        return Completion(text=self.text, ok=self.ok, error_message=self.error_message)


@pytest.fixture
def fake_inference():
    """Factory fixture building FakeInference backends."""
    return FakeInference


@pytest.fixture
def echo_agent():
    """Agent with a single identity capability named "echo"."""
    return create_agent(
        "echo-agent",
        "Returns its input",
        {"echo": create_capability("echo", "Echo the input", lambda i, c: i)},
        config=AgentConfig(primary="echo"),
    )


@pytest.fixture
def sql_pipeline():
    """Two-stage pipeline: stage 1 writes SQL, stage 2 requires it."""

    def generate(input, context):
        return Result.success("generated", context_delta={"sql": "SELECT 1"})

    def execute(input, context):
        if not context.get("sql"):
            return Result.failure("No SQL in context")
        return Result.success([{"?column?": 1}])

    generator = create_agent(
        "sql-generator",
        "Generates SQL",
        [create_capability("generate", "Generate SQL", generate)],
    )
    executor = create_agent(
        "database-executor",
        "Executes SQL",
        [create_capability("execute", "Execute SQL", execute)],
    )
    return create_pipeline([generator, executor])


@pytest.fixture
def test_settings():
    """Create test settings.

    Returns:
        AgentOrchestratorSettings: Settings instance configured for testing.
    """
    return AgentOrchestratorSettings(
        host="127.0.0.1",
        port=8000,
        ollama_host="http://localhost:11434",
        ollama_model="llama2",
        log_level="DEBUG",
        default_history_limit=100,
        cors_origins=["*"],
    )


@pytest.fixture
def registry(echo_agent, sql_pipeline):
    """Registry holding the echo agent, the SQL pipeline and its stages."""
    registry = AgentRegistry()
    registry.register_agent(echo_agent, key="echo")
    for agent in sql_pipeline.agents:
        registry.register_agent(agent)
    registry.register_pipeline("text-to-sql", sql_pipeline)
    return registry


@pytest.fixture
def test_app(test_settings, registry):
    """Create a FastAPI test application instance."""
    return create_app(settings=test_settings, registry=registry)


@pytest_asyncio.fixture
async def async_client(test_app):
    """Create an async HTTP client for testing FastAPI endpoints.

    Yields:
        AsyncClient: Async HTTP client for making test requests.
    """
    # Trigger the lifespan startup manually for tests
    async with test_app.router.lifespan_context(test_app):
        transport = ASGITransport(app=test_app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
