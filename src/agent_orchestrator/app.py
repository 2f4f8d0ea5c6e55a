"""FastAPI application factory and lifespan management.

This module contains the create_app() factory function that creates and configures
the FastAPI application instance, including lifespan management for startup/shutdown
and router registration.
"""

import importlib
import inspect
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Callable

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from agent_orchestrator.agents import AgentRegistry
from agent_orchestrator.config import AgentOrchestratorSettings
from agent_orchestrator.ollama import OllamaClient
from agent_orchestrator.routers import agents, pipelines

logger = logging.getLogger(__name__)

# Called once at startup with (registry, ollama_client) to register agents and
# pipelines that need the shared inference client. May be async.
RegistrySetup = Callable[[AgentRegistry, OllamaClient], Any]


def load_registry_setup(path: str) -> RegistrySetup:
    """Import a registry setup hook from a "package.module:function" path.

    Raises:
        ValueError: If the path is malformed or does not name a callable
    """
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ValueError(f"Registry setup must look like 'package.module:function', got '{path}'")

    module = importlib.import_module(module_name)
    setup = getattr(module, attr, None)
    if not callable(setup):
        raise ValueError(f"Registry setup '{path}' is not callable")
    return setup


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager for FastAPI application.

    The Ollama client is created once at startup and stored in app.state,
    then the optional registry setup hook populates the agent registry.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded while the app is running.
    """
    settings: AgentOrchestratorSettings = app.state.settings
    app.state.ollama_client = OllamaClient(
        host=settings.ollama_host,
        model=settings.ollama_model,
        timeout=settings.ollama_timeout,
    )
    logger.info(f"Initialized Ollama client with host: {settings.ollama_host}")

    setup: RegistrySetup | None = app.state.registry_setup
    if setup is not None:
        outcome = setup(app.state.registry, app.state.ollama_client)
        if inspect.isawaitable(outcome):
            await outcome
        logger.info(
            f"Registry ready: {len(app.state.registry.agents())} agents, "
            f"{len(app.state.registry.pipelines())} pipelines"
        )

    yield

    if hasattr(app.state, "ollama_client"):
        await app.state.ollama_client.close()
        logger.info("Ollama client closed")


def create_app(
    settings: AgentOrchestratorSettings | None = None,
    registry: AgentRegistry | None = None,
    registry_setup: RegistrySetup | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings instance. If not provided, settings will
                  be loaded from environment variables.
        registry: Caller-owned agent registry (default: a new empty one)
        registry_setup: Optional startup hook that registers agents and
                  pipelines using the shared Ollama client.

    Returns:
        FastAPI: Configured FastAPI application instance.
    """
    if settings is None:
        from agent_orchestrator.dependencies import get_settings

        settings = get_settings()

    app = FastAPI(
        title="agent-orchestrator",
        description="Agent orchestration core with capability routing and fail-fast pipelines",
        version="0.1.0",
        lifespan=lifespan,
    )

    if registry_setup is None and settings.registry_setup:
        registry_setup = load_registry_setup(settings.registry_setup)

    app.state.settings = settings
    app.state.registry = registry if registry is not None else AgentRegistry()
    app.state.registry_setup = registry_setup

    # Note: FastAPI's type hints for add_middleware are overly strict
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(agents.router)
    app.include_router(pipelines.router)

    return app
