"""CLI entry point for agent-orchestrator.

This module provides the command-line interface for serving the agent
registry over HTTP. It can be invoked as `agent-orchestrator` (via the
script entry point) or `python -m agent_orchestrator`.
"""

import argparse
import logging
import sys

import uvicorn

from agent_orchestrator import __version__, create_app
from agent_orchestrator.config import AgentOrchestratorSettings


def main() -> None:
    """Main entry point for the agent-orchestrator CLI.

    Parses command-line arguments and starts the uvicorn server with the
    FastAPI application.
    """
    parser = argparse.ArgumentParser(
        prog="agent-orchestrator",
        description="Serve registered agents and pipelines over HTTP",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"agent-orchestrator {__version__}",
    )

    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host to bind the server to (default: 127.0.0.1, can be set via AGENT_ORCH_HOST)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to bind the server to (default: 8000, can be set via AGENT_ORCH_PORT)",
    )

    parser.add_argument(
        "--ollama-host",
        type=str,
        default=None,
        help="Ollama server URL (default: http://localhost:11434, can be set via AGENT_ORCH_OLLAMA_HOST)",
    )

    parser.add_argument(
        "--ollama-model",
        type=str,
        default=None,
        help="Model used for completions and routing (default: llama2, can be set via AGENT_ORCH_OLLAMA_MODEL)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO, can be set via AGENT_ORCH_LOG_LEVEL)",
    )

    parser.add_argument(
        "--registry-setup",
        type=str,
        default=None,
        help="Startup hook registering agents, as package.module:function (can be set via AGENT_ORCH_REGISTRY_SETUP)",
    )

    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development (uvicorn --reload)",
    )

    args = parser.parse_args()

    # CLI args override environment variables
    settings_kwargs = {}
    if args.host is not None:
        settings_kwargs["host"] = args.host
    if args.port is not None:
        settings_kwargs["port"] = args.port
    if args.ollama_host is not None:
        settings_kwargs["ollama_host"] = args.ollama_host
    if args.ollama_model is not None:
        settings_kwargs["ollama_model"] = args.ollama_model
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level
    if args.registry_setup is not None:
        settings_kwargs["registry_setup"] = args.registry_setup

    settings = AgentOrchestratorSettings(**settings_kwargs)

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(settings=settings)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        reload=args.reload,
    )


if __name__ == "__main__":
    sys.exit(main())
