"""Pytest configuration for integration tests.

This module provides integration-test-specific fixtures that ensure
the API tests never talk to a real Ollama server.
"""

from unittest.mock import AsyncMock, patch

import pytest

from agent_orchestrator.ollama import Completion


@pytest.fixture(autouse=True)
def mock_ollama_client():
    """Mock OllamaClient for all integration tests.

    This fixture patches the OllamaClient class before the app is created,
    ensuring the lifespan uses our mock instead of creating a real client.
    """
    with patch("agent_orchestrator.app.OllamaClient") as mock_client_class:
        mock_instance = AsyncMock()
        mock_instance.host = "http://localhost:11434"
        mock_instance.complete.return_value = Completion(
            text="echo", ok=True, error_message="", model="llama2"
        )

        # Return the mock instance when OllamaClient is instantiated
        mock_client_class.return_value = mock_instance

        yield mock_instance
