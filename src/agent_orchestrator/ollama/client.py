"""Async Ollama client wrapper.

This module provides an async wrapper around the ollama.AsyncClient that
implements the InferenceClient protocol. The client is designed to be created
once at startup and reused by every agent that needs completions.
"""

import logging
from typing import Any

import ollama

from agent_orchestrator.ollama.types import Completion

logger = logging.getLogger(__name__)


class OllamaClient:
    """Async completion client for the Ollama API.

    Attributes:
        host: The Ollama server URL (e.g., "http://localhost:11434")
        model: Default model used for completions
        timeout: Request timeout in seconds
        _client: The underlying ollama.AsyncClient instance
    """

    def __init__(
        self, host: str, model: str = "llama2", timeout: float | None = 60.0
    ) -> None:
        """Initialize the Ollama client.

        Args:
            host: The Ollama server URL
            model: Default model name for completions
            timeout: Request timeout in seconds (None disables it)
        """
        self.host = host
        self.model = model
        self.timeout = timeout
        self._client = ollama.AsyncClient(host=host, timeout=timeout)
        logger.info(f"OllamaClient initialized with host: {host}, model: {model}")

    async def complete(
        self,
        prompt: str,
        temperature: float = 0.1,
        model: str | None = None,
    ) -> Completion:
        """Generate a non-streaming completion.

        Failures (connection errors, API errors, malformed responses) are
        reported through the returned Completion, never raised.

        Args:
            prompt: The prompt text
            temperature: Sampling temperature (0-1, low for factual output)
            model: Optional model override

        Returns:
            Completion: Generated text, or ok=False with an error message
        """
        model_name = model or self.model
        try:
            logger.debug(
                f"Requesting completion from {model_name} "
                f"(prompt_length={len(prompt)}, temperature={temperature})"
            )
            response = await self._client.generate(
                model=model_name,
                prompt=prompt,
                stream=False,
                options={"temperature": temperature},
            )
        except ollama.ResponseError as e:
            logger.error(f"Ollama API error for model {model_name}: {e}")
            return Completion.failed(str(e), model=model_name)
        except Exception as e:
            logger.error(f"Completion request failed: {e}")
            return Completion.failed(str(e) or type(e).__name__, model=model_name)

        text = _response_text(response)
        if text is None:
            logger.warning("Unexpected response from Ollama: no response text")
            return Completion.failed("Unexpected response from Ollama", model=model_name)

        logger.debug(f"Completion received: length={len(text)}")
        return Completion(text=text, ok=True, model=model_name)

    async def close(self) -> None:
        """Close the client and clean up resources.

        ollama.AsyncClient uses httpx internally which handles cleanup.
        """
        logger.debug("OllamaClient closed")


def _response_text(response: Any) -> str | None:
    """Extract the generated text from a generate() response object or dict."""
    if hasattr(response, "response"):
        return response.response
    if isinstance(response, dict):
        return response.get("response")
    return None
