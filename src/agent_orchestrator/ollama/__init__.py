"""Inference interface and Ollama integration layer.

This package defines the InferenceClient protocol consumed by LLM routing and
by capability bodies, plus an async Ollama-backed implementation.
"""

from agent_orchestrator.ollama.client import OllamaClient
from agent_orchestrator.ollama.types import Completion, InferenceClient

__all__ = ["Completion", "InferenceClient", "OllamaClient"]
