"""Type definitions for the inference interface.

This module contains the completion result dataclass and the protocol every
inference backend implements.
"""

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass
class Completion:
    """Outcome of a single completion request.

    Attributes:
        text: The generated text (empty on failure)
        ok: True if the backend produced a response
        error_message: Failure description (empty on success)
        model: Model that produced the response, when known
    """

    text: str = ""
    ok: bool = True
    error_message: str = ""
    model: str | None = None

    @classmethod
    def failed(cls, error_message: str, model: str | None = None) -> "Completion":
        """Build a failed completion."""
        return cls(text="", ok=False, error_message=error_message, model=model)


@runtime_checkable
class InferenceClient(Protocol):
    """Anything that can turn a prompt into text.

    Implementations must report failures through ``Completion.ok`` instead
    of raising.
    """

    async def complete(self, prompt: str, temperature: float = 0.1) -> Completion:
        ...
