"""
Base provider interfaces for the classification tiers.

Two backend shapes are supported:
- text generation: one prompt in, one generated string out (primary tier)
- chat completion: role-tagged messages in, one completion out (secondary tier)
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class ProviderError(Exception):
    """Any failure of an inference backend."""


class ProviderTransportError(ProviderError):
    """Network, timeout or HTTP status failure."""


class ProviderResponseError(ProviderError):
    """
    The backend answered, but not in the expected shape.

    Attributes:
        payload: The offending response (decoded JSON or raw text)
    """

    def __init__(self, message: str, payload: Optional[Any] = None):
        super().__init__(message)
        self.payload = payload


class TextGenerationProvider(ABC):
    """Backend that completes a single natural-language prompt."""

    @abstractmethod
    def generate(self, prompt: str) -> str:
        """
        Run the prompt and return the generated text.

        Raises:
            ProviderTransportError: backend unreachable or HTTP error
            ProviderResponseError: payload does not carry generated text
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return provider identifier for logging."""
        pass


class ChatProvider(ABC):
    """Backend that answers an ordered, role-tagged conversation."""

    @abstractmethod
    def complete(self, messages: List[Dict[str, str]]) -> str:
        """
        Send the conversation and return the completion text.

        Args:
            messages: Ordered [{"role": ..., "content": ...}] turns

        Raises:
            ProviderTransportError: backend unreachable or HTTP error
            ProviderResponseError: payload does not carry a completion
        """
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Return provider identifier for logging."""
        pass
