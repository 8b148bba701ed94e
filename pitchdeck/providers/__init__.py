"""
Inference providers for PitchDeck Scout.

- Hugging Face: hosted text-to-text model answering yes/no (primary tier)
- OpenAI: chat completion returning a probability as JSON (secondary tier)

Use the ProviderFactory for creating provider instances:
    from pitchdeck.providers import ProviderFactory
    provider = ProviderFactory.create("huggingface", config)
"""

from .base import (
    ChatProvider,
    ProviderError,
    ProviderResponseError,
    ProviderTransportError,
    TextGenerationProvider,
)
from .factory import ProviderFactory
from .huggingface_provider import HuggingFaceProvider
from .openai_provider import OpenAIProvider

__all__ = [
    "ChatProvider",
    "ProviderError",
    "ProviderResponseError",
    "ProviderTransportError",
    "TextGenerationProvider",
    "ProviderFactory",
    "HuggingFaceProvider",
    "OpenAIProvider",
]
