"""
OpenAI chat completion provider.

Secondary tier backend. The answer is returned as raw text: turning it
into a probability is the job of the score repair loop.
"""

from typing import Dict, List, Optional

import requests

from .base import ChatProvider, ProviderResponseError, ProviderTransportError
from ..utils.logger import logger
from ..utils.secrets import get_api_key


class OpenAIProvider(ChatProvider):
    """
    OpenAI provider for cloud chat completions.

    Features:
    - gpt-3.5-turbo by default, any chat model by config
    - Base URL override for Azure and proxies
    - Automatic API key retrieval from keyring or environment
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize OpenAI provider.

        Args:
            config: Provider configuration with:
                - model: Model name (default: gpt-3.5-turbo)
                - api_key: API key (or retrieved from keyring/env)
                - base_url: API base URL (for Azure/proxies)
                - timeout: Request timeout in seconds
        """
        config = config or {}
        self.model = config.get("model", "gpt-3.5-turbo")
        self.api_key = config.get("api_key") or get_api_key("openai")
        self.base_url = config.get("base_url", "https://api.openai.com/v1")
        self.timeout = config.get("timeout", 30)

        if not self.api_key:
            raise ValueError(
                "OpenAI API key not configured. "
                "Set OPENAI_API_KEY or store it with "
                "pitchdeck.utils.secrets.set_api_key('openai', 'sk-...')"
            )

    def get_name(self) -> str:
        return "openai"

    def complete(self, messages: List[Dict[str, str]]) -> str:
        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json"
                },
                json={
                    "model": self.model,
                    "messages": messages
                },
                timeout=self.timeout
            )

            if response.status_code == 429:
                logger.warning("OpenAI rate limit exceeded")

            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise ProviderTransportError("OpenAI request timed out") from e
        except requests.exceptions.HTTPError as e:
            raise ProviderTransportError(f"OpenAI HTTP error: {e}") from e
        except requests.exceptions.RequestException as e:
            raise ProviderTransportError(f"OpenAI request failed: {e}") from e

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except ValueError as e:
            raise ProviderResponseError("OpenAI returned non-JSON body", payload=response.text) from e
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderResponseError("OpenAI response has no completion", payload=data) from e

        if content is None:
            raise ProviderResponseError("OpenAI completion is empty", payload=data)

        tokens_used = (data.get("usage") or {}).get("total_tokens", 0)
        logger.debug(f"OpenAI ({self.model}) answered with {tokens_used} tokens")
        return content
