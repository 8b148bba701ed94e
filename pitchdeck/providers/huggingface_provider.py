"""
Hugging Face Inference API provider.

Primary tier backend: a hosted text-to-text model (flan-t5 by default)
answering a single prompt.
"""

from typing import Dict, Optional

import requests

from .base import ProviderResponseError, ProviderTransportError, TextGenerationProvider
from ..utils.logger import logger
from ..utils.secrets import get_api_key


class HuggingFaceProvider(TextGenerationProvider):
    """
    Hugging Face hosted inference.

    The endpoint answers either a list of {"generated_text": ...} objects
    or an error object (model loading, rate limit, bad token), which is
    reported as a ProviderResponseError.
    """

    def __init__(self, config: Optional[Dict] = None):
        """
        Initialize Hugging Face provider.

        Args:
            config: Provider configuration with:
                - model: Model id (default: google/flan-t5-xxl)
                - api_key: Access token (or retrieved from keyring/env)
                - base_url: Models endpoint
                - timeout: Request timeout in seconds
        """
        config = config or {}
        self.model = config.get("model", "google/flan-t5-xxl")
        self.api_key = config.get("api_key") or get_api_key("huggingface")
        self.base_url = config.get("base_url", "https://api-inference.huggingface.co/models")
        self.timeout = config.get("timeout", 30)

        if not self.api_key:
            raise ValueError(
                "Hugging Face access token not configured. "
                "Set HUGGINGFACE_ACCESS_TOKEN or store it with "
                "pitchdeck.utils.secrets.set_api_key('huggingface', 'hf_...')"
            )

    def get_name(self) -> str:
        return "huggingface"

    def generate(self, prompt: str) -> str:
        try:
            response = requests.post(
                f"{self.base_url}/{self.model}",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json"
                },
                json={"inputs": prompt},
                timeout=self.timeout
            )
        except requests.exceptions.Timeout as e:
            raise ProviderTransportError("Hugging Face request timed out") from e
        except requests.exceptions.RequestException as e:
            raise ProviderTransportError(f"Hugging Face request failed: {e}") from e

        # Error payloads (model loading, bad token) are JSON objects too,
        # so the status code is not checked before decoding
        try:
            result = response.json()
        except ValueError as e:
            raise ProviderResponseError(
                f"Hugging Face returned non-JSON body (HTTP {response.status_code})",
                payload=response.text
            ) from e

        if not isinstance(result, list) or not result:
            raise ProviderResponseError("Hugging Face returned no generations", payload=result)

        first = result[0]
        if not isinstance(first, dict) or not isinstance(first.get("generated_text"), str):
            raise ProviderResponseError("Hugging Face generation has no text", payload=result)

        logger.debug(f"Hugging Face ({self.model}) answered: {first['generated_text']!r}")
        return first["generated_text"]
