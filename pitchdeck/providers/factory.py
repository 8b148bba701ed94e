"""
Provider factory for inference backend instantiation.

Single entry point to build either tier's backend from its config
section. Uses a registry pattern for clean provider management.
"""

import logging
from typing import Dict, List, Optional, Type, Union

from .base import ChatProvider, TextGenerationProvider

logger = logging.getLogger(__name__)

Provider = Union[TextGenerationProvider, ChatProvider]


class ProviderFactory:
    """
    Factory for creating and managing provider instances.

    Features:
    - Registry pattern for provider classes
    - Instance caching keyed on name and config
    """

    _providers: Dict[str, Type] = {}
    _instances: Dict[str, Provider] = {}

    @classmethod
    def register(cls, name: str, provider_class: Type) -> None:
        """
        Register a provider class.

        Args:
            name: Provider identifier (e.g., 'huggingface', 'openai')
            provider_class: TextGenerationProvider or ChatProvider subclass
        """
        cls._providers[name] = provider_class
        logger.debug(f"Registered provider: {name}")

    @classmethod
    def create(
        cls, name: str, config: Optional[Dict] = None, use_cache: bool = True
    ) -> Provider:
        """
        Create or retrieve a provider instance.

        Args:
            name: Provider name (huggingface, openai)
            config: Provider-specific configuration
            use_cache: If True, return cached instance for same name and config

        Returns:
            Provider instance

        Raises:
            ValueError: If provider name is unknown or credentials are missing
        """
        cache_key = f"{name}:{hash(str(sorted(config.items())))}" if config else name
        if use_cache and cache_key in cls._instances:
            return cls._instances[cache_key]

        if name not in cls._providers:
            available = list(cls._providers.keys())
            raise ValueError(f"Unknown provider: '{name}'. Available: {available}")

        try:
            instance = cls._providers[name](config or {})
        except Exception as e:
            logger.error(f"Failed to create provider '{name}': {e}")
            raise

        if use_cache:
            cls._instances[cache_key] = instance

        logger.info(f"Created provider instance: {name}")
        return instance

    @classmethod
    def create_for_tier(cls, tier_config: Dict, expected: Type) -> Provider:
        """
        Build the backend described by a `providers.<tier>` config section.

        Raises:
            ValueError: If the named provider does not speak the tier's protocol
        """
        tier_config = dict(tier_config)
        name = tier_config.pop("name")
        provider = cls.create(name, tier_config)
        if not isinstance(provider, expected):
            raise ValueError(
                f"Provider '{name}' is not a {expected.__name__} and cannot serve this tier"
            )
        return provider

    @classmethod
    def list_providers(cls) -> List[str]:
        """List all registered provider names."""
        return list(cls._providers.keys())

    @classmethod
    def is_registered(cls, name: str) -> bool:
        """Check if a provider is registered."""
        return name in cls._providers

    @classmethod
    def clear_cache(cls) -> None:
        """Clear all cached provider instances."""
        cls._instances.clear()
        logger.debug("Cleared provider instance cache")

    @classmethod
    def unregister(cls, name: str) -> bool:
        """
        Unregister a provider (mainly for testing).

        Returns:
            True if provider was unregistered
        """
        if name in cls._providers:
            del cls._providers[name]
            keys_to_remove = [k for k in cls._instances if k.split(":", 1)[0] == name]
            for k in keys_to_remove:
                del cls._instances[k]
            return True
        return False


def _auto_register_providers():
    """
    Register the bundled providers.
    Called on module import.
    """
    from .huggingface_provider import HuggingFaceProvider
    from .openai_provider import OpenAIProvider

    ProviderFactory.register("huggingface", HuggingFaceProvider)
    ProviderFactory.register("openai", OpenAIProvider)


# Auto-register on import
_auto_register_providers()
