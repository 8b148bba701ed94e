"""
Secrets management for PitchDeck Scout using the system keyring.

API keys and the mail access token are looked up in the keyring first
(service "pitchdeck", entry "<name>_api_key") and then in the
environment, so a `.env` file works for local runs.
"""

import logging
import os
from typing import Optional

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

logger = logging.getLogger(__name__)

# Service name for keyring entries
SERVICE_NAME = "pitchdeck"

# Environment fallbacks per secret name
ENV_VARS = {
    "huggingface": "HUGGINGFACE_ACCESS_TOKEN",
    "openai": "OPENAI_API_KEY",
    "gmail": "GMAIL_ACCESS_TOKEN",
}


def get_api_key(provider: str) -> Optional[str]:
    """
    Retrieve the API key (or access token) for a provider.

    Args:
        provider: Secret name (e.g., 'huggingface', 'openai', 'gmail')

    Returns:
        Key string or None if neither keyring nor environment has one
    """
    try:
        key = keyring.get_password(SERVICE_NAME, f"{provider}_api_key")
        if key:
            logger.debug(f"Retrieved API key for {provider} from keyring")
            return key
    except KeyringError as e:
        logger.warning(f"Keyring lookup failed for {provider}: {e}")

    env_var = ENV_VARS.get(provider)
    if env_var and os.environ.get(env_var):
        logger.debug(f"Retrieved API key for {provider} from ${env_var}")
        return os.environ[env_var]

    return None


def set_api_key(provider: str, api_key: str) -> bool:
    """
    Store API key for a provider in the keyring.

    Returns:
        True if successful, False otherwise
    """
    try:
        keyring.set_password(SERVICE_NAME, f"{provider}_api_key", api_key)
        logger.info(f"Stored API key for {provider} in keyring")
        return True
    except KeyringError as e:
        logger.error(f"Failed to store API key for {provider}: {e}")
        return False


def delete_api_key(provider: str) -> bool:
    """Remove API key for a provider from the keyring."""
    try:
        keyring.delete_password(SERVICE_NAME, f"{provider}_api_key")
        logger.info(f"Deleted API key for {provider} from keyring")
        return True
    except PasswordDeleteError:
        logger.warning(f"No API key found for {provider} to delete")
        return False
    except KeyringError as e:
        logger.error(f"Failed to delete API key for {provider}: {e}")
        return False
