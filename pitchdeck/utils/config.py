import copy
import os
import json
from typing import Any, Dict, Optional

from .logger import logger

"""
Configuration loader for PitchDeck Scout.

Behavior:
- Looks for config path in env var `PITCHDECK_CONFIG`.
- Falls back to `pitchdeck/config.json` next to the package.
- If not found, attempts to load `pitchdeck/config.json.example` and then
  built-in defaults.

Sections missing from a loaded file are filled in from the defaults.
"""

_DEFAULT_CONFIG: Dict[str, Any] = {
    "self_address": "",
    "attachments_dir": "./attachmentsDownloaded",
    "classification": {"threshold": 60, "max_repair_attempts": 5},
    "extraction": {"strict_part_layout": True},
    "providers": {
        "primary": {
            "name": "huggingface",
            "model": "google/flan-t5-xxl",
            "base_url": "https://api-inference.huggingface.co/models",
            "timeout": 30,
        },
        "secondary": {
            "name": "openai",
            "model": "gpt-3.5-turbo",
            "base_url": "https://api.openai.com/v1",
            "timeout": 30,
        },
    },
    "gmail": {
        "base_url": "https://gmail.googleapis.com/gmail/v1",
        "user_id": "me",
        "max_results": 100,
    },
    "max_workers": 1,
}

_SCHEMA_PATH = os.path.join(
    os.path.dirname(__file__), "..", "json_schema", "config.schema.json"
)

_config_cache: Dict[str, Any] = {}


def _default_config_path() -> str:
    base_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    return os.path.join(base_dir, "config.json")


def _merge_defaults(cfg: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(_DEFAULT_CONFIG)
    for key, value in cfg.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            if key == "providers":
                for tier, tier_cfg in value.items():
                    merged["providers"].setdefault(tier, {}).update(tier_cfg)
            else:
                merged[key].update(value)
        else:
            merged[key] = value
    return merged


def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration from JSON with sensible fallbacks.

    Returns a dictionary with every known section present.
    """
    global _config_cache
    if _config_cache:
        return _config_cache

    env_path = os.environ.get("PITCHDECK_CONFIG")
    candidates = []
    if path:
        candidates.append(path)
    if env_path:
        candidates.append(env_path)
    candidates.append(_default_config_path())
    candidates.append(
        os.path.join(os.path.dirname(__file__), "..", "config.json.example")
    )

    for p in candidates:
        try:
            p_abs = os.path.abspath(p)
            if not os.path.exists(p_abs):
                continue
            with open(p_abs, "r", encoding="utf-8") as f:
                cfg = json.load(f)
            validate_config(cfg)
            _config_cache = _merge_defaults(cfg)
            logger.info(f"Configuration loaded from {p_abs}")
            return _config_cache
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file {p}: {e}")
            continue
        except Exception as e:
            logger.warning(f"Failed to load config {p}: {e}")
            continue

    logger.warning(
        "No config found; using default configuration. Create 'pitchdeck/config.json' to customize."
    )
    _config_cache = copy.deepcopy(_DEFAULT_CONFIG)
    return _config_cache


def clear_config_cache() -> None:
    """Forget the cached configuration (tests, config reloads)."""
    global _config_cache
    _config_cache = {}


def validate_config(cfg: Dict[str, Any]) -> None:
    """Validate configuration using the bundled JSON Schema.

    Raises jsonschema.ValidationError on invalid configs.
    """
    from jsonschema import validate

    if not isinstance(cfg, dict):
        raise ValueError("Configuration must be a JSON object/dict")

    with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
        schema_data = json.load(f)

    validate(instance=cfg, schema=schema_data)


if __name__ == "__main__":
    cfg = load_config()
    print(json.dumps(cfg, indent=2))
