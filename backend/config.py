"""App configuration: defaults overridden by environment variables.

Values are read from the process environment after loading `.env` from the
repository root. get_config() returns a fresh dict each call so tests can
patch the environment and build an app with a different setup.
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from backend.prompts import DEFAULT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

load_dotenv(Path(__file__).parent.parent / ".env")

_CONFIG_DEFAULTS: dict[str, Any] = {
    "api_key": "",
    "provider_url": "https://api.groq.com/openai",
    "provider_format": "openai",
    "model": "llama-3.3-70b-versatile",
    "timeout": 30.0,
    "max_tokens": 1000,
    "system_prompt": DEFAULT_SYSTEM_PROMPT,
    "host": "0.0.0.0",
    "port": 3000,
    "log_level": "INFO",
}

# config key -> environment variable
_ENV_KEYS: dict[str, str] = {
    "api_key": "API_KEY",
    "provider_url": "LLM_PROVIDER_URL",
    "provider_format": "LLM_PROVIDER_FORMAT",
    "model": "LLM_MODEL",
    "timeout": "LLM_TIMEOUT",
    "max_tokens": "LLM_MAX_TOKENS",
    "system_prompt": "SYSTEM_PROMPT",
    "host": "HOST",
    "port": "PORT",
    "log_level": "LOG_LEVEL",
}


def _coerce(key: str, raw: str) -> Any:
    default = _CONFIG_DEFAULTS[key]
    if isinstance(default, (int, float)):
        try:
            return type(default)(raw)
        except ValueError:
            logger.warning("invalid %s=%r, using %r", _ENV_KEYS[key], raw, default)
            return default
    return raw


def get_config(env: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return defaults merged with values from `env` (os.environ by default)."""
    env = os.environ if env is None else env
    config = dict(_CONFIG_DEFAULTS)
    for key, var in _ENV_KEYS.items():
        raw = env.get(var)
        if raw is not None and raw != "":
            config[key] = _coerce(key, raw)
    if config["provider_format"] not in ("openai", "koboldcpp", "echo"):
        logger.warning("unknown LLM_PROVIDER_FORMAT %r, using openai", config["provider_format"])
        config["provider_format"] = "openai"
    return config
