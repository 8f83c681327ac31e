import os
import json
import logging
from typing import Dict, Optional

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"

# Environment variables consulted when a provider key is absent from the file
PROVIDER_ENV_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
    "gemini": "GEMINI_API_KEY",
}
DEFAULT_PROVIDER_ENV_VAR = "AI_DETECTOR_DEFAULT_PROVIDER"

# Application-wide configuration
APP_CONFIG = {
    'HOST': os.getenv("AI_DETECTOR_HOST", "0.0.0.0"),
    'PORT': int(os.getenv("AI_DETECTOR_PORT", 5000)),
    'FETCH_TIMEOUT': float(os.getenv("AI_DETECTOR_FETCH_TIMEOUT", 10)),
    'LOG_FILE': os.getenv("AI_DETECTOR_LOG_FILE", "ai_detector.log"),
}


def load_llm_config(path: Optional[str] = None) -> Dict:
    """
    Load provider configuration from a JSON file, filling gaps from the environment

    Args:
        path (str, optional): Config file; the default file may be absent

    Returns:
        Dict: Provider keys plus default_provider and optional settings
    """
    config: Dict = {}
    config_path = path or DEFAULT_CONFIG_PATH

    try:
        with open(config_path, 'r') as config_file:
            config = json.load(config_file)
    except FileNotFoundError:
        if path:
            raise ConfigError(f"{config_path} not found. Please create it with LLM provider configurations.")
        logger.info(f"{config_path} not found, using environment configuration")
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid {config_path} format: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Invalid {config_path} format: expected a JSON object")

    for provider, env_var in PROVIDER_ENV_VARS.items():
        if provider not in config and os.getenv(env_var):
            config[provider] = os.environ[env_var]

    if "default_provider" not in config and os.getenv(DEFAULT_PROVIDER_ENV_VAR):
        config["default_provider"] = os.environ[DEFAULT_PROVIDER_ENV_VAR]

    return config
