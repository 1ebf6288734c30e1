"""Configuration-related exceptions for LLMO Checker."""

from .base import LLMOError


class ConfigurationError(LLMOError):
    """Configuration or environment variable errors."""

    error_code = "LLMO_CFG_001"
    user_message = "The service is not configured correctly. Please contact the administrator."


class MissingAPIKeyError(ConfigurationError):
    """Required API key or endpoint is not configured."""

    error_code = "LLMO_CFG_002"


class InvalidConfigurationError(ConfigurationError):
    """Configuration value is invalid."""

    error_code = "LLMO_CFG_003"
