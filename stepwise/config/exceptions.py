"""Configuration system exceptions."""


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass
