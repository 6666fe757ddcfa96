"""
Configuration for Stepwise.

Settings are read from STEPWISE_* environment variables (and .env).
"""

from stepwise.config.exceptions import ConfigError
from stepwise.config.settings import StepwiseSettings, settings

__all__ = ["ConfigError", "StepwiseSettings", "settings"]
