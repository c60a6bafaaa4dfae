"""Configuration loading, schema, and defaults."""

from composer_diff.config.loader import load_config
from composer_diff.config.schema import ComposerDiffConfig, OutputFormat
from composer_diff.exceptions import ConfigError

__all__ = [
    "ComposerDiffConfig",
    "ConfigError",
    "OutputFormat",
    "load_config",
]
