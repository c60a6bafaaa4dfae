"""Load and merge configuration from .composer-diff.toml and env vars."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from loguru import logger

from composer_diff.config.defaults import CONFIG_FILENAME
from composer_diff.config.schema import (
    OUTPUT_FORMATS,
    CommentConfig,
    ComposerDiffConfig,
    DiffConfig,
    GitHubConfig,
    OutputConfig,
)
from composer_diff.exceptions import ConfigError


def find_config_file(root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    unknown = set(raw) - valid_fields
    if unknown:
        logger.warning("Ignoring unknown keys in [{}]: {}", section, ", ".join(sorted(unknown)))
    return cls(**{k: v for k, v in raw.items() if k in valid_fields})


def _merge_env_overrides(cfg: ComposerDiffConfig) -> None:
    """Apply COMPOSER_DIFF_* environment variable overrides."""
    if val := os.environ.get("COMPOSER_DIFF_PATH"):
        cfg.diff.path = val
    if val := os.environ.get("COMPOSER_DIFF_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("COMPOSER_DIFF_API_URL"):
        cfg.github.api_url = val
    if val := os.environ.get("COMPOSER_DIFF_TIMEOUT"):
        try:
            cfg.github.timeout = float(val)
        except ValueError:
            pass


def load_config(root: Path, config_override: Optional[str] = None) -> ComposerDiffConfig:
    """Load, validate, and return a ComposerDiffConfig."""
    config_path = find_config_file(root, config_override)

    if config_path is None:
        cfg = ComposerDiffConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = ComposerDiffConfig(
            version=raw.get("version", "1.0"),
            diff=_build_section(raw, DiffConfig, "diff"),
            github=_build_section(raw, GitHubConfig, "github"),
            output=_build_section(raw, OutputConfig, "output"),
            comment=_build_section(raw, CommentConfig, "comment"),
        )
        if cfg.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output format in {config_path}: {cfg.output.format}")

    _merge_env_overrides(cfg)
    return cfg
