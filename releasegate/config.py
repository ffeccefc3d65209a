"""Configuration loading for releasegate (.releasegate.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_FILENAME = ".releasegate.yml"

DEFAULT_BASE_REF = "origin/develop"
DEFAULT_HEAD_REF = "HEAD"
DEFAULT_TRUTH_BRANCH = "origin/main"
DEFAULT_HTML_PATH = "frontend/index.html"
DEFAULT_CHECKSUMS_PATH = "CHECKSUMS.json"
DEFAULT_INJECT_COMMAND = "make inject-commit"
DEFAULT_CHECKSUMS_COMMAND = "make generate-checksums"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class PathsConfig:
    """Files that the hash-injection and checksum commits may touch."""

    html: str = DEFAULT_HTML_PATH
    checksums: str = DEFAULT_CHECKSUMS_PATH


@dataclass
class CommandsConfig:
    """Commands suggested to the release manager when a slot fails."""

    merge: Optional[str] = None
    inject: str = DEFAULT_INJECT_COMMAND
    checksums: str = DEFAULT_CHECKSUMS_COMMAND


@dataclass
class GateConfig:
    """Represents the settings defined in .releasegate.yml."""

    root: Path
    base: str = DEFAULT_BASE_REF
    head: str = DEFAULT_HEAD_REF
    truth_branch: str = DEFAULT_TRUTH_BRANCH
    paths: PathsConfig = field(default_factory=PathsConfig)
    commands: CommandsConfig = field(default_factory=CommandsConfig)

    @property
    def merge_command(self) -> str:
        return self.commands.merge or f"git merge {self.truth_branch}"


def load_config(config_path: Path) -> GateConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GateConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = GateConfig(root=root)
    config.base = _as_str(data.get("base")) or config.base
    config.head = _as_str(data.get("head")) or config.head
    config.truth_branch = _as_str(data.get("truth_branch")) or config.truth_branch

    paths_data = _as_section(data, "paths")
    config.paths.html = _as_str(paths_data.get("html")) or config.paths.html
    config.paths.checksums = _as_str(paths_data.get("checksums")) or config.paths.checksums
    if config.paths.html == config.paths.checksums:
        raise ConfigError("paths.html and paths.checksums must name different files")

    commands_data = _as_section(data, "commands")
    config.commands.merge = _as_str(commands_data.get("merge"))
    config.commands.inject = _as_str(commands_data.get("inject")) or config.commands.inject
    config.commands.checksums = (
        _as_str(commands_data.get("checksums")) or config.commands.checksums
    )

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' in {CONFIG_FILENAME} must be a mapping")
    return value


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        text = str(value).strip()
        return text or None
    return None


__all__ = [
    "CONFIG_FILENAME",
    "CommandsConfig",
    "ConfigError",
    "GateConfig",
    "PathsConfig",
    "load_config",
]
