#!/usr/bin/env python3
"""
BOA CONFIG - Project Settings Loader
------------------------------------
Reads an optional YAML project file and turns it into CompileOptions plus
watch-mode settings. Command-line flags are merged on top by the CLI.

Example boa.yaml:
    indent: 4
    root_selector: ":root"
    compact: false
    hover_guard: true
    watch:
      interval: 0.1
      debounce: 0.03

Author: Boa Team
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML, YAMLError

from boa.core.models import CompileOptions

logger = logging.getLogger("boa.config")

DEFAULT_CONFIG_NAMES = ["boa.yaml", ".boa.yaml"]
KNOWN_KEYS = {"indent", "root_selector", "compact", "minify", "hover_guard", "watch"}

class ConfigError(Exception):
    """Raised when a project file cannot be read or holds invalid values."""

@dataclass
class WatchSettings:
    interval: float = 0.1       # Seconds between mtime polls
    debounce: float = 0.03      # Quiet period before recompiling

@dataclass
class BoaConfig:
    options: CompileOptions = field(default_factory=CompileOptions)
    watch: WatchSettings = field(default_factory=WatchSettings)
    source_path: Optional[Path] = None

def find_config(start: Path) -> Optional[Path]:
    """Returns the first default config file found in `start`, if any."""
    for name in DEFAULT_CONFIG_NAMES:
        candidate = start / name
        if candidate.is_file():
            return candidate
    return None

def _indent_unit(value: Any) -> str:
    if isinstance(value, bool):
        raise ConfigError("'indent' must be a number of spaces or a string")
    if isinstance(value, int):
        if value < 0:
            raise ConfigError("'indent' must not be negative")
        return " " * value
    if isinstance(value, str):
        return value
    raise ConfigError("'indent' must be a number of spaces or a string")

def _flag(data: Dict[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return value

def _seconds(data: Dict[str, Any], key: str) -> float:
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ConfigError(f"'watch.{key}' must be a non-negative number")
    return float(value)

def parse_config(data: Optional[Dict[str, Any]]) -> BoaConfig:
    """Validates a loaded mapping. An empty file yields the defaults."""
    if data is None:
        return BoaConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping")

    for key in data:
        if key not in KNOWN_KEYS:
            logger.warning(f"Ignoring unknown config key '{key}'")

    overrides: Dict[str, Any] = {}
    if "indent" in data:
        overrides["indent"] = _indent_unit(data["indent"])
    if "root_selector" in data:
        if not isinstance(data["root_selector"], str) or not data["root_selector"].strip():
            raise ConfigError("'root_selector' must be a non-empty string")
        overrides["root_selector"] = data["root_selector"].strip()
    for alias in ("minify", "compact"):
        if alias in data:
            overrides["compact"] = _flag(data, alias)
    if "hover_guard" in data:
        overrides["hover_guard"] = _flag(data, "hover_guard")

    watch = WatchSettings()
    watch_data = data.get("watch") or {}
    if not isinstance(watch_data, dict):
        raise ConfigError("'watch' must be a mapping")
    if "interval" in watch_data:
        watch.interval = _seconds(watch_data, "interval")
    if "debounce" in watch_data:
        watch.debounce = _seconds(watch_data, "debounce")

    return BoaConfig(options=replace(CompileOptions(), **overrides), watch=watch)

def load_config(path: Optional[Path] = None, search_dir: Optional[Path] = None) -> BoaConfig:
    """
    Loads `path`, or the first default config file in `search_dir`
    (working directory when omitted). No file means defaults.
    """
    if path is None:
        path = find_config(search_dir or Path.cwd())
        if path is None:
            return BoaConfig()
    elif not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    yaml = YAML(typ="safe")
    try:
        data = yaml.load(path.read_text(encoding="utf-8-sig"))
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    config = parse_config(data)
    config.source_path = path
    logger.debug(f"Loaded config from {path}")
    return config
