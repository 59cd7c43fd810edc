"""YAML configuration — default color mode for the process.

    color:
      mode: auto    # always | never | auto | stdout | stderr | stdin

The file comes from an explicit path or ``$SGRKIT_CONFIG``; without either,
the environment-derived default stays in place.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from sgrkit.mode import ColorMode, set_default_mode

log = logging.getLogger(__name__)

CONFIG_ENV = "SGRKIT_CONFIG"


class ConfigError(ValueError):
    """The config file is unreadable or holds invalid values."""


@dataclass(frozen=True, slots=True)
class SgrConfig:
    mode: ColorMode | None = None  # None → keep the environment default

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SgrConfig:
        color = data.get("color", {})
        if color is None:
            color = {}
        if not isinstance(color, dict):
            raise ConfigError("'color' must be a mapping")
        raw_mode = color.get("mode")
        if raw_mode is None:
            return cls()
        try:
            return cls(mode=ColorMode.parse(str(raw_mode)))
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc


def load_config(path: str | Path | None = None) -> SgrConfig:
    if path is None:
        env_path = os.environ.get(CONFIG_ENV)
        if not env_path:
            return SgrConfig()
        path = env_path
    path = Path(path)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        log.warning("Invalid YAML in %s", path)
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        log.warning("Config %s is not a mapping", path)
        raise ConfigError(f"{path}: top level must be a mapping")

    config = SgrConfig.from_dict(data)
    log.info("Loaded color config from %s (mode=%s)", path, config.mode and config.mode.value)
    return config


def apply_config(config: SgrConfig) -> None:
    if config.mode is not None:
        set_default_mode(config.mode)
