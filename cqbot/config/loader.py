"""
Configuration loading and persistence utilities.

On disk the config uses camelCase keys (``botId``), in memory snake_case
(``bot_id``).
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Callable

from loguru import logger
from pydantic import ValidationError

from cqbot.config.schema import Config
from cqbot.utils.helpers import get_data_path


# =============================
# Paths
# =============================

def get_config_path() -> Path:
    """
    Return default configuration file path.

    Default:
        ~/.cqbot/config.json
    """
    return get_data_path() / "config.json"


# =============================
# Load & Save
# =============================

def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from disk or fallback to defaults.

    Flow:
        1. Read raw JSON
        2. camelCase → snake_case
        3. Pydantic validation (environment overrides applied here)
    """
    path = config_path or get_config_path()

    if not path.exists():
        logger.warning("Config file not found, using defaults | path={}", path)
        return Config()

    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)

        config = Config(**rename_keys(raw, to_snake))

        logger.info("Config loaded | path={}", path)
        return config

    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in config | path={} err={}", path, e)

    except ValidationError as e:
        logger.error("Invalid config | path={} err={}", path, e)

    logger.warning("Falling back to default configuration")
    return Config()


def save_config(config: Config, config_path: Path | None = None) -> Path:
    """
    Persist configuration to disk.

    Behavior:
        - snake_case → camelCase
        - Pretty JSON formatting
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data = rename_keys(config.model_dump(), to_camel)

    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info("Config saved | path={}", path)
    return path


# =============================
# Key naming (disk ↔ memory)
# =============================

_CAMEL_HUMP_RE = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_snake(name: str) -> str:
    """botId → bot_id"""
    return _CAMEL_HUMP_RE.sub(r"_\1", name).lower()


def to_camel(name: str) -> str:
    """bot_id → botId"""
    first, _, rest = name.partition("_")
    return first + rest.title().replace("_", "") if rest else first


def rename_keys(data: Any, rename: Callable[[str], str]) -> Any:
    """Apply ``rename`` to every key of the nested config sections."""
    if not isinstance(data, dict):
        return data
    return {rename(key): rename_keys(value, rename) for key, value in data.items()}
