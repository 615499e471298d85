"""
Runtime utility helpers.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import Any

from loguru import logger


# ===========================
# Paths
# ===========================

def get_data_path() -> Path:
    """Return the cqbot runtime directory (~/.cqbot)."""
    return ensure_dir(Path.home() / ".cqbot")


def ensure_dir(path: Path) -> Path:
    """Ensure directory exists."""
    path.mkdir(parents=True, exist_ok=True)
    return path


# ===========================
# String Utilities
# ===========================

def truncate(s: str, max_len: int = 120, suffix: str = "...") -> str:
    """Truncate a string with suffix."""
    if len(s) <= max_len:
        return s
    return s[: max_len - len(suffix)] + suffix


# ===========================
# Logging
# ===========================

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)


def setup_logging(verbose: bool = False) -> None:
    """Replace loguru's default sink with a stderr sink at INFO or DEBUG."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO", format=LOG_FORMAT)


# ===========================
# Imports
# ===========================

def import_object(path: str) -> Any:
    """
    Import ``package.module:attr``.

    Raises:
        ValueError: invalid path format
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Invalid import path (expected module:attr): {path}")

    obj: Any = importlib.import_module(module_name)
    for part in attr.split("."):
        obj = getattr(obj, part)
    return obj
