"""Optional per-project configuration from .goscope.toml or goscope.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILES = (".goscope.toml", "goscope.toml")
DEFAULT_TOP = 20


@dataclass
class Config:
    exclude: list[str] = field(default_factory=list)  # Extra directory names to skip
    top: int = DEFAULT_TOP  # Rows in the most-called table


def load_config(project_dir: Path) -> Config:
    """Read the ``[goscope]`` table of the first config file found."""
    for file_name in CONFIG_FILES:
        config_path = project_dir / file_name
        if not config_path.exists():
            continue
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.debug("Ignoring %s: %s", config_path, e)
            continue
        return _from_table(data.get("goscope", {}), config_path)

    return Config()


def _from_table(table: dict, config_path: Path) -> Config:
    config = Config()

    exclude = table.get("exclude")
    if isinstance(exclude, list) and all(isinstance(e, str) for e in exclude):
        config.exclude = exclude
    elif exclude is not None:
        logger.warning("%s: 'exclude' must be a list of strings", config_path)

    top = table.get("top")
    if isinstance(top, int) and not isinstance(top, bool) and top >= 0:
        config.top = top
    elif top is not None:
        logger.warning("%s: 'top' must be a non-negative integer", config_path)

    return config
