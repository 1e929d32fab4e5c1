"""
Config file: ToC defaults (insertion page, page offset, heading, level styles,
fonts) stored as JSON in .toc_maker.json.

Lookup order: env TOC_MAKER_CONFIG, then the working directory and its parents.
Relative font paths are resolved against the config file's directory.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict

from pydantic import ValidationError

from toc_maker.models import TocConfig

log = logging.getLogger(__name__)

CONFIG_FILENAME = ".toc_maker.json"
CONFIG_ENV = "TOC_MAKER_CONFIG"


class ConfigError(Exception):
    """Raised when the config file exists but cannot be parsed or validated."""


def _find_config_file() -> Path | None:
    """Return path to an existing config file, or None."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        p = Path(env_path).resolve()
        if p.exists():
            return p
    for d in [Path.cwd(), *Path.cwd().parents]:
        cf = (d / CONFIG_FILENAME).resolve()
        if cf.exists():
            return cf
    return None


def get_config_path() -> Path:
    """Path to the config file. Env TOC_MAKER_CONFIG wins; else an existing file up the tree; else cwd for create."""
    env_path = os.environ.get(CONFIG_ENV)
    if env_path:
        return Path(env_path).resolve()
    found = _find_config_file()
    if found is not None:
        return found
    return (Path.cwd() / CONFIG_FILENAME).resolve()


def _resolve_font_paths(data: Dict[str, Any], base: Path) -> Dict[str, Any]:
    for key in ("regular_font", "bold_font"):
        value = data.get(key)
        if value and not Path(value).is_absolute():
            data[key] = str((base / value).resolve())
    return data


def load_config(path: str | Path | None = None) -> TocConfig:
    """Load config from path (or the discovered file). Returns defaults when there is no file."""
    path = Path(path) if path is not None else _find_config_file()
    if path is None or not path.exists():
        log.debug("No %s found; using defaults", CONFIG_FILENAME)
        return TocConfig()
    path = path.resolve()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")
    try:
        return TocConfig.model_validate(_resolve_font_paths(data, path.parent))
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def save_config(config: TocConfig, path: str | Path | None = None) -> Path:
    """Write config as JSON. Returns the path written."""
    path = Path(path) if path is not None else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.model_dump(mode="json"), f, indent=2, ensure_ascii=False)
    return path
