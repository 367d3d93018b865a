"""Risk list loading from JSON files or Python config modules."""

import importlib.util
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STRING_CHECK_CONFIG"
DEFAULT_CONFIG_FILE = "risk-urls.json"

# Config files with these extensions are executed as Python modules
MODULE_EXTENSIONS = {".py"}

SHAPE_ERROR = 'Config must provide a list of strings, or a {"urls": [...]} object'


def normalize_urls(source: Any) -> list[str]:
    """
    Turn a loaded config value into an ordered list of non-empty strings.

    Accepts a list, or a mapping with a "urls" list.
    None items and empty strings are dropped; other items are converted with str().

    Raises:
        ConfigError: For any other shape, or when nothing usable remains.
    """
    urls = source.get("urls") if isinstance(source, Mapping) else source
    if not isinstance(urls, (list, tuple)) or len(urls) == 0:
        raise ConfigError(SHAPE_ERROR)

    normalized = [str(url) for url in urls if url is not None and str(url)]
    if not normalized:
        raise ConfigError("Config contains no non-empty risk strings")
    return normalized


def _load_module_source(config_path: Path) -> Any:
    module_name = f"string_check_config_{config_path.stem.replace('-', '_')}"
    spec = importlib.util.spec_from_file_location(module_name, config_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import {config_path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    for attr in ("urls", "URLS"):
        if hasattr(module, attr):
            return getattr(module, attr)
    return None


def load_risk_list(config_path: str | Path) -> list[str]:
    """
    Load the risk list from a config file.

    ``.py`` files are executed and their ``urls`` (or ``URLS``) attribute is
    used; every other file is parsed as JSON.

    Raises:
        ConfigError: If the file is missing, fails to load, or has the wrong shape.
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    if config_path.suffix.lower() in MODULE_EXTENSIONS:
        try:
            source = _load_module_source(config_path)
        except Exception as e:
            raise ConfigError(f"Failed to load config module: {e}") from e
    else:
        try:
            source = json.loads(config_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to read config: {e}") from e

    urls = normalize_urls(source)
    logger.debug(f"Loaded {len(urls)} risk strings from {config_path}")
    return urls


def default_config_path() -> Path:
    """Config path from $STRING_CHECK_CONFIG, else risk-urls.json in the cwd."""
    return Path(os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_FILE).resolve()


def resolve_risk_list(risk_urls: list[str] | str | Path | None) -> list[str]:
    """Resolve an inline list, a config path, or the env-configured path."""
    if isinstance(risk_urls, (list, tuple)):
        return normalize_urls(list(risk_urls))

    if isinstance(risk_urls, (str, Path)):
        return load_risk_list(Path(risk_urls).resolve())

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_risk_list(Path(env_path).resolve())

    raise ConfigError(
        f"No risk list given: pass a list of strings or a config path, or set {CONFIG_ENV_VAR}"
    )
