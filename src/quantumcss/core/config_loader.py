"""
Config loading for QuantumCSS.

Reads ``quantum.config.{json,yaml,yml,toml}`` into a ``QuantumConfig``.

``load_config`` is strict and raises ``ConfigError``; ``reload_config`` is the
fail-open wrapper used by build passes: it re-reads a config only when the
file changed (tracked by a caller-owned ``ConfigCache``) and falls back to
built-in defaults when the file is missing or broken.
"""

from __future__ import annotations

import json
import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .ir import QuantumConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = (
    "quantum.config.json",
    "quantum.config.yaml",
    "quantum.config.yml",
    "quantum.config.toml",
)


# =============================================================================
# Path helpers
# =============================================================================


def find_config(directory: Path) -> Path | None:
    """Return the first config file present in ``directory``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def config_base_dir(config_path: Path | None) -> Path:
    """Directory content globs are resolved against."""
    if config_path is None:
        return Path.cwd()
    return config_path.resolve().parent


# =============================================================================
# Loading
# =============================================================================


def _parse_document(path: Path, text: str) -> Any:
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            return json.loads(text)
        if suffix in (".yaml", ".yml"):
            return yaml.safe_load(text)
        if suffix == ".toml":
            return tomllib.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON: {e}", path) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", path) from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML: {e}", path) from e
    raise ConfigError(f"Unsupported config format '{path.suffix}'", path)


def load_config(path: Path) -> QuantumConfig:
    """Load and validate a config file.

    Args:
        path: Path to a ``.json``, ``.yaml``/``.yml`` or ``.toml`` config

    Returns:
        Validated QuantumConfig

    Raises:
        ConfigError: If the file is missing, unreadable, unparsable or invalid
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError("Config file not found", path)

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read config: {e}", path) from e

    data = _parse_document(path, text)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config must be a mapping, got {type(data).__name__}", path)

    try:
        return QuantumConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config schema: {e}", path) from e


@dataclass
class _CacheEntry:
    mtime_ns: int
    config: QuantumConfig


@dataclass
class ConfigCache:
    """Parsed configs keyed by resolved path, invalidated by file mtime."""

    entries: dict[Path, _CacheEntry] = field(default_factory=dict)

    def get(self, path: Path, mtime_ns: int) -> QuantumConfig | None:
        entry = self.entries.get(path)
        if entry is None or entry.mtime_ns != mtime_ns:
            return None
        return entry.config

    def put(self, path: Path, mtime_ns: int, config: QuantumConfig) -> None:
        self.entries[path] = _CacheEntry(mtime_ns=mtime_ns, config=config)

    def invalidate(self, path: Path | None = None) -> None:
        if path is None:
            self.entries.clear()
        else:
            self.entries.pop(Path(path).resolve(), None)

    def __len__(self) -> int:
        return len(self.entries)


def reload_config(path: Path | None, cache: ConfigCache | None = None) -> QuantumConfig:
    """Load a config for a build pass, falling back to defaults on failure.

    Args:
        path: Config file path (None means "no config": defaults)
        cache: Optional cache; an unchanged file is not re-parsed

    Returns:
        The parsed config, or ``QuantumConfig()`` if it could not be loaded
    """
    if path is None:
        logger.debug("No config file, using defaults")
        return QuantumConfig()

    resolved = Path(path).resolve()
    try:
        mtime_ns = resolved.stat().st_mtime_ns
    except OSError:
        logger.warning("Config file %s not found, using defaults", resolved)
        if cache is not None:
            cache.invalidate(resolved)
        return QuantumConfig()

    if cache is not None:
        cached = cache.get(resolved, mtime_ns)
        if cached is not None:
            return cached

    try:
        config = load_config(resolved)
    except ConfigError as e:
        logger.warning("%s; using defaults", e)
        if cache is not None:
            cache.invalidate(resolved)
        return QuantumConfig()

    if cache is not None:
        cache.put(resolved, mtime_ns, config)
    return config
