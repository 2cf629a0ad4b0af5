"""
QuantumCSS - utility-first CSS generated just in time.

Scans markup for ``class="..."`` tokens and emits only the CSS rules those
tokens need, driven by a configurable theme.
"""

from __future__ import annotations

from ._version import get_version
from .core import (
    ClassResolver,
    ConfigCache,
    ConfigError,
    QuantumConfig,
    QuantumError,
    ScanError,
    generate,
    generate_css,
    generate_from_classes,
    load_config,
    reload_config,
)

__version__ = get_version()

__all__ = [
    "__version__",
    "ClassResolver",
    "ConfigCache",
    "ConfigError",
    "QuantumConfig",
    "QuantumError",
    "ScanError",
    "generate",
    "generate_css",
    "generate_from_classes",
    "load_config",
    "reload_config",
]
