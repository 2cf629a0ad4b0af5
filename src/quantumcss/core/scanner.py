"""
Class token scanner.

Expands the configured content globs, reads each matched file as text and
collects every whitespace-separated token found inside ``class="..."``
attributes. Unreadable files are skipped: the remaining files still produce
usable output.
"""

from __future__ import annotations

import glob
import logging
import re
from collections.abc import Iterable
from pathlib import Path

from .errors import ScanError

logger = logging.getLogger(__name__)

CLASS_ATTRIBUTE = re.compile(r"""(?<![\w-])class\s*=\s*(?:"([^"]*)"|'([^']*)')""")

_BRACES = re.compile(r"\{([^{}]*)\}")


def expand_braces(pattern: str) -> list[str]:
    """Expand ``*.{html,js}`` style alternations, which ``glob`` does not support."""
    match = _BRACES.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def expand_patterns(patterns: Iterable[str], base_dir: Path | None = None) -> list[Path]:
    """
    Expand glob patterns to a sorted, de-duplicated list of files.

    Args:
        patterns: Glob patterns (``**`` is recursive, ``{a,b}`` alternates)
        base_dir: Directory relative patterns are resolved against (default: cwd)

    Raises:
        ScanError: If a pattern is not a string
    """
    root = Path(base_dir) if base_dir is not None else Path.cwd()
    files: set[Path] = set()
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise ScanError(f"Content pattern must be a string, got {type(pattern).__name__}")
        for expanded in expand_braces(pattern):
            for match in glob.glob(expanded, root_dir=root, recursive=True):
                path = root / match
                if path.is_file():
                    files.add(path)
    return sorted(files)


def extract_classes(text: str) -> set[str]:
    """Return every token inside the ``class`` attributes of ``text``."""
    tokens: set[str] = set()
    for match in CLASS_ATTRIBUTE.finditer(text):
        value = match.group(1) if match.group(1) is not None else match.group(2)
        tokens.update(value.split())
    return tokens


def scan(patterns: Iterable[str], base_dir: Path | None = None) -> set[str]:
    """
    Collect the distinct class tokens used across all matched files.

    Args:
        patterns: Content glob patterns from the config
        base_dir: Directory relative patterns are resolved against

    Returns:
        Unordered set of class tokens
    """
    tokens: set[str] = set()
    files = expand_patterns(patterns, base_dir)
    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.debug("Skipping unreadable content file %s: %s", path, e)
            continue
        tokens.update(extract_classes(text))
    logger.debug("Scanned %d files, found %d class tokens", len(files), len(tokens))
    return tokens
