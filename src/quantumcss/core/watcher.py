"""
Polling watcher behind ``quantumcss build --watch``.

Tracks the mtimes of the config file and every file matched by the content
globs. Any change (new, modified or deleted file) triggers a full re-run of the
generation pass; there is no incremental state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from pathlib import Path

from .config_loader import config_base_dir, reload_config
from .scanner import expand_patterns

logger = logging.getLogger(__name__)


class ContentWatcher:
    """
    Watches a config file and its content globs using mtime polling.

    Args:
        config_path: Config file to watch (None: defaults, nothing to re-read)
        on_change: Called with the list of changed paths
        poll_interval: Seconds between polls
    """

    def __init__(
        self,
        config_path: Path | None,
        on_change: Callable[[list[Path]], None],
        poll_interval: float = 0.5,
    ):
        self.config_path = config_path
        self.on_change = on_change
        self.poll_interval = poll_interval
        self._stop_event = threading.Event()
        self._mtimes: dict[Path, int] = {}

    def watched_files(self) -> list[Path]:
        """Config file plus the files its content globs currently match."""
        files: list[Path] = []
        if self.config_path is not None:
            files.append(self.config_path.resolve())
        config = reload_config(self.config_path)
        files.extend(expand_patterns(config.content, config_base_dir(self.config_path)))
        return files

    def snapshot(self) -> dict[Path, int]:
        mtimes: dict[Path, int] = {}
        for path in self.watched_files():
            try:
                mtimes[path] = path.stat().st_mtime_ns
            except OSError:
                continue
        return mtimes

    def start(self) -> None:
        """Record the current state without reporting it as a change."""
        self._mtimes = self.snapshot()

    def poll(self) -> list[Path]:
        """Return paths that changed since the previous poll."""
        current = self.snapshot()
        changed = [path for path, mtime in current.items() if self._mtimes.get(path) != mtime]
        changed.extend(path for path in self._mtimes if path not in current)
        self._mtimes = current
        return sorted(changed)

    def run(self) -> None:
        """Poll until ``stop()`` is called, invoking ``on_change`` on changes."""
        self.start()
        while not self._stop_event.wait(self.poll_interval):
            changed = self.poll()
            if changed:
                logger.debug("Detected changes in %d file(s)", len(changed))
                self.on_change(changed)

    def stop(self) -> None:
        self._stop_event.set()
