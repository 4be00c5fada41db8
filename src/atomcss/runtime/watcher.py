"""
Watch mode support.

Polls the mini program directory for page, stylesheet and script changes
and regenerates the stylesheets once per burst of changes.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path

from atomcss.core.errors import AtomCssError
from atomcss.core.pipeline import GenerationContext, GenerationReport, run_generation

logger = logging.getLogger(__name__)


class FileWatcher:
    """
    Watches files for changes using polling (cross-platform compatible).

    Uses mtime-based change detection; new, modified and deleted files
    all count as changes. Changes found in one poll are reported together.
    """

    def __init__(
        self,
        paths: list[Path],
        on_change: Callable[[list[Path]], None],
        file_types: Iterable[str] = (".wxml", ".wxss"),
        poll_interval: float = 0.5,
        ignore: Iterable[Path] = (),
    ):
        """
        Initialize the file watcher.

        Args:
            paths: Directories or files to watch
            on_change: Callback receiving the changed files of one poll
            file_types: File suffixes to watch, e.g. [".wxml", ".wxss"]
            poll_interval: How often to check for changes (seconds)
            ignore: Files never reported, such as generated output
        """
        self.paths = paths
        self.on_change = on_change
        self.file_types = frozenset(file_types)
        self.poll_interval = poll_interval
        self.ignore = {p.resolve() for p in ignore}

        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        self._file_mtimes: dict[Path, float] = {}

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def start(self) -> None:
        """Start watching for file changes."""
        self._file_mtimes = self._scan_files()
        self._thread = threading.Thread(target=self._watch_loop, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop watching for file changes."""
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout=2)

    def wait(self, seconds: float) -> bool:
        """Sleep unless stopped; True if the watcher was stopped meanwhile."""
        return self._stop_event.wait(seconds)

    def _watched(self, path: Path) -> bool:
        return path.suffix in self.file_types and path.resolve() not in self.ignore

    def _scan_files(self) -> dict[Path, float]:
        """Scan all watched paths and return file mtimes."""
        mtimes: dict[Path, float] = {}

        for watch_path in self.paths:
            if not watch_path.exists():
                continue
            candidates = [watch_path] if watch_path.is_file() else watch_path.rglob("*")
            for file_path in candidates:
                if not file_path.is_file() or not self._watched(file_path):
                    continue
                try:
                    mtimes[file_path] = file_path.stat().st_mtime
                except OSError:
                    # removed between listing and stat
                    continue

        return mtimes

    def poll(self) -> list[Path]:
        """Rescan once and return the files changed since the previous scan."""
        current = self._scan_files()
        changed = [
            path
            for path, mtime in current.items()
            if path not in self._file_mtimes or mtime > self._file_mtimes[path]
        ]
        changed.extend(path for path in self._file_mtimes if path not in current)
        self._file_mtimes = current
        return sorted(changed)

    def _watch_loop(self) -> None:
        """Main watch loop that polls for file changes."""
        while not self._stop_event.is_set():
            try:
                changed = self.poll()
                if changed:
                    self.on_change(changed)
            except Exception:
                logger.exception("File watcher error")

            self._stop_event.wait(self.poll_interval)


class RegenerationWatcher:
    """
    Regenerates a project's stylesheets whenever its files change.

    A change starts a ``delay`` second quiet period; changes arriving in
    that period are absorbed, then one generation run follows.
    """

    def __init__(
        self,
        work_dir: Path,
        context: GenerationContext,
        on_report: Callable[[GenerationReport], None] | None = None,
    ):
        self.work_dir = work_dir
        self.context = context
        self.on_report = on_report
        self.refresh_count = 0

        config = context.config
        self.delay = config.watch.delay
        self.watcher = FileWatcher(
            paths=[work_dir],
            on_change=self.handle_change,
            file_types=config.watch.file_types,
            poll_interval=config.watch.poll_interval,
            ignore=[
                work_dir / config.files.css_var_file,
                work_dir / config.files.css_output_file,
            ],
        )

    def start(self) -> None:
        self.watcher.start()
        logger.info("[task] watching %s for %s", self.work_dir, ",".join(sorted(self.watcher.file_types)))

    def stop(self) -> None:
        self.watcher.stop()

    def handle_change(self, paths: list[Path]) -> None:
        """Debounce a burst of changes into one generation run."""
        logger.info("[file changed] %s", ";".join(str(p) for p in paths))
        if self.delay > 0 and self.watcher.wait(self.delay):
            return
        absorbed = self.watcher.poll()
        if absorbed:
            logger.debug("Absorbed %d further changes", len(absorbed))
        self.regenerate()

    def regenerate(self) -> GenerationReport | None:
        """Run one generation; errors are logged and watching continues."""
        try:
            report = run_generation(self.work_dir, self.context)
        except AtomCssError as e:
            logger.error("Generation failed: %s", e)
            return None
        self.refresh_count += 1
        logger.info("[task] refresh %dx, status %s", self.refresh_count, report.status.name)
        if self.on_report is not None:
            self.on_report(report)
        return report
