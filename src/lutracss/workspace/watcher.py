# lutracss.workspace.watcher - Rebuild on file changes
"""
Watches the project for stylesheet and component changes and rebuilds the
symbol index.

The watch globs are broad and independent of the configured search
patterns; a rebuild always applies the configured patterns anyway.
"""
from pathlib import Path
from typing import Optional
import asyncio
import logging

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from lutracss.index.files import matches_any

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.3
WATCHED_EVENTS = ("created", "modified", "deleted", "moved")


def watch_patterns(library: str) -> list[str]:
    """Globs whose changes trigger a rebuild."""
    return ["**/*.css", f"**/node_modules/{library}/**/*.svelte"]


class _ChangeHandler(FileSystemEventHandler):
    """Forwards relevant watchdog events to the watcher."""

    def __init__(self, watcher: "IndexWatcher"):
        super().__init__()
        self.watcher = watcher

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in WATCHED_EVENTS:
            return

        paths = [event.src_path]
        if getattr(event, "dest_path", None):
            paths.append(event.dest_path)

        for path in paths:
            if isinstance(path, bytes):
                path = path.decode()
            if self.watcher.is_watched(Path(path)):
                logger.info("File change detected (%s %s), updating variables", event.event_type, path)
                self.watcher.notify()
                return


class IndexWatcher:
    """
    Rebuilds a workspace index when watched files change.

    Events arrive on the watchdog thread and are handed to the asyncio
    loop. Bursts of events within DEBOUNCE_SECONDS collapse into one
    rebuild, and a change during a running rebuild queues exactly one
    follow-up rebuild.
    """

    def __init__(
        self,
        workspace,
        loop: asyncio.AbstractEventLoop,
        debounce: float = DEBOUNCE_SECONDS,
    ):
        """
        Initialize watcher.

        Args:
            workspace: Active Workspace to rescan
            loop: Event loop the rebuilds run on
            debounce: Quiet period before a rebuild starts
        """
        self.workspace = workspace
        self.loop = loop
        self.debounce = debounce
        self.patterns = watch_patterns(workspace.library)
        self.rebuilds = 0

        self._observer: Optional[Observer] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._task: Optional[asyncio.Task] = None
        self._rerun = False

    def is_watched(self, path: Path) -> bool:
        """Check whether a changed path should trigger a rebuild."""
        try:
            relative = path.resolve().relative_to(self.workspace.root)
        except ValueError:
            return False
        return matches_any(relative.as_posix(), self.patterns)

    def notify(self) -> None:
        """Report a change. Safe to call from any thread."""
        self.loop.call_soon_threadsafe(self._schedule)

    def _schedule(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = self.loop.call_later(self.debounce, self._fire)

    def _fire(self) -> None:
        self._timer = None
        if self._task is not None and not self._task.done():
            self._rerun = True
            return
        self._task = self.loop.create_task(self._rebuild())

    async def _rebuild(self) -> None:
        while True:
            self._rerun = False
            try:
                await self.workspace.rescan()
            except Exception:
                logger.exception("Rebuild after file change failed")
            self.rebuilds += 1
            if not self._rerun:
                break

    async def wait_idle(self) -> None:
        """Wait for any scheduled or running rebuild to finish."""
        while self._timer is not None or (self._task is not None and not self._task.done()):
            if self._task is not None and not self._task.done():
                await self._task
            else:
                await asyncio.sleep(self.debounce / 2)

    def start(self) -> "IndexWatcher":
        """Start watching the workspace root."""
        if self._observer is not None:
            return self
        logger.info("Setting up file watchers for CSS and Svelte files")
        self._observer = Observer()
        self._observer.schedule(_ChangeHandler(self), str(self.workspace.root), recursive=True)
        self._observer.start()
        return self

    def stop(self) -> None:
        """Stop watching."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._observer is not None:
            self._observer.stop()
            self._observer.join()
            self._observer = None

    def __enter__(self) -> "IndexWatcher":
        return self.start()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
