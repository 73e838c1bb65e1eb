"""
Change watcher: polls the tasks root and tells subscribers when it changed.

Only the direct children of tasks_dir (the board directories) are observed.
Each tick takes a non-recursive watchdog DirectorySnapshot and compares each
child's mtime against the previous tick. A child seen for the first time is
only recorded; deletions are not reported. At most one "files-changed"
notification goes out per tick.

Lifecycle:
    watcher = ChangeWatcher(tasks_dir)
    watcher.subscribe(callback)     # callback(event_name)
    handle = watcher.start()        # idempotent while the loop is alive
    handle.cancel()                 # loop exits at its next wake-up
"""
import logging
import threading
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from watchdog.utils.dirsnapshot import DirectorySnapshot

logger = logging.getLogger(__name__)

FILES_CHANGED = "files-changed"


class WatchHandle:
    """Cancellation handle for one running poll loop."""

    def __init__(self, thread: threading.Thread, stop: threading.Event):
        self._thread = thread
        self._stop = stop

    @property
    def active(self) -> bool:
        return self._thread.is_alive() and not self._stop.is_set()

    def cancel(self) -> None:
        self._stop.set()

    def join(self, timeout: Optional[float] = None) -> None:
        self._thread.join(timeout)


class ChangeWatcher:
    """Polls the direct children of a tasks root for mtime changes."""

    def __init__(self, tasks_dir: Union[str, Path], interval: float = 1.0):
        self.tasks_dir = str(Path(tasks_dir))
        self.interval = interval
        self.subscribers: List[Callable[[str], None]] = []
        self._last_modified: Dict[str, float] = {}
        self._handle: Optional[WatchHandle] = None
        self._lock = threading.Lock()
        self._subscribers_lock = threading.Lock()

    def subscribe(self, callback: Callable[[str], None]) -> None:
        """Register a callback; it receives the event name."""
        with self._subscribers_lock:
            self.subscribers.append(callback)

    def start(self) -> WatchHandle:
        """Start the poll loop, or return the handle of the one already running."""
        with self._lock:
            if self._handle is not None and self._handle.active:
                logger.debug("Watcher already running, reusing handle")
                return self._handle
            if self._handle is not None:
                # A cancelled loop may still be mid-poll; let it finish first
                self._handle.join()

            stop = threading.Event()
            thread = threading.Thread(
                target=self._run, args=(stop,), name="mdkanban-watcher", daemon=True
            )
            self._handle = WatchHandle(thread, stop)
            thread.start()
            logger.info(f"Watching (polling, {self.interval}s): {self.tasks_dir}")
            return self._handle

    def _run(self, stop: threading.Event) -> None:
        while not stop.is_set():
            if self.poll_once():
                self._emit(FILES_CHANGED)
            stop.wait(self.interval)
        logger.info(f"Stopped watching {self.tasks_dir}")

    def poll_once(self) -> bool:
        """Take one snapshot; True if any known child's mtime moved."""
        try:
            snapshot = DirectorySnapshot(self.tasks_dir, recursive=False)
        except OSError as e:
            logger.debug(f"Cannot snapshot {self.tasks_dir}: {e}")
            return False

        changed = False
        for path in snapshot.paths:
            if path == self.tasks_dir:
                continue
            mtime = snapshot.mtime(path)
            last = self._last_modified.get(path)
            if last is not None and last != mtime:
                changed = True
            self._last_modified[path] = mtime
        return changed

    def _emit(self, event: str) -> None:
        with self._subscribers_lock:
            callbacks = list(self.subscribers)
        for callback in callbacks:
            try:
                callback(event)
            except Exception as e:
                logger.error(f"Error in {event} callback: {e}")
