"""Watch a vault for note changes and report them, debounced per path."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)


def _is_hidden(path: Path, root: Path) -> bool:
    try:
        rel = path.relative_to(root)
    except ValueError:
        return True
    return any(part.startswith(".") for part in rel.parts)


class _NoteHandler(PatternMatchingEventHandler):
    """Forwards created/modified *.md events, dropping repeats inside the debounce window."""

    def __init__(
        self,
        root: Path,
        debounce_seconds: float,
        callback: Callable[[Path], None],
    ) -> None:
        super().__init__(patterns=["*.md"], ignore_directories=True)
        self._root = root
        self._debounce = debounce_seconds
        self._callback = callback
        self._last_event: dict[str, float] = {}
        self._lock = threading.Lock()

    def on_created(self, event: FileSystemEvent) -> None:
        self._handle(event.src_path)

    def on_modified(self, event: FileSystemEvent) -> None:
        self._handle(event.src_path)

    def on_moved(self, event: FileSystemEvent) -> None:
        # matched on either end; only a move that lands on a note counts
        dest = event.dest_path
        if isinstance(dest, bytes):
            dest = dest.decode()
        if not dest.endswith(".md"):
            return
        self._handle(dest)

    def _handle(self, src: str | bytes) -> None:
        if isinstance(src, bytes):
            src = src.decode()
        path = Path(src).resolve()
        if _is_hidden(path, self._root):
            return

        now = time.time()
        with self._lock:
            last = self._last_event.get(str(path), 0)
            if now - last < self._debounce:
                return
            self._last_event[str(path)] = now

        try:
            self._callback(path)
        except Exception:
            logger.exception("Watcher callback failed for %s", path)


class VaultWatcher:
    """Recursively watches a vault directory for note changes.

    The callback runs on the observer thread; callers that hand work to an
    event loop must use `loop.call_soon_threadsafe`.
    """

    def __init__(
        self,
        root: Path,
        callback: Callable[[Path], None],
        debounce_seconds: float = 0.5,
    ) -> None:
        self._root = Path(root).resolve()
        self._handler = _NoteHandler(self._root, debounce_seconds, callback)
        self._observer: Observer | None = None

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> None:
        if self._observer is not None:
            return
        self._observer = Observer()
        self._observer.schedule(self._handler, str(self._root), recursive=True)
        self._observer.start()
        logger.info("Watching %s for changes", self._root)

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join(timeout=5)
        self._observer = None
        logger.info("Stopped watching %s", self._root)
