"""
Development runner: starts the app and re-executes the process whenever a
.py file inside the package is saved.

    python -m shopfront.dev_launcher
"""
import logging
import os
import sys
import time
from pathlib import Path

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

_log = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).resolve().parent
DEBOUNCE_SECONDS = 1.0
IGNORED_PARTS = {"__pycache__", ".git", ".pytest_cache"}


def is_source_change(path) -> bool:
    p = Path(str(path))
    return p.suffix == ".py" and not IGNORED_PARTS.intersection(p.parts)


class SourceEvents(FileSystemEventHandler):
    """Watchdog callbacks run on the observer thread; `sink` must be thread-safe."""

    def __init__(self, sink):
        super().__init__()
        self._sink = sink

    def on_modified(self, event):
        if not event.is_directory and is_source_change(event.src_path):
            self._sink(event.src_path)

    on_created = on_modified


class ReloadWatcher(QObject):
    """Debounced package file changes, delivered as `restart_requested` on the GUI thread."""

    changed = Signal(str)
    restart_requested = Signal(str)

    def __init__(self, root: Path = PACKAGE_DIR, debounce: float = DEBOUNCE_SECONDS):
        super().__init__()
        self.debounce = debounce
        self._last = 0.0
        self._observer = Observer()
        self._observer.schedule(SourceEvents(self.changed.emit), str(root), recursive=True)
        self.changed.connect(self._on_changed)

    def start(self) -> None:
        self._observer.start()

    def stop(self) -> None:
        if self._observer.is_alive():
            self._observer.stop()
            self._observer.join()

    def _on_changed(self, path: str) -> None:
        now = time.monotonic()
        if now - self._last > self.debounce:
            self._last = now
            self.restart_requested.emit(path)


def _reexec(app: QApplication, watcher: ReloadWatcher, path: str) -> None:
    _log.info("Change detected in %s; restarting", path)
    watcher.stop()
    app.quit()
    os.execv(sys.executable, [sys.executable, "-m", "shopfront.dev_launcher", *sys.argv[1:]])


def main():
    from .main import main as run_app
    from .utils.loggers import get_logger

    get_logger()
    app = QApplication(sys.argv)
    watcher = ReloadWatcher()
    watcher.restart_requested.connect(lambda path: _reexec(app, watcher, path))
    watcher.start()

    os.environ["__DEV_LAUNCHER__"] = "1"
    try:
        run_app()
    finally:
        os.environ.pop("__DEV_LAUNCHER__", None)

    # sign-in cancelled: nothing left to watch for
    if not any(w.isVisible() for w in app.topLevelWidgets()):
        watcher.stop()
        return 0

    code = app.exec()
    watcher.stop()
    return code


if __name__ == "__main__":
    sys.exit(main())
