"""
utils/tasks.py

Run blocking API calls off the UI thread and hand the outcome back to the GUI
thread through queued Qt signals.

Public interface
----------------
- TaskRunner.submit(fn, on_success=None, on_error=None, on_finished=None)
- TaskRunner.busy_changed(bool)   # drives loading labels / wait cursor

Callbacks always run on the thread that owns the runner (the GUI thread).
`synchronous=True` executes inline, which keeps controller tests deterministic.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Qt, Signal, Slot

_log = logging.getLogger(__name__)


class _Relay(QObject):
    """Owns one task's callbacks; lives on the GUI thread."""

    succeeded = Signal(object)
    failed = Signal(object)

    def __init__(
        self,
        on_success: Optional[Callable[[Any], None]],
        on_error: Optional[Callable[[BaseException], None]],
        on_done: Callable[["_Relay"], None],
    ) -> None:
        super().__init__()
        self._on_success = on_success
        self._on_error = on_error
        self._on_done = on_done
        self.succeeded.connect(self._deliver_success, Qt.QueuedConnection)
        self.failed.connect(self._deliver_error, Qt.QueuedConnection)

    @Slot(object)
    def _deliver_success(self, result: Any) -> None:
        try:
            if self._on_success is not None:
                self._on_success(result)
        finally:
            self._on_done(self)

    @Slot(object)
    def _deliver_error(self, exc: BaseException) -> None:
        try:
            if self._on_error is not None:
                self._on_error(exc)
            else:
                _log.error("Background task failed: %s", exc)
        finally:
            self._on_done(self)


class _TaskRunnable(QRunnable):
    """Thin QRunnable wrapper that reports the callable's outcome via the relay."""

    def __init__(self, work: Callable[[], Any], relay: _Relay) -> None:
        super().__init__()
        self.setAutoDelete(True)
        self._work = work
        self._relay = relay

    @Slot()
    def run(self) -> None:  # type: ignore[override]
        try:
            result = self._work()
        except Exception as exc:
            self._relay.failed.emit(exc)
        else:
            self._relay.succeeded.emit(result)


class TaskRunner(QObject):
    busy_changed = Signal(bool)

    def __init__(self, parent: QObject | None = None, *, pool: QThreadPool | None = None, synchronous: bool = False):
        super().__init__(parent)
        self._pool = pool or QThreadPool.globalInstance()
        self._synchronous = synchronous
        self._pending: set[_Relay] = set()

    @property
    def busy(self) -> bool:
        return bool(self._pending)

    def submit(
        self,
        fn: Callable[[], Any],
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[BaseException], None]] = None,
        on_finished: Optional[Callable[[], None]] = None,
    ) -> None:
        if self._synchronous:
            self._run_inline(fn, on_success, on_error, on_finished)
            return

        def _done(relay: _Relay) -> None:
            self._pending.discard(relay)
            relay.deleteLater()
            if on_finished is not None:
                on_finished()
            if not self._pending:
                self.busy_changed.emit(False)

        relay = _Relay(on_success, on_error, _done)
        was_idle = not self._pending
        self._pending.add(relay)
        if was_idle:
            self.busy_changed.emit(True)
        self._pool.start(_TaskRunnable(fn, relay))

    def _run_inline(self, fn, on_success, on_error, on_finished) -> None:
        self.busy_changed.emit(True)
        try:
            try:
                result = fn()
            except Exception as exc:
                if on_error is None:
                    raise
                on_error(exc)
            else:
                if on_success is not None:
                    on_success(result)
        finally:
            if on_finished is not None:
                on_finished()
            self.busy_changed.emit(False)
