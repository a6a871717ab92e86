import logging
from typing import Callable, Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QMessageBox
from PySide6.QtCore import Qt

_log = logging.getLogger(__name__)

# (kind, text) -> None ; installed by the main window (status bar toasts)
_sink: Optional[Callable[[str, str], None]] = None


def wrap_center(w: QWidget) -> QWidget:
    host = QWidget()
    lay = QVBoxLayout(host)
    lay.addStretch(1)
    lay.addWidget(w, 0, Qt.AlignCenter)
    lay.addStretch(1)
    return host


def info(parent: QWidget, title: str, text: str):
    QMessageBox.information(parent, title, text)


def warn(parent: QWidget, title: str, text: str):
    QMessageBox.warning(parent, title, text)


def error(parent: QWidget, title: str, text: str):
    QMessageBox.critical(parent, title, text)


def confirm(parent: QWidget, title: str, text: str) -> bool:
    choice = QMessageBox.question(parent, title, text, QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
    return choice == QMessageBox.Yes


def set_notification_sink(sink: Optional[Callable[[str, str], None]]) -> None:
    global _sink
    _sink = sink


def notify(kind: str, text: str, parent: QWidget | None = None) -> None:
    """
    Toast-style notification. kind: success | error | warning | info.

    Routed to the installed sink (main window status bar); without one,
    errors and warnings fall back to a message box and the rest are logged.
    """
    _log.info("notify[%s]: %s", kind, text)
    if _sink is not None:
        _sink(kind, text)
        return
    if kind == "error":
        error(parent, "Error", text)
    elif kind == "warning":
        warn(parent, "Warning", text)


def notify_success(text: str, parent: QWidget | None = None) -> None:
    notify("success", text, parent)


def notify_error(text: str, parent: QWidget | None = None) -> None:
    notify("error", text, parent)


def notify_warning(text: str, parent: QWidget | None = None) -> None:
    notify("warning", text, parent)


def notify_info(text: str, parent: QWidget | None = None) -> None:
    notify("info", text, parent)


def notify_exception(exc: BaseException, parent: QWidget | None = None) -> None:
    """Error callback for background tasks; session expiry is handled by the main window."""
    from ..api.client import SessionExpired

    if isinstance(exc, SessionExpired):
        _log.info("Request dropped, session expired")
        return
    notify_error(str(exc) or exc.__class__.__name__, parent)
