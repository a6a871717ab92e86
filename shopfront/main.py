from __future__ import annotations

import logging
import os
import sys
import warnings
from importlib import import_module
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QObject, Qt, QTimer, Signal
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSizePolicy,
    QStackedWidget,
    QWidget,
)

from .api.client import ApiClient
from .api.session import SessionStore
from .config import SESSION_PATH, api_base_url
from .constants import APP_NAME, STYLE_FILE
from .modules.base_module import BaseModule
from .utils.loggers import get_logger
from .utils.ui_helpers import confirm, notify_warning, set_notification_sink, wrap_center

_log = logging.getLogger(__name__)

NOTIFY_COLORS = {
    "success": "#15803d",
    "error": "#b91c1c",
    "warning": "#b45309",
    "info": "#1f2937",
}
NOTIFY_TIMEOUT_MS = 5000


RESOURCES_DIR = Path(__file__).resolve().parent / "resources"


def load_qss(path: Path = RESOURCES_DIR / STYLE_FILE) -> str:
    return path.read_text(encoding="utf-8") if path.is_file() else ""


def resolve_controller(dotted: str, attr: str):
    """`dotted.attr` as an object; ImportError covers a missing module or a missing name."""
    module = import_module(dotted)
    found = getattr(module, attr, None)
    if found is None:
        raise ImportError(f"{dotted} has no {attr}")
    return found


class SessionBridge(QObject):
    """
    Re-emits SessionStore expiry as a Qt signal. The 401 hook fires on a
    worker thread; the queued connection lands the handler on the GUI thread.
    """

    expired = Signal()

    def __init__(self, store: SessionStore):
        super().__init__()
        store.add_expiry_listener(self.expired.emit)


# (title, module path, controller class, needs api)
MODULES = [
    ("Dashboard", "shopfront.modules.dashboard.controller", "DashboardController", True),
    ("Products", "shopfront.modules.product.controller", "ProductController", True),
    ("Purchases", "shopfront.modules.purchase.controller", "PurchaseController", True),
    ("Sales", "shopfront.modules.sales.controller", "SalesController", True),
    ("Customers", "shopfront.modules.customer.controller", "CustomerController", True),
    ("Reports", "shopfront.modules.reporting.controller", "ReportsController", True),
    ("Settings", "shopfront.modules.settings.controller", "SettingsController", False),
]


class MainWindow(QMainWindow):
    sign_out_requested = Signal()

    def __init__(self, api: ApiClient, current_user: dict | None = None):
        super().__init__()
        self.setWindowTitle(APP_NAME)
        self.setMinimumSize(820, 520)

        self.api = api
        self.user = current_user or {}

        # left: page list, right: the selected page
        self.nav = QListWidget()
        self.nav.setFixedWidth(110)
        self.nav.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Expanding)
        self.stack = QStackedWidget()
        body = QWidget(self)
        split = QHBoxLayout(body)
        split.addWidget(self.nav)
        split.addWidget(self.stack, 1)
        self.setCentralWidget(body)

        # ---- status bar: signed-in user + notifications ----
        self.lbl_user = QLabel(f"Signed in as {self.api.store.username or 'user'}")
        self.statusBar().addPermanentWidget(self.lbl_user)
        menu = self.menuBar().addMenu("&Account")
        act_sign_out = menu.addAction("Sign out")
        act_sign_out.triggered.connect(self._on_sign_out)

        # title -> controller (None until the page is first opened)
        self.modules: dict[str, Optional[BaseModule]] = {}
        self.module_info: list[tuple[str, str, str, bool]] = []

        self.nav.currentRowChanged.connect(self._on_nav_item_changed)
        for info in MODULES:
            self._add_module_deferred(*info)

        set_notification_sink(self.show_notification)

        if self.nav.count():
            self.nav.setCurrentRow(0)

    # ---------- notifications ----------
    def show_notification(self, kind: str, text: str) -> None:
        color = NOTIFY_COLORS.get(kind, NOTIFY_COLORS["info"])
        self.statusBar().setStyleSheet(f"QStatusBar {{ color: {color}; }}")
        self.statusBar().showMessage(text, NOTIFY_TIMEOUT_MS)

    # ---------- lazy pages ----------
    def _add_module_deferred(self, title: str, module_path: str, class_name: str, needs_api: bool):
        self.nav.addItem(QListWidgetItem(title))
        self.stack.addWidget(wrap_center(QLabel(f"Loading {title}...")))
        self.module_info.append((title, module_path, class_name, needs_api))
        self.modules[title] = None

    def _on_nav_item_changed(self, index: int):
        if index < 0 or index >= len(self.module_info):
            return
        title = self.module_info[index][0]
        ctrl = self.modules.get(title)
        if ctrl is None:
            self._load_module(index)
        else:
            ctrl.reload()
        self.stack.setCurrentIndex(index)

    def _load_module(self, index: int):
        title, module_path, class_name, needs_api = self.module_info[index]
        QApplication.setOverrideCursor(Qt.WaitCursor)
        try:
            Controller = resolve_controller(module_path, class_name)
            controller = Controller(self.api) if needs_api else Controller()
        except ImportError as e:
            _log.error("[%s] failed to load: %s", title, e, exc_info=True)
            self._replace_page(index, wrap_center(QLabel(f"{title}\n\nLoading failed")))
            return
        finally:
            QApplication.restoreOverrideCursor()
        self.modules[title] = controller
        self._replace_page(index, controller.get_widget())

    def _replace_page(self, index: int, widget: QWidget):
        current = self.stack.widget(index)
        self.stack.removeWidget(current)
        current.deleteLater()
        self.stack.insertWidget(index, widget)

    def controller(self, title: str) -> Optional[BaseModule]:
        return self.modules.get(title)

    # ---------- session ----------
    def _on_sign_out(self):
        if confirm(self, "Sign out", "Sign out of this session?"):
            self.sign_out_requested.emit()

    def closeEvent(self, event):
        set_notification_sink(None)
        super().closeEvent(event)


class Shell(QObject):
    """
    Owns the sign-in / main-window cycle. Expired or signed-out sessions close
    the window and show the sign-in dialog again; cancelling it quits.
    """

    def __init__(self, app: QApplication, api: ApiClient):
        super().__init__(app)
        self.app = app
        self.api = api
        self.window: Optional[MainWindow] = None
        self._prompting = False
        self.bridge = SessionBridge(api.store)
        self.bridge.expired.connect(self._on_expired)

    def start(self) -> bool:
        user = self.api.store.user if self.api.store.is_authenticated else None
        if user is None:
            user = self._prompt_login()
        if user is None:
            return False
        self.window = MainWindow(self.api, current_user=user)
        self.window.sign_out_requested.connect(self._on_sign_out)
        self.window.resize(1100, 720)
        self.window.show()
        return True

    def _prompt_login(self) -> Optional[dict]:
        from .modules.login.controller import LoginController

        self._prompting = True
        try:
            return LoginController(self.api).prompt()
        finally:
            self._prompting = False

    def _close_window(self):
        win, self.window = self.window, None
        if win is not None:
            win.close()
            win.deleteLater()

    def _restart(self):
        if not self.start():
            QTimer.singleShot(0, self.app.quit)

    def _on_expired(self):
        # Several in-flight requests may 401 at once; only the first one counts.
        if self.window is None or self._prompting or self.api.store.is_authenticated:
            return
        _log.info("Returning to sign-in after session expiry")
        self._close_window()
        notify_warning("Your session has expired. Please sign in again.")
        self._restart()

    def _on_sign_out(self):
        _log.info("Signing out %s", self.api.store.username)
        self.api.store.clear()
        self._close_window()
        self._restart()


def main():
    warnings.filterwarnings("ignore",
                            message=r".*Failed to disconnect.*selectionChanged.*",
                            category=RuntimeWarning)
    os.environ.pop("QT_QPA_DISABLE_WINDOWDECORATION", None)
    get_logger()

    # dev_launcher creates the QApplication itself
    app = QApplication.instance()
    if app is None:
        app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)

    app.setStyleSheet(load_qss())

    store = SessionStore(SESSION_PATH)
    store.load()
    api = ApiClient(api_base_url(), store)
    _log.info("Using API at %s", api.base_url)

    shell = Shell(app, api)
    if not shell.start():
        return 0

    if os.environ.get("__DEV_LAUNCHER__") == "1":
        return 0
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
