# tests/test_main_window.py

from PySide6.QtWidgets import QLabel

from shopfront import main as main_mod
from shopfront.main import MainWindow, SessionBridge
from shopfront.modules.settings.controller import SettingsController


def test_session_bridge_emits_on_expiry(store, qtbot):
    bridge = SessionBridge(store)
    with qtbot.waitSignal(bridge.expired, timeout=1000):
        store.expire()


def test_pages_load_lazily_and_failures_show_placeholder(api, qtbot, monkeypatch, notes):
    monkeypatch.setattr(main_mod, "MODULES", [
        ("Settings", "shopfront.modules.settings.controller", "SettingsController", False),
        ("Broken", "shopfront.modules.does_not_exist", "Nothing", False),
    ])
    win = MainWindow(api, current_user={"name": "Cashier"})
    qtbot.addWidget(win)

    assert [win.nav.item(i).text() for i in range(win.nav.count())] == ["Settings", "Broken"]
    assert isinstance(win.controller("Settings"), SettingsController)
    assert win.stack.currentWidget() is win.controller("Settings").get_widget()

    win.nav.setCurrentRow(1)
    assert win.controller("Broken") is None
    assert win.stack.currentWidget().findChild(QLabel).text() == "Broken\n\nLoading failed"


def test_status_bar_notifications(api, qtbot, monkeypatch):
    monkeypatch.setattr(main_mod, "MODULES", [])
    win = MainWindow(api)
    qtbot.addWidget(win)
    win.show_notification("success", "Sale completed")
    assert win.statusBar().currentMessage() == "Sale completed"
