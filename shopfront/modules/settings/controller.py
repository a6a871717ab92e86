from __future__ import annotations

import logging

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QWidget

from ...config import SETTINGS, ShopSettings
from ...utils.ui_helpers import notify_success
from ..base_module import BaseModule
from .view import SettingsView

_log = logging.getLogger(__name__)


class SettingsController(BaseModule):
    """Edits the in-memory ShopSettings; other pages pick the values up on reload."""

    settings_changed = Signal()

    def __init__(self, settings: ShopSettings = SETTINGS):
        super().__init__()
        self.settings = settings
        self.view = SettingsView()
        self.view.btn_save.clicked.connect(self.save)
        self.view.btn_reset.clicked.connect(self.reload)
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        v = self.view
        v.shop_name.setText(self.settings.shop_name)
        idx = v.currency.findData(self.settings.currency)
        v.currency.setCurrentIndex(max(idx, 0))
        v.low_stock.setValue(self.settings.low_stock_threshold)
        v.lbl_error.hide()

    def save(self) -> bool:
        payload = self.view.get_payload()
        if payload is None:
            return False
        for key, value in payload.items():
            setattr(self.settings, key, value)
        _log.info("Settings updated: %s", payload)
        notify_success("Settings saved", self.view)
        self.settings_changed.emit()
        return True
