from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QFormLayout, QLineEdit, QComboBox, QSpinBox, QPushButton, QHBoxLayout, QLabel, QGroupBox
)

from ...constants import CURRENCIES


class SettingsView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        box = QGroupBox("Shop")
        form = QFormLayout(box)
        self.shop_name = QLineEdit()
        self.currency = QComboBox()
        for code, (name, symbol) in CURRENCIES.items():
            self.currency.addItem(f"{code} - {name} ({symbol})", code)
        self.low_stock = QSpinBox()
        self.low_stock.setRange(0, 10_000)
        self.low_stock.setSuffix(" pcs")
        form.addRow("Shop name*", self.shop_name)
        form.addRow("Currency", self.currency)
        form.addRow("Low stock threshold", self.low_stock)
        root.addWidget(box)

        note = QLabel("Settings apply to this session only.")
        note.setStyleSheet("color: #6b7280;")
        root.addWidget(note)

        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        self.lbl_error.hide()
        root.addWidget(self.lbl_error)

        row = QHBoxLayout()
        row.addStretch(1)
        self.btn_reset = QPushButton("Reset")
        self.btn_save = QPushButton("Save")
        row.addWidget(self.btn_reset)
        row.addWidget(self.btn_save)
        root.addLayout(row)
        root.addStretch(1)

    def get_payload(self) -> dict | None:
        name = self.shop_name.text().strip()
        if not name:
            self.lbl_error.setText("Shop name is required.")
            self.lbl_error.show()
            return None
        self.lbl_error.hide()
        return {
            "shop_name": name,
            "currency": self.currency.currentData(),
            "low_stock_threshold": int(self.low_stock.value()),
        }
