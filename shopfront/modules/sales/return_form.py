from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QFormLayout,
    QDialogButtonBox,
    QTableWidget,
    QTableWidgetItem,
    QSpinBox,
    QComboBox,
    QLineEdit,
    QLabel,
    QHeaderView,
)

from ...api.repositories.sales_repo import Sale
from ...constants import REFUND_METHODS
from ...utils.helpers import fmt_currency
from ...utils.validators import ValidationError
from .returns import ReturnLine, build_return_payload, refund_total

ADJUST_AGAINST_DUE = "Adjust against due"


class SaleReturnForm(QDialog):
    """
    Pick quantities to return from one sale.

    Each spin box is bounded by the line's remaining quantity, so fully
    returned lines are shown but locked at 0. Credit sales (with a customer)
    can settle the return against the customer's due instead of paying out.
    """

    COLS = ["Product", "Sold", "Returnable", "Unit Price", "Return Qty", "Refund"]

    def __init__(self, parent=None, sale: Sale | None = None):
        super().__init__(parent)
        self.setWindowTitle(f"Return Items – Sale #{sale.sale_id}" if sale else "Return Items")
        self.setModal(True)
        self.resize(640, 400)
        self.sale = sale
        self.lines = [ReturnLine.from_item(i) for i in (sale.items if sale else [])]
        self._payload = None

        root = QVBoxLayout(self)

        self.table = QTableWidget(len(self.lines), len(self.COLS))
        self.table.setHorizontalHeaderLabels(self.COLS)
        self.table.verticalHeader().setVisible(False)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.spins: list[QSpinBox] = []
        for row, line in enumerate(self.lines):
            self.table.setItem(row, 0, QTableWidgetItem(line.product_name))
            self.table.setItem(row, 1, QTableWidgetItem(str(line.sold_qty)))
            self.table.setItem(row, 2, QTableWidgetItem(str(line.remaining_qty)))
            self.table.setItem(row, 3, QTableWidgetItem(fmt_currency(line.unit_price)))
            spin = QSpinBox()
            spin.setRange(0, max(0, line.remaining_qty))
            spin.setEnabled(line.remaining_qty > 0)
            spin.valueChanged.connect(lambda v, r=row: self._on_qty(r, v))
            self.table.setCellWidget(row, 4, spin)
            self.spins.append(spin)
            self.table.setItem(row, 5, QTableWidgetItem(fmt_currency(0)))
        root.addWidget(self.table, 1)

        form = QFormLayout()
        self.refund_method = QComboBox()
        for value, label in REFUND_METHODS:
            self.refund_method.addItem(label, value)
        if sale is not None and sale.customer_id:
            self.refund_method.addItem(ADJUST_AGAINST_DUE, None)
        self.reason = QLineEdit()
        self.reason.setPlaceholderText("Reason (optional)")
        self.lbl_total = QLabel(fmt_currency(0))
        self.lbl_total.setStyleSheet("font-weight: bold;")
        form.addRow("Refund via", self.refund_method)
        form.addRow("Reason", self.reason)
        form.addRow("Refund total", self.lbl_total)
        root.addLayout(form)

        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        root.addWidget(self.lbl_error)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.button(QDialogButtonBox.Ok).setText("Process Return")
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

    def _on_qty(self, row: int, value: int):
        line = self.lines[row]
        line.set_quantity(value)
        self.table.item(row, 5).setText(fmt_currency(line.refund))
        self.lbl_total.setText(fmt_currency(self.refund_total()))

    def set_quantity(self, row: int, qty: int) -> None:
        """Programmatic entry; the spin box range does the clamping."""
        self.spins[row].setValue(qty)

    def refund_total(self) -> float:
        return refund_total(self.lines)

    def get_payload(self) -> dict | None:
        self.lbl_error.clear()
        try:
            return build_return_payload(self.lines, self.refund_method.currentData(), self.reason.text())
        except ValidationError as e:
            self.lbl_error.setText(str(e))
            return None

    def accept(self):
        payload = self.get_payload()
        if payload is None:
            return
        self._payload = payload
        super().accept()

    def payload(self) -> dict | None:
        return self._payload
