from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QVBoxLayout,
    QDialogButtonBox,
    QDoubleSpinBox,
    QComboBox,
    QLabel,
)

from ...api.repositories.customers_repo import Customer
from ...constants import PAYMENT_METHODS
from ...utils.helpers import fmt_currency
from ...utils.validators import ValidationError
from .payments import build_payment_payload


class CustomerReceiptDialog(QDialog):
    """
    Receive a payment against a customer's total due.

    The API decides which open invoices the amount settles; the latest
    unpaid invoice number is shown for context only.
    """

    def __init__(self, parent=None, *, customer: Customer, latest_bill: str = ""):
        super().__init__(parent)
        self.setWindowTitle(f"Receive Payment – {customer.name}")
        self.setModal(True)
        self.customer = customer
        self.due = max(0.0, customer.due_balance)
        self._payload = None

        root = QVBoxLayout(self)
        form = QFormLayout()
        if latest_bill:
            form.addRow("Latest Invoice", QLabel(latest_bill))
        self.lbl_due = QLabel(fmt_currency(self.due))
        self.lbl_due.setStyleSheet("font-weight: bold;")
        form.addRow("Total Due", self.lbl_due)

        self.amount = QDoubleSpinBox()
        self.amount.setDecimals(2)
        # not capped at the due: an overpayment has to reach validation to be reported
        self.amount.setRange(0, self.due + 1_000_000)
        form.addRow("Amount received", self.amount)

        self.method = QComboBox()
        for value, label in PAYMENT_METHODS:
            self.method.addItem(label, value)
        form.addRow("Method", self.method)
        root.addLayout(form)

        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        root.addWidget(self.lbl_error)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.button(QDialogButtonBox.Ok).setText("Receive")
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)

    def get_payload(self) -> dict | None:
        self.lbl_error.clear()
        try:
            return build_payment_payload(
                self.customer.customer_id,
                self.due,
                round(self.amount.value(), 2),
                self.method.currentData(),
            )
        except ValidationError as e:
            self.lbl_error.setText(str(e))
            return None

    def accept(self):
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self):
        return self._payload
