from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QGroupBox,
    QPushButton,
    QLineEdit,
    QLabel,
    QSplitter,
)

from ...api.repositories.customers_repo import Customer
from ...constants import PAGE_SIZE
from ...utils.helpers import fmt_currency
from ...widgets.pager import Pager
from ...widgets.table_view import TableView


class CustomerDetails(QGroupBox):
    def __init__(self, parent=None):
        super().__init__("Details", parent)
        form = QFormLayout(self)
        self.lab_id = QLabel("-")
        self.lab_name = QLabel("-")
        self.lab_phone = QLabel("-")
        self.lab_email = QLabel("-")
        self.lab_addr = QLabel("-")
        self.lab_addr.setWordWrap(True)
        self.lab_due = QLabel("-")
        form.addRow("ID:", self.lab_id)
        form.addRow("Name:", self.lab_name)
        form.addRow("Phone:", self.lab_phone)
        form.addRow("Email:", self.lab_email)
        form.addRow("Address:", self.lab_addr)
        form.addRow("Due balance:", self.lab_due)

    def set_data(self, c: Customer | None):
        if c is None:
            for lab in (self.lab_id, self.lab_name, self.lab_phone, self.lab_email, self.lab_addr, self.lab_due):
                lab.setText("-")
            self.lab_due.setStyleSheet("")
            return
        self.lab_id.setText(str(c.customer_id))
        self.lab_name.setText(c.name)
        self.lab_phone.setText(c.phone or "-")
        self.lab_email.setText(c.email or "-")
        self.lab_addr.setText(c.address or "-")
        self.lab_due.setText(fmt_currency(c.due_balance))
        self.lab_due.setStyleSheet("color: #b91c1c; font-weight: bold;" if c.due_balance > 0 else "")


class CustomerView(QWidget):
    """
    Customers view:
      - Toolbar: Add, Edit, Receive Payment, Payment History + search
      - Split: paged table (left) + details (right)
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.btn_add = QPushButton("Add")
        self.btn_edit = QPushButton("Edit")
        self.btn_receive_payment = QPushButton("Receive Payment")
        self.btn_payment_history = QPushButton("Payment History")
        for b in (self.btn_add, self.btn_edit, self.btn_receive_payment, self.btn_payment_history):
            bar.addWidget(b)
        bar.addStretch(1)
        bar.addWidget(QLabel("Search:"))
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search customers (name, phone)…")
        bar.addWidget(self.search, 2)
        self.lbl_status = QLabel()
        self.lbl_status.setStyleSheet("color: #6b7280;")
        bar.addWidget(self.lbl_status)
        root.addLayout(bar)

        split = QSplitter(Qt.Horizontal)
        left = QWidget()
        lv = QVBoxLayout(left)
        lv.setContentsMargins(0, 0, 0, 0)
        self.table = TableView()
        self.pager = Pager(PAGE_SIZE)
        lv.addWidget(self.table, 1)
        lv.addWidget(self.pager)
        split.addWidget(left)

        self.details = CustomerDetails()
        side = QWidget()
        sv = QVBoxLayout(side)
        sv.addWidget(self.details)
        sv.addStretch(1)
        split.addWidget(side)
        split.setStretchFactor(0, 3)
        split.setStretchFactor(1, 2)
        root.addWidget(split, 1)

    def set_busy(self, busy: bool):
        self.lbl_status.setText("Loading…" if busy else "")
