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

from ...api.repositories.purchases_repo import Purchase
from ...constants import PAGE_SIZE
from ...utils.helpers import fmt_currency, fmt_date
from ...widgets.pager import Pager
from ...widgets.table_view import TableView
from .model import PurchaseItemsModel


class PurchaseDetails(QGroupBox):
    def __init__(self, parent=None):
        super().__init__("Purchase", parent)
        lay = QVBoxLayout(self)
        form = QFormLayout()
        self.lab_id = QLabel("-")
        self.lab_date = QLabel("-")
        self.lab_supplier = QLabel("-")
        self.lab_total = QLabel("-")
        form.addRow("ID:", self.lab_id)
        form.addRow("Date:", self.lab_date)
        form.addRow("Supplier:", self.lab_supplier)
        form.addRow("Total:", self.lab_total)
        lay.addLayout(form)
        self.items_model = PurchaseItemsModel([])
        self.items = TableView(sortable=False)
        self.items.setModel(self.items_model)
        lay.addWidget(self.items, 1)

    def set_data(self, p: Purchase | None):
        if p is None:
            for lab in (self.lab_id, self.lab_date, self.lab_supplier, self.lab_total):
                lab.setText("-")
            self.items_model.replace([])
            return
        self.lab_id.setText(str(p.purchase_id))
        self.lab_date.setText(fmt_date(p.purchase_date))
        self.lab_supplier.setText(p.supplier or "-")
        self.lab_total.setText(fmt_currency(p.total_amount))
        self.items_model.replace(p.items)
        self.items.resizeColumnsToContents()


class PurchaseView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.btn_add = QPushButton("Add Purchase")
        self.btn_edit = QPushButton("Edit")
        self.btn_refresh = QPushButton("Refresh")
        for b in (self.btn_add, self.btn_edit, self.btn_refresh):
            bar.addWidget(b)
        bar.addStretch(1)
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search supplier, date or total…")
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
        self.details = PurchaseDetails()
        split.addWidget(self.details)
        split.setStretchFactor(0, 2)
        split.setStretchFactor(1, 3)
        root.addWidget(split, 1)

    def set_busy(self, busy: bool):
        self.lbl_status.setText("Loading…" if busy else "")
