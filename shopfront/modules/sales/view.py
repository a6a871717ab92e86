from PySide6.QtCore import Qt, QDate
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSplitter,
    QTabWidget,
    QCheckBox,
    QDateEdit,
)

from ...constants import PAGE_SIZE
from ...widgets.pager import Pager
from ...widgets.table_view import TableView
from .details import SaleDetails
from .form import SaleForm


def _date_edit() -> QDateEdit:
    d = QDateEdit(QDate.currentDate())
    d.setCalendarPopup(True)
    d.setDisplayFormat("dd MMM yyyy")
    d.setEnabled(False)
    return d


class SalesHistoryPanel(QWidget):
    """
    Filters (from / to / total search) over a paged table, with the bill of
    the selected sale on the right.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.chk_from = QCheckBox("From")
        self.date_from = _date_edit()
        self.chk_to = QCheckBox("To")
        self.date_to = _date_edit()
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search by total amount…")
        self.btn_clear = QPushButton("Clear Filters")
        self.btn_refresh = QPushButton("Refresh")
        for w in (self.chk_from, self.date_from, self.chk_to, self.date_to):
            bar.addWidget(w)
        bar.addWidget(self.search, 1)
        bar.addWidget(self.btn_clear)
        bar.addWidget(self.btn_refresh)
        root.addLayout(bar)

        self.chk_from.toggled.connect(self.date_from.setEnabled)
        self.chk_to.toggled.connect(self.date_to.setEnabled)

        split = QSplitter(Qt.Horizontal)
        left = QWidget()
        lv = QVBoxLayout(left)
        lv.setContentsMargins(0, 0, 0, 0)
        self.table = TableView()
        self.lbl_empty = QLabel("No sales found")
        self.lbl_empty.setAlignment(Qt.AlignCenter)
        self.lbl_empty.hide()
        self.pager = Pager(PAGE_SIZE)
        lv.addWidget(self.table, 1)
        lv.addWidget(self.lbl_empty)
        lv.addWidget(self.pager)
        split.addWidget(left)

        self.details = SaleDetails()
        split.addWidget(self.details)
        split.setStretchFactor(0, 3)
        split.setStretchFactor(1, 2)
        root.addWidget(split, 1)

    def range(self):
        f = self.date_from.date().toPython() if self.chk_from.isChecked() else None
        t = self.date_to.date().toPython() if self.chk_to.isChecked() else None
        return f, t

    def clear_filters(self):
        self.chk_from.setChecked(False)
        self.chk_to.setChecked(False)
        self.search.clear()


class SalesView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        head = QHBoxLayout()
        title = QLabel("Sales")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        self.lbl_status = QLabel()
        self.lbl_status.setStyleSheet("color: #6b7280;")
        head.addWidget(title)
        head.addStretch(1)
        head.addWidget(self.lbl_status)
        root.addLayout(head)

        self.tabs = QTabWidget()
        self.form = SaleForm()
        self.history = SalesHistoryPanel()
        self.tabs.addTab(self.form, "New Sale")
        self.tabs.addTab(self.history, "Sales History")
        root.addWidget(self.tabs, 1)

    def set_busy(self, busy: bool):
        self.lbl_status.setText("Loading…" if busy else "")
        self.form.btn_submit.setEnabled(not busy)
