from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QDateEdit, QPushButton
)

from ...widgets.table_view import TableView


class ReportsView(QWidget):
    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        row = QHBoxLayout()
        self.date_from = QDateEdit()
        self.date_from.setCalendarPopup(True)
        self.date_from.setDisplayFormat("yyyy-MM-dd")
        self.date_from.setDate(QDate.currentDate().addDays(-29))
        self.date_to = QDateEdit()
        self.date_to.setCalendarPopup(True)
        self.date_to.setDisplayFormat("yyyy-MM-dd")
        self.date_to.setDate(QDate.currentDate())
        self.btn_apply = QPushButton("Apply")
        self.btn_refresh = QPushButton("Reload Sales")
        self.btn_export_csv = QPushButton("Export CSV…")
        self.btn_export_pdf = QPushButton("Export PDF…")
        row.addWidget(QLabel("From:"))
        row.addWidget(self.date_from)
        row.addWidget(QLabel("To:"))
        row.addWidget(self.date_to)
        row.addWidget(self.btn_apply)
        row.addStretch(1)
        row.addWidget(self.btn_refresh)
        row.addWidget(self.btn_export_csv)
        row.addWidget(self.btn_export_pdf)
        root.addLayout(row)

        self.table = TableView()
        root.addWidget(self.table, 1)

        self.lbl_totals = QLabel()
        self.lbl_totals.setStyleSheet("font-weight: bold;")
        self.lbl_status = QLabel()
        self.lbl_status.setStyleSheet("color: #6b7280;")
        bottom = QHBoxLayout()
        bottom.addWidget(self.lbl_totals, 1)
        bottom.addWidget(self.lbl_status)
        root.addLayout(bottom)

    def range(self):
        return self.date_from.date().toPython(), self.date_to.date().toPython()

    def set_busy(self, busy: bool):
        self.lbl_status.setText("Loading…" if busy else "")
