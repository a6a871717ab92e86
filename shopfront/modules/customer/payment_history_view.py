# shopfront/modules/customer/payment_history_view.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, QUrl
from PySide6.QtWidgets import (
    QDialog,
    QVBoxLayout,
    QHBoxLayout,
    QLineEdit,
    QComboBox,
    QLabel,
    QPushButton,
    QDialogButtonBox,
)

from ...api.repositories.customers_repo import Customer, PaymentRecord
from ...config import SETTINGS
from ...utils.documents import render_html, temp_dir, safe_name, write_pdf
from ...utils.helpers import fmt_currency, fmt_datetime, today_str
from ...utils.ui_helpers import notify_error
from ...widgets.table_view import TableView
from ..documents import DocumentActions
from .model import PaymentHistoryModel
from .payments import HISTORY_FILTERS, filter_history

_log = logging.getLogger(__name__)


class PaymentHistoryDialog(QDialog):
    """
    Receipts and refunds for one customer.

    Amounts are signed: refunds come back from the API as negative payments.
    Search covers receipt number, method and invoice number.
    """

    def __init__(
        self,
        parent=None,
        *,
        customer: Customer,
        rows: list[PaymentRecord],
        documents: Optional[DocumentActions] = None,
    ):
        super().__init__(parent)
        self.setWindowTitle(f"Payment History – {customer.name}")
        self.resize(760, 460)
        self.customer = customer
        self.documents = documents
        self._all = list(rows)

        root = QVBoxLayout(self)
        bar = QHBoxLayout()
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search receipt, method or invoice…")
        self.kind = QComboBox()
        for value, label in HISTORY_FILTERS:
            self.kind.addItem(label, value)
        bar.addWidget(self.search, 1)
        bar.addWidget(self.kind)
        root.addLayout(bar)

        self.model = PaymentHistoryModel(self._all)
        self.table = TableView()
        self.table.setModel(self.model)
        root.addWidget(self.table, 1)

        self.lbl_empty = QLabel("No payment history found for this customer")
        self.lbl_empty.setAlignment(Qt.AlignCenter)
        root.addWidget(self.lbl_empty)

        self.lbl_summary = QLabel()
        root.addWidget(self.lbl_summary)

        acts = QHBoxLayout()
        self.btn_print = QPushButton("Print Receipt")
        self.btn_download = QPushButton("Download Receipt")
        self.btn_statement = QPushButton("Print Statement")
        acts.addWidget(self.btn_print)
        acts.addWidget(self.btn_download)
        acts.addStretch(1)
        acts.addWidget(self.btn_statement)
        root.addLayout(acts)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        root.addWidget(buttons)

        self.search.textChanged.connect(lambda _t: self.apply_filter())
        self.kind.currentIndexChanged.connect(lambda _i: self.apply_filter())
        self.btn_print.clicked.connect(self._print_selected)
        self.btn_download.clicked.connect(self._download_selected)
        self.btn_statement.clicked.connect(self.print_statement)
        self.table.selectionModel().selectionChanged.connect(lambda *_: self._update_buttons())
        self.apply_filter()

    # ---------------- filtering ----------------

    def apply_filter(self) -> None:
        rows = filter_history(self._all, self.search.text(), self.kind.currentData())
        self.model.replace(rows)
        self.table.resizeColumnsToContents()
        self.lbl_empty.setVisible(not rows)
        received = sum(p.amount for p in rows if p.amount > 0)
        refunded = -sum(p.amount for p in rows if p.amount < 0)
        self.lbl_summary.setText(
            f"{len(rows)} record(s) · Received {fmt_currency(received)} · Refunded {fmt_currency(refunded)}"
        )
        self._update_buttons()

    def visible_rows(self) -> list[PaymentRecord]:
        return self.model.rows()

    # ---------------- receipts ----------------

    def _selected(self) -> Optional[PaymentRecord]:
        row = self.table.selected_source_row()
        return None if row is None else self.model.at(row)

    def _update_buttons(self):
        p = self._selected()
        has = bool(p and p.receipt_no and self.documents)
        self.btn_print.setEnabled(has)
        self.btn_download.setEnabled(has)

    def _print_selected(self):
        p = self._selected()
        if p and p.receipt_no and self.documents:
            self.documents.print_receipt(p.receipt_no)

    def _download_selected(self):
        p = self._selected()
        if p and p.receipt_no and self.documents:
            self.documents.download_receipt(p.receipt_no)

    # ---------------- statement ----------------

    def statement_html(self) -> str:
        rows = self.visible_rows()
        return render_html(
            "report.html",
            shop_name=SETTINGS.shop_name,
            title=f"Payment statement – {self.customer.name}",
            subtitle=f"Generated {today_str()} · Current due {fmt_currency(self.customer.due_balance)}",
            labels=["Date", "Receipt", "Method", "Invoice", "Amount"],
            numeric=[4],
            rows=[
                [fmt_datetime(p.payment_date), p.receipt_no, p.payment_method.upper(), p.invoice_number or "-",
                 fmt_currency(p.amount)]
                for p in rows
            ],
            totals=["", "", "", "Net", fmt_currency(sum(p.amount for p in rows))],
        )

    def print_statement(self) -> Optional[Path]:
        path = temp_dir() / f"statement_{safe_name(self.customer.name)}_{self.customer.customer_id}.pdf"
        try:
            write_pdf(self.statement_html(), path)
        except OSError as e:
            _log.error("Failed to render statement PDF to %s: %s", path, e, exc_info=True)
            notify_error(f"Could not create statement: {e}", self)
            return None
        opener = self.documents.open_url if self.documents else None
        if opener is not None:
            opener(QUrl.fromLocalFile(str(path)))
        return path
