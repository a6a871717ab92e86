from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QGroupBox,
    QLabel,
    QPushButton,
    QScrollArea,
    QFrame,
)

from ...api.repositories.sales_repo import Sale, SaleReturn, SalePayment
from ...constants import WALK_IN_CUSTOMER
from ...utils.helpers import fmt_currency, fmt_date, fmt_datetime


def _muted(text: str) -> QLabel:
    lbl = QLabel(text)
    lbl.setStyleSheet("color: #6b7280;")
    lbl.setWordWrap(True)
    return lbl


def _clear_layout(lay):
    while lay.count():
        item = lay.takeAt(0)
        w = item.widget()
        if w is not None:
            w.deleteLater()
        elif item.layout() is not None:
            _clear_layout(item.layout())


class SaleDetails(QWidget):
    """
    Read-only bill view for one sale (items, returns, payments, totals).

    Document buttons only emit signals; the controller does the fetching.
    """

    return_requested = Signal(object)          # Sale
    print_invoice = Signal(int, str)           # invoice_id, invoice_number
    download_invoice = Signal(int, str)
    print_receipt = Signal(str)                # receipt_no
    download_receipt = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.sale: Optional[Sale] = None

        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)

        head = QHBoxLayout()
        self.lbl_title = QLabel("Select a sale")
        self.lbl_title.setStyleSheet("font-weight: bold; font-size: 14px;")
        self.btn_return = QPushButton("Return")
        self.btn_return.setEnabled(False)
        self.btn_return.clicked.connect(lambda: self.sale and self.return_requested.emit(self.sale))
        head.addWidget(self.lbl_title, 1)
        head.addWidget(self.btn_return)
        outer.addLayout(head)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.scroll.setFrameShape(QFrame.NoFrame)
        self.body = QWidget()
        self.body_lay = QVBoxLayout(self.body)
        self.body_lay.setAlignment(Qt.AlignTop)
        self.scroll.setWidget(self.body)
        outer.addWidget(self.scroll, 1)

    # ---------------- API ----------------

    def clear(self, message: str = "Select a sale") -> None:
        self.sale = None
        self.lbl_title.setText(message)
        self.btn_return.setEnabled(False)
        self.btn_return.setText("Return")
        _clear_layout(self.body_lay)

    def show_loading(self) -> None:
        self.clear("Loading bill…")

    def set_sale(self, sale: Sale) -> None:
        self.clear()
        self.sale = sale
        self.lbl_title.setText(f"Sale #{sale.sale_id} · {fmt_datetime(sale.sale_date)}")
        can_return = sale.is_returnable
        self.btn_return.setEnabled(can_return)
        self.btn_return.setText("Return" if can_return else "Fully Returned")

        who = sale.customer_name or WALK_IN_CUSTOMER
        if sale.customer_phone:
            who = f"{who} ({sale.customer_phone})"
        self.body_lay.addWidget(QLabel(f"Customer: {who}"))

        self._add_items(sale)
        if sale.returns:
            self._add_returns(sale.returns)
        self._add_payments(sale.payments)
        self._add_totals(sale)

    # ---------------- sections ----------------

    def _add_items(self, sale: Sale):
        box = QGroupBox("Bill Items")
        lay = QVBoxLayout(box)
        for item in sale.items:
            row = QHBoxLayout()
            row.addWidget(QLabel(f"{item.product_name} × {item.quantity}"), 1)
            row.addWidget(QLabel(fmt_currency(item.line_total)))
            lay.addLayout(row)
            if item.discount > 0:
                lay.addWidget(_muted(
                    f"MRP {fmt_currency(item.mrp)} → Selling {fmt_currency(item.unit_price)} "
                    f"(−{fmt_currency(item.discount)})"
                ))
            if item.remaining_qty < item.quantity:
                lay.addWidget(_muted(f"Returned {item.quantity - item.remaining_qty}, returnable {item.remaining_qty}"))
        if sale.discount > 0:
            row = QHBoxLayout()
            lbl = QLabel("Overall Discount")
            amt = QLabel(f"−{fmt_currency(sale.discount)}")
            lbl.setStyleSheet("color: #b91c1c;")
            amt.setStyleSheet("color: #b91c1c;")
            row.addWidget(lbl, 1)
            row.addWidget(amt)
            lay.addLayout(row)
        self.body_lay.addWidget(box)

    def _add_returns(self, returns: list[SaleReturn]):
        box = QGroupBox("Refund / Return History")
        lay = QVBoxLayout(box)
        for ret in returns:
            head = QHBoxLayout()
            head.addWidget(QLabel(fmt_date(ret.return_date)), 1)
            amt = QLabel(f"− {fmt_currency(ret.refund_amount)}")
            amt.setStyleSheet("color: #b91c1c;")
            head.addWidget(amt)
            lay.addLayout(head)
            if ret.invoice_number:
                lay.addWidget(_muted(f"Refund Receipt: {ret.invoice_number}"))
            for ri in ret.items:
                lay.addWidget(_muted(f"{ri.product_name} × {ri.quantity}   {fmt_currency(ri.line_total)}"))
            if ret.reason:
                lay.addWidget(_muted(f"Reason: {ret.reason}"))

            foot = QHBoxLayout()
            badge = QLabel(ret.refund_label)
            badge.setStyleSheet(
                "padding: 1px 6px; border-radius: 6px; "
                + ("background: #e5e7eb;" if not ret.refund_method else "background: #fee2e2; color: #b91c1c;")
            )
            foot.addWidget(badge)
            foot.addStretch(1)
            if ret.invoice_id:
                inv_id, inv_no = ret.invoice_id, ret.invoice_number
                b_print = QPushButton("Print")
                b_dl = QPushButton("Download")
                b_print.clicked.connect(lambda _=False, i=inv_id, n=inv_no: self.print_invoice.emit(i, n))
                b_dl.clicked.connect(lambda _=False, i=inv_id, n=inv_no: self.download_invoice.emit(i, n))
                foot.addWidget(b_print)
                foot.addWidget(b_dl)
            lay.addLayout(foot)
        self.body_lay.addWidget(box)

    def _add_payments(self, payments: list[SalePayment]):
        box = QGroupBox("Payments")
        lay = QVBoxLayout(box)
        if not payments:
            lay.addWidget(_muted("No payments made"))
        for p in payments:
            row = QHBoxLayout()
            row.addWidget(QLabel(f"{fmt_date(p.payment_date)} • {p.payment_method}"), 1)
            amt = QLabel(fmt_currency(p.amount))
            amt.setStyleSheet("color: #15803d;")
            row.addWidget(amt)
            if p.receipt_no:
                no = p.receipt_no
                b_print = QPushButton("Receipt")
                b_dl = QPushButton("Download")
                b_print.setToolTip("Print Receipt")
                b_dl.setToolTip("Download Receipt")
                b_print.clicked.connect(lambda _=False, n=no: self.print_receipt.emit(n))
                b_dl.clicked.connect(lambda _=False, n=no: self.download_receipt.emit(n))
                row.addWidget(b_print)
                row.addWidget(b_dl)
            lay.addLayout(row)

        inv = self.sale.invoice if self.sale else None
        if inv is not None:
            row = QHBoxLayout()
            row.addStretch(1)
            b_print = QPushButton("Print Invoice")
            b_dl = QPushButton("Download Invoice")
            b_print.clicked.connect(lambda: self.print_invoice.emit(inv.invoice_id, inv.invoice_number))
            b_dl.clicked.connect(lambda: self.download_invoice.emit(inv.invoice_id, inv.invoice_number))
            row.addWidget(b_print)
            row.addWidget(b_dl)
            lay.addLayout(row)
        self.body_lay.addWidget(box)

    def _add_totals(self, sale: Sale):
        box = QGroupBox("Totals")
        form = QFormLayout(box)
        form.addRow("Gross Total", QLabel(fmt_currency(sale.total)))
        if sale.refund_total > 0:
            form.addRow("Refunded", QLabel(f"− {fmt_currency(sale.refund_total)}"))
        net = QLabel(fmt_currency(sale.net_total))
        net.setStyleSheet("font-weight: bold;")
        form.addRow("Net Total", net)
        form.addRow("Paid", QLabel(fmt_currency(sale.paid_amount)))
        due = QLabel(fmt_currency(sale.due_amount))
        if sale.due_amount > 0:
            due.setStyleSheet("color: #b91c1c; font-weight: bold;")
        form.addRow("Due", due)
        if sale.payment_status:
            form.addRow("Status", QLabel(sale.payment_status.upper()))
        self.body_lay.addWidget(box)
