from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QWidget

from ...api.client import ApiClient
from ...api.repositories.customers_repo import Customer, CustomersRepo
from ...api.repositories.documents_repo import DocumentsRepo
from ...api.repositories.payments_repo import PaymentsRepo
from ...api.repositories.sales_repo import SalesRepo
from ...utils.pagination import page_slice
from ...utils.tasks import TaskRunner
from ...utils.ui_helpers import info, notify_exception, notify_info, notify_success
from ..base_module import BaseModule
from ..documents import DocumentActions
from .form import CustomerForm
from .model import CustomersTableModel, filter_customers
from .payments import latest_unpaid_sale
from .view import CustomerView

_log = logging.getLogger(__name__)


class CustomerController(BaseModule):
    """
    Customers: list/search/page, add/edit, receive payment, payment history.

    Due balances are always the server's figure; after a payment the list is
    reloaded rather than adjusted locally.
    """

    def __init__(self, api: ApiClient, runner: TaskRunner | None = None):
        super().__init__()
        self.repo = CustomersRepo(api)
        self.sales_repo = SalesRepo(api)
        self.payments_repo = PaymentsRepo(api)
        self.runner = runner or TaskRunner(self)
        self.view = CustomerView()
        self.documents = DocumentActions(DocumentsRepo(api), self.runner, self.view)

        self.customers: list[Customer] = []
        self.filtered: list[Customer] = []
        self.base = CustomersTableModel([])
        self.view.table.setModel(self.base)

        self._wire()
        self.reload()

    # ------------------------------------------------------------------ #
    # BaseModule API
    # ------------------------------------------------------------------ #

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        def _done(rows: list[Customer]):
            self.customers = rows
            self._apply_filter()

        self.runner.submit(self.repo.list_customers, on_success=_done, on_error=self._failed)

    # ------------------------------------------------------------------ #
    # Wiring & listing
    # ------------------------------------------------------------------ #

    def _wire(self):
        self.runner.busy_changed.connect(self.view.set_busy)
        self.view.btn_add.clicked.connect(self._add)
        self.view.btn_edit.clicked.connect(self._edit)
        self.view.btn_receive_payment.clicked.connect(self._on_receive_payment)
        self.view.btn_payment_history.clicked.connect(self._on_payment_history)
        self.view.search.textChanged.connect(lambda _t: self._apply_filter())
        self.view.pager.page_changed.connect(lambda _p: self._show_page())
        self.view.table.selectionModel().selectionChanged.connect(lambda *_: self._update_details())

    def _failed(self, exc: BaseException):
        notify_exception(exc, self.view)

    def _apply_filter(self):
        self.filtered = filter_customers(self.customers, self.view.search.text())
        self.view.pager.set_count(len(self.filtered))
        self.view.pager.reset()
        self._show_page()

    def _show_page(self):
        rows = page_slice(self.filtered, self.view.pager.page, self.view.pager.page_size)
        self.base.replace(rows)
        self.view.table.resizeColumnsToContents()
        if rows:
            self.view.table.selectRow(0)
        self._update_details()

    def _selected(self) -> Optional[Customer]:
        row = self.view.table.selected_source_row()
        return None if row is None else self.base.at(row)

    def _update_details(self):
        self.view.details.set_data(self._selected())

    # ------------------------------------------------------------------ #
    # CRUD
    # ------------------------------------------------------------------ #

    def _add(self):
        form = CustomerForm(self.view)
        if not form.exec():
            return
        self.save(None, form.payload())

    def _edit(self):
        c = self._selected()
        if not c:
            info(self.view, "Select", "Please select a customer to edit.")
            return
        form = CustomerForm(
            self.view,
            initial={"customer_id": c.customer_id, "name": c.name, "phone": c.phone, "email": c.email,
                     "address": c.address},
        )
        if not form.exec():
            return
        self.save(c.customer_id, form.payload())

    def save(self, customer_id: Optional[int], payload: dict) -> None:
        def _call():
            if customer_id:
                return self.repo.update(customer_id, payload)
            return self.repo.create(payload)

        def _done(_c):
            notify_success("Customer updated" if customer_id else "Customer added", self.view)
            self.reload()

        self.runner.submit(_call, on_success=_done, on_error=self._failed)

    # ------------------------------------------------------------------ #
    # Payments
    # ------------------------------------------------------------------ #

    def _on_receive_payment(self):
        c = self._selected()
        if not c:
            info(self.view, "Select", "Please select a customer.")
            return
        if c.due_balance <= 0:
            notify_info("Customer has no due", self.view)
            return

        def _done(sales):
            sale = latest_unpaid_sale(sales)
            if sale is None:
                notify_info("No unpaid invoices found for this customer", self.view)
                return
            self.open_receipt_dialog(c, sale.bill_number)

        self.runner.submit(lambda: self.sales_repo.list_sales(customer_id=c.customer_id),
                           on_success=_done, on_error=self._failed)

    def open_receipt_dialog(self, customer: Customer, latest_bill: str = "") -> None:
        from .receipt_dialog import CustomerReceiptDialog  # lazy import to keep UI deps local

        dlg = CustomerReceiptDialog(self.view, customer=customer, latest_bill=latest_bill)
        if not dlg.exec():
            return
        self.receive_payment(dlg.payload())

    def receive_payment(self, payload: dict) -> None:
        def _done(_body):
            notify_success("Payment received successfully", self.view)
            self.reload()

        self.runner.submit(
            lambda: self.payments_repo.receive_customer_payment(
                payload["customer_id"], payload["amount"], payload["payment_method"]
            ),
            on_success=_done,
            on_error=self._failed,
        )

    def _on_payment_history(self):
        c = self._selected()
        if not c:
            info(self.view, "Select", "Please select a customer.")
            return

        def _done(rows):
            if not rows:
                notify_info("No payment history found for this customer", self.view)
            self.open_history_dialog(c, rows)

        self.runner.submit(lambda: self.repo.payment_history(c.customer_id), on_success=_done, on_error=self._failed)

    def open_history_dialog(self, customer: Customer, rows) -> None:
        from .payment_history_view import PaymentHistoryDialog

        dlg = PaymentHistoryDialog(self.view, customer=customer, rows=rows, documents=self.documents)
        dlg.exec()
