from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QWidget

from ...api.client import ApiClient
from ...api.repositories.customers_repo import CustomersRepo
from ...api.repositories.documents_repo import DocumentsRepo
from ...api.repositories.products_repo import ProductsRepo
from ...api.repositories.sales_repo import Sale, SalesRepo
from ...config import SETTINGS
from ...utils.pagination import page_slice
from ...utils.tasks import TaskRunner
from ...utils.ui_helpers import notify_exception, notify_success
from ..base_module import BaseModule
from ..documents import DocumentActions
from .history import filter_sales
from .model import SalesTableModel
from .return_form import SaleReturnForm
from .view import SalesView

_log = logging.getLogger(__name__)


class SalesController(BaseModule):
    """
    POS billing + sales history.

    - New Sale tab: products and customers are loaded once and after every
      completed sale (stock changes server-side).
    - History tab: filtered client-side, 10 per page; bill details are
      fetched on first selection and cached per sale id.
    """

    def __init__(self, api: ApiClient, runner: TaskRunner | None = None):
        super().__init__()
        self.api = api
        self.sales_repo = SalesRepo(api)
        self.products_repo = ProductsRepo(api)
        self.customers_repo = CustomersRepo(api)
        self.runner = runner or TaskRunner(self)
        self.view = SalesView()
        self.documents = DocumentActions(DocumentsRepo(api), self.runner, self.view)

        self.sales: list[Sale] = []
        self.filtered: list[Sale] = []
        self.details_cache: dict[int, Sale] = {}
        self._selected_id: Optional[int] = None

        self.model = SalesTableModel([])
        self.view.history.table.setModel(self.model)

        self._wire()
        self.reload()

    # ------------------------------------------------------------------ #
    # BaseModule API
    # ------------------------------------------------------------------ #

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        self.view.form.set_low_stock_threshold(SETTINGS.low_stock_threshold)
        self._load_products()
        self._load_customers()
        self._load_sales()

    # ------------------------------------------------------------------ #
    # Wiring
    # ------------------------------------------------------------------ #

    def _wire(self):
        self.runner.busy_changed.connect(self.view.set_busy)
        self.view.form.submitted.connect(self.submit_sale)

        h = self.view.history
        h.search.textChanged.connect(lambda _t: self._apply_filters())
        h.chk_from.toggled.connect(lambda _b: self._apply_filters())
        h.chk_to.toggled.connect(lambda _b: self._apply_filters())
        h.date_from.dateChanged.connect(lambda _d: self._apply_filters())
        h.date_to.dateChanged.connect(lambda _d: self._apply_filters())
        h.btn_clear.clicked.connect(h.clear_filters)
        h.btn_refresh.clicked.connect(self._load_sales)
        h.pager.page_changed.connect(lambda _p: self._show_page())
        h.table.selectionModel().selectionChanged.connect(self._on_selection)

        d = h.details
        d.return_requested.connect(self.open_return)
        d.print_invoice.connect(lambda i, n: self.documents.print_invoice(i, n))
        d.download_invoice.connect(lambda i, n: self.documents.download_invoice(i, n))
        d.print_receipt.connect(self.documents.print_receipt)
        d.download_receipt.connect(self.documents.download_receipt)

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    def _load_products(self):
        self.runner.submit(
            self.products_repo.list_products,
            on_success=self.view.form.set_products,
            on_error=lambda e: notify_exception(e, self.view),
        )

    def _load_customers(self):
        self.runner.submit(
            self.customers_repo.list_customers,
            on_success=self.view.form.set_customers,
            on_error=lambda e: notify_exception(e, self.view),
        )

    def _load_sales(self):
        def _done(rows: list[Sale]):
            self.sales = rows
            self.details_cache.clear()
            self._apply_filters()

        self.runner.submit(
            self.sales_repo.list_sales,
            on_success=_done,
            on_error=lambda e: notify_exception(e, self.view),
        )

    # ------------------------------------------------------------------ #
    # History: filters, paging, details
    # ------------------------------------------------------------------ #

    def _apply_filters(self):
        h = self.view.history
        date_from, date_to = h.range()
        self.filtered = filter_sales(self.sales, date_from, date_to, h.search.text())
        h.pager.set_count(len(self.filtered))
        h.pager.reset()
        self._show_page()

    def _show_page(self):
        h = self.view.history
        rows = page_slice(self.filtered, h.pager.page, h.pager.page_size)
        self.model.replace(rows)
        h.table.resizeColumnsToContents()
        h.lbl_empty.setVisible(not rows)
        if self._selected_id is None or all(s.sale_id != self._selected_id for s in rows):
            self._selected_id = None
            h.details.clear()

    def _on_selection(self, *_):
        row = self.view.history.table.selected_source_row()
        if row is not None:
            self.show_details(self.model.at(row).sale_id)

    def show_details(self, sale_id: int) -> None:
        self._selected_id = sale_id
        details = self.view.history.details
        cached = self.details_cache.get(sale_id)
        if cached is not None:
            details.set_sale(cached)
            return
        details.show_loading()

        def _done(sale: Sale):
            self.details_cache[sale_id] = sale
            if self._selected_id == sale_id:
                details.set_sale(sale)

        self.runner.submit(
            lambda: self.sales_repo.get(sale_id),
            on_success=_done,
            on_error=lambda e: (details.clear(), notify_exception(e, self.view)),
        )

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #

    def submit_sale(self) -> None:
        payload = self.view.form.get_payload()
        if payload is None:
            return

        def _done(_body):
            notify_success("Sale completed", self.view)
            self.view.form.reset()
            self._load_products()
            self._load_sales()

        self.runner.submit(
            lambda: self.sales_repo.create(payload),
            on_success=_done,
            on_error=lambda e: notify_exception(e, self.view),
        )

    def open_return(self, sale: Sale) -> None:
        if not sale.is_returnable:
            return
        dlg = SaleReturnForm(self.view, sale=sale)
        if not dlg.exec():
            return
        self.submit_return(sale.sale_id, dlg.payload())

    def submit_return(self, sale_id: int, payload: dict) -> None:
        def _done(_body):
            notify_success("Return processed", self.view)
            self.details_cache.pop(sale_id, None)
            self._load_products()
            self._load_sales()
            self.show_details(sale_id)

        self.runner.submit(
            lambda: self.sales_repo.create_return(sale_id, payload),
            on_success=_done,
            on_error=lambda e: notify_exception(e, self.view),
        )
