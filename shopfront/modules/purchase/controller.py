from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QWidget

from ...api.client import ApiClient
from ...api.repositories.products_repo import Product, ProductsRepo
from ...api.repositories.purchases_repo import Purchase, PurchasesRepo
from ...utils.pagination import page_slice
from ...utils.tasks import TaskRunner
from ...utils.ui_helpers import info, notify_exception, notify_success
from ..base_module import BaseModule
from .form import PurchaseForm
from .model import PurchasesTableModel, filter_purchases
from .view import PurchaseView

_log = logging.getLogger(__name__)


class PurchaseController(BaseModule):
    """
    Purchase orders: list/search/page, details via GET /purchases/{id},
    create (POST) and edit (PUT). The product catalog is refetched before the
    form opens so buy/sell prices prefill from current values.
    """

    def __init__(self, api: ApiClient, runner: TaskRunner | None = None):
        super().__init__()
        self.repo = PurchasesRepo(api)
        self.products_repo = ProductsRepo(api)
        self.runner = runner or TaskRunner(self)
        self.view = PurchaseView()

        self.purchases: list[Purchase] = []
        self.filtered: list[Purchase] = []
        self.base = PurchasesTableModel([])
        self.view.table.setModel(self.base)

        self._wire()
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def _wire(self):
        self.runner.busy_changed.connect(self.view.set_busy)
        self.view.btn_add.clicked.connect(self._add)
        self.view.btn_edit.clicked.connect(self._edit)
        self.view.btn_refresh.clicked.connect(self.reload)
        self.view.search.textChanged.connect(lambda _t: self._apply_filter())
        self.view.pager.page_changed.connect(lambda _p: self._show_page())
        self.view.table.selectionModel().selectionChanged.connect(lambda *_: self._on_selection())

    def _failed(self, exc: BaseException):
        notify_exception(exc, self.view)

    # ---------------- listing ----------------

    def reload(self) -> None:
        def _done(rows: list[Purchase]):
            self.purchases = rows
            self._apply_filter()

        self.runner.submit(self.repo.list_purchases, on_success=_done, on_error=self._failed)

    def _apply_filter(self):
        self.filtered = filter_purchases(self.purchases, self.view.search.text())
        self.view.pager.set_count(len(self.filtered))
        self.view.pager.reset()
        self._show_page()

    def _show_page(self):
        rows = page_slice(self.filtered, self.view.pager.page, self.view.pager.page_size)
        self.base.replace(rows)
        self.view.table.resizeColumnsToContents()
        self.view.details.set_data(None)

    def _selected(self) -> Optional[Purchase]:
        row = self.view.table.selected_source_row()
        return None if row is None else self.base.at(row)

    def _on_selection(self):
        p = self._selected()
        if p is None:
            self.view.details.set_data(None)
            return
        self.runner.submit(lambda: self.repo.get(p.purchase_id),
                           on_success=self.view.details.set_data, on_error=self._failed)

    # ---------------- create / edit ----------------

    def _add(self):
        self.runner.submit(self.products_repo.list_products,
                           on_success=lambda products: self.open_form(products, None),
                           on_error=self._failed)

    def _edit(self):
        p = self._selected()
        if not p:
            info(self.view, "Select", "Please select a purchase to edit.")
            return

        def _load():
            return self.products_repo.list_products(), self.repo.get(p.purchase_id)

        self.runner.submit(_load, on_success=lambda res: self.open_form(res[0], res[1]), on_error=self._failed)

    def open_form(self, products: list[Product], purchase: Optional[Purchase]) -> None:
        form = PurchaseForm(self.view, products=products, purchase=purchase)
        if not form.exec():
            return
        self.save(purchase.purchase_id if purchase else None, form.payload())

    def save(self, purchase_id: Optional[int], payload: dict) -> None:
        def _call():
            if purchase_id:
                return self.repo.update(purchase_id, payload)
            return self.repo.create(payload)

        def _done(_b):
            notify_success("Purchase updated" if purchase_id else "Purchase saved", self.view)
            self.reload()

        self.runner.submit(_call, on_success=_done, on_error=self._failed)
