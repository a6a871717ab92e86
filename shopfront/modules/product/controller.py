from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtWidgets import QWidget

from ...api.client import ApiClient, ApiError, SessionExpired
from ...api.repositories.products_repo import Product, ProductsRepo
from ...config import SETTINGS
from ...utils.tasks import TaskRunner
from ...utils.ui_helpers import confirm, info, notify_error, notify_exception, notify_success
from ..base_module import BaseModule
from .form import ProductForm, make_dup_check
from .model import ProductsTableModel, ProductFilterProxy
from .view import ProductView

_log = logging.getLogger(__name__)

DELETE_BLOCKED = "Cannot delete product (linked to sales/purchases)."


class ProductController(BaseModule):
    def __init__(self, api: ApiClient, runner: TaskRunner | None = None):
        super().__init__()
        self.repo = ProductsRepo(api)
        self.runner = runner or TaskRunner(self)
        self.view = ProductView()

        self.base = ProductsTableModel([], SETTINGS.low_stock_threshold)
        self.proxy = ProductFilterProxy(self.view)
        self.proxy.setSourceModel(self.base)
        self.view.table.setModel(self.proxy)

        self._wire()
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def _wire(self):
        self.runner.busy_changed.connect(self.view.set_busy)
        self.view.btn_add.clicked.connect(self._add)
        self.view.btn_edit.clicked.connect(self._edit)
        self.view.btn_del.clicked.connect(self._delete)
        self.view.btn_refresh.clicked.connect(self.reload)
        self.view.search.textChanged.connect(self._on_filter)
        self.view.group.currentIndexChanged.connect(lambda _i: self._on_filter())

    # ---------------- listing ----------------

    def reload(self) -> None:
        def _done(rows: list[Product]):
            self.base.low_stock_threshold = SETTINGS.low_stock_threshold
            self.base.replace(rows)
            self.view.table.resizeColumnsToContents()
            self._update_count()

        self.runner.submit(self.repo.list_products, on_success=_done, on_error=self._failed)

    def _on_filter(self, *_):
        self.proxy.set_search(self.view.search.text())
        self.proxy.set_group(self.view.group.currentData())
        self._update_count()

    def _update_count(self):
        self.view.lbl_count.setText(f"{self.proxy.rowCount()} items")

    def _failed(self, exc: BaseException):
        notify_exception(exc, self.view)

    def _selected(self) -> Optional[Product]:
        row = self.view.table.selected_source_row()
        return None if row is None else self.base.at(row)

    # ---------------- CRUD ----------------

    def _add(self):
        form = ProductForm(self.view, dup_check=make_dup_check(self.base.rows()))
        if not form.exec():
            return
        self.save(None, form.payload())

    def _edit(self):
        p = self._selected()
        if not p:
            info(self.view, "Select", "Please select a product to edit.")
            return
        form = ProductForm(self.view, initial=p.as_dict(), dup_check=make_dup_check(self.base.rows()))
        if not form.exec():
            return
        self.save(p.product_id, form.payload())

    def save(self, product_id: Optional[int], payload: dict) -> None:
        def _call():
            if product_id:
                return self.repo.update(product_id, payload)
            return self.repo.create(payload)

        def _done(_p):
            notify_success("Product updated" if product_id else "Product added", self.view)
            self.reload()

        self.runner.submit(_call, on_success=_done, on_error=self._failed)

    def _delete(self):
        p = self._selected()
        if not p:
            info(self.view, "Select", "Please select a product to delete.")
            return
        if not confirm(self.view, "Delete", f"Delete product “{p.name}”?"):
            return
        self.delete(p.product_id)

    def delete(self, product_id: int) -> None:
        def _err(exc: BaseException):
            if isinstance(exc, ApiError) and not isinstance(exc, SessionExpired) and exc.status:
                notify_error(DELETE_BLOCKED, self.view)
            else:
                self._failed(exc)

        def _done(_r):
            notify_success("Product deleted", self.view)
            self.reload()

        self.runner.submit(lambda: self.repo.delete(product_id), on_success=_done, on_error=_err)
