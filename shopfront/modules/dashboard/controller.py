from __future__ import annotations

import logging

from PySide6.QtWidgets import QWidget

from ...api.client import ApiClient
from ...api.repositories.products_repo import ProductsRepo
from ...api.repositories.sales_repo import SalesRepo
from ...config import SETTINGS
from ...utils.helpers import fmt_currency
from ...utils.tasks import TaskRunner
from ...utils.ui_helpers import notify_exception
from ..base_module import BaseModule
from .model import DashboardModel, lookup
from .view import DashboardView

_log = logging.getLogger(__name__)


class DashboardController(BaseModule):
    def __init__(self, api: ApiClient, runner: TaskRunner | None = None):
        super().__init__()
        self.products_repo = ProductsRepo(api)
        self.sales_repo = SalesRepo(api)
        self.runner = runner or TaskRunner(self)
        self.view = DashboardView()
        self.model = DashboardModel()

        self.runner.busy_changed.connect(self.view.set_busy)
        self.view.btn_refresh.clicked.connect(self.reload)
        self.view.lookup.textChanged.connect(self._on_lookup)
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        def _load():
            return self.products_repo.list_products(), self.sales_repo.list_sales()

        self.runner.submit(_load, on_success=self._apply, on_error=lambda e: notify_exception(e, self.view))

    def _apply(self, result) -> None:
        products, sales = result
        m = self.model.refresh(products, sales, threshold=SETTINGS.low_stock_threshold)
        v = self.view
        v.set_kpi_value("today_sales", fmt_currency(m.kpi_today_sales), f"{m.kpi_today_count} bill(s) today")
        v.set_kpi_value("stock_value", fmt_currency(m.kpi_stock_value))
        v.set_kpi_value("low_stock", str(m.low_stock_count), f"Items with ≤ {m.threshold} pcs in stock.")
        v.set_low_stock(m.low_stock_rows, m.threshold)
        v.set_trend(m.trend)
        v.set_categories(m.categories)
        self._on_lookup(v.lookup.text())

    def _on_lookup(self, text: str) -> None:
        self.view.set_lookup(lookup(self.model.products, text))
