from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QUrl
from PySide6.QtGui import QDesktopServices
from PySide6.QtWidgets import QFileDialog, QWidget

from ...api.client import ApiClient
from ...api.repositories.sales_repo import Sale, SalesRepo
from ...config import SETTINGS
from ...utils.documents import render_html, write_pdf
from ...utils.helpers import fmt_currency, today_str
from ...utils.tasks import TaskRunner
from ...utils.ui_helpers import info, notify_error, notify_exception, notify_success
from ..base_module import BaseModule
from .model import HEADERS, MONEY_COLS, DailyReportModel, DayRow, daily_rows, display_cells, totals, write_csv
from .view import ReportsView

_log = logging.getLogger(__name__)


class ReportsController(BaseModule):
    """Per-day sales summary for a date range; CSV and PDF export of what is shown."""

    def __init__(self, api: ApiClient, runner: TaskRunner | None = None):
        super().__init__()
        self.sales_repo = SalesRepo(api)
        self.runner = runner or TaskRunner(self)
        self.view = ReportsView()
        self.model = DailyReportModel()
        self.view.table.setModel(self.model)
        self.sales: list[Sale] = []

        self.ask_save_path: Callable[[str, str, str], str] = self._ask_save_path
        self.open_url: Callable[[QUrl], bool] = QDesktopServices.openUrl

        self.runner.busy_changed.connect(self.view.set_busy)
        self.view.btn_apply.clicked.connect(self.apply_range)
        self.view.btn_refresh.clicked.connect(self.reload)
        self.view.btn_export_csv.clicked.connect(lambda: self.export_csv())
        self.view.btn_export_pdf.clicked.connect(lambda: self.export_pdf())
        self.reload()

    def get_widget(self) -> QWidget:
        return self.view

    def reload(self) -> None:
        def _done(rows: list[Sale]):
            self.sales = rows
            self.apply_range()

        self.runner.submit(
            self.sales_repo.list_sales,
            on_success=_done,
            on_error=lambda e: notify_exception(e, self.view),
        )

    def apply_range(self) -> None:
        date_from, date_to = self.view.range()
        if date_from > date_to:
            notify_error("'From' date is after 'To' date", self.view)
            return
        rows = daily_rows(self.sales, date_from, date_to)
        self.model.replace(rows)
        self.view.table.resizeColumnsToContents()
        t = totals(rows)
        self.view.lbl_totals.setText(
            f"{t.sales} sale(s)  ·  Net {fmt_currency(t.net)}  ·  Paid {fmt_currency(t.paid)}  ·  Due {fmt_currency(t.due)}"
        )

    # ---------------- export ----------------

    def _subtitle(self) -> str:
        date_from, date_to = self.view.range()
        return f"{date_from.isoformat()} to {date_to.isoformat()}"

    def export_csv(self, path: Optional[str] = None) -> Optional[Path]:
        rows = self.model.rows()
        if not rows:
            info(self.view, "Export CSV", "No report rows to export.")
            return None
        fn = path or self.ask_save_path("Export to CSV", "sales_report.csv", "CSV Files (*.csv)")
        if not fn:
            return None
        try:
            out = write_csv(fn, rows)
        except OSError as e:
            _log.error("CSV export to %s failed: %s", fn, e, exc_info=True)
            notify_error(f"Could not write CSV: {e}", self.view)
            return None
        notify_success(f"Report saved to {out}", self.view)
        return out

    def report_html(self, rows: list[DayRow]) -> str:
        return render_html(
            "report.html",
            shop_name=SETTINGS.shop_name,
            title="Daily sales report",
            subtitle=f"{self._subtitle()} · Generated {today_str()}",
            labels=HEADERS,
            numeric=[1] + sorted(MONEY_COLS),
            rows=[display_cells(r) for r in rows],
            totals=display_cells(totals(rows)),
        )

    def export_pdf(self, path: Optional[str] = None) -> Optional[Path]:
        rows = self.model.rows()
        if not rows:
            info(self.view, "Export PDF", "No report rows to export.")
            return None
        fn = path or self.ask_save_path("Export to PDF", "sales_report.pdf", "PDF Files (*.pdf)")
        if not fn:
            return None
        try:
            out = write_pdf(self.report_html(rows), fn)
        except OSError as e:
            _log.error("PDF export to %s failed: %s", fn, e, exc_info=True)
            notify_error(f"Could not create PDF: {e}", self.view)
            return None
        self.open_url(QUrl.fromLocalFile(str(out)))
        return out

    def _ask_save_path(self, title: str, suggested: str, filt: str) -> str:
        fn, _ = QFileDialog.getSaveFileName(self.view, title, suggested, filt)
        return fn
