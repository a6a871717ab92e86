from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Tuple

from PySide6.QtCharts import QBarCategoryAxis, QBarSeries, QBarSet, QChart, QChartView, QValueAxis
from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter, QStandardItem, QStandardItemModel
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QGridLayout,
    QLabel,
    QLineEdit,
    QPushButton,
)

from ...api.repositories.products_repo import Product
from ...utils.helpers import fmt_currency
from ...widgets.cards import Panel, StatCard
from ...widgets.table_view import TableView


class DashboardView(QWidget):
    """
    Widgets only; DashboardController pushes numbers in through:
        set_kpi_value(key, text, caption=None)
        set_trend(points), set_categories(values)
        set_low_stock(rows, threshold), set_lookup(rows)
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        root = QVBoxLayout(self)

        head = QHBoxLayout()
        title = QLabel("Dashboard")
        title.setStyleSheet("font-size: 18px; font-weight: bold;")
        self.lbl_status = QLabel()
        self.lbl_status.setStyleSheet("color: #6b7280;")
        self.btn_refresh = QPushButton("Refresh")
        head.addWidget(title)
        head.addStretch(1)
        head.addWidget(self.lbl_status)
        head.addWidget(self.btn_refresh)
        root.addLayout(head)

        # ---- KPI row ----
        kpis = QHBoxLayout()
        self._kpi_cards: Dict[str, StatCard] = {}
        for key, t, cap in [
            ("today_sales", "Today's Sales", "Bills dated today"),
            ("stock_value", "Stock Value", "Based on buy price × current stock."),
            ("low_stock", "Low Stock", ""),
        ]:
            card = StatCard(t, cap)
            self._kpi_cards[key] = card
            kpis.addWidget(card)
        root.addLayout(kpis)

        self.lbl_alert = QLabel()
        self.lbl_alert.setStyleSheet("background: #fef3c7; color: #92400e; padding: 6px; border-radius: 6px;")
        self.lbl_alert.hide()
        root.addWidget(self.lbl_alert)

        # ---- charts ----
        grid = QGridLayout()
        self.trend_chart, self.trend_view = _chart_pair("Sales (last 7 days)")
        self.cat_chart, self.cat_view = _chart_pair("Stock value by category (sell price × quantity)")

        grid.addWidget(self.trend_view, 0, 0)
        grid.addWidget(self.cat_view, 0, 1)

        # ---- low stock + lookup ----
        self.model_low = QStandardItemModel(0, 3)
        self.model_low.setHorizontalHeaderLabels(["Product", "Code", "Stock"])
        self.tbl_low = TableView()
        self.tbl_low.setModel(self.model_low)
        self.lbl_low_empty = QLabel("No low stock items")
        self.lbl_low_empty.setAlignment(Qt.AlignCenter)
        low_box = QWidget()
        lv = QVBoxLayout(low_box)
        lv.setContentsMargins(0, 0, 0, 0)
        lv.addWidget(self.tbl_low)
        lv.addWidget(self.lbl_low_empty)
        grid.addWidget(Panel("Low Stock Alert", low_box), 1, 0)

        look = QWidget()
        kv = QVBoxLayout(look)
        kv.setContentsMargins(0, 0, 0, 0)
        self.lookup = QLineEdit()
        self.lookup.setPlaceholderText("Search by name, code, category or size…")
        self.model_lookup = QStandardItemModel(0, 5)
        self.model_lookup.setHorizontalHeaderLabels(["Product", "Code", "Size", "MRP", "Stock"])
        self.tbl_lookup = TableView()
        self.tbl_lookup.setModel(self.model_lookup)
        kv.addWidget(self.lookup)
        kv.addWidget(self.tbl_lookup)
        grid.addWidget(Panel("Price Lookup", look), 1, 1)

        root.addLayout(grid, 1)

    # ---------------- setters ----------------

    def set_busy(self, busy: bool):
        self.lbl_status.setText("Loading…" if busy else "")

    def set_kpi_value(self, key: str, text: str, caption: Optional[str] = None) -> None:
        card = self._kpi_cards.get(key)
        if not card:
            return
        card.update_figure(text, caption)

    def set_low_stock(self, rows: List[Product], threshold: int) -> None:
        self.model_low.removeRows(0, self.model_low.rowCount())
        for p in rows:
            self.model_low.appendRow([
                QStandardItem(p.name),
                QStandardItem(p.code),
                QStandardItem(f"{p.current_stock} pcs"),
            ])
        self.tbl_low.resizeColumnsToContents()
        self.lbl_low_empty.setVisible(not rows)
        if rows:
            self.lbl_alert.setText(
                f"You have {len(rows)} items with low stock levels (≤ {threshold} pcs). Consider restocking soon."
            )
        self.lbl_alert.setVisible(bool(rows))

    def set_lookup(self, rows: List[Product]) -> None:
        self.model_lookup.removeRows(0, self.model_lookup.rowCount())
        for p in rows:
            self.model_lookup.appendRow([
                QStandardItem(p.name),
                QStandardItem(p.code),
                QStandardItem(p.size or "-"),
                QStandardItem(fmt_currency(p.sell_price)),
                QStandardItem(str(p.current_stock)),
            ])
        self.tbl_lookup.resizeColumnsToContents()

    def set_trend(self, points: List[Tuple[date, float]]) -> None:
        _fill_bar_chart(self.trend_chart, [d.strftime("%a") for d, _ in points], [v for _, v in points], "Sales")

    def set_categories(self, values: Dict[str, float]) -> None:
        items = sorted(values.items(), key=lambda kv: kv[1], reverse=True)
        _fill_bar_chart(self.cat_chart, [k for k, _ in items], [v for _, v in items], "Stock value")


def _fill_bar_chart(chart: QChart, labels: List[str], values: List[float], name: str) -> None:
    chart.removeAllSeries()
    for axis in chart.axes():
        chart.removeAxis(axis)
    bars = QBarSet(name)
    for v in values:
        bars.append(float(v))
    series = QBarSeries()
    series.append(bars)
    chart.addSeries(series)

    ax_x = QBarCategoryAxis()
    ax_x.append(labels)
    ax_y = QValueAxis()
    ax_y.setRange(0, max(values + [1.0]) * 1.1)
    ax_y.setLabelFormat("%.0f")
    chart.addAxis(ax_x, Qt.AlignBottom)
    chart.addAxis(ax_y, Qt.AlignLeft)
    series.attachAxis(ax_x)
    series.attachAxis(ax_y)



def _chart_pair(title: str) -> Tuple[QChart, QChartView]:
    chart = QChart()
    chart.setTitle(title)
    chart.legend().hide()
    view = QChartView(chart)
    view.setRenderHint(QPainter.Antialiasing)
    view.setMinimumHeight(220)
    return chart, view
