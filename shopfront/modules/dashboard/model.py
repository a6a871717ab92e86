# shopfront/modules/dashboard/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, Optional

from ...api.repositories.products_repo import Product
from ...api.repositories.sales_repo import Sale
from ...constants import LOW_STOCK_THRESHOLD
from ...utils.helpers import parse_date

UNCATEGORIZED = "Uncategorized"


# --------------------------- Metric helpers ---------------------------

def sales_on(sales: Iterable[Sale], day: date) -> list[Sale]:
    return [s for s in sales if parse_date(s.sale_date) == day]


def today_sales_total(sales: Iterable[Sale], today: Optional[date] = None) -> float:
    return sum(s.total for s in sales_on(sales, today or date.today()))


def stock_value(products: Iterable[Product]) -> float:
    """At cost: Σ buy_price × current_stock."""
    return sum(p.buy_price * p.current_stock for p in products)


def low_stock(products: Iterable[Product], threshold: int = LOW_STOCK_THRESHOLD) -> list[Product]:
    """In stock but at or below the threshold; sold-out items are not 'low'."""
    rows = [p for p in products if 0 < p.current_stock <= threshold]
    return sorted(rows, key=lambda p: (p.current_stock, p.name.lower()))


def sales_trend(sales: Iterable[Sale], days: int = 7, today: Optional[date] = None) -> list[tuple[date, float]]:
    """(day, total) for the last `days` days, oldest first, today included."""
    today = today or date.today()
    totals: dict[date, float] = {today - timedelta(days=i): 0.0 for i in range(days)}
    for s in sales:
        d = parse_date(s.sale_date)
        if d in totals:
            totals[d] += s.total
    return sorted(totals.items())


def value_by_category(products: Iterable[Product]) -> dict[str, float]:
    """Retail value (sell_price × stock) per category."""
    out: dict[str, float] = {}
    for p in products:
        cat = p.category.strip() or UNCATEGORIZED
        out[cat] = out.get(cat, 0.0) + p.sell_price * p.current_stock
    return out


def lookup(products: Iterable[Product], term: str, limit: int = 30) -> list[Product]:
    """Quick price lookup over name, code, category and size."""
    t = (term or "").strip().lower()
    rows = []
    for p in products:
        if not t or any(t in f.lower() for f in (p.name, p.code, p.category, p.size) if f):
            rows.append(p)
        if len(rows) >= limit:
            break
    return rows


# --------------------------- Dashboard Model ---------------------------

@dataclass
class DashboardModel:
    """
    Snapshot of the numbers the dashboard shows, computed from the loaded
    products and sales.

    Usage:
        model = DashboardModel()
        model.refresh(products, sales, threshold=3)
        print(model.kpi_today_sales, model.low_stock_count, ...)
    """

    products: list[Product] = field(default_factory=list)
    sales: list[Sale] = field(default_factory=list)
    threshold: int = LOW_STOCK_THRESHOLD

    kpi_today_sales: float = 0.0
    kpi_today_count: int = 0
    kpi_stock_value: float = 0.0
    low_stock_rows: list[Product] = field(default_factory=list)
    trend: list[tuple[date, float]] = field(default_factory=list)
    categories: dict[str, float] = field(default_factory=dict)

    @property
    def low_stock_count(self) -> int:
        return len(self.low_stock_rows)

    def refresh(
        self,
        products: list[Product],
        sales: list[Sale],
        *,
        threshold: int | None = None,
        today: Optional[date] = None,
    ) -> "DashboardModel":
        today = today or date.today()
        self.products = products
        self.sales = sales
        if threshold is not None:
            self.threshold = threshold
        self.kpi_today_sales = today_sales_total(sales, today)
        self.kpi_today_count = len(sales_on(sales, today))
        self.kpi_stock_value = stock_value(products)
        self.low_stock_rows = low_stock(products, self.threshold)
        self.trend = sales_trend(sales, 7, today)
        self.categories = value_by_category(products)
        return self
