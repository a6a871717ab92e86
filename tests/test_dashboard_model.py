# tests/test_dashboard_model.py

from datetime import date

from shopfront.modules.dashboard.model import (
    DashboardModel,
    low_stock,
    lookup,
    sales_trend,
    stock_value,
    today_sales_total,
    value_by_category,
)

from factories import make_product, make_sale

TODAY = date(2024, 5, 10)


def _products():
    return [
        make_product(pid=1, code="TS-01", name="T-Shirt", stock=2, buy=300, sell=500, category="Tops"),
        make_product(pid=2, code="JN-01", name="Jeans", stock=0, buy=800, sell=1200, category="Bottoms"),
        make_product(pid=3, code="CP-01", name="Cap", stock=3, buy=100, sell=200, category=""),
        make_product(pid=4, code="SK-01", name="Socks", stock=20, buy=50, sell=90, category="Tops", size="Free"),
    ]


def _sales():
    return [
        make_sale(sid=1, sale_date="2024-05-10T09:00:00Z", total=1000),
        make_sale(sid=2, sale_date="2024-05-10 18:30:00", total=250),
        make_sale(sid=3, sale_date="2024-05-08", total=400),
        make_sale(sid=4, sale_date="2024-04-01", total=999),
    ]


def test_today_sales_total():
    assert today_sales_total(_sales(), TODAY) == 1250


def test_stock_value_at_cost():
    assert stock_value(_products()) == 2 * 300 + 3 * 100 + 20 * 50


def test_low_stock_excludes_sold_out():
    assert [p.code for p in low_stock(_products(), 3)] == ["TS-01", "CP-01"]


def test_sales_trend_last_seven_days():
    trend = sales_trend(_sales(), 7, TODAY)
    assert len(trend) == 7
    assert trend[0][0] == date(2024, 5, 4)
    assert trend[-1] == (TODAY, 1250)
    assert dict(trend)[date(2024, 5, 8)] == 400


def test_value_by_category():
    assert value_by_category(_products()) == {
        "Tops": 2 * 500 + 20 * 90,
        "Bottoms": 0,
        "Uncategorized": 600,
    }


def test_lookup():
    assert [p.code for p in lookup(_products(), "free")] == ["SK-01"]
    assert len(lookup(_products(), "", limit=2)) == 2


def test_model_refresh():
    m = DashboardModel().refresh(_products(), _sales(), threshold=2, today=TODAY)
    assert m.kpi_today_count == 2
    assert m.low_stock_count == 1
    assert m.threshold == 2
