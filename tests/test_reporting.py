# tests/test_reporting.py

import csv
from datetime import date

from shopfront.modules.reporting.model import DailyReportModel, daily_rows, display_cells, totals, write_csv

from factories import make_sale


def _sales():
    return [
        make_sale(sid=1, sale_date="2024-05-10 09:00:00", total=1000, paid=600, due=400, discount=100,
                  subtotal=1100),
        make_sale(sid=2, sale_date="2024-05-10 20:00:00", total=500, paid=500, due=0, refund_total=200),
        make_sale(sid=3, sale_date="2024-05-11", total=300, paid=300, due=0),
        make_sale(sid=4, sale_date="2024-06-01", total=999, paid=999, due=0),
    ]


def test_daily_rows_group_by_day_within_range():
    rows = daily_rows(_sales(), date(2024, 5, 1), date(2024, 5, 31))
    assert [r.day for r in rows] == ["2024-05-10", "2024-05-11"]
    d = rows[0]
    assert (d.sales, d.gross, d.discount, d.refunds, d.net, d.paid, d.due) == (2, 1600, 100, 200, 1300, 1100, 400)


def test_to_date_is_inclusive():
    rows = daily_rows(_sales(), date(2024, 5, 10), date(2024, 5, 10))
    assert [r.day for r in rows] == ["2024-05-10"]


def test_totals_row():
    t = totals(daily_rows(_sales()))
    assert t.day == "Total"
    assert t.sales == 4
    assert t.net == 1300 + 300 + 999


def test_display_cells_formats_money():
    row = daily_rows(_sales(), date(2024, 5, 11), date(2024, 5, 11))[0]
    assert display_cells(row) == ["2024-05-11", "1", "300.00", "0.00", "0.00", "300.00", "300.00", "0.00"]


def test_write_csv(tmp_path):
    rows = daily_rows(_sales(), date(2024, 5, 1), date(2024, 5, 31))
    out = write_csv(tmp_path / "r.csv", rows)
    with open(out, newline="", encoding="utf-8") as f:
        data = list(csv.reader(f))
    assert data[0][0] == "Date"
    assert len(data) == 4
    assert data[-1][:2] == ["Total", "3"]
    assert data[1][5] == "1300.00"


def test_table_model(qapp):
    m = DailyReportModel(daily_rows(_sales()))
    assert m.rowCount() == 3
    assert m.columnCount() == 8
    assert m.index(0, 0).data() == "2024-05-10"
