"""
Daily sales report over the sales already loaded from the API.

One row per calendar day in the chosen range that had at least one sale,
plus a totals row. Money columns are plain floats; formatting is the view's job.
"""
from __future__ import annotations

import csv
import os
from dataclasses import dataclass, fields
from datetime import date
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

from PySide6.QtCore import QAbstractTableModel, QModelIndex, Qt

from ...api.repositories.sales_repo import Sale
from ...utils.helpers import fmt_money
from ..sales.history import parse_datetime, in_range


@dataclass
class DayRow:
    day: str
    sales: int = 0
    gross: float = 0.0
    discount: float = 0.0
    refunds: float = 0.0
    net: float = 0.0
    paid: float = 0.0
    due: float = 0.0

    def add(self, s: Sale) -> None:
        self.sales += 1
        self.gross += s.subtotal
        self.discount += s.discount
        self.refunds += s.refund_total
        self.net += s.net_total
        self.paid += s.paid_amount
        self.due += s.due_amount


HEADERS = ["Date", "Sales", "Gross", "Discount", "Refunds", "Net", "Paid", "Due"]
FIELDS = [f.name for f in fields(DayRow)]
MONEY_COLS = {2, 3, 4, 5, 6, 7}


def daily_rows(sales: Iterable[Sale], date_from: Optional[date] = None, date_to: Optional[date] = None) -> List[DayRow]:
    by_day: Dict[str, DayRow] = {}
    for s in sales:
        if not in_range(s, date_from, date_to):
            continue
        dt = parse_datetime(s.sale_date)
        if dt is None:
            continue
        key = dt.date().isoformat()
        by_day.setdefault(key, DayRow(key)).add(s)
    return [by_day[k] for k in sorted(by_day)]


def totals(rows: Sequence[DayRow]) -> DayRow:
    t = DayRow("Total")
    for r in rows:
        t.sales += r.sales
        t.gross += r.gross
        t.discount += r.discount
        t.refunds += r.refunds
        t.net += r.net
        t.paid += r.paid
        t.due += r.due
    return t


def display_cells(row: DayRow) -> List[str]:
    out: List[str] = []
    for c, name in enumerate(FIELDS):
        v = getattr(row, name)
        out.append(fmt_money(v) if c in MONEY_COLS else str(v))
    return out


def write_csv(path: str | os.PathLike, rows: Sequence[DayRow]) -> Path:
    """Rows plus a trailing totals line; numbers are written unformatted."""
    p = Path(path)
    with open(p, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(HEADERS)
        for r in list(rows) + [totals(rows)]:
            w.writerow([
                r.day, r.sales,
                f"{r.gross:.2f}", f"{r.discount:.2f}", f"{r.refunds:.2f}",
                f"{r.net:.2f}", f"{r.paid:.2f}", f"{r.due:.2f}",
            ])
    return p


class DailyReportModel(QAbstractTableModel):
    def __init__(self, rows: Optional[List[DayRow]] = None, parent=None) -> None:
        super().__init__(parent)
        self._rows: List[DayRow] = rows or []

    def rows(self) -> List[DayRow]:
        return list(self._rows)

    def replace(self, rows: List[DayRow]) -> None:
        self.beginResetModel()
        self._rows = rows or []
        self.endResetModel()

    def rowCount(self, parent=QModelIndex()) -> int:  # type: ignore[override]
        return 0 if parent.isValid() else len(self._rows)

    def columnCount(self, parent=QModelIndex()) -> int:  # type: ignore[override]
        return 0 if parent.isValid() else len(HEADERS)

    def headerData(self, section, orientation, role=Qt.DisplayRole):  # type: ignore[override]
        if role != Qt.DisplayRole:
            return None
        return HEADERS[section] if orientation == Qt.Horizontal else str(section + 1)

    def data(self, index: QModelIndex, role=Qt.DisplayRole) -> Any:  # type: ignore[override]
        if not index.isValid():
            return None
        r, c = index.row(), index.column()
        if role == Qt.DisplayRole:
            return display_cells(self._rows[r])[c]
        if role == Qt.TextAlignmentRole:
            if c > 0:
                return Qt.AlignRight | Qt.AlignVCenter
            return Qt.AlignLeft | Qt.AlignVCenter
        return None
