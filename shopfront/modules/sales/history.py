"""Filtering for the sales history list (client-side over the loaded sales)."""
from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable, Optional

from ...api.repositories.sales_repo import Sale


def parse_datetime(v: str) -> Optional[datetime]:
    if not v:
        return None
    text = str(v).strip().replace("Z", "+00:00")
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        try:
            return datetime.combine(date.fromisoformat(text[:10]), time.min)
        except ValueError:
            return None
    return dt.replace(tzinfo=None)


def in_range(sale: Sale, date_from: Optional[date], date_to: Optional[date]) -> bool:
    """`date_to` covers the whole day (up to 23:59:59)."""
    dt = parse_datetime(sale.sale_date)
    if dt is None:
        return date_from is None and date_to is None
    if date_from is not None and dt < datetime.combine(date_from, time.min):
        return False
    if date_to is not None and dt > datetime.combine(date_to, time(23, 59, 59)):
        return False
    return True


def matches_total(sale: Sale, text: str) -> bool:
    t = (text or "").strip()
    if not t:
        return True
    candidates = {
        str(sale.total),
        f"{sale.total:.2f}",
        f"{sale.total:g}",
        f"{sale.net_total:.2f}",
    }
    return any(t in c for c in candidates)


def filter_sales(
    sales: Iterable[Sale],
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    search: str = "",
) -> list[Sale]:
    return [s for s in sales if in_range(s, date_from, date_to) and matches_total(s, search)]
