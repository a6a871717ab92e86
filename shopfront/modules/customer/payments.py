"""Customer-level payment rules and history filters (no Qt, no I/O)."""
from __future__ import annotations

from typing import Iterable, Optional

from ...api.repositories.customers_repo import PaymentRecord
from ...api.repositories.sales_repo import Sale
from ...utils.validators import ValidationError

HISTORY_FILTERS = [("all", "All"), ("payment", "Payments"), ("refund", "Refunds")]


def validate_customer_payment(due: float, amount: float) -> float:
    """The amount must settle part or all of the current due, never more."""
    if due <= 0:
        raise ValidationError("Customer has no due")
    if amount <= 0:
        raise ValidationError("Enter a valid payment amount")
    if amount > due:
        raise ValidationError("Payment exceeds total due")
    return amount


def build_payment_payload(customer_id: int, due: float, amount: float, payment_method: str) -> dict:
    validate_customer_payment(due, amount)
    return {"customer_id": customer_id, "amount": amount, "payment_method": payment_method}


def latest_unpaid_sale(sales: Iterable[Sale]) -> Optional[Sale]:
    """Most recent sale still carrying a due; None when everything is settled."""
    unpaid = [s for s in sales if s.due_amount > 0]
    if not unpaid:
        return None
    return max(unpaid, key=lambda s: (s.sale_date, s.sale_id))


def filter_history(rows: Iterable[PaymentRecord], search: str = "", kind: str = "all") -> list[PaymentRecord]:
    t = (search or "").strip().lower()
    out = []
    for p in rows:
        if t and t not in p.search_text():
            continue
        if kind == "payment" and p.amount <= 0:
            continue
        if kind == "refund" and p.amount >= 0:
            continue
        out.append(p)
    return out
