"""
Sale return / refund calculation.

Each sale line carries `remaining_qty` from the API (original quantity minus
what has already come back). The cashier picks a return quantity per line,
clamped to [0, remaining_qty]; the refund is those quantities at the price
actually charged.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from ...api.repositories.sales_repo import SaleItem
from ...utils.validators import ValidationError


@dataclass
class ReturnLine:
    sale_item_id: int
    product_name: str
    sold_qty: int
    remaining_qty: int
    unit_price: float
    return_qty: int = 0

    @classmethod
    def from_item(cls, item: SaleItem) -> "ReturnLine":
        return cls(
            sale_item_id=item.item_id,
            product_name=item.product_name,
            sold_qty=item.quantity,
            remaining_qty=item.remaining_qty,
            unit_price=item.unit_price,
        )

    def set_quantity(self, qty: int) -> int:
        self.return_qty = clamp(qty, self.remaining_qty)
        return self.return_qty

    @property
    def refund(self) -> float:
        return self.return_qty * self.unit_price


def clamp(qty: int, remaining: int) -> int:
    return max(0, min(int(qty), max(0, int(remaining))))


def is_returnable(items: Iterable[SaleItem]) -> bool:
    return any(i.remaining_qty > 0 for i in items)


def refund_total(lines: Iterable[ReturnLine]) -> float:
    return sum(l.return_qty * l.unit_price for l in lines)


def build_return_payload(lines: Iterable[ReturnLine], refund_method: Optional[str], reason: str = "") -> dict:
    """
    POST /sales/{id}/returns body. Only lines with a positive quantity are
    sent; a missing refund_method tells the API to adjust the customer's due.
    """
    items = [
        {"sale_item_id": l.sale_item_id, "quantity": clamp(l.return_qty, l.remaining_qty)}
        for l in lines
        if clamp(l.return_qty, l.remaining_qty) > 0
    ]
    if not items:
        raise ValidationError("Select at least one item to return")
    payload: dict = {"items": items, "reason": (reason or "").strip()}
    if refund_method:
        payload["refund_method"] = refund_method
    return payload
