# shopfront/api/repositories/purchases_repo.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...utils.helpers import parse_money, parse_int
from .base import BaseRepo, DomainError, unwrap_list, unwrap_object


@dataclass
class PurchaseItem:
    item_id: int
    product_id: int
    product_code: str
    product_name: str
    quantity: int
    unit_price: float
    sell_price: Optional[float]

    @classmethod
    def from_api(cls, r: dict) -> "PurchaseItem":
        prod = r.get("product") or {}
        sp = r.get("sell_price", prod.get("sell_price"))
        return cls(
            item_id=int(r.get("id") or 0),
            product_id=int(r.get("product_id") or prod.get("id") or 0),
            product_code=str(prod.get("code") or ""),
            product_name=str(prod.get("name") or ""),
            quantity=parse_int(r.get("quantity")),
            unit_price=parse_money(r.get("unit_price")),
            sell_price=parse_money(sp) if sp not in (None, "") else None,
        )

    @property
    def line_total(self) -> float:
        return self.quantity * self.unit_price


@dataclass
class Purchase:
    purchase_id: int
    purchase_date: str
    supplier: str
    total_amount: float
    items: list[PurchaseItem] = field(default_factory=list)

    @classmethod
    def from_api(cls, r: dict) -> "Purchase":
        return cls(
            purchase_id=int(r["id"]),
            purchase_date=str(r.get("purchase_date") or ""),
            supplier=str(r.get("supplier") or r.get("supplier_name") or ""),
            total_amount=parse_money(r.get("total_amount")),
            items=[PurchaseItem.from_api(i) for i in r.get("items") or []],
        )

    def search_text(self) -> str:
        return f"{self.supplier} {self.purchase_date} {self.total_amount}".lower()


class PurchasesRepo(BaseRepo):
    def list_purchases(self) -> list[Purchase]:
        rows = unwrap_list(self.api.get("/purchases", error_message="Failed to load purchases"))
        return [Purchase.from_api(r) for r in rows]

    def get(self, purchase_id: int) -> Purchase:
        body = self.api.get(f"/purchases/{purchase_id}", error_message="Failed to load purchase")
        if not body:
            raise DomainError(f"Purchase #{purchase_id} not found.")
        return Purchase.from_api(unwrap_object(body))

    def create(self, payload: dict) -> dict:
        body = self.api.post("/purchases", payload, error_message="Failed to save purchase")
        return body if isinstance(body, dict) else {}

    def update(self, purchase_id: int, payload: dict) -> dict:
        body = self.api.put(f"/purchases/{purchase_id}", payload, error_message="Failed to update purchase")
        return body if isinstance(body, dict) else {}
