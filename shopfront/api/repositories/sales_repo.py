# shopfront/api/repositories/sales_repo.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...utils.helpers import parse_money, parse_int
from .base import BaseRepo, DomainError, unwrap_list, unwrap_object


@dataclass
class SaleItem:
    item_id: int
    product_id: int
    product_name: str
    quantity: int
    unit_price: float      # selling price actually charged
    mrp: float
    line_total: float
    remaining_qty: int     # server-computed returnable quantity

    @classmethod
    def from_api(cls, r: dict) -> "SaleItem":
        prod = r.get("product") or {}
        qty = parse_int(r.get("quantity"))
        unit = parse_money(r.get("unit_price"))
        remaining = r.get("remaining_qty")
        return cls(
            item_id=int(r.get("id") or 0),
            product_id=int(r.get("product_id") or prod.get("id") or 0),
            product_name=str(prod.get("name") or r.get("product_name") or ""),
            quantity=qty,
            unit_price=unit,
            mrp=parse_money(r.get("mrp"), default=unit),
            line_total=parse_money(r.get("line_total"), default=qty * unit),
            remaining_qty=max(0, parse_int(remaining, default=qty)),
        )

    @property
    def discount(self) -> float:
        """MRP → selling price discount for the whole line (never negative)."""
        return max(0.0, (self.mrp - self.unit_price) * self.quantity)


@dataclass
class SalePayment:
    payment_id: int
    amount: float
    payment_method: str
    payment_date: str
    receipt_no: str

    @classmethod
    def from_api(cls, r: dict) -> "SalePayment":
        return cls(
            payment_id=int(r.get("id") or 0),
            amount=parse_money(r.get("amount")),
            payment_method=str(r.get("payment_method") or ""),
            payment_date=str(r.get("payment_date") or r.get("created_at") or ""),
            receipt_no=str(r.get("receipt_no") or ""),
        )


@dataclass
class ReturnItem:
    sale_item_id: int
    product_name: str
    quantity: int
    line_total: float

    @classmethod
    def from_api(cls, r: dict) -> "ReturnItem":
        sale_item = r.get("sale_item") or {}
        prod = sale_item.get("product") or r.get("product") or {}
        return cls(
            sale_item_id=int(r.get("sale_item_id") or sale_item.get("id") or 0),
            product_name=str(prod.get("name") or r.get("product_name") or ""),
            quantity=parse_int(r.get("quantity")),
            line_total=parse_money(r.get("line_total")),
        )


@dataclass
class SaleReturn:
    return_id: int
    return_date: str
    refund_method: Optional[str]   # None => adjusted against customer due
    refund_amount: float
    reason: str
    items: list[ReturnItem] = field(default_factory=list)
    invoice_id: Optional[int] = None
    invoice_number: str = ""

    @classmethod
    def from_api(cls, r: dict) -> "SaleReturn":
        inv = r.get("invoice") or {}
        return cls(
            return_id=int(r.get("id") or 0),
            return_date=str(r.get("return_date") or r.get("created_at") or ""),
            refund_method=(r.get("refund_method") or None),
            refund_amount=parse_money(r.get("refund_amount")),
            reason=str(r.get("reason") or ""),
            items=[ReturnItem.from_api(i) for i in r.get("items") or []],
            invoice_id=int(inv["id"]) if inv.get("id") else None,
            invoice_number=str(inv.get("invoice_number") or ""),
        )

    @property
    def refund_label(self) -> str:
        if not self.refund_method:
            return "Adjusted against due"
        return f"{self.refund_method.upper()} Refund"


@dataclass
class Invoice:
    invoice_id: int
    invoice_number: str

    @classmethod
    def from_api(cls, r: dict) -> "Invoice":
        return cls(invoice_id=int(r.get("id") or 0), invoice_number=str(r.get("invoice_number") or ""))


@dataclass
class Sale:
    sale_id: int
    sale_date: str
    customer_id: Optional[int]
    customer_name: str
    customer_phone: str
    subtotal: float
    discount: float
    total: float
    paid_amount: float
    due_amount: float
    refund_total: float
    net_total: float
    payment_status: str
    bill_number: str = ""
    items: list[SaleItem] = field(default_factory=list)
    payments: list[SalePayment] = field(default_factory=list)
    returns: list[SaleReturn] = field(default_factory=list)
    invoices: list[Invoice] = field(default_factory=list)

    @classmethod
    def from_api(cls, r: dict) -> "Sale":
        cust = r.get("customer") or {}
        total = parse_money(r.get("total"))
        refund_total = parse_money(r.get("refund_total"))
        cid = r.get("customer_id") or cust.get("id")
        return cls(
            sale_id=int(r["id"]),
            sale_date=str(r.get("sale_date") or ""),
            customer_id=int(cid) if cid else None,
            customer_name=str(cust.get("name") or ""),
            customer_phone=str(cust.get("phone") or ""),
            subtotal=parse_money(r.get("subtotal"), default=total),
            discount=parse_money(r.get("discount")),
            total=total,
            paid_amount=parse_money(r.get("paid_amount")),
            due_amount=parse_money(r.get("due_amount")),
            refund_total=refund_total,
            net_total=parse_money(r.get("net_total"), default=total - refund_total),
            payment_status=str(r.get("payment_status") or ""),
            bill_number=str(r.get("bill_number") or r.get("invoice_number") or ""),
            items=[SaleItem.from_api(i) for i in r.get("items") or []],
            payments=[SalePayment.from_api(p) for p in r.get("payments") or []],
            returns=[SaleReturn.from_api(x) for x in r.get("returns") or []],
            invoices=[Invoice.from_api(i) for i in r.get("invoices") or []],
        )

    @property
    def is_returnable(self) -> bool:
        return any(i.remaining_qty > 0 for i in self.items)

    @property
    def items_discount(self) -> float:
        return sum(i.discount for i in self.items)

    @property
    def invoice(self) -> Optional[Invoice]:
        return self.invoices[0] if self.invoices else None


class SalesRepo(BaseRepo):
    def list_sales(self, customer_id: int | None = None) -> list[Sale]:
        params = {"customer_id": customer_id} if customer_id else None
        rows = unwrap_list(self.api.get("/sales", params, error_message="Failed to load sales"))
        return [Sale.from_api(r) for r in rows]

    def get(self, sale_id: int) -> Sale:
        body = self.api.get(f"/sales/{sale_id}", error_message="Failed to load sale details")
        if not body:
            raise DomainError(f"Sale #{sale_id} not found.")
        return Sale.from_api(unwrap_object(body))

    def create(self, payload: dict) -> dict:
        body = self.api.post("/sales", payload, error_message="Sale failed")
        return body if isinstance(body, dict) else {}

    def create_return(self, sale_id: int, payload: dict) -> dict:
        body = self.api.post(f"/sales/{sale_id}/returns", payload, error_message="Return failed")
        return body if isinstance(body, dict) else {}
