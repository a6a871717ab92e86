# shopfront/api/repositories/customers_repo.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...utils.helpers import parse_money
from .base import BaseRepo, unwrap_list, unwrap_object


@dataclass
class Customer:
    customer_id: int
    name: str
    phone: str
    email: str
    address: str
    due_balance: float     # server-computed; never adjusted locally

    @classmethod
    def from_api(cls, r: dict) -> "Customer":
        return cls(
            customer_id=int(r["id"]),
            name=str(r.get("name") or ""),
            phone=str(r.get("phone") or ""),
            email=str(r.get("email") or ""),
            address=str(r.get("address") or ""),
            due_balance=parse_money(r.get("due_balance")),
        )

    @property
    def label(self) -> str:
        return f"{self.name} ({self.phone})" if self.phone else self.name


@dataclass
class PaymentRecord:
    payment_id: int
    amount: float          # signed: > 0 payment, < 0 refund
    payment_method: str
    payment_date: str
    receipt_no: str
    invoice_number: str

    @classmethod
    def from_api(cls, r: dict) -> "PaymentRecord":
        inv = r.get("invoice") or {}
        return cls(
            payment_id=int(r.get("id") or 0),
            amount=parse_money(r.get("amount")),
            payment_method=str(r.get("payment_method") or ""),
            payment_date=str(r.get("payment_date") or ""),
            receipt_no=str(r.get("receipt_no") or ""),
            invoice_number=str(inv.get("invoice_number") or ""),
        )

    @property
    def is_refund(self) -> bool:
        return self.amount < 0

    def search_text(self) -> str:
        return f"{self.receipt_no} {self.payment_method} {self.invoice_number}".lower()


class CustomersRepo(BaseRepo):
    def list_customers(self) -> list[Customer]:
        rows = unwrap_list(self.api.get("/customers", error_message="Failed to load customers"))
        return [Customer.from_api(r) for r in rows]

    def create(self, payload: dict) -> Optional[Customer]:
        body = self.api.post("/customers", payload, error_message="Failed to save customer")
        return Customer.from_api(unwrap_object(body)) if body else None

    def update(self, customer_id: int, payload: dict) -> Optional[Customer]:
        body = self.api.put(f"/customers/{customer_id}", payload, error_message="Failed to save customer")
        return Customer.from_api(unwrap_object(body)) if body else None

    def payment_history(self, customer_id: int) -> list[PaymentRecord]:
        rows = unwrap_list(
            self.api.get(f"/customers/{customer_id}/payments", error_message="Failed to load payment history")
        )
        return [PaymentRecord.from_api(r) for r in rows]
