# shopfront/api/repositories/payments_repo.py
from __future__ import annotations

from .base import BaseRepo


class PaymentsRepo(BaseRepo):
    def receive_customer_payment(self, customer_id: int, amount: float, payment_method: str) -> dict:
        """
        Customer-level receipt; the API decides which open invoices it settles.
        """
        body = self.api.post(
            "/payments",
            {"customer_id": customer_id, "amount": amount, "payment_method": payment_method},
            error_message="Payment failed",
        )
        return body if isinstance(body, dict) else {}
