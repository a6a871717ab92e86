# shopfront/api/repositories/documents_repo.py
from __future__ import annotations

from urllib.parse import quote

from .base import BaseRepo


class DocumentsRepo(BaseRepo):
    """Invoice and receipt documents rendered by the API (PDF/HTML)."""

    @staticmethod
    def invoice_path(invoice_id: int, action: str = "print") -> str:
        return f"/invoices/{invoice_id}/{action}"

    @staticmethod
    def receipt_path(receipt_no: str, action: str = "print") -> str:
        return f"/receipts/{quote(str(receipt_no), safe='')}/{action}"

    def fetch_invoice(self, invoice_id: int, action: str = "print") -> tuple[bytes, str]:
        return self.api.get_bytes(self.invoice_path(invoice_id, action), error_message="Failed to load invoice")

    def fetch_receipt(self, receipt_no: str, action: str = "print") -> tuple[bytes, str]:
        return self.api.get_bytes(self.receipt_path(receipt_no, action), error_message="Failed to load receipt")
