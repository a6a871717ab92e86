from ...api.repositories.customers_repo import Customer, PaymentRecord
from ...utils.helpers import fmt_currency, fmt_datetime
from ...widgets.row_model import ALERT_RED, OK_GREEN, RowTableModel


def filter_customers(rows: list[Customer], text: str) -> list[Customer]:
    needle = (text or "").strip().lower()
    if not needle:
        return list(rows)
    return [c for c in rows if needle in c.name.lower() or needle in c.phone.lower()]


class CustomersTableModel(RowTableModel):
    HEADERS = ["ID", "Name", "Phone", "Email", "Due"]
    NUMERIC_COLUMNS = frozenset({4})

    def cells(self, c: Customer) -> list:
        return [c.customer_id, c.name, c.phone, c.email, fmt_currency(c.due_balance)]

    def sort_values(self, c: Customer) -> list:
        return [c.customer_id, c.name, c.phone, c.email, c.due_balance]

    def colour(self, c: Customer, column: int):
        if column == 4 and c.due_balance > 0:
            return ALERT_RED
        return None


class PaymentHistoryModel(RowTableModel):
    """Payments and refunds; refunds carry a negative amount."""

    HEADERS = ["Date", "Receipt", "Method", "Invoice", "Type", "Amount"]
    NUMERIC_COLUMNS = frozenset({5})

    def cells(self, p: PaymentRecord) -> list:
        return [
            fmt_datetime(p.payment_date),
            p.receipt_no,
            p.payment_method.upper(),
            p.invoice_number or "-",
            "Refund" if p.is_refund else "Payment",
            fmt_currency(p.amount),
        ]

    def colour(self, p: PaymentRecord, column: int):
        if column < 4:
            return None
        return ALERT_RED if p.is_refund else OK_GREEN
