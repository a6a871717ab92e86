# tests/test_customer_payments.py

import pytest

from shopfront.api.repositories.customers_repo import PaymentRecord
from shopfront.modules.customer.payments import (
    build_payment_payload,
    filter_history,
    latest_unpaid_sale,
    validate_customer_payment,
)
from shopfront.utils.validators import ValidationError

from factories import make_sale


def test_partial_payment_accepted():
    assert validate_customer_payment(1500, 500) == 500


@pytest.mark.parametrize("due,amount,msg", [
    (0, 100, "no due"),
    (500, 0, "valid payment amount"),
    (500, -10, "valid payment amount"),
    (500, 500.01, "exceeds total due"),
])
def test_payment_rejected(due, amount, msg):
    with pytest.raises(ValidationError, match=msg):
        validate_customer_payment(due, amount)


def test_payment_payload():
    assert build_payment_payload(7, 1500, 500, "card") == {
        "customer_id": 7, "amount": 500, "payment_method": "card",
    }


def test_latest_unpaid_sale():
    cust = {"id": 7, "name": "Asha"}
    sales = [
        make_sale(sid=1, sale_date="2024-05-01", total=500, paid=0, due=500, customer=cust),
        make_sale(sid=2, sale_date="2024-05-09", total=800, paid=300, due=500, customer=cust),
        make_sale(sid=3, sale_date="2024-05-12", total=200, paid=200, due=0, customer=cust),
    ]
    assert latest_unpaid_sale(sales).sale_id == 2
    assert latest_unpaid_sale(sales[2:]) is None


def _rec(pid, amount, method="cash", receipt="R-1", invoice=""):
    return PaymentRecord.from_api({
        "id": pid, "amount": amount, "payment_method": method, "receipt_no": receipt,
        "invoice": {"invoice_number": invoice} if invoice else None,
    })


def test_filter_history_by_kind_and_search():
    rows = [_rec(1, 500, "cash", "R-100", "INV-7"), _rec(2, -200, "upi", "R-101"), _rec(3, 300, "card", "R-102")]
    assert [r.payment_id for r in filter_history(rows, kind="payment")] == [1, 3]
    assert [r.payment_id for r in filter_history(rows, kind="refund")] == [2]
    assert [r.payment_id for r in filter_history(rows, search="inv-7")] == [1]
    assert [r.payment_id for r in filter_history(rows, search="UPI")] == [2]
