# tests/test_repositories.py

import pytest

from shopfront.api.client import ApiError
from shopfront.api.repositories.auth_repo import AuthRepo
from shopfront.api.repositories.base import DomainError, unwrap_list, unwrap_object
from shopfront.api.repositories.customers_repo import CustomersRepo
from shopfront.api.repositories.documents_repo import DocumentsRepo
from shopfront.api.repositories.payments_repo import PaymentsRepo
from shopfront.api.repositories.products_repo import ProductsRepo
from shopfront.api.repositories.sales_repo import SalesRepo

from factories import product_row, sale_row


@pytest.mark.parametrize("payload", [
    [{"id": 1}],
    {"data": [{"id": 1}]},
    {"data": {"data": [{"id": 1}], "current_page": 1}},
    {"items": [{"id": 1}], "total": 1},
    {"results": [{"id": 1}]},
])
def test_unwrap_list_shapes(payload):
    assert unwrap_list(payload) == [{"id": 1}]


@pytest.mark.parametrize("payload", [{"message": "ok"}, None, {"data": "nope"}, "text"])
def test_unwrap_list_unknown_shape_raises(payload):
    with pytest.raises(DomainError):
        unwrap_list(payload)


def test_list_products_unknown_shape_surfaces_error(api, adapter):
    adapter.add("GET", "/products", body={"message": "maintenance"})
    with pytest.raises(DomainError):
        ProductsRepo(api).list_products()


def test_unwrap_object():
    assert unwrap_object({"data": {"id": 3}}) == {"id": 3}
    assert unwrap_object({"id": 3, "data": {"id": 9}}) == {"id": 3, "data": {"id": 9}}
    with pytest.raises(DomainError):
        unwrap_object([1, 2])


def test_list_products(api, adapter):
    adapter.add("GET", "/products", body={"data": [product_row(pid=1, gender=None), product_row(pid=2, stock=-4)]})
    rows = ProductsRepo(api).list_products()
    assert [p.product_id for p in rows] == [1, 2]
    assert rows[0].gender == "unisex"
    assert rows[1].current_stock == 0
    assert rows[0].label == "TS-01 - T-Shirt (M)"


def test_delete_product_blocked(api, adapter):
    adapter.add("DELETE", "/products/4", status=409, content=b"")
    with pytest.raises(ApiError) as ei:
        ProductsRepo(api).delete(4)
    assert ei.value.status == 409
    assert "Cannot delete product" in str(ei.value)


def test_sales_for_customer_sends_filter(api, adapter):
    cust = {"id": 7, "name": "Asha", "phone": "999"}
    adapter.add("GET", "/sales", body=[sale_row(sid=3, customer=cust, total=900, paid=400, due=500)])
    rows = SalesRepo(api).list_sales(customer_id=7)
    assert adapter.last_params() == {"customer_id": "7"}
    assert rows[0].customer_name == "Asha"
    assert rows[0].due_amount == 500
    assert rows[0].net_total == 900


def test_sale_detail_returns_and_invoice(api, adapter):
    body = sale_row(
        sid=5,
        items=[{"id": 1, "product": {"name": "Jeans"}, "quantity": 2, "unit_price": 800, "mrp": 1000,
                "remaining_qty": 1}],
        returns=[{"id": 2, "refund_method": None, "refund_amount": 800,
                  "items": [{"sale_item": {"id": 1, "product": {"name": "Jeans"}}, "quantity": 1}]}],
        invoices=[{"id": 12, "invoice_number": "INV-0012"}],
        refund_total=800,
    )
    adapter.add("GET", "/sales/5", body={"data": body})
    sale = SalesRepo(api).get(5)
    assert sale.items[0].discount == 400
    assert sale.is_returnable
    assert sale.returns[0].refund_label == "Adjusted against due"
    assert sale.returns[0].items[0].product_name == "Jeans"
    assert sale.invoice.invoice_number == "INV-0012"
    assert sale.net_total == 200


def test_sign_in_persists_session(api, adapter, store):
    store.clear()
    adapter.add("POST", "/auth/login", body={"access_token": "new-tok", "user": {"id": 2, "name": "Ravi"}})
    user = AuthRepo(api).sign_in("ravi", "secret")
    assert user["name"] == "Ravi"
    assert store.token == "new-tok"
    assert adapter.last_json() == {"username": "ravi", "password": "secret"}


def test_login_without_token_is_domain_error(api, adapter):
    adapter.add("POST", "/auth/login", body={"user": {}})
    with pytest.raises(DomainError):
        AuthRepo(api).login("a", "b")


def test_payment_history_signed_amounts(api, adapter):
    adapter.add("GET", "/customers/7/payments", body={"data": [
        {"id": 1, "amount": 500, "payment_method": "cash", "receipt_no": "R-1",
         "invoice": {"invoice_number": "INV-1"}},
        {"id": 2, "amount": -200, "payment_method": "upi", "receipt_no": "R-2"},
    ]})
    rows = CustomersRepo(api).payment_history(7)
    assert [r.is_refund for r in rows] == [False, True]
    assert rows[0].invoice_number == "INV-1"


def test_receive_customer_payment_body(api, adapter):
    adapter.add("POST", "/payments", status=201, body={"receipt_no": "R-9"})
    out = PaymentsRepo(api).receive_customer_payment(7, 250.0, "upi")
    assert out == {"receipt_no": "R-9"}
    assert adapter.last_json() == {"customer_id": 7, "amount": 250.0, "payment_method": "upi"}


def test_document_paths():
    assert DocumentsRepo.invoice_path(12, "download") == "/invoices/12/download"
    assert DocumentsRepo.receipt_path("RCPT/2024 01") == "/receipts/RCPT%2F2024%2001/print"
