# tests/test_cart.py

import pytest

from shopfront.modules.sales.cart import Cart, build_sale_payload, resolve_payment
from shopfront.utils.validators import ValidationError

from factories import make_product


def _cart_from_example() -> Cart:
    """Two lines: 500 x 2 and 300 x 1, bill discount 100."""
    cart = Cart()
    a = make_product(pid=1, code="A", sell=500, stock=5)
    b = make_product(pid=2, code="B", sell=300, stock=5)
    cart.add(a)
    cart.add(a)
    cart.add(b)
    cart.set_discount(100)
    return cart


def test_subtotal_and_final_amount():
    cart = _cart_from_example()
    assert cart.subtotal == 1300
    assert cart.final_amount == 1200


def test_full_payment_walk_in_has_no_due():
    cart = _cart_from_example()
    res = resolve_payment(cart.final_amount, 1200, None)
    assert res.bill_due == 0
    assert res.is_credit is False

    payload = build_sale_payload(cart, 1200, "cash", None, "2024-05-10")
    assert payload["customer_id"] is None
    assert payload["paid_amount"] == 1200
    assert payload["payment_method"] == "cash"
    assert payload["discount"] == 100
    assert payload["items"] == [
        {"product_id": 1, "quantity": 2, "unit_price": 500},
        {"product_id": 2, "quantity": 1, "unit_price": 300},
    ]


def test_discount_never_makes_final_negative():
    cart = Cart()
    cart.add(make_product(sell=200, stock=1))
    cart.set_discount(500)
    assert cart.final_amount == 0
    cart.set_discount(-50)
    assert cart.discount == 0


def test_add_out_of_stock_rejected():
    cart = Cart()
    with pytest.raises(ValidationError, match="Out of stock"):
        cart.add(make_product(stock=0))
    assert cart.is_empty()


def test_add_beyond_stock_rejected_and_cart_unchanged():
    cart = Cart()
    p = make_product(stock=2)
    cart.add(p)
    cart.add(p)
    with pytest.raises(ValidationError, match="Not enough stock"):
        cart.add(p)
    assert cart.find(p.product_id).quantity == 2


def test_update_quantity_zero_removes_line():
    cart = Cart()
    p = make_product(stock=5)
    cart.add(p)
    cart.update_quantity(p.product_id, 0)
    assert cart.is_empty()


def test_update_quantity_clamps_to_stock():
    cart = Cart()
    p = make_product(stock=3)
    cart.add(p)
    cart.update_quantity(p.product_id, 10)
    assert cart.find(p.product_id).quantity == 3


def test_selling_price_below_mrp_counts_as_item_discount():
    cart = Cart()
    p = make_product(sell=500, stock=3)
    cart.add(p)
    cart.add(p)
    cart.update_selling_price(p.product_id, 450)
    assert cart.subtotal == 900
    assert cart.items_discount == 100
    cart.update_selling_price(p.product_id, -1)
    assert cart.find(p.product_id).selling_price == 0


def test_credit_sale_without_customer_rejected():
    with pytest.raises(ValidationError, match="Customer is required"):
        resolve_payment(1000, 400, None)


def test_credit_sale_with_customer():
    res = resolve_payment(1000, 400, 7)
    assert res.bill_due == 600
    assert res.is_credit


def test_overpayment_and_negative_rejected():
    with pytest.raises(ValidationError, match="cannot exceed"):
        resolve_payment(1000, 1001, 7)
    with pytest.raises(ValidationError, match="negative"):
        resolve_payment(1000, -1, 7)


def test_empty_cart_rejected():
    with pytest.raises(ValidationError, match="Cart is empty"):
        build_sale_payload(Cart(), 0, "cash", None, "2024-05-10")


def test_unpaid_credit_sale_omits_payment_method():
    cart = _cart_from_example()
    payload = build_sale_payload(cart, 0, "cash", 5, "2024-05-10")
    assert "payment_method" not in payload
    assert payload["customer_id"] == 5


@pytest.mark.parametrize("prices,total", [((10.1, 20.2), 30.3), ((0.1, 0.2), 0.3)])
def test_paise_prices_paid_in_full_walk_in(prices, total):
    cart = Cart()
    for pid, price in enumerate(prices, start=1):
        cart.add(make_product(pid=pid, code=f"P{pid}", sell=price, stock=5))
    assert cart.subtotal == total
    assert cart.final_amount == total

    res = resolve_payment(cart.final_amount, total, None)
    assert res.bill_due == 0
    payload = build_sale_payload(cart, total, "cash", None, "2024-05-10")
    assert payload["paid_amount"] == total


def test_update_quantity_drops_line_when_known_stock_hits_zero():
    cart = Cart()
    cart.add(make_product(pid=1, stock=3))
    with pytest.raises(ValidationError):
        cart.add(make_product(pid=1, stock=0))
    cart.update_quantity(1, 2)
    assert cart.is_empty()
