# tests/test_purchase_lines.py

import math

import pytest

from shopfront.api.repositories.purchases_repo import Purchase
from shopfront.modules.purchase.lines import (
    EXISTING,
    NEW,
    NewProduct,
    PurchaseLine,
    build_purchase_payload,
    line_errors,
    lines_from_purchase,
    purchase_total,
)
from shopfront.utils.validators import ValidationError

from factories import make_product


def test_select_product_prefills_prices():
    line = PurchaseLine()
    line.select_product(make_product(pid=4, buy=320, sell=599))
    assert (line.product_id, line.unit_price, line.sell_price) == (4, 320, 599)


def test_total_is_qty_times_price():
    lines = [PurchaseLine(product_id=1, quantity=3, unit_price=100),
             PurchaseLine(mode=NEW, quantity=2, unit_price=50.5)]
    assert purchase_total(lines) == 401


def test_nan_price_counts_as_zero_and_is_an_error():
    line = PurchaseLine(product_id=1, quantity=2, unit_price=math.nan)
    assert line.line_total == 0
    assert "Purchase price (buy) is required." in line_errors(line)


def test_line_errors():
    assert line_errors(PurchaseLine(quantity=0, unit_price=10)) == [
        "Please select an existing product.",
        "Quantity must be at least 1.",
    ]
    assert line_errors(PurchaseLine(mode=NEW, quantity=1, unit_price=10)) == [
        "Product code is required.",
        "Product name is required.",
    ]


def test_payload_mixed_lines_and_default_supplier():
    existing = PurchaseLine(product_id=1, quantity=2, unit_price=300, sell_price=500)
    new = PurchaseLine(mode=NEW, quantity=5, unit_price=120,
                       product=NewProduct(code=" SH-9 ", name="Shorts", category="Bottoms", sell_price=250))
    payload = build_purchase_payload("2024-05-10", "  ", [existing, new])
    assert payload["supplier"] == "Unnamed Supplier"
    assert payload["items"][0] == {"product_id": 1, "quantity": 2, "unit_price": 300.0, "sell_price": 500.0}
    assert payload["items"][1]["product"]["code"] == "SH-9"
    assert payload["items"][1]["product"]["gender"] == "unisex"
    assert payload["items"][1]["quantity"] == 5


def test_payload_reports_first_bad_line():
    good = PurchaseLine(product_id=1, quantity=1, unit_price=10)
    bad = PurchaseLine(mode=NEW, quantity=1, unit_price=10)
    with pytest.raises(ValidationError, match=r"^Item 2: Product code is required\.$"):
        build_purchase_payload("2024-05-10", "ACME", [good, bad])
    with pytest.raises(ValidationError, match="Add at least one item"):
        build_purchase_payload("2024-05-10", "ACME", [])


def test_lines_from_purchase_are_existing():
    purchase = Purchase.from_api({
        "id": 9, "purchase_date": "2024-05-02", "supplier": "ACME", "total_amount": 600,
        "items": [{"id": 1, "product": {"id": 4, "code": "A", "name": "Cap", "sell_price": 200},
                   "quantity": 3, "unit_price": 200}],
    })
    lines = lines_from_purchase(purchase)
    assert lines[0].mode == EXISTING
    assert (lines[0].product_id, lines[0].quantity, lines[0].sell_price) == (4, 3, 200)
