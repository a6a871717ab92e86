# tests/test_forms.py

import pytest
from PySide6.QtWidgets import QMessageBox

from shopfront.modules.customer.form import CustomerForm
from shopfront.modules.product.form import ProductForm, make_dup_check

from factories import make_product


# ---------------------------
# Product form
# ---------------------------

def test_product_form_create_payload(qtbot):
    form = ProductForm()
    qtbot.addWidget(form)
    form.code.setText("  TS-02 ")
    form.name.setText("Polo")
    form.sell_price.setText("799")
    form.gender.setCurrentIndex(form.gender.findData("boys"))
    form.opening_stock.setValue(12)

    assert form.get_payload() == {
        "code": "TS-02", "name": "Polo", "category": "", "gender": "boys",
        "size": None, "color": None, "buy_price": 0.0, "sell_price": 799.0,
        "opening_stock": 12,
    }


@pytest.mark.parametrize("code,name,sell,buy,msg", [
    ("", "Polo", "10", "", "Code is required."),
    ("A", " ", "10", "", "Name is required."),
    ("A", "Polo", "", "", "Sell price must be a valid non-negative number."),
    ("A", "Polo", "-1", "", "Sell price must be a valid non-negative number."),
    ("A", "Polo", "10", "abc", "Buy price must be a valid non-negative number."),
])
def test_product_form_validation(qtbot, code, name, sell, buy, msg):
    form = ProductForm()
    qtbot.addWidget(form)
    form.code.setText(code)
    form.name.setText(name)
    form.sell_price.setText(sell)
    form.buy_price.setText(buy)
    assert form.get_payload() is None
    assert form.lbl_error.text() == msg


def test_product_form_edit_has_no_opening_stock(qtbot):
    p = make_product(pid=3, code="CP-01", name="Cap", sell=200, buy=90)
    form = ProductForm(initial=p.as_dict())
    qtbot.addWidget(form)
    payload = form.get_payload()
    assert "opening_stock" not in payload
    assert payload["sell_price"] == 200
    assert payload["buy_price"] == 90


def test_duplicate_code_warns_but_does_not_block(qtbot, monkeypatch):
    warned = []
    monkeypatch.setattr(QMessageBox, "warning", lambda *a, **k: warned.append(a[1]))
    products = [make_product(pid=1, code="TS-01")]
    form = ProductForm(dup_check=make_dup_check(products))
    qtbot.addWidget(form)
    form.code.setText("ts-01")
    form.name.setText("Other")
    form.sell_price.setText("10")
    assert form.get_payload() is not None
    assert warned == ["Possible Duplicate"]


def test_dup_check_ignores_product_being_edited():
    check = make_dup_check([make_product(pid=1, code="TS-01")])
    assert check("TS-01", None)
    assert not check("TS-01", 1)


# ---------------------------
# Customer form
# ---------------------------

def test_customer_form_normalizes(qtbot):
    form = CustomerForm()
    qtbot.addWidget(form)
    form.name.setText("  Asha   Rao ")
    form.phone.setText(" 98765  43210 ")
    form.addr.setPlainText("\n 12  MG Road \nPune \n\n")
    assert form.get_payload() == {
        "name": "Asha Rao", "phone": "98765 43210", "email": "", "address": "12 MG Road\nPune",
    }


def test_customer_form_requires_name_and_valid_email(qtbot):
    form = CustomerForm()
    qtbot.addWidget(form)
    assert form.get_payload() is None
    assert form.lbl_error.text() == "Customer name is required"
    form.name.setText("Asha")
    form.email.setText("not-an-email")
    assert form.get_payload() is None
    assert form.lbl_error.text() == "Enter a valid email address"
