# tests/test_sale_form.py

import pytest

from shopfront.api.repositories.customers_repo import Customer
from shopfront.modules.sales.form import SaleForm
from shopfront.modules.sales.return_form import ADJUST_AGAINST_DUE, SaleReturnForm

from factories import make_product, make_sale


@pytest.fixture()
def form(qtbot):
    f = SaleForm()
    qtbot.addWidget(f)
    f.set_customers([Customer.from_api({"id": 7, "name": "Asha", "phone": "999", "due_balance": 0})])
    return f


def test_paid_follows_total_until_edited(form):
    form.add_product(make_product(pid=1, sell=500, stock=5))
    form.add_product(make_product(pid=1, sell=500, stock=5))
    form.add_product(make_product(pid=2, code="B", sell=300, stock=5))
    form.discount.setValue(100)
    assert form.cart.final_amount == 1200
    assert form.paid.value() == 1200

    form.paid.setValue(200)
    form.discount.setValue(0)
    assert form.paid.value() == 200


def test_walk_in_full_payment_payload(form):
    form.add_product(make_product(pid=1, sell=500, stock=5))
    payload = form.get_payload()
    assert payload["customer_id"] is None
    assert payload["paid_amount"] == 500
    assert payload["payment_method"] == "cash"


def test_walk_in_credit_is_rejected_inline(form):
    form.add_product(make_product(pid=1, sell=500, stock=5))
    form.paid.setValue(100)
    assert form.get_payload() is None
    assert form.lbl_error.text() == "Customer is required for credit sale"

    form.customer.setCurrentIndex(form.customer.findData(7))
    payload = form.get_payload()
    assert payload["customer_id"] == 7
    assert payload["paid_amount"] == 100


def test_out_of_stock_warns(form, notes):
    assert form.add_product(make_product(stock=0)) is False
    assert notes == [("warning", "Out of stock")]
    assert form.cart.is_empty()


def test_cart_cell_edit_removes_on_zero(form):
    form.add_product(make_product(pid=1, sell=500, stock=5))
    idx = form.cart_model.index(0, form.cart_model.COL_QTY)
    assert form.cart_model.setData(idx, 3)
    assert form.cart.lines[0].quantity == 3
    assert form.cart_model.setData(idx, 0)
    assert form.cart_model.rowCount() == 0


def test_reset_clears_bill(form):
    form.add_product(make_product(pid=1, sell=500, stock=5))
    form.paid.setValue(10)
    form.reset()
    assert form.cart.is_empty()
    assert form.paid.value() == 0
    form.add_product(make_product(pid=1, sell=500, stock=5))
    assert form.paid.value() == 500


# ---------------------------
# Return dialog
# ---------------------------

def _sale(customer=None):
    return make_sale(
        sid=9, customer=customer, total=1500,
        items=[
            {"id": 1, "product": {"name": "Jeans"}, "quantity": 3, "unit_price": 500, "remaining_qty": 2},
            {"id": 2, "product": {"name": "Cap"}, "quantity": 1, "unit_price": 100, "remaining_qty": 0},
        ],
    )


def test_return_form_clamps_and_totals(qtbot):
    dlg = SaleReturnForm(sale=_sale())
    qtbot.addWidget(dlg)
    dlg.set_quantity(0, 5)
    dlg.set_quantity(1, 1)
    assert dlg.spins[0].value() == 2
    assert dlg.spins[1].value() == 0
    assert not dlg.spins[1].isEnabled()
    assert dlg.refund_total() == 1000
    assert dlg.get_payload() == {
        "items": [{"sale_item_id": 1, "quantity": 2}], "reason": "", "refund_method": "cash",
    }


def test_return_form_requires_a_line(qtbot):
    dlg = SaleReturnForm(sale=_sale())
    qtbot.addWidget(dlg)
    assert dlg.get_payload() is None
    assert dlg.lbl_error.text() == "Select at least one item to return"


def test_adjust_against_due_only_for_customer_sales(qtbot):
    walk_in = SaleReturnForm(sale=_sale())
    qtbot.addWidget(walk_in)
    assert walk_in.refund_method.findText(ADJUST_AGAINST_DUE) == -1

    credit = SaleReturnForm(sale=_sale(customer={"id": 7, "name": "Asha"}))
    qtbot.addWidget(credit)
    credit.refund_method.setCurrentIndex(credit.refund_method.findText(ADJUST_AGAINST_DUE))
    credit.set_quantity(0, 1)
    assert "refund_method" not in credit.get_payload()


@pytest.mark.parametrize("prices", [(10.1, 20.2), (0.1, 0.2)])
def test_walk_in_paid_in_full_at_paise_prices(form, prices):
    for pid, price in enumerate(prices, start=1):
        form.add_product(make_product(pid=pid, code=f"P{pid}", sell=price, stock=5))
    payload = form.get_payload()
    assert payload is not None, form.lbl_error.text()
    assert payload["paid_amount"] == form.cart.final_amount
    assert form.lbl_error.text() == ""
