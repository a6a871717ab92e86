"""
Point-of-sale panel: product picker on the left, bill on the right.

The widget owns a `Cart` and only ever mutates it through the cart rules;
`get_payload()` returns the POST /sales body or None (reason shown inline).
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QFormLayout,
    QGroupBox,
    QLabel,
    QLineEdit,
    QPushButton,
    QComboBox,
    QDoubleSpinBox,
    QSplitter,
)

from ...api.repositories.customers_repo import Customer
from ...api.repositories.products_repo import Product
from ...constants import PAYMENT_METHODS, WALK_IN_CUSTOMER
from ...utils.helpers import fmt_currency, now_iso
from ...utils.ui_helpers import notify_warning
from ...utils.validators import ValidationError
from ...widgets.table_view import TableView
from ..product.model import ProductsTableModel, ProductFilterProxy
from .cart import Cart, build_sale_payload, to_money
from .model import CartTableModel

MAX_AMOUNT = 10_000_000.0


class SaleForm(QWidget):
    submitted = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.cart = Cart()
        self._paid_touched = False
        self._syncing = False

        root = QVBoxLayout(self)
        split = QSplitter(Qt.Horizontal)
        root.addWidget(split, 1)

        # ---- Left: product picker ---------------------------------------
        left = QWidget()
        lv = QVBoxLayout(left)
        self.search = QLineEdit()
        self.search.setPlaceholderText("Search products by name or code…")
        lv.addWidget(self.search)

        self.products_model = ProductsTableModel([])
        self.products_proxy = ProductFilterProxy(self)
        self.products_proxy.setSourceModel(self.products_model)
        self.products_table = TableView()
        self.products_table.setModel(self.products_proxy)
        lv.addWidget(self.products_table, 1)

        self.btn_add = QPushButton("Add to Bill")
        lv.addWidget(self.btn_add, 0, Qt.AlignRight)
        split.addWidget(left)

        # ---- Right: bill --------------------------------------------------
        right = QWidget()
        rv = QVBoxLayout(right)

        self.cart_model = CartTableModel(self.cart)
        self.cart_table = TableView(sortable=False)
        self.cart_table.setEditTriggers(TableView.DoubleClicked | TableView.EditKeyPressed)
        self.cart_table.setModel(self.cart_model)
        rv.addWidget(QLabel("Bill"))
        rv.addWidget(self.cart_table, 1)

        row = QHBoxLayout()
        self.btn_remove = QPushButton("Remove Line")
        self.btn_clear = QPushButton("Clear Bill")
        row.addWidget(self.btn_remove)
        row.addWidget(self.btn_clear)
        row.addStretch(1)
        rv.addLayout(row)

        box = QGroupBox("Payment")
        form = QFormLayout(box)
        self.customer = QComboBox()
        self.customer.addItem(WALK_IN_CUSTOMER, None)
        self.discount = QDoubleSpinBox()
        self.discount.setRange(0, MAX_AMOUNT)
        self.discount.setDecimals(2)
        self.paid = QDoubleSpinBox()
        self.paid.setRange(0, MAX_AMOUNT)
        self.paid.setDecimals(2)
        self.method = QComboBox()
        for value, label in PAYMENT_METHODS:
            self.method.addItem(label, value)

        self.lbl_subtotal = QLabel()
        self.lbl_items_discount = QLabel()
        self.lbl_final = QLabel()
        self.lbl_final.setStyleSheet("font-weight: bold;")
        self.lbl_due = QLabel()

        form.addRow("Customer", self.customer)
        form.addRow("Subtotal", self.lbl_subtotal)
        form.addRow("MRP savings", self.lbl_items_discount)
        form.addRow("Discount", self.discount)
        form.addRow("Total", self.lbl_final)
        form.addRow("Paid now", self.paid)
        form.addRow("Method", self.method)
        form.addRow("Due", self.lbl_due)
        rv.addWidget(box)

        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        self.lbl_error.setWordWrap(True)
        rv.addWidget(self.lbl_error)

        self.btn_submit = QPushButton("Complete Sale")
        rv.addWidget(self.btn_submit)
        split.addWidget(right)
        split.setStretchFactor(0, 2)
        split.setStretchFactor(1, 3)

        # ---- wiring -------------------------------------------------------
        self.search.textChanged.connect(self.products_proxy.set_search)
        self.products_table.doubleClicked.connect(lambda _i: self._add_selected())
        self.btn_add.clicked.connect(self._add_selected)
        self.btn_remove.clicked.connect(self._remove_selected)
        self.btn_clear.clicked.connect(self.reset)
        self.btn_submit.clicked.connect(self.submitted.emit)
        self.cart_model.cart_changed.connect(self._recalc)
        self.discount.valueChanged.connect(self._on_discount)
        self.paid.valueChanged.connect(self._on_paid_edited)
        self.paid.valueChanged.connect(lambda _v: self._update_due())
        self._recalc()

    # ---------------- data ----------------

    def set_products(self, products: list[Product]) -> None:
        self.products_model.replace(products)
        self.products_table.resizeColumnsToContents()
        # keep known stock in the cart current
        by_id = {p.product_id: p for p in products}
        for line in self.cart.lines:
            if line.product_id in by_id:
                line.stock = by_id[line.product_id].current_stock

    def set_customers(self, customers: list[Customer]) -> None:
        current = self.customer.currentData()
        self.customer.blockSignals(True)
        self.customer.clear()
        self.customer.addItem(WALK_IN_CUSTOMER, None)
        for c in customers:
            self.customer.addItem(c.label, c.customer_id)
        idx = self.customer.findData(current) if current is not None else 0
        self.customer.setCurrentIndex(max(0, idx))
        self.customer.blockSignals(False)

    def set_low_stock_threshold(self, threshold: int) -> None:
        self.products_model.low_stock_threshold = threshold

    # ---------------- cart actions ----------------

    def add_product(self, product: Product) -> bool:
        try:
            self.cart.add(product)
        except ValidationError as e:
            notify_warning(str(e), self)
            return False
        self.cart_model.refresh()
        return True

    def _add_selected(self):
        row = self.products_table.selected_source_row()
        if row is not None:
            self.add_product(self.products_model.at(row))

    def _remove_selected(self):
        row = self.cart_table.selected_source_row()
        if row is None:
            return
        self.cart.remove(self.cart_model.at(row).product_id)
        self.cart_model.refresh()

    def reset(self) -> None:
        self.cart.clear()
        self._paid_touched = False
        self.discount.setValue(0)
        self.customer.setCurrentIndex(0)
        self.method.setCurrentIndex(0)
        self.lbl_error.clear()
        self.cart_model.refresh()

    # ---------------- totals ----------------

    def _on_discount(self, value: float):
        self.cart.set_discount(value)
        self._recalc()

    def _on_paid_edited(self, _value: float):
        if not self._syncing:
            self._paid_touched = True

    def _recalc(self):
        self.lbl_subtotal.setText(fmt_currency(self.cart.subtotal))
        self.lbl_items_discount.setText(fmt_currency(self.cart.items_discount))
        self.lbl_final.setText(fmt_currency(self.cart.final_amount))
        if not self._paid_touched:
            # paid follows the bill until the cashier types an amount
            self._syncing = True
            self.paid.setValue(self.cart.final_amount)
            self._syncing = False
        self._update_due()

    def _update_due(self):
        due = to_money(self.cart.final_amount - self.paid.value())
        self.lbl_due.setText(fmt_currency(due))
        self.method.setEnabled(self.paid.value() > 0)

    # ---------------- API ----------------

    def customer_id(self) -> Optional[int]:
        return self.customer.currentData()

    def get_payload(self) -> dict | None:
        self.lbl_error.clear()
        try:
            return build_sale_payload(
                self.cart,
                paid_now=to_money(self.paid.value()),
                payment_method=self.method.currentData(),
                customer_id=self.customer_id(),
                sale_date=now_iso(),
            )
        except ValidationError as e:
            self.lbl_error.setText(str(e))
            return None
