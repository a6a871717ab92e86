from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtWidgets import QComboBox, QLineEdit, QMessageBox, QSpinBox

from ...constants import TARGET_GROUPS
from ...utils.validators import non_empty, try_parse_float
from ...widgets.form_dialog import FormDialog

DupCheck = Callable[[str, Optional[int]], bool]


def _price_text(value) -> str:
    return "" if value is None else f"{float(value):.2f}"


class ProductForm(FormDialog):
    """
    Product create/edit form.

    Required: code, name, sell price (MRP). Buy price defaults to 0.
    Opening stock is only offered when creating; later stock moves through
    purchases and sales.

    dup_check: optional callable (code, current_id) -> bool. A hit shows a
    warning but does not block saving; the API owns uniqueness.
    """

    def __init__(self, parent=None, initial: dict | None = None, dup_check: Optional[DupCheck] = None):
        super().__init__("Edit Product" if initial else "Add Product", parent)
        values = initial or {}
        self._product_id = values.get("product_id")
        self._dup_check = dup_check
        self.is_edit = bool(self._product_id)

        self.code = QLineEdit(values.get("code") or "")
        self.name = QLineEdit(values.get("name") or "")
        self.category = QLineEdit(values.get("category") or "")
        self.gender = QComboBox()
        for group in TARGET_GROUPS:
            self.gender.addItem(group.capitalize(), group)
        self.gender.setCurrentIndex(max(0, self.gender.findData((values.get("gender") or "unisex").lower())))
        self.size = QLineEdit(values.get("size") or "")
        self.color = QLineEdit(values.get("color") or "")
        self.buy_price = QLineEdit(_price_text(values.get("buy_price")))
        self.sell_price = QLineEdit(_price_text(values.get("sell_price")))
        for price in (self.buy_price, self.sell_price):
            price.setPlaceholderText("0.00")
        self.opening_stock = QSpinBox()
        self.opening_stock.setRange(0, 1_000_000)

        rows = [
            ("Code (SKU)*", self.code),
            ("Name*", self.name),
            ("Category", self.category),
            ("Target group", self.gender),
            ("Size", self.size),
            ("Color", self.color),
            ("Buy price", self.buy_price),
            ("Sell price (MRP)*", self.sell_price),
        ]
        if not self.is_edit:
            rows.append(("Opening stock", self.opening_stock))
        for label, widget in rows:
            self.form.addRow(label, widget)

    def _price(self, edit: QLineEdit, default=None):
        text = edit.text().strip()
        if not text and default is not None:
            return default
        ok, value = try_parse_float(text)
        return value if ok and value >= 0 else None

    def collect(self) -> dict | None:
        code = self.code.text().strip()
        name = self.name.text().strip()
        if not non_empty(code):
            return self.fail(self.code, "Code is required.")
        if not non_empty(name):
            return self.fail(self.name, "Name is required.")
        sell = self._price(self.sell_price)
        if sell is None:
            return self.fail(self.sell_price, "Sell price must be a valid non-negative number.")
        buy = self._price(self.buy_price, default=0.0)
        if buy is None:
            return self.fail(self.buy_price, "Buy price must be a valid non-negative number.")

        if self._dup_check and self._dup_check(code, self._product_id):
            QMessageBox.warning(
                self,
                "Possible Duplicate",
                f"A product with code “{code}” already exists.\n\nYou can still proceed; the server has the final say.",
            )

        payload = {
            "code": code,
            "name": name,
            "category": self.category.text().strip(),
            "gender": self.gender.currentData(),
            "size": self.size.text().strip() or None,
            "color": self.color.text().strip() or None,
            "buy_price": buy,
            "sell_price": sell,
        }
        if not self.is_edit:
            payload["opening_stock"] = self.opening_stock.value()
        return payload


def make_dup_check(products) -> DupCheck:
    """Case-insensitive code lookup against the loaded list, ignoring the product being edited."""
    def check(code: str, current_id: Optional[int]) -> bool:
        wanted = (code or "").strip().lower()
        return any(p.code.strip().lower() == wanted and p.product_id != current_id for p in products)
    return check
