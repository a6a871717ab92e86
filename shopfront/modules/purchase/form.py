from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, QDate, Signal
from PySide6.QtWidgets import (
    QDialog,
    QWidget,
    QGroupBox,
    QFormLayout,
    QGridLayout,
    QVBoxLayout,
    QHBoxLayout,
    QDialogButtonBox,
    QDateEdit,
    QLineEdit,
    QComboBox,
    QSpinBox,
    QLabel,
    QPushButton,
    QScrollArea,
)

from ...api.repositories.products_repo import Product
from ...api.repositories.purchases_repo import Purchase
from ...constants import TARGET_GROUPS
from ...utils.helpers import fmt_currency, parse_date
from ...utils.validators import ValidationError, try_parse_float
from .lines import EXISTING, NEW, PurchaseLine, build_purchase_payload, line_errors, lines_from_purchase, purchase_total


def _price_edit() -> QLineEdit:
    e = QLineEdit()
    e.setPlaceholderText("0.00")
    return e


class LineEditor(QGroupBox):
    """One purchase line; edits go straight into the bound PurchaseLine."""

    changed = Signal()
    remove_requested = Signal(object)

    def __init__(self, line: PurchaseLine, products: list[Product], *, edit_mode: bool = False, parent=None):
        super().__init__(parent)
        self.line = line
        self.products = products
        self.edit_mode = edit_mode
        self._loading = True

        root = QVBoxLayout(self)
        top = QHBoxLayout()
        self.mode = QComboBox()
        self.mode.addItem("Existing product", EXISTING)
        if not edit_mode:
            self.mode.addItem("New product", NEW)
        self.btn_remove = QPushButton("Remove")
        self.btn_remove.setVisible(not edit_mode)
        top.addWidget(self.mode)
        top.addStretch(1)
        top.addWidget(self.btn_remove)
        root.addLayout(top)

        # existing-product fields
        self.existing_box = QWidget()
        ef = QFormLayout(self.existing_box)
        ef.setContentsMargins(0, 0, 0, 0)
        self.product = QComboBox()
        self.product.addItem("Select product…", None)
        for p in products:
            self.product.addItem(p.label, p.product_id)
        self.product.setEnabled(not edit_mode)
        self.sell_price = _price_edit()
        ef.addRow("Product", self.product)
        ef.addRow("Sell price (MRP)", self.sell_price)
        root.addWidget(self.existing_box)

        # new-product fields
        self.new_box = QWidget()
        nf = QGridLayout(self.new_box)
        nf.setContentsMargins(0, 0, 0, 0)
        self.new_code = QLineEdit()
        self.new_name = QLineEdit()
        self.new_category = QLineEdit()
        self.new_gender = QComboBox()
        for g in TARGET_GROUPS:
            self.new_gender.addItem(g.capitalize(), g)
        self.new_gender.setCurrentIndex(self.new_gender.findData("unisex"))
        self.new_size = QLineEdit()
        self.new_color = QLineEdit()
        self.new_sell = _price_edit()
        for i, (label, w) in enumerate([
            ("Code*", self.new_code), ("Name*", self.new_name), ("Category", self.new_category),
            ("Group", self.new_gender), ("Size", self.new_size), ("Color", self.new_color),
            ("Sell price", self.new_sell),
        ]):
            nf.addWidget(QLabel(label), i // 2, (i % 2) * 2)
            nf.addWidget(w, i // 2, (i % 2) * 2 + 1)
        root.addWidget(self.new_box)

        qty_row = QHBoxLayout()
        self.quantity = QSpinBox()
        self.quantity.setRange(0, 1_000_000)
        self.unit_price = _price_edit()
        self.lbl_total = QLabel()
        qty_row.addWidget(QLabel("Qty"))
        qty_row.addWidget(self.quantity)
        qty_row.addWidget(QLabel("Buy price"))
        qty_row.addWidget(self.unit_price)
        qty_row.addStretch(1)
        qty_row.addWidget(self.lbl_total)
        root.addLayout(qty_row)

        self.lbl_errors = QLabel()
        self.lbl_errors.setStyleSheet("color: #b91c1c;")
        self.lbl_errors.setWordWrap(True)
        self.lbl_errors.hide()
        root.addWidget(self.lbl_errors)

        self._load_from_line()
        self._loading = False

        self.mode.currentIndexChanged.connect(self._on_mode)
        self.product.currentIndexChanged.connect(self._on_product)
        self.btn_remove.clicked.connect(lambda: self.remove_requested.emit(self))
        for w in (self.sell_price, self.unit_price, self.new_code, self.new_name, self.new_category,
                  self.new_size, self.new_color, self.new_sell):
            w.textChanged.connect(self._sync)
        self.new_gender.currentIndexChanged.connect(self._sync)
        self.quantity.valueChanged.connect(self._sync)

    # ---------------- line <-> widgets ----------------

    def _load_from_line(self):
        l = self.line
        self.mode.setCurrentIndex(max(0, self.mode.findData(l.mode)))
        self.product.setCurrentIndex(max(0, self.product.findData(l.product_id)))
        self.sell_price.setText(f"{l.sell_price:.2f}" if l.sell_price else "")
        self.quantity.setValue(l.quantity)
        self.unit_price.setText(f"{l.unit_price:.2f}" if l.unit_price else "")
        self._apply_mode()
        self._refresh_total()

    def _apply_mode(self):
        is_new = self.mode.currentData() == NEW
        self.existing_box.setVisible(not is_new)
        self.new_box.setVisible(is_new)

    def _on_mode(self, _i):
        self.line.mode = self.mode.currentData()
        self._apply_mode()
        self._sync()

    def _on_product(self, _i):
        if self._loading:
            return
        pid = self.product.currentData()
        p = next((x for x in self.products if x.product_id == pid), None)
        if p is not None:
            self.line.select_product(p)
            self._loading = True
            self.unit_price.setText(f"{p.buy_price:.2f}")
            self.sell_price.setText(f"{p.sell_price:.2f}")
            self._loading = False
        else:
            self.line.product_id = None
        self._sync()

    @staticmethod
    def _num(edit: QLineEdit) -> float:
        text = edit.text().strip()
        ok, v = try_parse_float(text) if text else (False, None)
        return v if ok else float("nan")

    def _sync(self, *_):
        if self._loading:
            return
        l = self.line
        l.quantity = self.quantity.value()
        l.unit_price = self._num(self.unit_price)
        sell = self._num(self.sell_price)
        l.sell_price = 0.0 if sell != sell else sell
        l.product.code = self.new_code.text()
        l.product.name = self.new_name.text()
        l.product.category = self.new_category.text()
        l.product.gender = self.new_gender.currentData()
        l.product.size = self.new_size.text()
        l.product.color = self.new_color.text()
        new_sell = self._num(self.new_sell)
        l.product.sell_price = 0.0 if new_sell != new_sell else new_sell
        self._refresh_total()
        self.changed.emit()

    def _refresh_total(self):
        self.lbl_total.setText(fmt_currency(self.line.line_total))

    def show_errors(self, errs: list[str]):
        self.lbl_errors.setText("\n".join(errs))
        self.lbl_errors.setVisible(bool(errs))


class PurchaseForm(QDialog):
    """
    Create or edit a purchase order.

    Edit mode keeps the posted items: no new-product lines, no adding or
    removing lines, product fixed per line; quantities and prices stay editable.
    """

    def __init__(self, parent=None, *, products: list[Product], purchase: Optional[Purchase] = None):
        super().__init__(parent)
        self.is_edit = purchase is not None
        self.setWindowTitle("Edit Purchase Order" if self.is_edit else "Add Purchase Order")
        self.setModal(True)
        self.resize(720, 560)
        self.products = products
        self.editors: list[LineEditor] = []
        self._payload = None

        root = QVBoxLayout(self)
        head = QFormLayout()
        self.date = QDateEdit(QDate.currentDate())
        self.date.setCalendarPopup(True)
        self.date.setDisplayFormat("yyyy-MM-dd")
        self.supplier = QLineEdit()
        self.supplier.setPlaceholderText("Unnamed Supplier")
        head.addRow("Date", self.date)
        head.addRow("Supplier", self.supplier)
        root.addLayout(head)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.lines_host = QWidget()
        self.lines_lay = QVBoxLayout(self.lines_host)
        self.lines_lay.setAlignment(Qt.AlignTop)
        self.scroll.setWidget(self.lines_host)
        root.addWidget(self.scroll, 1)

        foot = QHBoxLayout()
        self.btn_add_line = QPushButton("Add Item")
        self.btn_add_line.setVisible(not self.is_edit)
        self.lbl_total = QLabel()
        self.lbl_total.setStyleSheet("font-weight: bold;")
        foot.addWidget(self.btn_add_line)
        foot.addStretch(1)
        foot.addWidget(QLabel("Total:"))
        foot.addWidget(self.lbl_total)
        root.addLayout(foot)

        self.lbl_error = QLabel()
        self.lbl_error.setStyleSheet("color: #b91c1c;")
        root.addWidget(self.lbl_error)

        self.buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self.buttons.accepted.connect(self.accept)
        self.buttons.rejected.connect(self.reject)
        root.addWidget(self.buttons)
        self.btn_add_line.clicked.connect(lambda: self.add_line())

        if purchase is not None:
            d = parse_date(purchase.purchase_date)
            if d:
                self.date.setDate(QDate(d.year, d.month, d.day))
            self.supplier.setText(purchase.supplier)
            for line in lines_from_purchase(purchase):
                self.add_line(line)
        else:
            self.add_line()
        self._refresh_total()

    # ---------------- lines ----------------

    @property
    def lines(self) -> list[PurchaseLine]:
        return [e.line for e in self.editors]

    def add_line(self, line: PurchaseLine | None = None) -> LineEditor:
        ed = LineEditor(line or PurchaseLine(), self.products, edit_mode=self.is_edit)
        ed.changed.connect(self._refresh_total)
        ed.remove_requested.connect(self.remove_line)
        self.editors.append(ed)
        self.lines_lay.addWidget(ed)
        self._renumber()
        self._refresh_total()
        return ed

    def remove_line(self, ed: LineEditor) -> None:
        if self.is_edit or ed not in self.editors:
            return
        self.editors.remove(ed)
        ed.setParent(None)
        ed.deleteLater()
        self._renumber()
        self._refresh_total()

    def _renumber(self):
        for i, ed in enumerate(self.editors, start=1):
            ed.setTitle(f"Item {i}")
            ed.btn_remove.setEnabled(len(self.editors) > 1)

    def _refresh_total(self):
        self.lbl_total.setText(fmt_currency(purchase_total(self.lines)))

    # ---------------- API ----------------

    def get_payload(self) -> dict | None:
        self.lbl_error.clear()
        for ed in self.editors:
            ed.show_errors(line_errors(ed.line))
        try:
            return build_purchase_payload(
                self.date.date().toString("yyyy-MM-dd"),
                self.supplier.text(),
                self.lines,
            )
        except ValidationError as e:
            self.lbl_error.setText(str(e))
            return None

    def accept(self):
        p = self.get_payload()
        if p is None:
            return
        self._payload = p
        super().accept()

    def payload(self):
        return self._payload
