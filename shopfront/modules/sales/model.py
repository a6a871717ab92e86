from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex, Signal

from ...api.repositories.sales_repo import Sale
from ...utils.helpers import fmt_currency, fmt_datetime
from ...constants import WALK_IN_CUSTOMER
from ...widgets.row_model import ALERT_RED, RowTableModel
from .cart import Cart, CartLine


class SalesTableModel(RowTableModel):
    HEADERS = ["ID", "Date", "Customer", "Total", "Paid", "Due", "Status"]
    NUMERIC_COLUMNS = frozenset({3, 4, 5})

    def cells(self, s: Sale) -> list:
        return [
            s.sale_id,
            fmt_datetime(s.sale_date),
            s.customer_name or WALK_IN_CUSTOMER,
            fmt_currency(s.net_total),
            fmt_currency(s.paid_amount),
            fmt_currency(s.due_amount),
            (s.payment_status or "").upper(),
        ]

    def sort_values(self, s: Sale) -> list:
        return [
            s.sale_id, str(s.sale_date or ""), s.customer_name or WALK_IN_CUSTOMER,
            s.net_total, s.paid_amount, s.due_amount, s.payment_status or "",
        ]

    def colour(self, s: Sale, column: int):
        return ALERT_RED if column == 5 and s.due_amount > 0 else None


class CartTableModel(QAbstractTableModel):
    """
    Live view over a Cart. Qty and Price cells are editable and write
    straight through the cart rules (qty <= 0 removes, price clamps at 0).
    """

    HEADERS = ["Code", "Product", "MRP", "Qty", "Price", "Discount", "Total"]
    COL_QTY = 3
    COL_PRICE = 4

    cart_changed = Signal()

    def __init__(self, cart: Cart):
        super().__init__()
        self.cart = cart

    def rowCount(self, parent=QModelIndex()):
        return len(self.cart.lines)

    def columnCount(self, parent=QModelIndex()):
        return len(self.HEADERS)

    def flags(self, index):
        base = super().flags(index)
        if index.isValid() and index.column() in (self.COL_QTY, self.COL_PRICE):
            return base | Qt.ItemIsEditable
        return base

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None
        line: CartLine = self.cart.lines[index.row()]
        c = index.column()
        if role == Qt.EditRole:
            if c == self.COL_QTY:
                return line.quantity
            if c == self.COL_PRICE:
                return line.selling_price
        if role == Qt.DisplayRole:
            mapping = [
                line.code,
                line.name,
                fmt_currency(line.mrp),
                line.quantity,
                fmt_currency(line.selling_price),
                fmt_currency(line.discount) if line.discount > 0 else "",
                fmt_currency(line.line_total),
            ]
            return mapping[c]
        if role == Qt.ToolTipRole and c == self.COL_QTY:
            return f"In stock: {line.stock}"
        return None

    def setData(self, index, value, role=Qt.EditRole):
        if not index.isValid() or role != Qt.EditRole:
            return False
        line = self.cart.lines[index.row()]
        try:
            if index.column() == self.COL_QTY:
                qty = int(float(value))
                self.beginResetModel()
                self.cart.update_quantity(line.product_id, qty)
                self.endResetModel()
            elif index.column() == self.COL_PRICE:
                self.cart.update_selling_price(line.product_id, float(value))
                self.dataChanged.emit(self.index(index.row(), 0), self.index(index.row(), self.columnCount() - 1))
            else:
                return False
        except (TypeError, ValueError):
            return False
        self.cart_changed.emit()
        return True

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if orientation == Qt.Horizontal and role == Qt.DisplayRole:
            return self.HEADERS[section]
        return super().headerData(section, orientation, role)

    def at(self, row: int) -> CartLine:
        return self.cart.lines[row]

    def refresh(self):
        self.beginResetModel()
        self.endResetModel()
        self.cart_changed.emit()
