from PySide6.QtCore import QSortFilterProxyModel

from ...api.repositories.products_repo import Product
from ...constants import KIDS_GROUPS
from ...utils.helpers import fmt_currency
from ...widgets.row_model import ALERT_RED, RowTableModel

LOW_STOCK_AMBER = "#b45309"


class ProductsTableModel(RowTableModel):
    HEADERS = ["Code", "Name", "Category", "Group", "Size", "Color", "Buy", "MRP", "Stock"]
    NUMERIC_COLUMNS = frozenset({6, 7, 8})
    COL_STOCK = 8

    def __init__(self, rows: list[Product], low_stock_threshold: int = 3):
        super().__init__(rows)
        self.low_stock_threshold = low_stock_threshold

    def cells(self, p: Product) -> list:
        return [
            p.code, p.name, p.category, p.gender.capitalize(), p.size, p.color,
            fmt_currency(p.buy_price), fmt_currency(p.sell_price), p.current_stock,
        ]

    def sort_values(self, p: Product) -> list:
        return [p.code, p.name, p.category, p.gender, p.size, p.color, p.buy_price, p.sell_price, p.current_stock]

    def colour(self, p: Product, column: int):
        if column != self.COL_STOCK:
            return None
        if p.current_stock <= 0:
            return ALERT_RED
        if p.current_stock <= self.low_stock_threshold:
            return LOW_STOCK_AMBER
        return None


def matches_group(p: Product, group: str) -> bool:
    """'all' | 'kids' (boys+girls) | a single target group."""
    if not group or group == "all":
        return True
    if group == "kids":
        return p.gender in KIDS_GROUPS
    return p.gender == group


def matches_search(p: Product, text: str) -> bool:
    t = (text or "").strip().lower()
    return not t or t in p.name.lower() or t in p.code.lower()


class ProductFilterProxy(QSortFilterProxyModel):
    """Name/code search combined with the target-group filter."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._text = ""
        self._group = "all"

    def set_search(self, text: str):
        self._text = text or ""
        self.invalidateFilter()

    def set_group(self, group: str):
        self._group = group or "all"
        self.invalidateFilter()

    def filterAcceptsRow(self, source_row, source_parent):
        model = self.sourceModel()
        p = model.at(source_row)
        return matches_search(p, self._text) and matches_group(p, self._group)

    def lessThan(self, left, right):
        model = self.sourceModel()
        return model.sort_key(model.at(left.row()), left.column()) < model.sort_key(model.at(right.row()), right.column())
