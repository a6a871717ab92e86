from ...api.repositories.purchases_repo import Purchase, PurchaseItem
from ...utils.helpers import fmt_currency, fmt_date
from ...widgets.row_model import RowTableModel


def filter_purchases(rows: list[Purchase], text: str) -> list[Purchase]:
    """Search over supplier, date and total."""
    needle = (text or "").strip().lower()
    return [p for p in rows if needle in p.search_text()] if needle else list(rows)


class PurchasesTableModel(RowTableModel):
    HEADERS = ["ID", "Date", "Supplier", "Total"]
    NUMERIC_COLUMNS = frozenset({3})

    def cells(self, p: Purchase) -> list:
        return [p.purchase_id, fmt_date(p.purchase_date), p.supplier, fmt_currency(p.total_amount)]

    def sort_values(self, p: Purchase) -> list:
        return [p.purchase_id, str(p.purchase_date or ""), p.supplier, p.total_amount]


class PurchaseItemsModel(RowTableModel):
    HEADERS = ["Code", "Product", "Qty", "Buy Price", "MRP", "Line Total"]
    NUMERIC_COLUMNS = frozenset({2, 3, 4, 5})

    def cells(self, i: PurchaseItem) -> list:
        mrp = "-" if i.sell_price is None else fmt_currency(i.sell_price)
        return [i.product_code, i.product_name, i.quantity, fmt_currency(i.unit_price), mrp, fmt_currency(i.line_total)]
