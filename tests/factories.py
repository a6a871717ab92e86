# tests/factories.py
"""API-shaped sample records and the domain objects built from them."""

from shopfront.api.repositories.products_repo import Product
from shopfront.api.repositories.sales_repo import Sale


def product_row(pid=1, code="TS-01", name="T-Shirt", stock=10, sell=500.0, buy=300.0,
                category="Tops", gender="male", size="M", color="Blue") -> dict:
    return {
        "id": pid, "code": code, "name": name, "category": category, "gender": gender,
        "size": size, "color": color, "buy_price": buy, "sell_price": sell,
        "current_stock": stock,
    }


def make_product(**kw) -> Product:
    return Product.from_api(product_row(**kw))


def sale_row(sid=1, sale_date="2024-05-10 10:00:00", total=1000.0, paid=1000.0, due=0.0,
             customer=None, items=None, **extra) -> dict:
    row = {
        "id": sid, "sale_date": sale_date, "subtotal": total, "discount": 0, "total": total,
        "paid_amount": paid, "due_amount": due, "payment_status": "paid" if due == 0 else "partial",
        "items": items or [],
    }
    if customer:
        row["customer_id"] = customer["id"]
        row["customer"] = customer
    row.update(extra)
    return row


def make_sale(**kw) -> Sale:
    return Sale.from_api(sale_row(**kw))
