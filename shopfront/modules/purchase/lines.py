"""
Purchase order line items.

A line either restocks an existing product or registers a brand-new one
inline. Totals are Σ quantity × unit_price regardless of mode.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ...api.repositories.products_repo import Product
from ...api.repositories.purchases_repo import Purchase
from ...constants import DEFAULT_SUPPLIER
from ...utils.validators import ValidationError

EXISTING = "existing"
NEW = "new"


@dataclass
class NewProduct:
    code: str = ""
    name: str = ""
    category: str = ""
    gender: str = "unisex"
    size: str = ""
    color: str = ""
    sell_price: float = 0.0

    def as_payload(self) -> dict:
        return {
            "code": self.code.strip(),
            "name": self.name.strip(),
            "category": self.category.strip(),
            "gender": self.gender,
            "size": self.size.strip(),
            "color": self.color.strip(),
            "sell_price": float(self.sell_price or 0),
        }


@dataclass
class PurchaseLine:
    mode: str = EXISTING
    product_id: Optional[int] = None
    quantity: int = 1
    unit_price: float = 0.0
    sell_price: float = 0.0
    product: NewProduct = field(default_factory=NewProduct)

    @property
    def line_total(self) -> float:
        price = self.unit_price if _finite(self.unit_price) else 0.0
        return self.quantity * price

    def select_product(self, p: Product) -> None:
        """Existing mode: pick a catalog product and prefill both prices."""
        self.mode = EXISTING
        self.product_id = p.product_id
        self.unit_price = p.buy_price
        self.sell_price = p.sell_price


def _finite(v) -> bool:
    try:
        return math.isfinite(float(v))
    except (TypeError, ValueError):
        return False


def line_errors(line: PurchaseLine) -> list[str]:
    errs: list[str] = []
    if line.mode == EXISTING and not line.product_id:
        errs.append("Please select an existing product.")
    if line.mode == NEW:
        if not line.product.code.strip():
            errs.append("Product code is required.")
        if not line.product.name.strip():
            errs.append("Product name is required.")
    if line.unit_price is None or not _finite(line.unit_price):
        errs.append("Purchase price (buy) is required.")
    if line.quantity is None or line.quantity < 1:
        errs.append("Quantity must be at least 1.")
    return errs


def validate_lines(lines: Iterable[PurchaseLine]) -> dict[int, list[str]]:
    """Errors keyed by line index; empty dict means every line is valid."""
    out: dict[int, list[str]] = {}
    for i, line in enumerate(lines):
        errs = line_errors(line)
        if errs:
            out[i] = errs
    return out


def purchase_total(lines: Iterable[PurchaseLine]) -> float:
    return sum(l.line_total for l in lines)


def line_payload(line: PurchaseLine) -> dict:
    if line.mode == EXISTING:
        return {
            "product_id": line.product_id,
            "quantity": int(line.quantity),
            "unit_price": float(line.unit_price),
            "sell_price": float(line.sell_price or 0),
        }
    return {
        "product": line.product.as_payload(),
        "quantity": int(line.quantity),
        "unit_price": float(line.unit_price),
    }


def build_purchase_payload(purchase_date: str, supplier: str, lines: list[PurchaseLine]) -> dict:
    if not lines:
        raise ValidationError("Add at least one item.")
    errors = validate_lines(lines)
    if errors:
        first = min(errors)
        raise ValidationError(f"Item {first + 1}: {errors[first][0]}")
    return {
        "purchase_date": purchase_date,
        "supplier": (supplier or "").strip() or DEFAULT_SUPPLIER,
        "items": [line_payload(l) for l in lines],
    }


def lines_from_purchase(purchase: Purchase) -> list[PurchaseLine]:
    """Edit mode starts from the posted items, all as existing products."""
    return [
        PurchaseLine(
            mode=EXISTING,
            product_id=i.product_id,
            quantity=i.quantity,
            unit_price=i.unit_price,
            sell_price=i.sell_price or 0.0,
        )
        for i in purchase.items
    ]
