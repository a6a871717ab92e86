# shopfront/api/repositories/products_repo.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Optional

from ...utils.helpers import parse_money, parse_int
from .base import BaseRepo, unwrap_list, unwrap_object


@dataclass
class Product:
    product_id: int
    code: str
    name: str
    category: str
    gender: str            # male | female | boys | girls | unisex (default)
    size: str
    color: str
    buy_price: float
    sell_price: float      # MRP
    current_stock: int

    @classmethod
    def from_api(cls, r: dict) -> "Product":
        return cls(
            product_id=int(r["id"]),
            code=str(r.get("code") or ""),
            name=str(r.get("name") or ""),
            category=str(r.get("category") or ""),
            gender=str(r.get("gender") or "unisex").lower(),
            size=str(r.get("size") or ""),
            color=str(r.get("color") or ""),
            buy_price=parse_money(r.get("buy_price")),
            sell_price=parse_money(r.get("sell_price")),
            current_stock=max(0, parse_int(r.get("current_stock"))),
        )

    @property
    def mrp(self) -> float:
        return self.sell_price

    @property
    def label(self) -> str:
        size = f" ({self.size})" if self.size else ""
        return f"{self.code} - {self.name}{size}"

    def as_dict(self) -> dict:
        return asdict(self)


class ProductsRepo(BaseRepo):
    def list_products(self) -> list[Product]:
        rows = unwrap_list(self.api.get("/products", error_message="Failed to load products"))
        return [Product.from_api(r) for r in rows]

    def create(self, payload: dict) -> Optional[Product]:
        body = self.api.post("/products", payload, error_message="Failed to save product")
        return Product.from_api(unwrap_object(body)) if body else None

    def update(self, product_id: int, payload: dict) -> Optional[Product]:
        body = self.api.put(f"/products/{product_id}", payload, error_message="Failed to save product")
        return Product.from_api(unwrap_object(body)) if body else None

    def delete(self, product_id: int) -> None:
        # The API refuses when the product is referenced by sales/purchases.
        self.api.delete(
            f"/products/{product_id}",
            error_message="Cannot delete product (linked to sales/purchases).",
        )
