"""
Point-of-sale cart and bill arithmetic.

Pure data + functions: nothing here touches Qt or the network, so the sale
form and the tests share exactly the same rules.

    subtotal      = Σ selling_price × quantity
    final_amount  = max(0, subtotal − discount)
    bill_due      = final_amount − paid_now

Money is kept in whole paise: every total is rounded to 2 decimals so that
a bill paid in full compares equal to its total.

Stock checks are soft (the API is authoritative); they only stop the cashier
from building a bill the shop obviously cannot fill.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ...api.repositories.products_repo import Product
from ...utils.validators import ValidationError


def to_money(value: float) -> float:
    return round(float(value), 2)


@dataclass
class CartLine:
    product_id: int
    code: str
    name: str
    mrp: float
    stock: int
    quantity: int = 1
    selling_price: float = 0.0

    @classmethod
    def from_product(cls, p: Product) -> "CartLine":
        return cls(
            product_id=p.product_id,
            code=p.code,
            name=p.name,
            mrp=p.sell_price,
            stock=p.current_stock,
            quantity=1,
            selling_price=p.sell_price,
        )

    @property
    def line_total(self) -> float:
        return to_money(self.selling_price * self.quantity)

    @property
    def discount(self) -> float:
        """MRP discount for display; zero when sold at or above MRP."""
        return to_money(max(0.0, (self.mrp - self.selling_price) * self.quantity))


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)
    discount: float = 0.0

    # -- lookup ---------------------------------------------------------
    def find(self, product_id: int) -> Optional[CartLine]:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def __len__(self) -> int:
        return len(self.lines)

    def is_empty(self) -> bool:
        return not self.lines

    # -- mutation -------------------------------------------------------
    def add(self, product: Product) -> CartLine:
        """
        Add one unit of `product`.

        Raises ValidationError (cart unchanged) when the product is out of
        stock or one more unit would exceed the known stock.
        """
        line = self.find(product.product_id)
        if line is None:
            if product.current_stock <= 0:
                raise ValidationError("Out of stock")
            line = CartLine.from_product(product)
            self.lines.append(line)
            return line
        # refresh the stock we know about before checking
        line.stock = product.current_stock
        if line.quantity + 1 > line.stock:
            raise ValidationError("Not enough stock")
        line.quantity += 1
        return line

    def update_quantity(self, product_id: int, qty: int) -> None:
        """qty <= 0 removes the line; otherwise clamps to known stock."""
        line = self.find(product_id)
        if line is None:
            return
        if qty <= 0:
            self.remove(product_id)
            return
        if line.stock <= 0:
            self.remove(product_id)
            return
        line.quantity = min(int(qty), line.stock)

    def update_selling_price(self, product_id: int, price: float) -> None:
        line = self.find(product_id)
        if line is None:
            return
        line.selling_price = max(0.0, float(price))

    def set_discount(self, amount: float) -> None:
        self.discount = max(0.0, float(amount))

    def remove(self, product_id: int) -> None:
        self.lines = [l for l in self.lines if l.product_id != product_id]

    def clear(self) -> None:
        self.lines = []
        self.discount = 0.0

    # -- totals ---------------------------------------------------------
    @property
    def subtotal(self) -> float:
        return to_money(sum(l.line_total for l in self.lines))

    @property
    def final_amount(self) -> float:
        return to_money(max(0.0, self.subtotal - max(0.0, self.discount)))

    @property
    def items_discount(self) -> float:
        return to_money(sum(l.discount for l in self.lines))


@dataclass(frozen=True)
class PaymentResolution:
    final_amount: float
    paid_now: float
    bill_due: float

    @property
    def is_credit(self) -> bool:
        return self.bill_due > 0


def resolve_payment(final_amount: float, paid_now: float, customer_id: Optional[int]) -> PaymentResolution:
    """
    Decide how the bill is settled.

    - paid_now < 0 is rejected
    - paid_now > final_amount is an overpayment and rejected
    - any unpaid remainder is credit and needs a customer to carry it
    """
    final_amount, paid_now = to_money(final_amount), to_money(paid_now)
    if paid_now < 0:
        raise ValidationError("Paid amount cannot be negative")
    if paid_now > final_amount:
        raise ValidationError("Paid amount cannot exceed bill total")
    due = to_money(final_amount - paid_now)
    if due > 0 and not customer_id:
        raise ValidationError("Customer is required for credit sale")
    return PaymentResolution(final_amount=final_amount, paid_now=paid_now, bill_due=due)


def build_sale_payload(
    cart: Cart,
    paid_now: float,
    payment_method: str,
    customer_id: Optional[int],
    sale_date: str,
) -> dict:
    """Validate the bill and build the POST /sales body."""
    if cart.is_empty():
        raise ValidationError("Cart is empty")
    res = resolve_payment(cart.final_amount, paid_now, customer_id)
    payload = {
        "sale_date": sale_date,
        "customer_id": customer_id or None,
        "discount": max(0.0, cart.discount),
        "paid_amount": res.paid_now,
        "items": [
            {"product_id": l.product_id, "quantity": l.quantity, "unit_price": l.selling_price}
            for l in cart.lines
        ],
    }
    if res.paid_now > 0:
        payload["payment_method"] = payment_method
    return payload
