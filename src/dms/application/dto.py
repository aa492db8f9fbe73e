"""Data Transfer Objects: plain containers that cross layer boundaries.

Display DTOs carry preformatted strings for the CLI.  The submission DTOs
carry the exact shape the order/purchase REST endpoints expect.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LineItemSpec:
    """Input: one add-row entry (product SKU, cartons, pieces, price)."""

    sku: str
    cartons: str
    pieces: str
    price: str


@dataclass(frozen=True)
class LineItemDTO:
    """Output: a single line as displayed to the user."""

    product_sku: str
    product_name: str
    cartons: int
    pieces: int
    total_pieces: int
    price: str  # formatted, per carton for purchases
    line_total: str
    available_stock: int | None


@dataclass(frozen=True)
class TotalsDTO:
    item_count: int
    total_pieces: int
    subtotal: str
    grand_total: str


@dataclass(frozen=True)
class SubmissionLine:
    product_id: str
    cartons: int
    pieces: int
    pieces_per_carton: int
    quantity: int
    price: Decimal  # per piece
    total: Decimal

    def to_dict(self, price_key: str) -> dict:
        price = _number(self.price)
        return {
            "productId": self.product_id,
            "cartons": self.cartons,
            "pieces": self.pieces,
            "piecesPerCarton": self.pieces_per_carton,
            "quantity": self.quantity,
            "price": price,
            price_key: price,
            "total": _number(self.total),
        }


@dataclass(frozen=True)
class SubmissionPayload:
    """Output: the lines and totals handed to order/purchase submission."""

    mode: str
    items: list[SubmissionLine]
    subtotal: Decimal
    grand_total: Decimal

    def to_dict(self) -> dict:
        price_key = "salePrice" if self.mode == "SALE" else "purchasePrice"
        return {
            "items": [item.to_dict(price_key) for item in self.items],
            "subtotal": _number(self.subtotal),
            "grandTotal": _number(self.grand_total),
        }


def _number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)
