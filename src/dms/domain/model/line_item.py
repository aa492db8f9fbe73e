"""LineItem: one product row of a sales order or a purchase.

Line items are immutable.  They are created by ``LineItemBuilder.add()``
and replaced wholesale by ``LineItemEditor.edit()``; no field is ever
patched in place.  The dataclass ``__init__`` does not validate so a
persisted order can be reconstituted as-is.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dms.domain.model.value_objects import Money


class LineMode(Enum):
    """Direction of the document the line belongs to.

    SALE lines are priced per piece and draw stock down; PURCHASE lines
    are priced per carton and bring stock in.
    """

    SALE = "SALE"
    PURCHASE = "PURCHASE"

    @property
    def price_label(self) -> str:
        return "Sale price" if self is LineMode.SALE else "Purchase price"


@dataclass(frozen=True)
class LineItem:
    product_id: str
    product_sku: str
    product_name: str
    mode: LineMode
    pieces_per_carton: int  # captured at add time, fixed for the line's life
    cartons: int
    pieces: int
    total_pieces: int
    unit_price: Money  # always per piece, full precision
    line_total: Money  # rounded to cents when the line is built
    price_per_carton: Money | None = None  # purchase lines only
    available_stock_at_add_time: int | None = None

    @property
    def entered_price(self) -> Money:
        """The price as the user typed it (per carton for purchases)."""
        if self.mode is LineMode.PURCHASE and self.price_per_carton is not None:
            return self.price_per_carton
        return self.unit_price

    @property
    def exceeds_stock_at_add_time(self) -> bool:
        if self.mode is not LineMode.SALE or self.available_stock_at_add_time is None:
            return False
        return self.total_pieces > self.available_stock_at_add_time
