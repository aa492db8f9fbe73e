"""Typed outcomes of line entry.

Every validation failure is returned as a ``Rejection`` value so the caller
can render inline feedback; nothing here is raised.  Successful results may
still carry non-blocking ``LineWarning`` values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dms.domain.model.line_item import LineItem


class RejectionReason(Enum):
    NO_PRODUCT_SELECTED = "NO_PRODUCT_SELECTED"
    ZERO_QUANTITY = "ZERO_QUANTITY"
    INVALID_PRICE = "INVALID_PRICE"
    DUPLICATE_PRODUCT = "DUPLICATE_PRODUCT"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"


class LineWarning(Enum):
    STOCK_UNKNOWN = "STOCK_UNKNOWN"
    STOCK_FETCH_FAILED = "STOCK_FETCH_FAILED"
    EXCEEDS_STOCK_AT_ADD_TIME = "EXCEEDS_STOCK_AT_ADD_TIME"


@dataclass(frozen=True)
class Rejection:
    """Why a line was not accepted.

    ``requested`` and ``available`` are only set for INSUFFICIENT_STOCK.
    """

    reason: RejectionReason
    message: str
    requested: int | None = None
    available: int | None = None

    @staticmethod
    def no_product_selected() -> Rejection:
        return Rejection(RejectionReason.NO_PRODUCT_SELECTED, "Select a product first")

    @staticmethod
    def zero_quantity() -> Rejection:
        return Rejection(RejectionReason.ZERO_QUANTITY, "Enter cartons or pieces")

    @staticmethod
    def invalid_price(label: str = "Price") -> Rejection:
        return Rejection(RejectionReason.INVALID_PRICE, f"{label} must be > 0")

    @staticmethod
    def duplicate_product(product_name: str) -> Rejection:
        return Rejection(
            RejectionReason.DUPLICATE_PRODUCT,
            f"{product_name} already added; edit the existing line instead",
        )

    @staticmethod
    def insufficient_stock(requested: int, available: int) -> Rejection:
        return Rejection(
            RejectionReason.INSUFFICIENT_STOCK,
            f"Insufficient stock! Available: {available} pieces, "
            f"Requested: {requested} pieces",
            requested=requested,
            available=available,
        )


@dataclass(frozen=True)
class LineResult:
    """Either a committed-ready ``line`` or a ``rejection``, never both."""

    line: LineItem | None = None
    rejection: Rejection | None = None
    warnings: tuple[LineWarning, ...] = field(default=())

    @property
    def ok(self) -> bool:
        return self.rejection is None

    @staticmethod
    def accepted(line: LineItem, warnings: tuple[LineWarning, ...] = ()) -> LineResult:
        return LineResult(line=line, warnings=warnings)

    @staticmethod
    def rejected(rejection: Rejection) -> LineResult:
        return LineResult(rejection=rejection)
