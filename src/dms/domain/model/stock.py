"""Stock snapshots and the observable state of a stock lookup.

A snapshot is a point-in-time read.  Nothing here bounds its age: by the
time a line is committed the real stock may already have moved.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dms.domain.model.value_objects import Money


@dataclass(frozen=True)
class StockSnapshot:
    product_id: str
    current_stock_pieces: int
    average_cost_per_piece: Money
    suggested_price_per_piece: Money

    def average_cost_per_carton(self, pieces_per_carton: int) -> Money:
        """Average cost scaled to a whole carton (purchase screen hint)."""
        return self.average_cost_per_piece * max(1, pieces_per_carton)


class StockStatus(Enum):
    PENDING = "PENDING"
    LOADED = "LOADED"
    UNKNOWN = "UNKNOWN"
    FAILED = "FAILED"


@dataclass(frozen=True)
class StockReading:
    """What the line entry screen currently knows about one product's stock.

    Only a LOADED reading carries a snapshot.  UNKNOWN means the oracle
    answered but had nothing (e.g. a new product); FAILED means it did not
    answer at all.
    """

    product_id: str
    status: StockStatus
    snapshot: StockSnapshot | None = None
    error: str | None = None

    @property
    def is_available(self) -> bool:
        return self.status == StockStatus.LOADED and self.snapshot is not None

    @property
    def available_pieces(self) -> int | None:
        if not self.is_available:
            return None
        return self.snapshot.current_stock_pieces  # type: ignore[union-attr]

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def pending(product_id: str) -> StockReading:
        return StockReading(product_id=product_id, status=StockStatus.PENDING)

    @staticmethod
    def loaded(snapshot: StockSnapshot) -> StockReading:
        return StockReading(
            product_id=snapshot.product_id,
            status=StockStatus.LOADED,
            snapshot=snapshot,
        )

    @staticmethod
    def unknown(product_id: str) -> StockReading:
        return StockReading(product_id=product_id, status=StockStatus.UNKNOWN)

    @staticmethod
    def failed(product_id: str, error: str) -> StockReading:
        return StockReading(product_id=product_id, status=StockStatus.FAILED, error=error)
