"""Stock oracle backed by the local catalog file.

Used when no REST backend is configured.  Mirrors the backend's stock
endpoint: the suggested sale price is average cost plus a 5% margin,
rounded up to a whole rupee, falling back to the product's suggested
retail price when there is no cost history.
"""

from __future__ import annotations

import json
import math
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dms.domain.exceptions import StockFetchError, ValidationError
from dms.domain.model.stock import StockSnapshot
from dms.domain.model.value_objects import Money
from dms.domain.repository.stock_oracle import StockOracle

SALE_MARGIN = Decimal("1.05")


def suggested_sale_price(average_cost: Decimal, suggested_retail: Decimal) -> Decimal:
    if average_cost > 0:
        return Decimal(math.ceil(average_cost * SALE_MARGIN))
    return suggested_retail


class JsonStockOracle(StockOracle):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    async def fetch(self, product_id: str) -> StockSnapshot | None:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StockFetchError(f"Cannot read stock from {self._file_path}: {exc}") from exc

        for raw in records:
            if str(raw.get("id")) == product_id:
                return self._to_snapshot(product_id, raw)
        return None

    @staticmethod
    def _to_snapshot(product_id: str, raw: dict) -> StockSnapshot | None:
        if raw.get("currentStock") is None:
            return None
        try:
            stock = int(raw["currentStock"])
            average_cost = Money(Decimal(str(raw.get("averageCost") or 0)))
            retail = Decimal(str(raw.get("suggestedRetailPrice") or 0))
            suggested = Money(suggested_sale_price(average_cost.amount, retail))
        except (InvalidOperation, TypeError, ValueError, ValidationError) as exc:
            raise StockFetchError(f"Malformed stock record for product {product_id}") from exc
        return StockSnapshot(
            product_id=product_id,
            current_stock_pieces=max(0, stock),
            average_cost_per_piece=average_cost,
            suggested_price_per_piece=suggested,
        )
