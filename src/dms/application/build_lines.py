"""Application service: Build Lines use case.

Runs a whole add-row session from a list of entries: each entry selects
its product, waits for the stock reading, then submits the add row.
Rejected entries are reported alongside the lines that made it in.
"""

from __future__ import annotations

from dataclasses import dataclass

from dms.application.dto import LineItemSpec
from dms.application.line_entry import LineEntrySession
from dms.domain.exceptions import EntityNotFoundError
from dms.domain.model.line_item import LineMode
from dms.domain.model.product import Product
from dms.domain.model.rejection import LineResult
from dms.domain.repository.product_repository import ProductRepository
from dms.domain.repository.stock_oracle import StockOracle


@dataclass(frozen=True)
class EntryOutcome:
    spec: LineItemSpec
    result: LineResult


class BuildLinesHandler:

    def __init__(self, product_repo: ProductRepository, oracle: StockOracle) -> None:
        self._product_repo = product_repo
        self._oracle = oracle

    async def handle(
        self, mode: LineMode, specs: list[LineItemSpec]
    ) -> tuple[LineEntrySession, list[EntryOutcome]]:
        """Resolve every SKU first, then enter the lines in order."""
        try:
            products = self._resolve(specs)
            session = LineEntrySession(mode, self._oracle)
            outcomes: list[EntryOutcome] = []
            for spec, product in zip(specs, products):
                await session.select_product(product)
                result = session.add(spec.cartons, spec.pieces, spec.price)
                outcomes.append(EntryOutcome(spec=spec, result=result))
        finally:
            await self._oracle.aclose()
        return session, outcomes

    def _resolve(self, specs: list[LineItemSpec]) -> list[Product]:
        products: list[Product] = []
        for spec in specs:
            product = self._product_repo.get_by_sku(spec.sku)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.sku}'")
            products.append(product)
        return products
