"""In-memory fakes for testing.

These implement the same abstract interfaces as the JSON and HTTP
adapters but keep everything in a dict. No file or network I/O.
"""

from __future__ import annotations

import asyncio

from dms.domain.exceptions import StockFetchError
from dms.domain.model.product import Product
from dms.domain.model.stock import StockSnapshot
from dms.domain.model.value_objects import Money
from dms.domain.repository.product_repository import ProductRepository
from dms.domain.repository.stock_oracle import StockOracle


def make_product(
    product_id: str = "1",
    sku: str = "OIL-1L",
    name: str = "Cooking Oil 1L",
    pieces_per_carton: int = 12,
    stock: int = 0,
) -> Product:
    return Product(
        id=product_id,
        sku=sku,
        name=name,
        pieces_per_carton=pieces_per_carton,
        current_stock_pieces=stock,
    )


def make_snapshot(product_id: str = "1", stock: int = 50, cost: str = "40") -> StockSnapshot:
    return StockSnapshot(
        product_id=product_id,
        current_stock_pieces=stock,
        average_cost_per_piece=Money.of(cost),
        suggested_price_per_piece=Money.of("42"),
    )


class FakeProductRepository(ProductRepository):

    def __init__(self, products: list[Product] | None = None) -> None:
        self._store: dict[str, Product] = {}
        for p in products or []:
            self._store[p.id] = p

    def get_by_id(self, product_id: str) -> Product | None:
        return self._store.get(product_id)

    def get_by_sku(self, sku: str) -> Product | None:
        for p in self._store.values():
            if p.sku.lower() == sku.lower():
                return p
        return None

    def list_all(self) -> list[Product]:
        return list(self._store.values())


class FakeStockOracle(StockOracle):
    """Answers immediately from a dict; ids in ``failing`` raise."""

    def __init__(
        self,
        snapshots: list[StockSnapshot] | None = None,
        failing: set[str] | None = None,
    ) -> None:
        self._store = {s.product_id: s for s in snapshots or []}
        self._failing = failing or set()
        self.requests: list[str] = []
        self.closed = False

    async def fetch(self, product_id: str) -> StockSnapshot | None:
        self.requests.append(product_id)
        if product_id in self._failing:
            raise StockFetchError("connection refused")
        return self._store.get(product_id)

    async def aclose(self) -> None:
        self.closed = True


class GatedStockOracle(StockOracle):
    """Holds every fetch until the test calls ``release(product_id)``."""

    def __init__(self, snapshots: list[StockSnapshot]) -> None:
        self._store = {s.product_id: s for s in snapshots}
        self._gates: dict[str, asyncio.Event] = {}

    def _gate(self, product_id: str) -> asyncio.Event:
        return self._gates.setdefault(product_id, asyncio.Event())

    def release(self, product_id: str) -> None:
        self._gate(product_id).set()

    async def fetch(self, product_id: str) -> StockSnapshot | None:
        await self._gate(product_id).wait()
        return self._store.get(product_id)
