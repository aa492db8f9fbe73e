"""REST-backed implementation of StockOracle.

Talks to ``GET {api}/inventory/stock/{productId}``, which answers::

    {"success": true,
     "data": {"currentStock": 40, "averageCost": 310.5, "suggestedSalePrice": 327}}

A 404 means the backend does not know the product, which line entry treats
as "stock unknown".  Every other failure becomes a StockFetchError.
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

import httpx

from dms.domain.exceptions import StockFetchError, ValidationError
from dms.domain.model.stock import StockSnapshot
from dms.domain.model.value_objects import Money
from dms.domain.repository.stock_oracle import StockOracle

logger = logging.getLogger(__name__)


class HttpStockOracle(StockOracle):

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @staticmethod
    def create(base_url: str, token: str | None = None, timeout: float = 15.0) -> HttpStockOracle:
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers=headers,
            timeout=timeout,
        )
        return HttpStockOracle(client)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, product_id: str) -> StockSnapshot | None:
        try:
            response = await self._client.get(f"inventory/stock/{product_id}")
        except httpx.HTTPError as exc:
            raise StockFetchError(f"Stock request for product {product_id} failed: {exc}") from exc

        if response.status_code == 404:
            logger.info("Backend has no stock record for product %s", product_id)
            return None
        if response.is_error:
            raise StockFetchError(
                f"Stock request for product {product_id} returned HTTP {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise StockFetchError(f"Stock response for product {product_id} is not JSON") from exc
        return self._to_snapshot(product_id, body)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_snapshot(product_id: str, body: object) -> StockSnapshot | None:
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict) or data.get("currentStock") is None:
            return None
        try:
            stock = int(data["currentStock"])
            average_cost = Money(Decimal(str(data.get("averageCost") or 0)))
            suggested = Money(Decimal(str(data.get("suggestedSalePrice") or 0)))
        except (InvalidOperation, TypeError, ValueError, ValidationError) as exc:
            raise StockFetchError(f"Malformed stock response for product {product_id}") from exc
        return StockSnapshot(
            product_id=product_id,
            current_stock_pieces=max(0, stock),
            average_cost_per_piece=average_cost,
            suggested_price_per_piece=suggested,
        )
