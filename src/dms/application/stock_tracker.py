"""Application service: keep the stock reading in step with the selection.

Selecting a product starts a stock fetch that races further user input.
Each fetch is tagged with a request token; when it completes, its result
is published only if the token is still the latest and the product is
still the one selected.  Anything else is a stale response and is dropped.
"""

from __future__ import annotations

import logging

from dms.domain.exceptions import StockFetchError
from dms.domain.model.stock import StockReading
from dms.domain.repository.stock_oracle import StockOracle

logger = logging.getLogger(__name__)


class StockTracker:

    def __init__(self, oracle: StockOracle) -> None:
        self._oracle = oracle
        self._token = 0
        self._selected: str | None = None
        self._reading: StockReading | None = None

    @property
    def selected_product_id(self) -> str | None:
        return self._selected

    @property
    def reading(self) -> StockReading | None:
        """The reading for the current selection (PENDING while in flight)."""
        return self._reading

    def clear(self) -> None:
        """Forget the selection; any in-flight fetch becomes stale."""
        self._token += 1
        self._selected = None
        self._reading = None

    async def select(self, product_id: str) -> StockReading | None:
        """Select *product_id* and fetch its stock.

        Returns the published reading, or None if a newer selection
        superseded this one before the fetch finished.
        """
        self._token += 1
        token = self._token
        self._selected = product_id
        self._reading = StockReading.pending(product_id)

        try:
            snapshot = await self._oracle.fetch(product_id)
        except StockFetchError as exc:
            logger.warning("Stock fetch for product %s failed: %s", product_id, exc)
            reading = StockReading.failed(product_id, str(exc))
        else:
            if snapshot is None:
                reading = StockReading.unknown(product_id)
            else:
                reading = StockReading.loaded(snapshot)

        if token != self._token or product_id != self._selected:
            logger.debug(
                "Discarding stale stock response for product %s (request %d, latest %d)",
                product_id,
                token,
                self._token,
            )
            return None

        self._reading = reading
        return reading
