"""Abstract stock oracle.

The live source of on-hand quantities and costs.  Implementations talk to
the network, so ``fetch`` is a coroutine; timeouts and retries are the
transport's business.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from dms.domain.model.stock import StockSnapshot


class StockOracle(ABC):

    @abstractmethod
    async def fetch(self, product_id: str) -> StockSnapshot | None:
        """Return a fresh snapshot, or None when stock is unknown.

        Raises StockFetchError when the lookup itself fails.
        """

    async def aclose(self) -> None:
        """Release transport resources; nothing to do by default."""
