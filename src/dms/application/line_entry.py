"""Application service: a line entry session for one order or purchase.

This is the thin adapter every entry screen sits on.  It holds the two
pieces of state a screen needs, the committed line set and the stock
reading for the product currently selected in the add row, and forwards
all rules to the domain services.

Nothing is persisted here; the submission payload is handed to the
order/purchase API by the caller.
"""

from __future__ import annotations

import logging
from typing import Iterable

from dms.application.dto import (
    LineItemDTO,
    SubmissionLine,
    SubmissionPayload,
    TotalsDTO,
)
from dms.application.stock_tracker import StockTracker
from dms.domain.exceptions import ValidationError
from dms.domain.model.line_item import LineItem, LineMode
from dms.domain.model.line_set import OrderLineSet
from dms.domain.model.product import Product
from dms.domain.model.rejection import LineResult
from dms.domain.model.stock import StockReading
from dms.domain.repository.stock_oracle import StockOracle
from dms.domain.service import unit_converter
from dms.domain.service.line_item_builder import LineItemBuilder, build_line, parse_price
from dms.domain.service.line_item_editor import LineItemEditor

logger = logging.getLogger(__name__)


class LineEntrySession:

    def __init__(
        self,
        mode: LineMode,
        oracle: StockOracle,
        lines: OrderLineSet | None = None,
    ) -> None:
        self.mode = mode
        self.lines = lines if lines is not None else OrderLineSet()
        self._tracker = StockTracker(oracle)
        self._product: Product | None = None

    # --- Add row --------------------------------------------------------------

    @property
    def selected_product(self) -> Product | None:
        return self._product

    @property
    def stock(self) -> StockReading | None:
        return self._tracker.reading

    async def select_product(self, product: Product | None) -> StockReading | None:
        """Select a product in the add row and load its stock."""
        self._product = product
        if product is None:
            self._tracker.clear()
            return None
        return await self._tracker.select(product.id)

    def add(self, cartons: object, pieces: object, price: object) -> LineResult:
        """Validate the add row and, on success, commit it to the line set."""
        result = LineItemBuilder(self.lines).add(
            self._product, cartons, pieces, price, self.mode, self._tracker.reading
        )
        if not result.ok:
            return result

        line: LineItem = result.line  # type: ignore[assignment]
        rejection = self.lines.append(line)
        if rejection is not None:
            return LineResult.rejected(rejection)

        logger.info(
            "Added %s: %d pieces, total %s",
            line.product_sku,
            line.total_pieces,
            line.line_total,
        )
        self._product = None
        self._tracker.clear()
        return result

    # --- Committed lines ------------------------------------------------------

    def edit(self, index: int, cartons: object, pieces: object, price: object) -> LineResult:
        result = LineItemEditor().edit(self.lines[index], cartons, pieces, price)
        if result.ok:
            self.lines.replace(index, result.line)  # type: ignore[arg-type]
        return result

    def remove(self, index: int) -> LineItem:
        return self.lines.remove(index)

    def load(self, records: Iterable[dict]) -> None:
        """Bring in the lines of a saved document for editing."""
        for record in records:
            rejection = self.lines.append(line_from_record(record, self.mode))
            if rejection is not None:
                raise ValidationError(rejection.message)

    # --- Output ---------------------------------------------------------------

    def line_dtos(self) -> list[LineItemDTO]:
        return [self._to_dto(line) for line in self.lines]

    def totals(self) -> TotalsDTO:
        totals = self.lines.totals()
        return TotalsDTO(
            item_count=totals.item_count,
            total_pieces=totals.total_pieces,
            subtotal=str(totals.subtotal),
            grand_total=str(totals.grand_total),
        )

    def payload(self) -> SubmissionPayload:
        totals = self.lines.totals()
        return SubmissionPayload(
            mode=self.mode.value,
            items=[
                SubmissionLine(
                    product_id=line.product_id,
                    cartons=line.cartons,
                    pieces=line.pieces,
                    pieces_per_carton=line.pieces_per_carton,
                    quantity=line.total_pieces,
                    price=line.unit_price.amount,
                    total=line.line_total.amount,
                )
                for line in self.lines
            ],
            subtotal=totals.subtotal.amount,
            grand_total=totals.grand_total.amount,
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(line: LineItem) -> LineItemDTO:
        return LineItemDTO(
            product_sku=line.product_sku,
            product_name=line.product_name,
            cartons=line.cartons,
            pieces=line.pieces,
            total_pieces=line.total_pieces,
            price=str(line.entered_price),
            line_total=str(line.line_total),
            available_stock=line.available_stock_at_add_time,
        )


def line_from_record(record: dict, mode: LineMode) -> LineItem:
    """Reconstitute a committed line from a saved order/purchase item.

    Saved items store the per-piece price under ``salePrice`` or
    ``purchasePrice`` (or the generic ``price``).  Totals are re-derived
    rather than trusted.  Older items with only ``quantity`` are read as
    loose pieces.  ``product`` may be a bare id or the populated product
    document (``{"_id", "name", "sku"}``) the backend returns for a
    fetched order.
    """
    product_id, product_sku, product_name = _product_ref(record)
    pieces_per_carton = unit_converter.normalize_pieces_per_carton(
        record.get("piecesPerCarton")
    )
    cartons = unit_converter.count_from_input(record.get("cartons"))
    pieces = unit_converter.count_from_input(record.get("pieces"))
    quantity = unit_converter.count_from_input(record.get("quantity"))
    if cartons * pieces_per_carton + pieces == 0 and quantity > 0:
        pieces = quantity

    price_key = "salePrice" if mode is LineMode.SALE else "purchasePrice"
    unit_price = parse_price(record.get(price_key, record.get("price")))
    if unit_price is None:
        raise ValidationError(
            f"Saved line for product '{product_id}' has no usable price"
        )
    entered_price = unit_price * pieces_per_carton if mode is LineMode.PURCHASE else unit_price

    available = record.get("availableStock")
    return build_line(
        product_id=product_id,
        product_sku=product_sku,
        product_name=product_name,
        mode=mode,
        pieces_per_carton=pieces_per_carton,
        cartons=cartons,
        pieces=pieces,
        entered_price=entered_price,
        available_stock_at_add_time=(
            None if available is None else unit_converter.count_from_input(available)
        ),
    )


def _product_ref(record: dict) -> tuple[str, str, str]:
    product = record.get("product")
    if isinstance(product, dict):
        product_id = record.get("productId") or product.get("_id") or product.get("id")
        sku = record.get("productSku") or product.get("sku", "")
        name = record.get("productName") or product.get("name", "")
    else:
        product_id = record.get("productId") or product
        sku = record.get("productSku", "")
        name = record.get("productName", "")
    if not product_id:
        raise ValidationError("Saved line has no product")
    return str(product_id), str(sku), str(name)
