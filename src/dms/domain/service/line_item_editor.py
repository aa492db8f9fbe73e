"""Domain service: edit a committed line in place.

An edit is a full replacement of cartons, pieces and price.  The same
quantity and price rules as adding apply, but live stock is NOT queried
again: the line keeps the stock figure captured when it was first added.
A sale edit that now exceeds that figure is accepted with a warning.
"""

from __future__ import annotations

import logging

from dms.domain.model.line_item import LineItem
from dms.domain.model.rejection import LineResult, LineWarning, Rejection
from dms.domain.service import unit_converter
from dms.domain.service.line_item_builder import build_line, parse_price

logger = logging.getLogger(__name__)


class LineItemEditor:

    def edit(
        self,
        existing: LineItem,
        cartons: object,
        pieces: object,
        price: object,
    ) -> LineResult:
        """Return the edited line; *price* is per carton for purchase lines."""
        carton_count = unit_converter.count_from_input(cartons)
        piece_count = unit_converter.count_from_input(pieces)
        total_pieces = unit_converter.to_total_pieces(
            carton_count, piece_count, existing.pieces_per_carton
        )
        if total_pieces <= 0:
            return self._reject(existing, Rejection.zero_quantity())

        entered_price = parse_price(price)
        if entered_price is None:
            return self._reject(existing, Rejection.invalid_price(existing.mode.price_label))

        updated = build_line(
            product_id=existing.product_id,
            product_sku=existing.product_sku,
            product_name=existing.product_name,
            mode=existing.mode,
            pieces_per_carton=existing.pieces_per_carton,
            cartons=carton_count,
            pieces=piece_count,
            entered_price=entered_price,
            available_stock_at_add_time=existing.available_stock_at_add_time,
        )

        warnings: tuple[LineWarning, ...] = ()
        if updated.exceeds_stock_at_add_time:
            warnings = (LineWarning.EXCEEDS_STOCK_AT_ADD_TIME,)
        return LineResult.accepted(updated, warnings)

    @staticmethod
    def _reject(existing: LineItem, rejection: Rejection) -> LineResult:
        logger.info(
            "Edit of %s rejected: %s", existing.product_sku, rejection.reason.value
        )
        return LineResult.rejected(rejection)
