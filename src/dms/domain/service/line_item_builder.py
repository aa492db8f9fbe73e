"""Domain service: turn raw add-row input into a validated LineItem.

This is the single home of the quantity/price/stock rules shared by the
sales order, order edit and purchase screens.  Those screens only collect
input and render the returned result.

Validation runs in a fixed order and stops at the first failure:

  1. a product is selected
  2. the quantity converts to at least one piece
  3. the price is a positive number
  4. the product is not already in the line set
  5. (sales only) the quantity fits the stock snapshot, when there is one
"""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation

from dms.domain.model.line_item import LineItem, LineMode
from dms.domain.model.line_set import OrderLineSet
from dms.domain.model.product import Product
from dms.domain.model.rejection import LineResult, LineWarning, Rejection
from dms.domain.model.stock import StockReading, StockStatus
from dms.domain.model.value_objects import Money
from dms.domain.service import unit_converter

logger = logging.getLogger(__name__)


def parse_price(raw: object) -> Money | None:
    """Coerce a price field to Money; None when it is not a positive number."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        amount = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return None
    if not amount.is_finite() or amount <= 0:
        return None
    return Money(amount)


def build_line(
    *,
    product_id: str,
    product_sku: str,
    product_name: str,
    mode: LineMode,
    pieces_per_carton: int,
    cartons: int,
    pieces: int,
    entered_price: Money,
    available_stock_at_add_time: int | None,
) -> LineItem:
    """Price a line whose inputs are already validated.

    Sale prices are per piece.  Purchase prices are per carton and are
    normalized to per piece; the purchase total is carton-priced cartons
    plus piece-priced loose pieces, which equals ``total_pieces × price per
    piece`` once rounded to cents.
    """
    total_pieces = cartons * pieces_per_carton + pieces
    if mode is LineMode.PURCHASE:
        price_per_carton: Money | None = entered_price
        unit_price = unit_converter.price_per_piece_from_per_carton(
            entered_price, pieces_per_carton
        )
        line_total = entered_price * cartons + unit_price * pieces
    else:
        price_per_carton = None
        unit_price = entered_price
        line_total = unit_price * total_pieces

    return LineItem(
        product_id=product_id,
        product_sku=product_sku,
        product_name=product_name,
        mode=mode,
        pieces_per_carton=pieces_per_carton,
        cartons=cartons,
        pieces=pieces,
        total_pieces=total_pieces,
        unit_price=unit_price,
        line_total=line_total.rounded(),
        price_per_carton=price_per_carton,
        available_stock_at_add_time=available_stock_at_add_time,
    )


def stock_warnings(stock: StockReading | None) -> tuple[LineWarning, ...]:
    if stock is None or stock.status in (StockStatus.PENDING, StockStatus.UNKNOWN):
        return (LineWarning.STOCK_UNKNOWN,)
    if stock.status == StockStatus.FAILED:
        return (LineWarning.STOCK_FETCH_FAILED,)
    return ()


class LineItemBuilder:
    """Validates add-row input against a target line set.

    The builder never appends; the caller hands an accepted line to
    ``OrderLineSet.append`` which re-checks the duplicate rule.
    """

    def __init__(self, line_set: OrderLineSet) -> None:
        self._line_set = line_set

    def add(
        self,
        product: Product | None,
        cartons: object,
        pieces: object,
        price: object,
        mode: LineMode,
        stock: StockReading | None = None,
    ) -> LineResult:
        if product is None:
            return self._reject(Rejection.no_product_selected())

        pieces_per_carton = unit_converter.normalize_pieces_per_carton(
            product.pieces_per_carton
        )
        carton_count = unit_converter.count_from_input(cartons)
        piece_count = unit_converter.count_from_input(pieces)
        total_pieces = unit_converter.to_total_pieces(
            carton_count, piece_count, pieces_per_carton
        )
        if total_pieces <= 0:
            return self._reject(Rejection.zero_quantity())

        entered_price = parse_price(price)
        if entered_price is None:
            return self._reject(Rejection.invalid_price(mode.price_label))

        if self._line_set.contains(product.id):
            return self._reject(Rejection.duplicate_product(product.name))

        # A reading for some other product is as good as no reading.
        if stock is not None and stock.product_id != product.id:
            stock = None

        available = stock.available_pieces if stock is not None else None
        if mode is LineMode.SALE and available is not None and total_pieces > available:
            return self._reject(Rejection.insufficient_stock(total_pieces, available))

        warnings = stock_warnings(stock)
        if warnings:
            logger.warning(
                "Stock for %s not verified (%s); accepting %d pieces",
                product.sku,
                ", ".join(w.value for w in warnings),
                total_pieces,
            )

        line = build_line(
            product_id=product.id,
            product_sku=product.sku,
            product_name=product.name,
            mode=mode,
            pieces_per_carton=pieces_per_carton,
            cartons=carton_count,
            pieces=piece_count,
            entered_price=entered_price,
            available_stock_at_add_time=available,
        )
        return LineResult.accepted(line, warnings)

    @staticmethod
    def _reject(rejection: Rejection) -> LineResult:
        logger.info("Line rejected: %s (%s)", rejection.reason.value, rejection.message)
        return LineResult.rejected(rejection)
