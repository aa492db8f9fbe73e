"""Unit tests for LineItemBuilder validation and pricing."""

import pytest

from dms.domain.model.line_item import LineMode
from dms.domain.model.line_set import OrderLineSet
from dms.domain.model.rejection import LineWarning, RejectionReason
from dms.domain.model.stock import StockReading
from dms.domain.model.value_objects import Money
from dms.domain.service.line_item_builder import LineItemBuilder, parse_price
from tests.fakes import make_product, make_snapshot


def _stock(product_id: str = "1", stock: int = 50) -> StockReading:
    return StockReading.loaded(make_snapshot(product_id, stock=stock))


def _sale(builder, product, cartons, pieces, price, stock):
    return builder.add(product, cartons, pieces, price, LineMode.SALE, stock)


class TestValidationOrder:

    def test_no_product(self):
        result = LineItemBuilder(OrderLineSet()).add(None, 1, 0, "10", LineMode.SALE, None)
        assert not result.ok
        assert result.rejection.reason == RejectionReason.NO_PRODUCT_SELECTED

    def test_zero_quantity_regardless_of_stock(self):
        product = make_product()
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 0, "10", _stock(stock=50))
        assert result.rejection.reason == RejectionReason.ZERO_QUANTITY

    def test_zero_quantity_checked_before_price(self):
        product = make_product()
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 0, "0", None)
        assert result.rejection.reason == RejectionReason.ZERO_QUANTITY

    @pytest.mark.parametrize("price", [0, "0", "-5", "abc", None, "", "NaN"])
    def test_invalid_price(self, price):
        product = make_product()
        result = _sale(LineItemBuilder(OrderLineSet()), product, 1, 0, price, _stock())
        assert result.rejection.reason == RejectionReason.INVALID_PRICE

    def test_duplicate_product(self):
        product = make_product()
        lines = OrderLineSet()
        first = _sale(LineItemBuilder(lines), product, 0, 5, "10", _stock())
        lines.append(first.line)

        second = _sale(LineItemBuilder(lines), product, 0, 1, "10", _stock())
        assert second.rejection.reason == RejectionReason.DUPLICATE_PRODUCT
        assert len(lines) == 1

    def test_duplicate_checked_before_stock(self):
        product = make_product()
        lines = OrderLineSet()
        lines.append(_sale(LineItemBuilder(lines), product, 0, 5, "10", _stock()).line)
        result = _sale(LineItemBuilder(lines), product, 0, 500, "10", _stock(stock=1))
        assert result.rejection.reason == RejectionReason.DUPLICATE_PRODUCT


class TestSaleStockCeiling:

    def test_one_over_stock_rejected(self):
        product = make_product(pieces_per_carton=12)
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 51, "10", _stock(stock=50))
        assert result.rejection.reason == RejectionReason.INSUFFICIENT_STOCK
        assert result.rejection.requested == 51
        assert result.rejection.available == 50

    def test_exactly_stock_accepted(self):
        product = make_product(pieces_per_carton=12)
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 50, "10", _stock(stock=50))
        assert result.ok
        assert result.line.total_pieces == 50

    def test_rejection_then_success(self):
        product = make_product(pieces_per_carton=12)
        builder = LineItemBuilder(OrderLineSet())

        rejected = _sale(builder, product, 1, 0, "35", _stock(stock=10))
        assert rejected.rejection.reason == RejectionReason.INSUFFICIENT_STOCK
        assert (rejected.rejection.requested, rejected.rejection.available) == (12, 10)

        accepted = _sale(builder, product, 0, 10, "35", _stock(stock=10))
        assert accepted.ok
        assert accepted.line.line_total == Money.of("350.00")

    def test_unknown_stock_skips_check_with_warning(self):
        product = make_product()
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 999, "10", StockReading.unknown("1"))
        assert result.ok
        assert result.warnings == (LineWarning.STOCK_UNKNOWN,)
        assert result.line.available_stock_at_add_time is None

    def test_failed_fetch_skips_check_with_warning(self):
        product = make_product()
        reading = StockReading.failed("1", "timeout")
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 999, "10", reading)
        assert result.ok
        assert result.warnings == (LineWarning.STOCK_FETCH_FAILED,)

    def test_pending_fetch_counts_as_unknown(self):
        product = make_product()
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 3, "10", StockReading.pending("1"))
        assert result.ok
        assert result.warnings == (LineWarning.STOCK_UNKNOWN,)

    def test_reading_for_another_product_is_ignored(self):
        product = make_product(product_id="1")
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 30, "10", _stock("2", stock=5))
        assert result.ok
        assert result.warnings == (LineWarning.STOCK_UNKNOWN,)

    def test_stock_recorded_on_line(self):
        product = make_product()
        result = _sale(LineItemBuilder(OrderLineSet()), product, 0, 5, "10", _stock(stock=50))
        assert result.line.available_stock_at_add_time == 50
        assert result.warnings == ()


class TestSalePricing:

    def test_total_is_pieces_times_price(self):
        product = make_product(pieces_per_carton=12)
        result = _sale(LineItemBuilder(OrderLineSet()), product, 2, 3, "10.25", _stock(stock=100))
        line = result.line
        assert line.total_pieces == 27
        assert line.unit_price == Money.of("10.25")
        assert line.price_per_carton is None
        assert line.line_total == Money.of("276.75")

    def test_raw_input_is_clamped(self):
        product = make_product(pieces_per_carton=12)
        result = _sale(LineItemBuilder(OrderLineSet()), product, "-2", "4.8", "10", _stock())
        assert (result.line.cartons, result.line.pieces, result.line.total_pieces) == (0, 4, 4)


class TestPurchase:

    def test_carton_purchase_scenario(self):
        product = make_product(pieces_per_carton=24)
        result = LineItemBuilder(OrderLineSet()).add(
            product, 3, 5, "1200", LineMode.PURCHASE, _stock(stock=0)
        )
        line = result.line
        assert line.total_pieces == 77
        assert line.unit_price == Money.of("50")
        assert line.price_per_carton == Money.of("1200")
        assert line.line_total == Money.of("3850.00")

    def test_no_stock_ceiling(self):
        product = make_product(pieces_per_carton=24)
        result = LineItemBuilder(OrderLineSet()).add(
            product, 10, 0, "1200", LineMode.PURCHASE, _stock(stock=0)
        )
        assert result.ok
        assert result.line.total_pieces == 240

    def test_uneven_carton_price_reconstructs_to_the_cent(self):
        product = make_product(pieces_per_carton=7)
        result = LineItemBuilder(OrderLineSet()).add(
            product, 3, 0, "100", LineMode.PURCHASE, _stock()
        )
        assert result.line.line_total == Money.of("300.00")
        assert (result.line.unit_price * 21).rounded() == Money.of("300.00")

    def test_failed_fetch_still_warns(self):
        product = make_product()
        result = LineItemBuilder(OrderLineSet()).add(
            product, 1, 0, "500", LineMode.PURCHASE, StockReading.failed("1", "boom")
        )
        assert result.ok
        assert result.warnings == (LineWarning.STOCK_FETCH_FAILED,)

    def test_invalid_price_label(self):
        product = make_product()
        result = LineItemBuilder(OrderLineSet()).add(
            product, 1, 0, "0", LineMode.PURCHASE, None
        )
        assert result.rejection.message == "Purchase price must be > 0"


class TestParsePrice:

    def test_parses_strings(self):
        assert parse_price(" 12.5 ") == Money.of("12.5")

    def test_rejects_booleans(self):
        assert parse_price(True) is None
