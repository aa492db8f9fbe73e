"""Unit tests for editing committed lines."""

from dms.domain.model.line_item import LineMode
from dms.domain.model.line_set import OrderLineSet
from dms.domain.model.rejection import LineWarning, RejectionReason
from dms.domain.model.stock import StockReading
from dms.domain.model.value_objects import Money
from dms.domain.service.line_item_builder import LineItemBuilder
from dms.domain.service.line_item_editor import LineItemEditor
from tests.fakes import make_product, make_snapshot


def _committed(mode=LineMode.SALE, ppc=12, stock=20, cartons=0, pieces=10, price="35"):
    product = make_product(pieces_per_carton=ppc)
    reading = StockReading.loaded(make_snapshot("1", stock=stock))
    return LineItemBuilder(OrderLineSet()).add(product, cartons, pieces, price, mode, reading).line


class TestEditValidation:

    def test_zero_quantity_rejected(self):
        result = LineItemEditor().edit(_committed(), 0, "0", "35")
        assert result.rejection.reason == RejectionReason.ZERO_QUANTITY

    def test_invalid_price_rejected(self):
        result = LineItemEditor().edit(_committed(), 1, 0, "-1")
        assert result.rejection.reason == RejectionReason.INVALID_PRICE


class TestEditSale:

    def test_full_replacement(self):
        original = _committed()
        result = LineItemEditor().edit(original, 1, 2, "30")
        line = result.line
        assert (line.cartons, line.pieces, line.total_pieces) == (1, 2, 14)
        assert line.line_total == Money.of("420.00")
        assert line.product_id == original.product_id
        assert line.pieces_per_carton == original.pieces_per_carton

    def test_keeps_stock_captured_at_add_time(self):
        original = _committed(stock=20)
        result = LineItemEditor().edit(original, 0, 15, "35")
        assert result.ok
        assert result.line.available_stock_at_add_time == 20
        assert result.warnings == ()

    def test_exceeding_captured_stock_warns_but_is_accepted(self):
        original = _committed(stock=20)
        result = LineItemEditor().edit(original, 2, 0, "35")
        assert result.ok
        assert result.line.total_pieces == 24
        assert result.warnings == (LineWarning.EXCEEDS_STOCK_AT_ADD_TIME,)


class TestEditPurchase:

    def test_price_is_per_carton(self):
        original = _committed(mode=LineMode.PURCHASE, ppc=24, cartons=1, pieces=0, price="1200")
        result = LineItemEditor().edit(original, 3, 5, "960")
        line = result.line
        assert line.total_pieces == 77
        assert line.price_per_carton == Money.of("960")
        assert line.unit_price == Money.of("40")
        assert line.line_total == Money.of("3080.00")
        assert result.warnings == ()

    def test_edit_replaces_line_in_set(self):
        original = _committed(mode=LineMode.PURCHASE, ppc=24, cartons=1, pieces=0, price="1200")
        lines = OrderLineSet([original])
        result = LineItemEditor().edit(lines[0], 2, 0, "1200")
        lines.replace(0, result.line)
        assert lines.totals().subtotal == Money.of("2400.00")
