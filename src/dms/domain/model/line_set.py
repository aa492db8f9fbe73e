"""OrderLineSet: the ordered lines of one order or purchase.

Invariant: no two lines share a ``product_id``.  A second line for the
same product is rejected, never merged into the first.

Totals are recomputed from the current lines on every read so they can
never drift from what the set actually contains.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from dms.domain.exceptions import ValidationError
from dms.domain.model.line_item import LineItem
from dms.domain.model.rejection import Rejection
from dms.domain.model.value_objects import Money


@dataclass(frozen=True)
class LineSetTotals:
    item_count: int
    total_pieces: int
    subtotal: Money

    @property
    def grand_total(self) -> Money:
        # Discount and tax belong to order submission, not line entry.
        return self.subtotal


class OrderLineSet:

    def __init__(self, lines: list[LineItem] | None = None) -> None:
        self._lines: list[LineItem] = []
        for line in lines or []:
            rejection = self.append(line)
            if rejection is not None:
                raise ValidationError(rejection.message)

    # --- Queries --------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(list(self._lines))

    def __getitem__(self, index: int) -> LineItem:
        return self._lines[self._check_index(index)]

    @property
    def lines(self) -> list[LineItem]:
        return list(self._lines)

    def contains(self, product_id: str) -> bool:
        return self.index_of(product_id) is not None

    def index_of(self, product_id: str) -> int | None:
        for i, line in enumerate(self._lines):
            if line.product_id == product_id:
                return i
        return None

    def totals(self) -> LineSetTotals:
        subtotal = Money.zero()
        total_pieces = 0
        for line in self._lines:
            subtotal = subtotal + line.line_total
            total_pieces += line.total_pieces
        return LineSetTotals(
            item_count=len(self._lines),
            total_pieces=total_pieces,
            subtotal=subtotal,
        )

    # --- Mutations ------------------------------------------------------------

    def append(self, line: LineItem) -> Rejection | None:
        """Add a line at the end; returns a rejection for a duplicate product."""
        if self.contains(line.product_id):
            return Rejection.duplicate_product(line.product_name)
        self._lines.append(line)
        return None

    def remove(self, index: int) -> LineItem:
        """Remove and return the line at *index*.  No confirmation here."""
        return self._lines.pop(self._check_index(index))

    def replace(self, index: int, updated: LineItem) -> LineItem:
        """Swap in an edited line, returning the one it replaced.

        Product and carton size are fixed for the life of a line.
        """
        current = self._lines[self._check_index(index)]
        if updated.product_id != current.product_id:
            raise ValidationError(
                f"Cannot replace line for {current.product_name} "
                f"with a line for product '{updated.product_id}'"
            )
        if updated.pieces_per_carton != current.pieces_per_carton:
            raise ValidationError(
                f"Pieces per carton of {current.product_name} cannot change "
                f"({current.pieces_per_carton} -> {updated.pieces_per_carton})"
            )
        self._lines[index] = updated
        return current

    # --- Internal helpers -----------------------------------------------------

    def _check_index(self, index: int) -> int:
        if not isinstance(index, int) or not 0 <= index < len(self._lines):
            raise ValidationError(f"No line at position {index}")
        return index
