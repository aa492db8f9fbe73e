"""Carton / piece conversions.

Pure functions, no I/O.  Stock is always counted in pieces; cartons exist
only at the point of entry and display.  Raw user input is clamped here so
a negative or non-numeric field can never leak a negative total downstream.
"""

from __future__ import annotations

from decimal import ROUND_FLOOR, Decimal, InvalidOperation

from dms.domain.model.value_objects import Money


def normalize_pieces_per_carton(pieces_per_carton: object) -> int:
    """Return a usable carton size; zero, missing or garbage becomes 1."""
    size = count_from_input(pieces_per_carton)
    return size if size >= 1 else 1


def count_from_input(raw: object) -> int:
    """Floor a raw quantity field to a non-negative int (bad input -> 0)."""
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        value = Decimal(str(raw).strip())
    except (InvalidOperation, ValueError):
        return 0
    if not value.is_finite() or value <= 0:
        return 0
    return int(value.to_integral_value(rounding=ROUND_FLOOR))


def to_total_pieces(cartons: object, pieces: object, pieces_per_carton: object) -> int:
    size = normalize_pieces_per_carton(pieces_per_carton)
    return count_from_input(cartons) * size + count_from_input(pieces)


def to_cartons_and_pieces(total_pieces: int, pieces_per_carton: object) -> tuple[int, int]:
    """Split a piece count into whole cartons plus loose pieces.

    For display only.  The result is never written back into an editable
    quantity field.
    """
    size = normalize_pieces_per_carton(pieces_per_carton)
    total = max(0, int(total_pieces))
    return divmod(total, size)


def price_per_piece_from_per_carton(price_per_carton: Money, pieces_per_carton: object) -> Money:
    """Per-piece price at full Decimal precision (no intermediate rounding)."""
    return price_per_carton.split(normalize_pieces_per_carton(pieces_per_carton))


def describe_stock(total_pieces: int, pieces_per_carton: object) -> str:
    """Human hint such as ``"≈ 3 cartons + 5 pcs"`` for the stock banner."""
    size = normalize_pieces_per_carton(pieces_per_carton)
    if size == 1:
        return f"{max(0, int(total_pieces))} pcs"
    cartons, pieces = to_cartons_and_pieces(total_pieces, size)
    label = "carton" if cartons == 1 else "cartons"
    if pieces:
        return f"≈ {cartons} {label} + {pieces} pcs"
    return f"≈ {cartons} {label}"
