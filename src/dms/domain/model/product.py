"""Product snapshot as seen by line entry.

Products are owned by the catalog; line entry only ever reads a copy.
The one number that matters here is how many loose pieces make a carton.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A catalog product, read-only to this package.

    ``current_stock_pieces`` is whatever the catalog reported when the
    product list was loaded; the authoritative figure for validation comes
    from a fresh stock snapshot.
    """

    id: str
    sku: str
    name: str
    pieces_per_carton: int = 1
    current_stock_pieces: int = 0
