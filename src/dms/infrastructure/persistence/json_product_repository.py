"""JSON-file-backed implementation of ProductRepository.

The catalog file is a list of product records in the same camelCase shape
the REST backend uses::

    [{"id": "p1", "sku": "OIL-1L", "name": "Cooking Oil 1L",
      "piecesPerCarton": 12, "currentStock": 40, "averageCost": "310",
      "suggestedRetailPrice": "350"}]
"""

from __future__ import annotations

import json
from pathlib import Path

from dms.domain.exceptions import EntityNotFoundError
from dms.domain.model.product import Product
from dms.domain.repository.product_repository import ProductRepository
from dms.domain.service.unit_converter import count_from_input, normalize_pieces_per_carton


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if str(raw["id"]) == product_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> Product | None:
        for raw in self._load_raw():
            if str(raw.get("sku", "")).upper() == sku.strip().upper():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=str(raw["id"]),
            sku=str(raw.get("sku", "")).upper(),
            name=raw["name"],
            pieces_per_carton=normalize_pieces_per_carton(raw.get("piecesPerCarton")),
            current_stock_pieces=count_from_input(raw.get("currentStock")),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            text = self._file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise EntityNotFoundError(f"Product catalog not found: {self._file_path}")
        return json.loads(text)
