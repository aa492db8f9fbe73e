"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Settings come from the environment (optionally a ``.env`` file):

- ``DMS_DATA_DIR``     directory holding ``products.json``
- ``DMS_API_URL``      REST backend base URL; enables the HTTP stock oracle
- ``DMS_API_TOKEN``    bearer token for the backend
- ``DMS_API_TIMEOUT``  request timeout in seconds (default 15)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from dms.domain.exceptions import ValidationError
from dms.domain.repository.stock_oracle import StockOracle
from dms.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from dms.infrastructure.persistence.json_stock_oracle import JsonStockOracle
from dms.infrastructure.remote.http_stock_oracle import HttpStockOracle

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    api_url: str | None = None
    api_token: str | None = None
    api_timeout: float = 15.0

    @property
    def catalog_path(self) -> Path:
        return self.data_dir / "products.json"

    @staticmethod
    def from_env() -> Settings:
        load_dotenv()
        raw_timeout = os.environ.get("DMS_API_TIMEOUT", "15")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValidationError(f"DMS_API_TIMEOUT must be a number, got {raw_timeout!r}")
        data_dir = os.environ.get("DMS_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir) if data_dir else _DEFAULT_DATA_DIR,
            api_url=os.environ.get("DMS_API_URL") or None,
            api_token=os.environ.get("DMS_API_TOKEN") or None,
            api_timeout=timeout,
        )


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.catalog_path)


def stock_oracle(settings: Settings) -> StockOracle:
    if settings.api_url:
        return HttpStockOracle.create(
            settings.api_url, settings.api_token, settings.api_timeout
        )
    return JsonStockOracle(settings.catalog_path)
