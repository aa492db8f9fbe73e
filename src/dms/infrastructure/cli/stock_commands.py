"""CLI commands for live stock lookups."""

from __future__ import annotations

import asyncio

import click

from dms.application.stock_tracker import StockTracker
from dms.domain.exceptions import DomainException
from dms.domain.model.product import Product
from dms.domain.model.stock import StockReading, StockStatus
from dms.domain.repository.stock_oracle import StockOracle
from dms.domain.service.unit_converter import describe_stock
from dms.infrastructure.bootstrap import Settings, product_repository, stock_oracle


async def _read_stock(oracle: StockOracle, product: Product) -> StockReading | None:
    try:
        return await StockTracker(oracle).select(product.id)
    finally:
        await oracle.aclose()


@click.command("show")
@click.option("--product", "sku", required=True, help="Product SKU.")
@click.pass_obj
def stock_show(settings: Settings, sku: str) -> None:
    """Show current stock, average cost and suggested price for a product."""
    try:
        product = product_repository(settings).get_by_sku(sku)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if product is None:
        raise click.ClickException(f"Product not found: '{sku}'")

    reading = asyncio.run(_read_stock(stock_oracle(settings), product))

    click.echo(f"{product.name} ({product.sku}), {product.pieces_per_carton} pcs/ctn")
    if reading is None or reading.status == StockStatus.UNKNOWN:
        click.echo("Stock: unknown")
        return
    if reading.status == StockStatus.FAILED:
        click.echo(f"Stock: unavailable ({reading.error})")
        return

    snapshot = reading.snapshot
    click.echo(
        f"Stock: {snapshot.current_stock_pieces} pcs "
        f"({describe_stock(snapshot.current_stock_pieces, product.pieces_per_carton)})"
    )
    click.echo(
        f"Average cost: {snapshot.average_cost_per_piece}/pc, "
        f"{snapshot.average_cost_per_carton(product.pieces_per_carton)}/carton"
    )
    if not snapshot.suggested_price_per_piece.is_zero:
        click.echo(f"Suggested sale price: {snapshot.suggested_price_per_piece}/pc")
