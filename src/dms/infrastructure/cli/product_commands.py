"""CLI commands for browsing the product catalog."""

from __future__ import annotations

import click

from dms.domain.exceptions import DomainException
from dms.domain.service.unit_converter import describe_stock
from dms.infrastructure.bootstrap import Settings, product_repository


@click.command("list")
@click.pass_obj
def product_list(settings: Settings) -> None:
    """List all products in the catalog."""
    repo = product_repository(settings)
    try:
        products = repo.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<12} {'Name':<24} {'Pcs/Ctn':>8} {'Stock':>8}  Cartons")
    click.echo("-" * 70)
    for p in products:
        click.echo(
            f"{p.sku:<12} {p.name:<24} {p.pieces_per_carton:>8} "
            f"{p.current_stock_pieces:>8}  {describe_stock(p.current_stock_pieces, p.pieces_per_carton)}"
        )
