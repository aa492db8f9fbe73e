"""CLI commands for sales order and purchase line entry."""

from __future__ import annotations

import asyncio
import json

import click

from dms.application.build_lines import BuildLinesHandler
from dms.application.dto import LineItemSpec
from dms.domain.exceptions import DomainException
from dms.domain.model.line_item import LineMode
from dms.infrastructure.bootstrap import Settings, product_repository, stock_oracle


def _parse_items(raw_items: tuple[str, ...]) -> list[LineItemSpec]:
    """Parse 'OIL-1L:2:5:350' entries into LineItemSpec list."""
    specs: list[LineItemSpec] = []
    for raw in raw_items:
        parts = raw.strip().rsplit(":", 3)
        if len(parts) != 4 or not parts[0]:
            raise click.BadParameter(
                f"Invalid item format '{raw}'. Expected 'SKU:Cartons:Pieces:Price'."
            )
        sku, cartons, pieces, price = (part.strip() for part in parts)
        specs.append(LineItemSpec(sku=sku, cartons=cartons, pieces=pieces, price=price))
    return specs


@click.command("build")
@click.option(
    "--mode",
    type=click.Choice(["sale", "purchase"], case_sensitive=False),
    default="sale",
    show_default=True,
    help="Sale lines are priced per piece, purchase lines per carton.",
)
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Line as 'SKU:Cartons:Pieces:Price' (repeatable).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the submission payload.")
@click.pass_obj
def lines_build(settings: Settings, mode: str, items: tuple[str, ...], as_json: bool) -> None:
    """Enter lines for one order or purchase and show the totals."""
    specs = _parse_items(items)
    line_mode = LineMode(mode.upper())

    handler = BuildLinesHandler(
        product_repo=product_repository(settings),
        oracle=stock_oracle(settings),
    )

    try:
        session, outcomes = asyncio.run(handler.handle(line_mode, specs))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for outcome in outcomes:
        if not outcome.result.ok:
            click.echo(f"Rejected {outcome.spec.sku}: {outcome.result.rejection.message}", err=True)
        for warning in outcome.result.warnings:
            click.echo(f"Warning {outcome.spec.sku}: {warning.value}", err=True)

    if as_json:
        click.echo(json.dumps(session.payload().to_dict(), indent=2))
        return

    price_header = "Price/Pc" if line_mode is LineMode.SALE else "Price/Ctn"
    click.echo(
        f"  {'SKU':<12} {'Ctn':>5} {'Pcs':>5} {'Total Pcs':>10} {price_header:>14} {'Total':>16}"
    )
    click.echo(f"  {'-'*67}")
    for line in session.line_dtos():
        click.echo(
            f"  {line.product_sku:<12} {line.cartons:>5} {line.pieces:>5} "
            f"{line.total_pieces:>10} {line.price:>14} {line.line_total:>16}"
        )
    click.echo(f"  {'-'*67}")
    totals = session.totals()
    click.echo(f"  {'Items':<12} {totals.item_count:>5}")
    click.echo(f"  {'Total pieces':<12} {totals.total_pieces:>22}")
    click.echo(f"  {'Subtotal':<35} {totals.subtotal:>32}")
    click.echo(f"  {'Grand Total':<35} {totals.grand_total:>32}")
