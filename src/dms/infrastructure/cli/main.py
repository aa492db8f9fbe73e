import logging

import click

from dms.domain.exceptions import DomainException
from dms.infrastructure.bootstrap import Settings
from dms.infrastructure.cli.line_commands import lines_build
from dms.infrastructure.cli.product_commands import product_list
from dms.infrastructure.cli.stock_commands import stock_show


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log engine decisions.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """DMS: distribution line entry"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if ctx.obj is None:
        try:
            ctx.obj = Settings.from_env()
        except DomainException as exc:
            raise click.ClickException(str(exc))


@cli.group()
def lines() -> None:
    """Enter order and purchase lines."""


@cli.group()
def product() -> None:
    """Browse products."""


@cli.group()
def stock() -> None:
    """Look up stock."""


# Register subcommands
lines.add_command(lines_build)
product.add_command(product_list)
stock.add_command(stock_show)
