import logging

import click

from opm.infrastructure.cli.item_commands import items_add, items_delete, items_set
from opm.infrastructure.cli.order_commands import order_show
from opm.infrastructure.cli.product_commands import product_create, product_list


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """OPM: Order Product Manager"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def order() -> None:
    """Inspect orders."""


@cli.group()
def items() -> None:
    """Edit the product rows of an order."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_show)
items.add_command(items_add)
items.add_command(items_delete)
items.add_command(items_set)
product.add_command(product_create)
product.add_command(product_list)
