"""CLI commands for an order's product screen."""

from __future__ import annotations

import click

from opm.application.show_order_products import ShowOrderProductsHandler
from opm.domain.exceptions import DomainException
from opm.infrastructure.bootstrap import order_repository, product_repository
from opm.infrastructure.cli._editing import display_products
from opm.infrastructure.cli.console import ConsoleSignals, EchoNotifier


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show the products of an order with subtotal, taxes and total."""
    handler = ShowOrderProductsHandler(
        order_repo=order_repository(),
        product_repo=product_repository(),
        notifier=EchoNotifier(),
        signals=ConsoleSignals(),
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_products(dto)
