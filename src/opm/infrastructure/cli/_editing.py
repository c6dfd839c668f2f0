"""Helpers shared by the commands that open an order editor."""

from __future__ import annotations

import click

from opm.application.dto import OrderProductsDTO
from opm.application.order_editor import EditorState, OrderEditor
from opm.application.show_order_products import ShowOrderProductsHandler, open_editor
from opm.domain.exceptions import DomainException
from opm.infrastructure.bootstrap import order_repository, product_repository
from opm.infrastructure.cli.console import ConsoleSignals, EchoNotifier


def load_editor(order_id: str) -> OrderEditor:
    try:
        return open_editor(
            order_id,
            order_repository(),
            product_repository(),
            EchoNotifier(),
            ConsoleSignals(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))


def to_user_row(row: int, editor: OrderEditor) -> int:
    """Convert a 1-based row number into a store index."""
    count = len(editor.details.items)
    if not 1 <= row <= count:
        raise click.BadParameter(
            f"Row {row} does not exist (order has {count} product(s)).",
            param_hint="--row",
        )
    return row - 1


def save_and_report(editor: OrderEditor) -> None:
    """Run validate-then-save and turn a rejected save into a non-zero exit."""
    try:
        sent = editor.save()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not sent:
        for row, item in enumerate(editor.details.items, start=1):
            if not item.is_valid:
                for issue in (item.error_message or "").split("\n"):
                    click.echo(f"  Row {row}: {issue}", err=True)
        raise click.ClickException("Products were not saved.")

    if editor.state != EditorState.SAVED:
        raise click.ClickException("Products were not saved.")


def display_products(dto: OrderProductsDTO) -> None:
    """Shared formatting for the product grid of an order."""
    click.echo(dto.title)
    if dto.account_name:
        click.echo(f"Account: {dto.account_name}")
    click.echo()

    if not dto.items:
        click.echo("  No products on this order.")
    else:
        click.echo(
            f"  {'#':>3} {'Product':<24} {'Qty':>5} {'Price':>10} {'Handling':>10} {'Total':>10}  Status"
        )
        click.echo(f"  {'-'*80}")
        for item in dto.items:
            click.echo(
                f"  {item.row:>3} {item.product:<24} {item.qty:>5} {item.unit_price:>10} "
                f"{item.handling_price:>10} {item.total_price:>10}  {item.status}"
            )
        click.echo(f"  {'-'*80}")

    click.echo(f"  {'Subtotal':<20} {dto.subtotal:>12}")
    click.echo(f"  {'Taxes':<20} {dto.taxes:>12}")
    click.echo(f"  {'Total':<20} {dto.total:>12}")


def display_editor(editor: OrderEditor) -> None:
    display_products(ShowOrderProductsHandler.to_dto(editor))
