"""CLI commands that edit the product rows of an order.

Each command opens the editor, applies one change through the line-item
store and saves.  Rows are numbered from 1, as in ``opm order show``.
"""

from __future__ import annotations

import click

from opm.domain.exceptions import DomainException
from opm.domain.model.edits import parse_edit
from opm.infrastructure.cli._editing import (
    display_editor,
    load_editor,
    save_and_report,
    to_user_row,
)


def _parse_assignments(raw: tuple[str, ...]) -> list:
    """Parse ('qty=3', 'unit_price=9.50') into typed edits."""
    edits = []
    for pair in raw:
        if "=" not in pair:
            raise click.BadParameter(
                f"Invalid field format '{pair}'. Expected 'field=value'."
            )
        name, value = pair.split("=", 1)
        try:
            edits.append(parse_edit(name, value))
        except DomainException as exc:
            raise click.BadParameter(str(exc))
    return edits


@click.command("add")
@click.option("--order", "order_id", required=True, help="Order ID.")
@click.option("--product", "product_id", required=True, help="Product ID for the new rows.")
@click.option("--count", default=1, show_default=True, type=click.IntRange(min=1),
              help="Number of rows to add.")
@click.argument("assignments", nargs=-1)
def items_add(order_id: str, product_id: str, count: int, assignments: tuple[str, ...]) -> None:
    """Add COUNT rows of a product, e.g. ``qty=2 unit_price=10``."""
    edits = _parse_assignments(assignments)
    editor = load_editor(order_id)
    store = editor.store

    store.set_quantity_to_add(count)
    try:
        for item in store.add_many():
            index = store.details.items.index(item)
            store.select_product(product_id, index)
            if store.product_error is not None:
                raise store.product_error
            if edits:
                store.edit(index, *edits)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    save_and_report(editor)
    click.echo(f"{count} product row(s) added to order {order_id}.")


@click.command("set")
@click.option("--order", "order_id", required=True, help="Order ID.")
@click.option("--row", required=True, type=int, help="Row number (from 1).")
@click.option("--product", "product_id", default=None, help="Select a different product.")
@click.option("--clear-product", is_flag=True, default=False, help="Remove the product.")
@click.argument("assignments", nargs=-1)
def items_set(
    order_id: str,
    row: int,
    product_id: str | None,
    clear_product: bool,
    assignments: tuple[str, ...],
) -> None:
    """Change fields of a row, e.g. ``qty=3 handling_price=2.50``."""
    if product_id and clear_product:
        raise click.UsageError("--product and --clear-product are mutually exclusive")
    edits = _parse_assignments(assignments)
    if not edits and not product_id and not clear_product:
        raise click.UsageError("Nothing to change.")

    editor = load_editor(order_id)
    index = to_user_row(row, editor)
    store = editor.store

    if product_id or clear_product:
        store.select_product(product_id, index)
        if store.product_error is not None:
            raise click.ClickException(str(store.product_error))
    if edits:
        store.edit(index, *edits)

    save_and_report(editor)
    click.echo(f"Row {row} of order {order_id} updated.")


@click.command("delete")
@click.option("--order", "order_id", required=True, help="Order ID.")
@click.option("--row", required=True, type=int, help="Row number (from 1).")
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
def items_delete(order_id: str, row: int, yes: bool) -> None:
    """Delete a row (saved rows ask for confirmation)."""
    editor = load_editor(order_id)
    index = to_user_row(row, editor)
    store = editor.store

    store.delete(index)
    if store.details.items[index].is_deleting:
        confirmed = yes or click.confirm(
            f"Delete row {row} ({store.details.items[index].unique_id})?", default=False
        )
        store.resolve_delete(index, confirmed)
        if not confirmed:
            editor.cancel()
            click.echo("Deletion cancelled.")
            return

    save_and_report(editor)
    click.echo(f"Row {row} deleted from order {order_id}.")
    display_editor(editor)
