"""CLI commands for the product catalog."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

import click

from opm.domain.exceptions import DomainException
from opm.domain.model.product import ProductDetails
from opm.infrastructure.bootstrap import product_repository
from opm.infrastructure.cli._editing import load_editor, save_and_report, to_user_row


def _dimension(value: str | None, name: str) -> Decimal | None:
    if value is None:
        return None
    try:
        number = Decimal(value)
    except InvalidOperation:
        number = None
    if number is None or not number.is_finite():
        raise click.BadParameter(f"Invalid {name} '{value}'.", param_hint=f"--{name}")
    return number


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<12} {'Name':<24} {'Code':<10} {'Category':<14} Active")
    click.echo("-" * 68)
    for p in products:
        click.echo(
            f"{p.id:<12} {p.name:<24} {p.product_code or '':<10} "
            f"{p.category or '':<14} {'yes' if p.is_active else 'no'}"
        )


@click.command("create")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--code", default=None, help="Product code.")
@click.option("--sku", default=None, help="Stock keeping unit.")
@click.option("--category", default=None, help="Category.")
@click.option("--description", default=None, help="Description.")
@click.option("--finish", default=None, help="Finish.")
@click.option("--depth", default=None, help="Depth.")
@click.option("--width", default=None, help="Width.")
@click.option("--height", default=None, help="Height.")
@click.option("--order", "order_id", default=None, help="Also select it into this order...")
@click.option("--row", type=int, default=None, help="...at this row (from 1).")
def product_create(
    product_id: str,
    name: str,
    code: str | None,
    sku: str | None,
    category: str | None,
    description: str | None,
    finish: str | None,
    depth: str | None,
    width: str | None,
    height: str | None,
    order_id: str | None,
    row: int | None,
) -> None:
    """Create a product, optionally selecting it into an order row."""
    if (order_id is None) != (row is None):
        raise click.UsageError("--order and --row must be given together")

    editor = None
    if order_id is not None:
        # the row must exist before the product panel can target it
        editor = load_editor(order_id)
        editor.store.open_new_product_panel(to_user_row(row, editor))

    product = ProductDetails(
        id=product_id,
        name=name,
        product_code=code,
        product_sku=sku,
        description=description,
        category=category,
        depth=_dimension(depth, "depth"),
        width=_dimension(width, "width"),
        height=_dimension(height, "height"),
        finish=finish,
    )
    try:
        product_repository().create_product(product)
    except DomainException as exc:
        if editor is not None:
            editor.store.close_new_product_panel()
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' created.")

    if editor is not None:
        editor.store.create_product_succeeded(product.id)
        if editor.store.product_error is not None:
            raise click.ClickException(str(editor.store.product_error))
        save_and_report(editor)
        click.echo(f"Row {row} of order {order_id} now uses {product.id}.")
