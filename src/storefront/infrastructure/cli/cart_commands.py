"""CLI commands for the shopping cart."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.remove_from_cart import ClearCartHandler, RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.context import CliContext


@click.command("show")
@click.pass_obj
def cart_show(obj: CliContext) -> None:
    """Show the items in your cart."""
    try:
        dto = ShowCartHandler(obj.uow()).handle(obj.principal().user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dto.items:
        click.echo("Your cart is empty.")
        return

    click.echo(f"  {'ID':<6} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*54}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<6} {item.product_name:<20} {item.quantity:>5} "
            f"{item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Cart Total':<27} {dto.total:>27}")
    click.echo(f"  {dto.item_count} item(s)")


@click.command("add")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", type=int, default=1, show_default=True)
@click.pass_obj
def cart_add(obj: CliContext, product_id: int, quantity: int) -> None:
    """Add a product to your cart (merges with an existing line)."""
    try:
        item = AddToCartHandler(obj.uow()).handle(obj.principal().user_id, product_id, quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"'{item.product_name}' x{item.quantity} in cart ({item.line_total})")


@click.command("update")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.option("--quantity", required=True, type=click.IntRange(min=0), help="0 removes the line.")
@click.pass_obj
def cart_update(obj: CliContext, product_id: int, quantity: int) -> None:
    """Set the quantity of a cart line."""
    try:
        item = UpdateCartItemHandler(obj.uow()).handle(
            obj.principal().user_id, product_id, quantity
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if item is None:
        if quantity == 0:
            click.echo(f"Product #{product_id} removed from cart.")
            return
        raise click.ClickException("Cart item not found")
    click.echo(f"'{item.product_name}' x{item.quantity} in cart ({item.line_total})")


@click.command("remove")
@click.option("--product", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def cart_remove(obj: CliContext, product_id: int) -> None:
    """Remove a product from your cart."""
    try:
        removed = RemoveFromCartHandler(obj.uow()).handle(obj.principal().user_id, product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not removed:
        raise click.ClickException("Cart item not found")
    click.echo(f"Product #{product_id} removed from cart.")


@click.command("clear")
@click.pass_obj
def cart_clear(obj: CliContext) -> None:
    """Remove everything from your cart."""
    try:
        ClearCartHandler(obj.uow()).handle(obj.principal().user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Cart cleared.")
