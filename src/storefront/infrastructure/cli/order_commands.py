"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from storefront.application.cancel_order import CancelOrderHandler
from storefront.application.create_order import CreateOrderHandler
from storefront.application.create_order_from_cart import CreateOrderFromCartHandler
from storefront.application.delete_order import DeleteOrderHandler
from storefront.application.dto import OrderDTO, OrderItemSpec, OrderPageDTO
from storefront.application.list_orders import ListOrdersHandler
from storefront.application.remove_from_cart import ClearCartHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_order import UpdateOrderHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.order import OrderStatus, PaymentMethod, PaymentStatus
from storefront.infrastructure.cli.context import CliContext

_PAYMENT_METHODS = click.Choice([m.value for m in PaymentMethod])


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse '7:2:10.00,9:1:5.00' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        entry = entry.strip()
        parts = entry.split(":")
        if len(parts) != 3:
            raise click.BadParameter(
                f"Invalid item format '{entry}'. Expected 'ProductId:Quantity:Price'."
            )
        pid_str, qty_str, price = (p.strip() for p in parts)
        try:
            product_id = int(pid_str)
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid product ID or quantity in '{entry}'."
            )
        specs.append(OrderItemSpec(product_id=product_id, quantity=qty, price=price))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_status})")
    click.echo(f"User:     #{dto.user_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(f"Ship to:  {dto.shipping_address}")
    click.echo(f"Bill to:  {dto.billing_address}")
    click.echo(f"Payment:  {dto.payment_method}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*47}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<20} {item.quantity:>5} {item.price:>10} {item.line_total:>10}"
        )
    click.echo(f"  {'-'*47}")
    click.echo(f"  {'Order Total':<27} {dto.total_amount:>20}")


def _display_page(result: OrderPageDTO) -> None:
    if not result.orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'User':<6} {'Status':<12} {'Payment':<10} {'Total':>10}  Created")
    click.echo("-" * 70)
    for o in result.orders:
        click.echo(
            f"{o.id:<6} {o.user_id:<6} {o.status:<12} {o.payment_status:<10} "
            f"{o.total_amount:>10}  {o.created_at}"
        )
    pg = result.pagination
    click.echo(f"Page {pg.page} of {pg.pages}  ({pg.total} orders)")


@click.command("create")
@click.option("--items", required=True, help="Items as 'ProductId:Qty:Price,...'.")
@click.option("--shipping", "shipping_address", required=True, help="Shipping address.")
@click.option("--billing", "billing_address", required=True, help="Billing address.")
@click.option("--payment-method", required=True, type=_PAYMENT_METHODS)
@click.pass_obj
def order_create(
    obj: CliContext,
    items: str,
    shipping_address: str,
    billing_address: str,
    payment_method: str,
) -> None:
    """Place an order for explicit items, then empty your cart."""
    specs = _parse_items(items)

    try:
        principal = obj.principal()
        dto = CreateOrderHandler(obj.uow()).handle(
            user_id=principal.user_id,
            item_specs=specs,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
        )
        ClearCartHandler(obj.uow()).handle(principal.user_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created  (status={dto.status})")
    _display_order(dto)


@click.command("checkout")
@click.option("--shipping", "shipping_address", required=True, help="Shipping address.")
@click.option("--billing", "billing_address", required=True, help="Billing address.")
@click.option("--payment-method", required=True, type=_PAYMENT_METHODS)
@click.pass_obj
def order_checkout(
    obj: CliContext,
    shipping_address: str,
    billing_address: str,
    payment_method: str,
) -> None:
    """Turn your cart into an order."""
    try:
        dto = CreateOrderFromCartHandler(obj.uow()).handle(
            user_id=obj.principal().user_id,
            shipping_address=shipping_address,
            billing_address=billing_address,
            payment_method=payment_method,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created from cart  (status={dto.status})")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
@click.pass_obj
def order_show(obj: CliContext, order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(obj.uow()).handle(obj.principal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=10, show_default=True)
@click.option("--all", "all_orders", is_flag=True, default=False, help="Every user's orders (admin).")
@click.pass_obj
def order_list(obj: CliContext, page: int, limit: int, all_orders: bool) -> None:
    """List your orders, newest first."""
    handler = ListOrdersHandler(obj.uow())

    try:
        principal = obj.principal()
        if all_orders:
            result = handler.all(principal, page=page, limit=limit)
        else:
            result = handler.for_user(principal, page=page, limit=limit)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_page(result)


@click.command("update")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to update.")
@click.option("--status", type=click.Choice([s.value for s in OrderStatus]), default=None)
@click.option(
    "--payment-status", type=click.Choice([s.value for s in PaymentStatus]), default=None
)
@click.option("--shipping", "shipping_address", default=None, help="New shipping address.")
@click.option("--billing", "billing_address", default=None, help="New billing address.")
@click.pass_obj
def order_update(obj: CliContext, order_id: int, **changes) -> None:
    """Update status, payment status or addresses of an order (admin)."""
    try:
        dto = UpdateOrderHandler(obj.uow()).handle(obj.principal(), order_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto is None:
        raise click.ClickException(f"Order #{order_id} not found")
    click.echo(f"Order #{order_id} updated.")
    _display_order(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.pass_obj
def order_cancel(obj: CliContext, order_id: int) -> None:
    """Cancel one of your pending orders."""
    try:
        CancelOrderHandler(obj.uow()).handle(obj.principal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")


@click.command("delete")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to delete.")
@click.pass_obj
def order_delete(obj: CliContext, order_id: int) -> None:
    """Delete an order and its items (admin)."""
    try:
        deleted = DeleteOrderHandler(obj.uow()).handle(obj.principal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not deleted:
        raise click.ClickException(f"Order #{order_id} not found")
    click.echo(f"Order #{order_id} deleted.")
