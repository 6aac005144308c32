import click

from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import start
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.context import CliContext
from storefront.infrastructure.cli.db_commands import db_drop, db_init
from storefront.infrastructure.cli.order_commands import (
    order_cancel,
    order_checkout,
    order_create,
    order_delete,
    order_list,
    order_show,
    order_update,
)
from storefront.infrastructure.cli.product_commands import (
    product_add,
    product_categories,
    product_delete,
    product_list,
    product_show,
    product_update,
)
from storefront.infrastructure.config import Settings


@click.group()
@click.option("--user-id", type=click.IntRange(min=1), default=None, help="Act as this user.")
@click.option("--admin", is_flag=True, default=False, help="Act with admin rights.")
@click.pass_context
def cli(ctx: click.Context, user_id: int | None, admin: bool) -> None:
    """Storefront: catalog, cart and orders."""
    try:
        settings = Settings.from_env()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    database = start(settings)
    ctx.call_on_close(database.dispose)
    ctx.obj = CliContext(database=database, user_id=user_id, is_admin=admin)


@cli.group()
def db() -> None:
    """Manage the database schema."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def cart() -> None:
    """Manage your shopping cart."""


@cli.group()
def order() -> None:
    """Manage orders."""


# Register subcommands
db.add_command(db_init)
db.add_command(db_drop)
product.add_command(product_add)
product.add_command(product_categories)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_show)
product.add_command(product_update)
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
order.add_command(order_cancel)
order.add_command(order_checkout)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_update)
