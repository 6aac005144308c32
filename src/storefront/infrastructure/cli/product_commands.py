"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.add_product import AddProductHandler
from storefront.application.dto import ProductDTO
from storefront.application.show_products import (
    ListCategoriesHandler,
    ListProductsHandler,
    ShowProductHandler,
)
from storefront.application.update_product import (
    DeleteProductHandler,
    UpdateProductHandler,
)
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.cli.context import CliContext


def _display_product(dto: ProductDTO) -> None:
    state = "active" if dto.is_active else "inactive"
    click.echo(f"Product #{dto.id} '{dto.name}'  ({state})")
    click.echo(f"Category: {dto.category}")
    click.echo(f"Price:    {dto.price}")
    click.echo(f"Stock:    {dto.stock}")
    click.echo(f"Image:    {dto.image_url}")
    if dto.description:
        click.echo()
        click.echo(dto.description)


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--description", default="", help="Product description.")
@click.option("--price", required=True, help="Price (e.g. 15.00).")
@click.option("--category", required=True, help="Category name.")
@click.option("--image-url", required=True, help="Product image URL.")
@click.option("--stock", type=int, default=0, show_default=True, help="Units in stock.")
@click.pass_obj
def product_add(
    obj: CliContext,
    name: str,
    description: str,
    price: str,
    category: str,
    image_url: str,
    stock: int,
) -> None:
    """Add a new product to the catalog (admin)."""
    handler = AddProductHandler(obj.uow())

    try:
        dto = handler.handle(
            obj.principal(),
            name=name,
            description=description,
            price=price,
            category=category,
            image_url=image_url,
            stock=stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price}")


@click.command("list")
@click.option("--page", type=int, default=1, show_default=True)
@click.option("--limit", type=int, default=10, show_default=True)
@click.option("--category", default=None, help="Only list this category.")
@click.pass_obj
def product_list(obj: CliContext, page: int, limit: int, category: str | None) -> None:
    """List active products in the catalog."""
    try:
        result = ListProductsHandler(obj.uow()).handle(page=page, limit=limit, category=category)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not result.products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<14} {'Price':>10} {'Stock':>6}")
    click.echo("-" * 64)
    for p in result.products:
        click.echo(f"{p.id:<6} {p.name:<24} {p.category:<14} {p.price:>10} {p.stock:>6}")
    pg = result.pagination
    click.echo(f"Page {pg.page} of {pg.pages}  ({pg.total} products)")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_show(obj: CliContext, product_id: int) -> None:
    """Show one product."""
    try:
        dto = ShowProductHandler(obj.uow()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("categories")
@click.pass_obj
def product_categories(obj: CliContext) -> None:
    """List the categories of active products."""
    categories = ListCategoriesHandler(obj.uow()).handle()
    if not categories:
        click.echo("No categories found.")
        return
    for category in categories:
        click.echo(category)


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None)
@click.option("--description", default=None)
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--category", default=None)
@click.option("--image-url", default=None)
@click.option("--stock", type=int, default=None)
@click.option("--active/--inactive", "is_active", default=None)
@click.pass_obj
def product_update(obj: CliContext, product_id: int, **changes) -> None:
    """Update fields of a product (admin)."""
    handler = UpdateProductHandler(obj.uow())

    try:
        dto = handler.handle(obj.principal(), product_id, changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if dto is None:
        raise click.ClickException(f"Product #{product_id} not found")
    click.echo(f"Product #{product_id} updated.")
    _display_product(dto)


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_delete(obj: CliContext, product_id: int) -> None:
    """Delete a product (admin)."""
    handler = DeleteProductHandler(obj.uow())

    try:
        deleted = handler.handle(obj.principal(), product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not deleted:
        raise click.ClickException(f"Product #{product_id} not found")
    click.echo(f"Product #{product_id} deleted.")
