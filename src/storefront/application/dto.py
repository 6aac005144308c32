"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world. Mapping from the domain
lives here too, so every handler renders an order the same way.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from storefront.domain.model.cart import CartItem
from storefront.domain.model.order import Order, OrderItem
from storefront.domain.model.product import Product

_TIMESTAMP = "%Y-%m-%d %H:%M UTC"


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line (product, quantity, caller-quoted price)."""

    product_id: int
    quantity: int
    price: str


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    description: str
    price: str  # formatted, e.g. "$15.00"
    category: str
    image_url: str
    stock: int
    is_active: bool


@dataclass(frozen=True)
class CartItemDTO:
    product_id: int
    product_name: str
    quantity: int
    price: str
    line_total: str
    image_url: str


@dataclass(frozen=True)
class CartDTO:
    items: list[CartItemDTO]
    total: str
    item_count: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: int
    product_name: str
    quantity: int
    price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    user_id: int
    status: str
    payment_status: str
    items: list[OrderItemDTO]
    total_amount: str
    shipping_address: str
    billing_address: str
    payment_method: str
    created_at: str
    updated_at: str


@dataclass(frozen=True)
class PaginationDTO:
    page: int
    limit: int
    total: int
    pages: int

    @staticmethod
    def of(page: int, limit: int, total: int) -> PaginationDTO:
        return PaginationDTO(page=page, limit=limit, total=total, pages=math.ceil(total / limit))


@dataclass(frozen=True)
class OrderPageDTO:
    orders: list[OrderDTO]
    pagination: PaginationDTO


@dataclass(frozen=True)
class ProductPageDTO:
    products: list[ProductDTO]
    pagination: PaginationDTO


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        description=product.description,
        price=str(product.price),
        category=product.category,
        image_url=product.image_url,
        stock=product.stock,
        is_active=product.is_active,
    )


def cart_item_to_dto(item: CartItem) -> CartItemDTO:
    return CartItemDTO(
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity.value,
        price=str(item.price),
        line_total=str(item.line_total),
        image_url=item.image_url,
    )


def _order_item_to_dto(item: OrderItem) -> OrderItemDTO:
    return OrderItemDTO(
        product_id=item.product_id,
        product_name=item.product_name,
        quantity=item.quantity.value,
        price=str(item.price),
        line_total=str(item.line_total),
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        status=order.status.value,
        payment_status=order.payment_status.value,
        items=[_order_item_to_dto(item) for item in order.items],
        total_amount=str(order.total_amount),
        shipping_address=order.shipping_address,
        billing_address=order.billing_address,
        payment_method=order.payment_method.value,
        created_at=order.created_at.strftime(_TIMESTAMP),
        updated_at=order.updated_at.strftime(_TIMESTAMP),
    )
