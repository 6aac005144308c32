"""Integration tests for the CreateOrder use case.

Uses in-memory fakes, no database.
"""

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    TransactionFailureError,
    ValidationError,
)
from storefront.domain.model.order import OrderItem
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeUnitOfWork, make_product

SHIPPING = "1 Main Street, Springfield"
BILLING = "2 Side Road, Shelbyville"


def _setup() -> tuple[CreateOrderHandler, FakeUnitOfWork]:
    uow = FakeUnitOfWork([
        make_product(7, "Widget", price="10.00", stock=10),
        make_product(9, "Gadget", price="5.00", stock=3),
    ])
    return CreateOrderHandler(uow), uow


def _place(handler: CreateOrderHandler, *specs: OrderItemSpec, user_id: int = 1):
    return handler.handle(
        user_id=user_id,
        item_specs=list(specs),
        shipping_address=SHIPPING,
        billing_address=BILLING,
        payment_method="paypal",
    )


class FailingOrderRepository(FakeOrderRepository):
    """Blows up on the second item insert, after the first one succeeded."""

    def add_item(self, order_id: int, item: OrderItem) -> OrderItem:
        if self.count_items() >= 1:
            raise TransactionFailureError("connection lost")
        return super().add_item(order_id, item)

    def count_items(self) -> int:
        return sum(len(o.items) for o in self._store.values())


class TestCreateOrderHappyPath:

    def test_creates_order_with_correct_total(self):
        handler, _ = _setup()
        dto = _place(handler, OrderItemSpec(7, 2, "10.00"), OrderItemSpec(9, 1, "5.00"))
        assert dto.total_amount == "$25.00"
        assert dto.status == "pending"
        assert dto.payment_status == "pending"
        assert dto.payment_method == "paypal"
        assert len(dto.items) == 2

    def test_assigns_order_id(self):
        handler, _ = _setup()
        assert _place(handler, OrderItemSpec(7, 1, "10.00")).id == 1

    def test_items_snapshot_product_name(self):
        handler, uow = _setup()
        dto = _place(handler, OrderItemSpec(7, 1, "10.00"))
        assert dto.items[0].product_name == "Widget"
        stored = uow.orders.get_by_id(dto.id)
        assert stored.items[0].image_url == "https://img.example.com/widget.png"

    def test_decrements_stock(self):
        handler, uow = _setup()
        _place(handler, OrderItemSpec(7, 4, "10.00"), OrderItemSpec(9, 3, "5.00"))
        assert uow.products.get_by_id(7).stock == 6
        assert uow.products.get_by_id(9).stock == 0

    def test_total_matches_sum_of_items(self):
        handler, uow = _setup()
        dto = _place(handler, OrderItemSpec(7, 3, "9.99"), OrderItemSpec(9, 2, "4.50"))
        order = uow.orders.get_by_id(dto.id)
        expected = Money.zero()
        for item in order.items:
            expected = expected + item.line_total
        assert order.total_amount == expected == Money.of("38.97")


class TestCreateOrderPricing:

    def test_uses_caller_supplied_price(self):
        handler, _ = _setup()
        dto = _place(handler, OrderItemSpec(7, 2, "8.00"))
        assert dto.items[0].price == "$8.00"
        assert dto.total_amount == "$16.00"

    def test_price_locked_after_catalog_change(self):
        handler, uow = _setup()
        dto = _place(handler, OrderItemSpec(7, 1, "10.00"))
        uow.products.get_by_id(7).apply_changes({"price": "99.99"})
        assert uow.orders.get_by_id(dto.id).total_amount == Money.of("10.00")


class TestCreateOrderAtomicity:

    def test_failure_after_first_item_leaves_nothing_behind(self):
        handler, uow = _setup()
        uow.orders = FailingOrderRepository()

        with pytest.raises(TransactionFailureError):
            _place(handler, OrderItemSpec(7, 2, "10.00"), OrderItemSpec(9, 1, "5.00"))

        assert uow.orders.count_all() == 0
        assert uow.orders.count_items() == 0
        assert uow.products.get_by_id(7).stock == 10
        assert uow.products.get_by_id(9).stock == 3
        assert uow.rollbacks == 1

    def test_insufficient_stock_rolls_back_earlier_lines(self):
        handler, uow = _setup()
        with pytest.raises(InsufficientStockError, match="Insufficient stock for Gadget"):
            _place(handler, OrderItemSpec(7, 2, "10.00"), OrderItemSpec(9, 4, "5.00"))

        assert uow.orders.count_all() == 0
        assert uow.products.get_by_id(7).stock == 10
        assert uow.products.get_by_id(9).stock == 3

    def test_unknown_product_rolls_back(self):
        handler, uow = _setup()
        with pytest.raises(EntityNotFoundError, match="Product #404 not found"):
            _place(handler, OrderItemSpec(7, 1, "10.00"), OrderItemSpec(404, 1, "1.00"))
        assert uow.orders.count_all() == 0
        assert uow.products.get_by_id(7).stock == 10


class TestCreateOrderValidation:

    def test_empty_items_rejected(self):
        handler, uow = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            _place(handler)
        assert uow.commits == 0

    def test_non_positive_quantity_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="must be positive"):
            _place(handler, OrderItemSpec(7, 0, "10.00"))

    def test_malformed_product_id_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid product ID"):
            _place(handler, OrderItemSpec(-7, 1, "10.00"))

    def test_malformed_price_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid money amount"):
            _place(handler, OrderItemSpec(7, 1, "free"))
