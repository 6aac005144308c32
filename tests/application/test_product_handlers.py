"""Integration tests for the catalog use cases."""

import pytest

from storefront.application.add_product import AddProductHandler
from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.show_products import (
    ListCategoriesHandler,
    ListProductsHandler,
    ShowProductHandler,
)
from storefront.application.update_product import DeleteProductHandler, UpdateProductHandler
from storefront.domain.exceptions import EntityNotFoundError, ForbiddenError, ValidationError
from storefront.domain.model.principal import Principal
from tests.fakes import FakeUnitOfWork, make_product, utc

ADMIN = Principal(user_id=99, is_admin=True)
CUSTOMER = Principal(user_id=1)


def _setup() -> FakeUnitOfWork:
    return FakeUnitOfWork([
        make_product(1, "Widget", category="Gadgets", created_at=utc(minute=1)),
        make_product(2, "Teapot", category="Kitchen", created_at=utc(minute=2)),
        make_product(3, "Sprocket", category="Gadgets", created_at=utc(minute=3)),
        make_product(4, "Relic", category="Antiques", is_active=False, created_at=utc(minute=4)),
    ])


def _add(uow: FakeUnitOfWork, principal: Principal = ADMIN, **overrides):
    fields = {
        "name": "Lamp",
        "description": "A desk lamp",
        "price": "24.50",
        "category": "Lighting",
        "image_url": "https://img.example.com/lamp.png",
        "stock": 12,
    }
    fields.update(overrides)
    return AddProductHandler(uow).handle(principal, **fields)


class TestAddProduct:

    def test_adds_active_product(self):
        uow = _setup()
        dto = _add(uow)
        assert dto.id == 5
        assert dto.price == "$24.50"
        assert dto.is_active is True
        assert uow.products.get_by_id(5).stock == 12

    def test_requires_admin(self):
        uow = _setup()
        with pytest.raises(ForbiddenError):
            _add(uow, principal=CUSTOMER)
        assert uow.products.get_by_id(5) is None

    def test_rejects_zero_price(self):
        with pytest.raises(ValidationError, match="greater than zero"):
            _add(_setup(), price="0")

    def test_rejects_short_name(self):
        with pytest.raises(ValidationError, match="name must be 2-100"):
            _add(_setup(), name="X")


class TestUpdateProduct:

    def test_sparse_update(self):
        uow = _setup()
        dto = UpdateProductHandler(uow).handle(
            ADMIN, 1, {"price": "12.00", "name": None}
        )
        assert dto.price == "$12.00"
        assert dto.name == "Widget"

    def test_does_not_touch_cart_snapshot(self):
        uow = _setup()
        AddToCartHandler(uow).handle(CUSTOMER.user_id, 1, 1)
        UpdateProductHandler(uow).handle(ADMIN, 1, {"price": "12.00"})
        assert str(uow.carts.get(CUSTOMER.user_id, 1).price) == "$10.00"

    def test_deactivate_hides_from_listing(self):
        uow = _setup()
        UpdateProductHandler(uow).handle(ADMIN, 3, {"is_active": False})
        names = [p.name for p in ListProductsHandler(uow).handle().products]
        assert "Sprocket" not in names

    def test_invalid_change_leaves_product_untouched(self):
        uow = _setup()
        with pytest.raises(ValidationError):
            UpdateProductHandler(uow).handle(ADMIN, 1, {"price": "12.00", "stock": -1})
        product = uow.products.get_by_id(1)
        assert str(product.price) == "$10.00"
        assert product.stock == 100

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError, match="Unknown product fields: colour"):
            UpdateProductHandler(_setup()).handle(ADMIN, 1, {"colour": "red"})

    def test_missing_product_returns_none(self):
        assert UpdateProductHandler(_setup()).handle(ADMIN, 42, {"stock": 1}) is None

    def test_requires_admin(self):
        with pytest.raises(ForbiddenError):
            UpdateProductHandler(_setup()).handle(CUSTOMER, 1, {"stock": 1})


class TestDeleteProduct:

    def test_delete(self):
        uow = _setup()
        handler = DeleteProductHandler(uow)
        assert handler.handle(ADMIN, 2) is True
        assert handler.handle(ADMIN, 2) is False
        with pytest.raises(EntityNotFoundError):
            ShowProductHandler(uow).handle(2)

    def test_requires_admin(self):
        with pytest.raises(ForbiddenError):
            DeleteProductHandler(_setup()).handle(CUSTOMER, 1)


class TestCatalogQueries:

    def test_list_active_newest_first(self):
        page = ListProductsHandler(_setup()).handle()
        assert [p.name for p in page.products] == ["Sprocket", "Teapot", "Widget"]
        assert page.pagination.total == 3
        assert page.pagination.pages == 1

    def test_filter_by_category(self):
        page = ListProductsHandler(_setup()).handle(category="Gadgets")
        assert [p.id for p in page.products] == [3, 1]
        assert page.pagination.total == 2

    def test_pagination(self):
        page = ListProductsHandler(_setup()).handle(page=2, limit=2)
        assert [p.name for p in page.products] == ["Widget"]
        assert page.pagination.pages == 2

    def test_categories_are_distinct_active_and_sorted(self):
        assert ListCategoriesHandler(_setup()).handle() == ["Gadgets", "Kitchen"]

    def test_show_inactive_product_by_id(self):
        assert ShowProductHandler(_setup()).handle(4).is_active is False

    def test_show_missing_product(self):
        with pytest.raises(EntityNotFoundError, match="Product #42 not found"):
            ShowProductHandler(_setup()).handle(42)
