"""End-to-end tests of the command line against a throwaway SQLite file."""

import pytest
from click.testing import CliRunner

from storefront.infrastructure.cli.main import cli

SHIPPING = "1 Main Street, Springfield"
BILLING = "2 Side Road, Shelbyville"


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()
    env = {
        "STOREFRONT_DATABASE_URL": f"sqlite:///{tmp_path / 'cli.db'}",
        "STOREFRONT_LOG_LEVEL": "WARNING",
    }

    def invoke(*args: str):
        return runner.invoke(cli, list(args), env=env)

    result = invoke("db", "init")
    assert result.exit_code == 0, result.output
    return invoke


def _add_product(run, name: str, price: str, stock: int = 10):
    return run(
        "--user-id", "99", "--admin",
        "product", "add",
        "--name", name,
        "--price", price,
        "--category", "Gadgets",
        "--image-url", f"https://img.example.com/{name.lower()}.png",
        "--stock", str(stock),
    )


class TestCatalogCommands:

    def test_add_and_list(self, run):
        result = _add_product(run, "Widget", "10.00")
        assert result.exit_code == 0, result.output
        assert "Product #1 'Widget' added at $10.00" in result.output

        listing = run("product", "list")
        assert listing.exit_code == 0
        assert "Widget" in listing.output
        assert "Page 1 of 1  (1 products)" in listing.output

    def test_add_requires_admin(self, run):
        result = run(
            "--user-id", "1",
            "product", "add",
            "--name", "Widget",
            "--price", "10.00",
            "--category", "Gadgets",
            "--image-url", "https://img.example.com/widget.png",
        )
        assert result.exit_code == 1
        assert "Admin access required" in result.output

    def test_update_missing_product(self, run):
        result = run("--user-id", "99", "--admin", "product", "update", "--id", "42", "--stock", "3")
        assert result.exit_code == 1
        assert "Product #42 not found" in result.output


class TestCartAndOrderCommands:

    def test_checkout_flow(self, run):
        _add_product(run, "Widget", "10.00")
        _add_product(run, "Gadget", "5.00")

        assert run("--user-id", "1", "cart", "add", "--product", "1", "--quantity", "2").exit_code == 0
        assert run("--user-id", "1", "cart", "add", "--product", "2").exit_code == 0

        cart = run("--user-id", "1", "cart", "show")
        assert "$25.00" in cart.output
        assert "3 item(s)" in cart.output

        result = run(
            "--user-id", "1",
            "order", "checkout",
            "--shipping", SHIPPING,
            "--billing", BILLING,
            "--payment-method", "stripe",
        )
        assert result.exit_code == 0, result.output
        assert "Order #1 created from cart  (status=pending)" in result.output
        assert "$25.00" in result.output

        assert "Your cart is empty." in run("--user-id", "1", "cart", "show").output

    def test_checkout_with_empty_cart(self, run):
        result = run(
            "--user-id", "1",
            "order", "checkout",
            "--shipping", SHIPPING,
            "--billing", BILLING,
            "--payment-method", "paypal",
        )
        assert result.exit_code == 1
        assert "Cart is empty" in result.output

    def test_direct_order_and_cancel(self, run):
        _add_product(run, "Widget", "10.00", stock=5)

        created = run(
            "--user-id", "1",
            "order", "create",
            "--items", "1:2:9.50",
            "--shipping", SHIPPING,
            "--billing", BILLING,
            "--payment-method", "credit_card",
        )
        assert created.exit_code == 0, created.output
        assert "$19.00" in created.output

        assert run("--user-id", "2", "order", "show", "--id", "1").exit_code == 1
        assert "Order #1 cancelled." in run("--user-id", "1", "order", "cancel", "--id", "1").output

        again = run("--user-id", "1", "order", "cancel", "--id", "1")
        assert again.exit_code == 1
        assert "Only pending orders can be cancelled" in again.output

    def test_malformed_items(self, run):
        result = run(
            "--user-id", "1",
            "order", "create",
            "--items", "1:2",
            "--shipping", SHIPPING,
            "--billing", BILLING,
            "--payment-method", "paypal",
        )
        assert result.exit_code == 2
        assert "ProductId:Quantity:Price" in result.output

    def test_cart_requires_user(self, run):
        result = run("cart", "show")
        assert result.exit_code == 2
        assert "requires --user-id" in result.output

    def test_admin_status_update(self, run):
        _add_product(run, "Widget", "10.00")
        run(
            "--user-id", "1",
            "order", "create",
            "--items", "1:1:10.00",
            "--shipping", SHIPPING,
            "--billing", BILLING,
            "--payment-method", "paypal",
        )

        result = run("--user-id", "99", "--admin", "order", "update", "--id", "1", "--status", "shipped")
        assert result.exit_code == 0, result.output
        assert "status=shipped" in result.output

        listing = run("--user-id", "99", "--admin", "order", "list", "--all")
        assert "shipped" in listing.output
        assert "(1 orders)" in listing.output
