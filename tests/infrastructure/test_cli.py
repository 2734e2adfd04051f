"""End-to-end tests for the click CLI with a fake shop gateway.

The basket snapshot lives in a temporary data directory, so every
invocation behaves like a fresh page load of the same session.
"""

import json

import pytest
from click.testing import CliRunner

from storefront.domain.exceptions import InvariantViolationError
from storefront.infrastructure import bootstrap
from storefront.infrastructure.cli.main import cli
from tests.fakes import FakeShopGateway, make_product


@pytest.fixture
def gateway(monkeypatch, tmp_path):
    fake = FakeShopGateway([
        make_product("A", 100, title="Widget"),
        make_product("B", None, title="Mighty pen"),
        make_product("C", 750, title="Gadget"),
    ])
    monkeypatch.setattr(bootstrap, "shop_gateway", lambda: fake)
    monkeypatch.setenv("STOREFRONT_DATA_DIR", str(tmp_path))
    return fake


def _invoke(*args: str):
    return CliRunner().invoke(cli, list(args))


def _saved_ids(tmp_path) -> list[str]:
    return json.loads((tmp_path / "basket.json").read_text(encoding="utf-8"))["itemIds"]


class TestProducts:

    def test_list(self, gateway):
        result = _invoke("product", "list")
        assert result.exit_code == 0, result.output
        assert "Widget" in result.output
        assert "Priceless" in result.output

    def test_list_marks_basket_items(self, gateway):
        _invoke("basket", "add", "--id", "C")
        result = _invoke("product", "list")
        line = next(l for l in result.output.splitlines() if "Gadget" in l)
        assert line.startswith("*")

    def test_show(self, gateway):
        result = _invoke("product", "show", "--id", "B")
        assert result.exit_code == 0, result.output
        assert "Mighty pen" in result.output
        assert "Not for sale." in result.output

    def test_show_unknown(self, gateway):
        result = _invoke("product", "show", "--id", "nope")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_catalog_failure(self, gateway):
        gateway.catalog_error = "Service Unavailable"
        result = _invoke("product", "list")
        assert result.exit_code == 1
        assert "Could not load products: Service Unavailable" in result.output


class TestBasket:

    def test_add_persists_between_commands(self, gateway, tmp_path):
        result = _invoke("basket", "add", "--id", "A")
        assert result.exit_code == 0, result.output
        assert "1 item(s), total 100 synapses" in result.output
        assert _saved_ids(tmp_path) == ["A"]

        result = _invoke("basket", "show")
        assert "Widget" in result.output
        assert "100 synapses" in result.output

    def test_add_twice(self, gateway):
        _invoke("basket", "add", "--id", "A")
        result = _invoke("basket", "add", "--id", "A")
        assert result.exit_code == 0
        assert "already in the basket" in result.output

    def test_add_unknown(self, gateway):
        result = _invoke("basket", "add", "--id", "ghost")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_remove(self, gateway, tmp_path):
        _invoke("basket", "add", "--id", "A")
        _invoke("basket", "add", "--id", "C")
        result = _invoke("basket", "remove", "--id", "A")
        assert result.exit_code == 0, result.output
        assert _saved_ids(tmp_path) == ["C"]

    def test_remove_absent(self, gateway):
        result = _invoke("basket", "remove", "--id", "A")
        assert result.exit_code == 1
        assert "not in the basket" in result.output

    def test_clear(self, gateway, tmp_path):
        _invoke("basket", "add", "--id", "A")
        result = _invoke("basket", "clear")
        assert result.exit_code == 0
        assert "Basket cleared." in result.output
        assert not (tmp_path / "basket.json").exists()

        result = _invoke("basket", "show")
        assert "Your basket is empty." in result.output

    def test_show_empty(self, gateway):
        result = _invoke("basket", "show")
        assert "Your basket is empty." in result.output

    def test_vanished_product_dropped_on_next_load(self, gateway, tmp_path):
        _invoke("basket", "add", "--id", "A")
        _invoke("basket", "add", "--id", "C")
        gateway.products = [p for p in gateway.products if p.id != "A"]

        _invoke("basket", "show")

        assert _saved_ids(tmp_path) == ["C"]


CHECKOUT = (
    "checkout",
    "--payment", "cash",
    "--address", "Main st. 1",
    "--email", "a@b.c",
    "--phone", "123",
)


class TestCheckout:

    def test_success(self, gateway, tmp_path):
        _invoke("basket", "add", "--id", "A")
        _invoke("basket", "add", "--id", "C")

        result = _invoke(*CHECKOUT)

        assert result.exit_code == 0, result.output
        assert "Order placed." in result.output
        assert "Charged 850 synapses" in result.output
        assert gateway.submitted[0].items == ("A", "C")
        assert gateway.submitted[0].payment == "cash"
        assert not (tmp_path / "basket.json").exists()

    def test_empty_basket(self, gateway):
        result = _invoke(*CHECKOUT)
        assert result.exit_code == 1
        assert "Your basket is empty" in result.output

    def test_rejected(self, gateway, tmp_path):
        _invoke("basket", "add", "--id", "A")
        gateway.order_error = "Out of stock"

        result = _invoke(*CHECKOUT)

        assert result.exit_code == 1
        assert "Order failed: Out of stock" in result.output
        assert _saved_ids(tmp_path) == ["A"]

    def test_blank_address(self, gateway):
        _invoke("basket", "add", "--id", "A")
        result = _invoke(
            "checkout", "--payment", "card", "--address", "  ",
            "--email", "a@b.c", "--phone", "123",
        )
        assert result.exit_code == 1
        assert "Enter a delivery address" in result.output
        assert gateway.submitted == []

    def test_blank_phone(self, gateway):
        _invoke("basket", "add", "--id", "A")
        result = _invoke(
            "checkout", "--payment", "card", "--address", "Main st.",
            "--email", "a@b.c", "--phone", "",
        )
        assert result.exit_code == 1
        assert "Enter a phone number" in result.output

    def test_unknown_payment_rejected_by_cli(self, gateway):
        result = _invoke(
            "checkout", "--payment", "barter", "--address", "x",
            "--email", "a@b.c", "--phone", "1",
        )
        assert result.exit_code == 2

    def test_domain_error_reported_without_traceback(self, gateway, monkeypatch):
        _invoke("basket", "add", "--id", "A")

        async def broken_submit(order):
            raise InvariantViolationError("Order payload is inconsistent")

        monkeypatch.setattr(gateway, "submit_order", broken_submit)
        result = _invoke(*CHECKOUT)

        assert result.exit_code == 1
        assert "Error: Order payload is inconsistent" in result.output
        assert not isinstance(result.exception, InvariantViolationError)
