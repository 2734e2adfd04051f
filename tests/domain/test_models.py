"""Unit tests for the small value objects."""

from storefront.domain.model.basket import BasketEntry, BasketState
from storefront.domain.model.order import OrderResult, ValidationGroup, ValidationResult


class TestBasketState:

    def test_empty(self):
        state = BasketState.derive([])
        assert state.total == 0
        assert state.item_count == 0
        assert state.is_empty

    def test_priceless_counts_as_zero(self):
        state = BasketState.derive([
            BasketEntry("a", "A", 10),
            BasketEntry("b", "B", None),
            BasketEntry("c", "C", 2.5),
        ])
        assert state.total == 12.5
        assert state.item_ids == ("a", "b", "c")


class TestValidationGroup:

    def test_of_field(self):
        assert ValidationGroup.of_field("payment") is ValidationGroup.DELIVERY
        assert ValidationGroup.of_field("address") is ValidationGroup.DELIVERY
        assert ValidationGroup.of_field("email") is ValidationGroup.CONTACTS
        assert ValidationGroup.of_field("phone") is ValidationGroup.CONTACTS
        assert ValidationGroup.of_field("total") is None

    def test_fields(self):
        assert ValidationGroup.CONTACTS.fields == ("email", "phone")


class TestValidationResult:

    def test_message_empty_when_valid(self):
        assert ValidationResult(is_valid=True).message == ""


class TestOrderResult:

    def test_from_raw(self):
        result = OrderResult.from_raw({"id": 42, "total": 2200})
        assert result == OrderResult(id="42", total=2200)
