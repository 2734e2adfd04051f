"""OrderDraftStore: the checkout form fields and their validation state.

Each validation group runs its own small state machine::

    PRISTINE --(field write / validate)--> INVALID <--> VALID
        ^                                     |
        +--------------- clear() -------------+

Writing a field re-validates only the group that owns it, so typing an
address never touches the contact errors and vice versa.  Results are
announced with ``order:valid`` (delivery) and ``contacts:valid`` (contacts).
"""

from __future__ import annotations

import logging

from storefront.domain.events import CONTACTS_VALID, ORDER_VALID, EventBus
from storefront.domain.exceptions import InvariantViolationError
from storefront.domain.model.order import (
    GroupState,
    Order,
    OrderDraft,
    PaymentMethod,
    ValidationGroup,
    ValidationResult,
)

logger = logging.getLogger(__name__)

PAYMENT_REQUIRED = "Select a payment method"
ADDRESS_REQUIRED = "Enter a delivery address"
EMAIL_REQUIRED = "Enter an email"
PHONE_REQUIRED = "Enter a phone number"

_GROUP_EVENTS = {
    ValidationGroup.DELIVERY: ORDER_VALID,
    ValidationGroup.CONTACTS: CONTACTS_VALID,
}

_ACCEPTED_PAYMENTS = frozenset(method.value for method in PaymentMethod)


def _blank(value: str | None) -> bool:
    return not value or not value.strip()


class OrderDraftStore:

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus
        self._draft = OrderDraft()
        self._states: dict[ValidationGroup, GroupState] = {}
        self._results: dict[ValidationGroup, ValidationResult] = {}
        self._reset_groups()

    # --- Field edits ----------------------------------------------------------

    def set_field(self, name: str, value: str | None) -> ValidationResult:
        """Store one field and re-validate the group it belongs to."""
        group = ValidationGroup.of_field(name)
        if group is None:
            raise InvariantViolationError(f"Unknown order field '{name}'")

        if isinstance(value, PaymentMethod):
            value = value.value
        if name != "payment" and value is None:
            value = ""
        setattr(self._draft, name, value)
        return self.validate(group)

    # --- Validation -----------------------------------------------------------

    def validate(self, group: ValidationGroup) -> ValidationResult:
        if group is ValidationGroup.DELIVERY:
            errors = self._delivery_errors()
        else:
            errors = self._contacts_errors()

        result = ValidationResult(is_valid=not errors, errors=errors)
        self._results[group] = result
        self._states[group] = GroupState.VALID if result.is_valid else GroupState.INVALID
        logger.debug("%s group is %s", group.value, self._states[group].value)
        self._bus.emit(_GROUP_EVENTS[group], result)
        return result

    def validate_delivery(self) -> ValidationResult:
        return self.validate(ValidationGroup.DELIVERY)

    def validate_contacts(self) -> ValidationResult:
        return self.validate(ValidationGroup.CONTACTS)

    def _delivery_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if self._draft.payment not in _ACCEPTED_PAYMENTS:
            errors["payment"] = PAYMENT_REQUIRED
        if _blank(self._draft.address):
            errors["address"] = ADDRESS_REQUIRED
        return errors

    def _contacts_errors(self) -> dict[str, str]:
        errors: dict[str, str] = {}
        if _blank(self._draft.email):
            errors["email"] = EMAIL_REQUIRED
        if _blank(self._draft.phone):
            errors["phone"] = PHONE_REQUIRED
        return errors

    # --- Order assembly -------------------------------------------------------

    def build_order(self, item_ids: list[str], total: int | float) -> Order:
        """Combine the draft with the basket contents.

        Does not validate; callers check ``is_valid()`` for both groups first.
        """
        return Order(
            payment=self._draft.payment or "",
            address=self._draft.address.strip(),
            email=self._draft.email.strip(),
            phone=self._draft.phone.strip(),
            items=tuple(item_ids),
            total=total,
        )

    def clear(self) -> None:
        """Back to an empty, pristine draft; both groups re-announced."""
        self._draft = OrderDraft()
        self._reset_groups()
        for group in ValidationGroup:
            self._bus.emit(_GROUP_EVENTS[group], self._results[group])

    # --- Queries --------------------------------------------------------------

    @property
    def draft(self) -> OrderDraft:
        """A copy of the current field values."""
        return OrderDraft(
            payment=self._draft.payment,
            address=self._draft.address,
            email=self._draft.email,
            phone=self._draft.phone,
        )

    def state(self, group: ValidationGroup) -> GroupState:
        return self._states[group]

    def result(self, group: ValidationGroup) -> ValidationResult:
        return self._results[group]

    def is_valid(self, group: ValidationGroup) -> bool:
        return self._states[group] is GroupState.VALID

    # --- Internal helpers -----------------------------------------------------

    def _reset_groups(self) -> None:
        for group in ValidationGroup:
            self._states[group] = GroupState.PRISTINE
            self._results[group] = ValidationResult(is_valid=False)
