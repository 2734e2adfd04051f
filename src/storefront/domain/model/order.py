"""Order draft, validation results and the submission payload.

The draft is edited one field at a time while the shopper walks through
the checkout forms.  Its fields fall into two validation groups that are
checked independently of each other:

- delivery: ``payment`` and ``address``
- contacts: ``email`` and ``phone``

The ``Order`` is only assembled at submit time and never changes after.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PaymentMethod(Enum):
    CARD = "card"
    CASH = "cash"


class ValidationGroup(Enum):
    DELIVERY = "delivery"
    CONTACTS = "contacts"

    @property
    def fields(self) -> tuple[str, ...]:
        return GROUP_FIELDS[self]

    @staticmethod
    def of_field(name: str) -> ValidationGroup | None:
        for group, names in GROUP_FIELDS.items():
            if name in names:
                return group
        return None


GROUP_FIELDS: dict[ValidationGroup, tuple[str, ...]] = {
    ValidationGroup.DELIVERY: ("payment", "address"),
    ValidationGroup.CONTACTS: ("email", "phone"),
}


class GroupState(Enum):
    """Pristine -> Invalid <-> Valid.  Pristine comes back only on clear()."""

    PRISTINE = "pristine"
    INVALID = "invalid"
    VALID = "valid"


@dataclass
class OrderDraft:
    payment: str | None = None
    address: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def message(self) -> str:
        """All error messages joined for a single-line display."""
        return "; ".join(self.errors.values())

    def to_payload(self) -> dict[str, Any]:
        return {"isValid": self.is_valid, "errors": dict(self.errors)}


@dataclass(frozen=True)
class Order:
    """Submission payload: the draft plus the basket's ids and total."""

    payment: str
    address: str
    email: str
    phone: str
    items: tuple[str, ...]
    total: int | float

    def to_payload(self) -> dict[str, Any]:
        return {
            "payment": self.payment,
            "address": self.address,
            "email": self.email,
            "phone": self.phone,
            "items": list(self.items),
            "total": self.total,
        }


@dataclass(frozen=True)
class OrderResult:
    """What the shop service returns for an accepted order."""

    id: str
    total: int | float

    @staticmethod
    def from_raw(raw: dict[str, Any]) -> OrderResult:
        return OrderResult(id=str(raw["id"]), total=raw["total"])
