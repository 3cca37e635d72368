"""
Typed accessors for customer attributes targeted by audience rules.

Rules name fields by their wire name (``spend``, ``visits``,
``lastOrderDate``...). Each name maps to an extraction function with a
known kind, so a lookup can tell an unknown field (MISSING) apart from a
known field without a value (None).
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional

from app.core.timezone import to_epoch_millis
from app.repositories.customer import Customer


class FieldKind(str, Enum):
    """How a field value takes part in comparisons."""

    NUMBER = "number"
    DATE = "date"
    TEXT = "text"


class _Missing:
    """Sentinel for a field name no accessor knows about."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class FieldAccessor:
    name: str
    kind: FieldKind
    extract: Callable[[Customer], Any]


_ACCESSORS = [
    FieldAccessor("spend", FieldKind.NUMBER, lambda c: c.spend),
    FieldAccessor("visits", FieldKind.NUMBER, lambda c: c.visits),
    FieldAccessor("lastOrderDate", FieldKind.DATE, lambda c: c.last_order_date),
    FieldAccessor("createdAt", FieldKind.DATE, lambda c: c.created_at),
    FieldAccessor("name", FieldKind.TEXT, lambda c: c.name),
    FieldAccessor("email", FieldKind.TEXT, lambda c: c.email),
]

# Legacy and snake_case names used by older campaign rows
_ALIASES = {
    "totalSpend": "spend",
    "visitCount": "visits",
    "last_order_date": "lastOrderDate",
    "created_at": "createdAt",
}

CUSTOMER_FIELDS: Dict[str, FieldAccessor] = {a.name: a for a in _ACCESSORS}
CUSTOMER_FIELDS.update({alias: CUSTOMER_FIELDS[name] for alias, name in _ALIASES.items()})


def get_accessor(field: str) -> Optional[FieldAccessor]:
    return CUSTOMER_FIELDS.get(field)


def read_field(customer: Customer, field: str) -> Any:
    """
    Read a rule field from a customer.

    Args:
        customer: Customer record
        field: Field name as written in the rule

    Returns:
        MISSING for an unknown field, None for a known field without a
        value, epoch milliseconds for dates, the raw value otherwise
    """
    accessor = get_accessor(field)
    if accessor is None:
        return MISSING

    value = accessor.extract(customer)
    if value is None:
        return None
    if accessor.kind == FieldKind.DATE:
        return to_epoch_millis(value)
    return value
