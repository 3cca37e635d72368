"""
Audience rules and their evaluation against a single customer.

A rule is ``{field, operator, value}``. Three operators exist: GT (``>``),
LT (``<``) and EQ (``=``). Evaluation never raises: an unknown operator,
an unknown or empty field and a non-numeric operand all make the rule
false.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from dateutil.parser import isoparse

from app.core.exceptions import ValidationError
from app.core.timezone import to_epoch_millis
from app.repositories.customer import Customer
from app.services.audience.fields import FieldKind, get_accessor, read_field

RuleValue = Union[str, int, float]


class Operator(str, Enum):
    """Comparison operators supported by rules."""

    GT = "GT"
    LT = "LT"
    EQ = "EQ"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def parse(cls, raw: Any) -> Optional["Operator"]:
        """
        Resolve a wire operator (symbol or name).

        Returns:
            The operator, or None when it is not one of the three supported
        """
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, str):
            return None
        text = raw.strip()
        if text in _BY_SYMBOL:
            return _BY_SYMBOL[text]
        try:
            return cls(text.upper())
        except ValueError:
            return None


_SYMBOLS = {Operator.GT: ">", Operator.LT: "<", Operator.EQ: "="}
_BY_SYMBOL = {symbol: op for op, symbol in _SYMBOLS.items()}


class Logic(str, Enum):
    """How the results of a rule set are combined."""

    ALL = "ALL"
    ANY = "ANY"

    @classmethod
    def parse(cls, raw: Any) -> "Logic":
        """
        Resolve a wire logic value. AND/OR are accepted as aliases.

        Raises:
            ValidationError: for anything else
        """
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip().upper()
        text = {"AND": "ALL", "OR": "ANY"}.get(text, text)
        try:
            return cls(text)
        except ValueError:
            raise ValidationError(
                "Invalid rule logic", details={"logic": raw, "allowed": ["ALL", "ANY"]}
            )


@dataclass(frozen=True)
class Rule:
    """One condition over a customer field. The operator is kept as given."""

    field: str
    operator: str
    value: RuleValue

    @property
    def parsed_operator(self) -> Optional[Operator]:
        return Operator.parse(self.operator)

    @classmethod
    def from_dict(cls, data: dict) -> "Rule":
        return cls(
            field=str(data.get("field", "")),
            operator=data.get("operator", ""),
            value=data.get("value"),
        )

    def to_dict(self) -> dict:
        op = self.parsed_operator
        return {
            "field": self.field,
            "operator": op.symbol if op else self.operator,
            "value": self.value,
        }


@dataclass(frozen=True)
class RuleSet:
    """Ordered rules plus the logic that combines them."""

    rules: Tuple[Rule, ...] = field(default_factory=tuple)
    logic: Logic = Logic.ALL

    @classmethod
    def build(cls, rules: List[dict], logic: Any) -> "RuleSet":
        """Build from wire rules and logic."""
        return cls(
            rules=tuple(Rule.from_dict(r) for r in (rules or [])),
            logic=Logic.parse(logic),
        )

    def rules_to_list(self) -> List[dict]:
        return [r.to_dict() for r in self.rules]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value)


def coerce_rule_value(value: Any, kind: FieldKind) -> Optional[float]:
    """
    Coerce a rule value to a number.

    Numeric strings are accepted for every field and a blank string counts
    as 0; ISO-8601 strings and datetimes are accepted for date fields and
    become epoch milliseconds.

    Returns:
        The number, or None when the value cannot be coerced
    """
    if _is_number(value):
        return float(value)
    if kind == FieldKind.DATE and isinstance(value, datetime):
        return to_epoch_millis(value)
    if not isinstance(value, str):
        return None
    if not value.strip():
        return 0.0

    text = value.strip()
    try:
        number = float(text)
    except ValueError:
        number = None
    if number is not None:
        return None if math.isnan(number) else number

    if kind == FieldKind.DATE:
        try:
            return to_epoch_millis(isoparse(text))
        except ValueError:
            return None
    return None


def evaluate(customer: Customer, rule: Rule) -> bool:
    """
    Evaluate one rule against one customer.

    Args:
        customer: Customer record
        rule: Rule to test

    Returns:
        True when the customer satisfies the rule
    """
    operator = rule.parsed_operator
    if operator is None:
        return False

    customer_value = read_field(customer, rule.field)
    # MISSING and None both fail
    if not _is_number(customer_value):
        return False

    accessor = get_accessor(rule.field)
    target = coerce_rule_value(rule.value, accessor.kind)
    if target is None:
        return False

    if operator == Operator.GT:
        return customer_value > target
    if operator == Operator.LT:
        return customer_value < target
    return customer_value == target
