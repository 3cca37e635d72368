"""
Audience matching: combines rule results per customer.
"""
from typing import Iterable, List

from app.repositories.customer import Customer
from app.services.audience.rules import Logic, RuleSet, evaluate


def matches(customer: Customer, rule_set: RuleSet) -> bool:
    """
    Decide whether a customer belongs to the audience.

    ALL with no rules matches everyone; ANY with no rules matches no one.
    """
    results = (evaluate(customer, rule) for rule in rule_set.rules)
    if rule_set.logic == Logic.ALL:
        return all(results)
    return any(results)


def match_audience(population: Iterable[Customer], rule_set: RuleSet) -> List[Customer]:
    """Matched customers, in population order."""
    return [customer for customer in population if matches(customer, rule_set)]


def preview_audience(population: Iterable[Customer], rule_set: RuleSet) -> int:
    """Exact audience size for a rule set."""
    return sum(1 for customer in population if matches(customer, rule_set))
