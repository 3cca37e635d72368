"""
Audience segmentation.

Structure:
- fields: typed accessors for customer attributes
- rules: Rule / RuleSet model and single-rule evaluation
- matcher: ALL / ANY combination over a population
"""
from app.services.audience.fields import MISSING, FieldKind, read_field
from app.services.audience.matcher import match_audience, matches, preview_audience
from app.services.audience.rules import Logic, Operator, Rule, RuleSet, evaluate

__all__ = [
    "MISSING",
    "FieldKind",
    "read_field",
    "Logic",
    "Operator",
    "Rule",
    "RuleSet",
    "evaluate",
    "matches",
    "match_audience",
    "preview_audience",
]
