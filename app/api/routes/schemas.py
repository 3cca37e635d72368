"""
Request models shared by the API routes.

Field names follow the camelCase wire format; snake_case is accepted too.
"""
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from app.services.audience.rules import RuleSet


class RuleIn(BaseModel):
    """One audience rule. The operator is not validated here: unknown ones never match."""

    field: str
    operator: str
    value: Union[float, int, str, None] = None


class RuleSetIn(BaseModel):
    rules: List[RuleIn] = Field(default_factory=list)
    logic: str = "ALL"

    def to_rule_set(self) -> RuleSet:
        return RuleSet.build([rule.model_dump() for rule in self.rules], self.logic)


class CreateCampaignRequest(RuleSetIn):
    model_config = ConfigDict(populate_by_name=True)

    name: str
    # Accepted for compatibility; the stored estimate is always recomputed
    audience_size: Optional[int] = Field(default=None, alias="audienceSize")
