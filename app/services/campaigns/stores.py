"""
Store interfaces used by the campaign services.

The Supabase repositories in app.repositories implement these; tests can
pass any object with the same methods.
"""
from typing import List, Optional, Protocol

from app.repositories.customer import Customer
from app.services.audience.rules import RuleSet
from app.services.campaigns.types import (
    Campaign,
    DeliveryLogEntry,
    DeliveryStatus,
    EnrichedDeliveryLog,
)


class CustomerStore(Protocol):
    async def list_all(self) -> List[Customer]: ...

    async def create(self, data: dict) -> Customer: ...


class CampaignStore(Protocol):
    async def create(
        self, name: str, rule_set: RuleSet, audience_size_estimate: int
    ) -> Campaign: ...

    async def get(self, campaign_id: str) -> Optional[Campaign]: ...

    async def save(self, campaign: Campaign) -> Campaign: ...

    async def list_all(self) -> List[Campaign]: ...


class DeliveryLogStore(Protocol):
    async def append(self, entry: DeliveryLogEntry) -> None: ...

    async def list_all(self) -> List[EnrichedDeliveryLog]: ...

    async def list_by_campaign(self, campaign_id: str) -> List[EnrichedDeliveryLog]: ...

    async def count_by_status(self, campaign_id: str) -> dict[DeliveryStatus, int]: ...
