"""
Repository for campaigns.
"""

import logging
from typing import List, Optional

from app.core.exceptions import StoreError
from app.core.timezone import iso_utc
from app.services.audience.rules import RuleSet
from app.services.campaigns.types import Campaign, CampaignStatus

from .base import BaseRepository

logger = logging.getLogger(__name__)


class CampaignRepository(BaseRepository[Campaign]):
    """Campaign Store."""

    @property
    def table_name(self) -> str:
        return "campaigns"

    async def create(
        self, name: str, rule_set: RuleSet, audience_size_estimate: int
    ) -> Campaign:
        """
        Insert a new campaign with zeroed totals.

        Args:
            name: Campaign name
            rule_set: Audience rules
            audience_size_estimate: Audience size computed at creation

        Returns:
            Stored campaign
        """
        row = {
            "name": name,
            "rules": rule_set.rules_to_list(),
            "logic": rule_set.logic.value,
            "audience_size_estimate": audience_size_estimate,
            "sent": 0,
            "failed": 0,
            "status": CampaignStatus.CREATED.value,
        }
        response = self._execute(self._table().insert(row), "create_campaign")
        if not response.data:
            raise StoreError("campaigns store returned no row on insert", stage="create_campaign")

        campaign = Campaign.from_db_row(response.data[0])
        logger.info(f"Campaign created: {campaign.id}")
        return campaign

    async def get(self, campaign_id: str) -> Optional[Campaign]:
        """
        Fetch a campaign by ID.

        Returns:
            Campaign or None when it does not exist
        """
        query = self._table().select("*").eq("id", campaign_id).limit(1)
        response = self._execute(query, "load_campaign", campaign_id=campaign_id)
        if not response.data:
            return None
        return Campaign.from_db_row(response.data[0])

    async def save(self, campaign: Campaign) -> Campaign:
        """
        Persist the totals and status of a campaign.

        Raises:
            StoreError: update failed or matched no row
        """
        data = {
            "sent": campaign.sent,
            "failed": campaign.failed,
            "status": campaign.status.value,
            "dispatched_at": iso_utc(campaign.dispatched_at) if campaign.dispatched_at else None,
        }
        query = self._table().update(data).eq("id", campaign.id)
        response = self._execute(query, "save_campaign", campaign_id=campaign.id)
        if not response.data:
            raise StoreError(
                "campaigns store updated no row",
                stage="save_campaign",
                details={"campaign_id": campaign.id},
            )
        return Campaign.from_db_row(response.data[0])

    async def list_all(self) -> List[Campaign]:
        """Campaigns, newest first."""
        query = self._table().select("*").order("created_at", desc=True)
        response = self._execute(query, "list_campaigns")
        return [Campaign.from_db_row(row) for row in (response.data or [])]
