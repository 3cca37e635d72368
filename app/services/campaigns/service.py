"""
Campaign application service.

Everything the HTTP layer needs besides dispatching: audience preview,
campaign creation and listing, delivery logs and reports.
"""

import logging
from typing import List

from app.core.exceptions import NotFoundError, ValidationError
from app.repositories.customer import Customer
from app.services.audience.matcher import preview_audience
from app.services.audience.rules import RuleSet
from app.services.campaigns.stores import CampaignStore, CustomerStore, DeliveryLogStore
from app.services.campaigns.types import (
    Campaign,
    CampaignReport,
    DeliveryStatus,
    EnrichedDeliveryLog,
)

logger = logging.getLogger(__name__)


class CampaignService:
    """Campaign use cases over the three stores."""

    def __init__(
        self,
        customer_store: CustomerStore,
        campaign_store: CampaignStore,
        delivery_log: DeliveryLogStore,
    ):
        self.customer_store = customer_store
        self.campaign_store = campaign_store
        self.delivery_log = delivery_log

    async def preview(self, rule_set: RuleSet) -> int:
        """Exact audience size of a rule set over the current population."""
        population = await self.customer_store.list_all()
        return preview_audience(population, rule_set)

    async def create_campaign(self, name: str, rule_set: RuleSet) -> Campaign:
        """
        Create a campaign, estimating its audience once.

        Args:
            name: Campaign name
            rule_set: Audience rules

        Returns:
            The stored campaign
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Campaign name is required", details={"field": "name"})

        estimate = await self.preview(rule_set)
        campaign = await self.campaign_store.create(name, rule_set, estimate)
        logger.info(
            f"Campaign {campaign.id} created with estimated audience {estimate}",
            extra={"campaign_id": campaign.id},
        )
        return campaign

    async def list_campaigns(self) -> List[Campaign]:
        """Campaigns, newest first."""
        return await self.campaign_store.list_all()

    async def list_delivery_logs(self) -> List[EnrichedDeliveryLog]:
        """Delivery logs with customer and campaign, newest first."""
        return await self.delivery_log.list_all()

    async def list_campaign_logs(self, campaign_id: str) -> List[EnrichedDeliveryLog]:
        """
        Delivery logs of one campaign, newest first.

        Raises:
            NotFoundError: campaign does not exist
        """
        campaign = await self.campaign_store.get(campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign", identifier=str(campaign_id))
        return await self.delivery_log.list_by_campaign(campaign.id)

    async def campaign_report(self, campaign_id: str) -> CampaignReport:
        """
        Delivery report for one campaign.

        Raises:
            NotFoundError: campaign does not exist
        """
        campaign = await self.campaign_store.get(campaign_id)
        if campaign is None:
            raise NotFoundError("Campaign", identifier=str(campaign_id))

        counts = await self.delivery_log.count_by_status(campaign.id)
        return CampaignReport(
            campaign_id=campaign.id,
            name=campaign.name,
            status=campaign.status,
            audience_size_estimate=campaign.audience_size_estimate,
            last_run_sent=campaign.sent,
            last_run_failed=campaign.failed,
            logged_sent=counts.get(DeliveryStatus.SENT, 0),
            logged_failed=counts.get(DeliveryStatus.FAILED, 0),
            dispatched_at=campaign.dispatched_at,
        )

    async def create_customer(self, data: dict) -> Customer:
        """Ingest one customer record."""
        return await self.customer_store.create(data)
