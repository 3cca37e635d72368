"""
Campaign endpoints: creation, listing, sending and reports.
"""
import logging

from fastapi import APIRouter, Depends

from app.api.routes.schemas import CreateCampaignRequest
from app.repositories.deps import get_campaign_service, get_dispatcher
from app.services.campaigns.dispatcher import CampaignDispatcher
from app.services.campaigns.service import CampaignService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/campaigns", tags=["campaigns"])


@router.post("", status_code=201)
async def create_campaign(
    body: CreateCampaignRequest,
    service: CampaignService = Depends(get_campaign_service),
):
    """Create a campaign; the audience size is estimated once, here."""
    campaign = await service.create_campaign(body.name, body.to_rule_set())
    if body.audience_size is not None and body.audience_size != campaign.audience_size_estimate:
        logger.info(
            f"Campaign {campaign.id}: client estimate {body.audience_size} "
            f"replaced by {campaign.audience_size_estimate}",
            extra={"campaign_id": campaign.id},
        )
    return campaign.to_dict()


@router.get("")
async def list_campaigns(service: CampaignService = Depends(get_campaign_service)):
    """Campaigns, newest first."""
    campaigns = await service.list_campaigns()
    return [campaign.to_dict() for campaign in campaigns]


@router.post("/{campaign_id}/send")
async def send_campaign(
    campaign_id: str,
    dispatcher: CampaignDispatcher = Depends(get_dispatcher),
):
    """
    Dispatch a campaign to its audience as it matches now.

    Sending again replaces the totals and adds a new set of log rows.
    `logErrors` counts recipients whose delivery log entry could not be
    written.
    """
    result = await dispatcher.dispatch_campaign(campaign_id)
    return {"message": "Campaign sent", **result.to_dict()}


@router.get("/{campaign_id}/report")
async def campaign_report(
    campaign_id: str,
    service: CampaignService = Depends(get_campaign_service),
):
    """Delivery report of a campaign."""
    report = await service.campaign_report(campaign_id)
    return report.to_dict()


@router.get("/{campaign_id}/logs")
async def campaign_logs(
    campaign_id: str,
    service: CampaignService = Depends(get_campaign_service),
):
    """Delivery log entries of one campaign, across every run."""
    logs = await service.list_campaign_logs(campaign_id)
    return [entry.to_dict() for entry in logs]
