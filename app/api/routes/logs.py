"""
Delivery log endpoint.
"""
from fastapi import APIRouter, Depends

from app.repositories.deps import get_campaign_service
from app.services.campaigns.service import CampaignService

router = APIRouter(prefix="/api/logs", tags=["logs"])


@router.get("")
async def list_logs(service: CampaignService = Depends(get_campaign_service)):
    """Delivery log entries with customer and campaign, newest first."""
    logs = await service.list_delivery_logs()
    return [entry.to_dict() for entry in logs]
