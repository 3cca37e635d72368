"""
Audience preview endpoint.
"""
from fastapi import APIRouter, Depends

from app.api.routes.schemas import RuleSetIn
from app.repositories.deps import get_campaign_service
from app.services.campaigns.service import CampaignService

router = APIRouter(prefix="/api/audience", tags=["audience"])


@router.post("/preview")
async def preview_audience(
    body: RuleSetIn,
    service: CampaignService = Depends(get_campaign_service),
):
    """Exact number of customers matching the rules right now."""
    audience_size = await service.preview(body.to_rule_set())
    return {"audienceSize": audience_size}
