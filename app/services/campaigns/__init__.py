"""
Campaigns module.

Structure:
- types: campaign, delivery log and report types
- outcomes: simulated delivery outcome sources
- stores: store interfaces
- dispatcher: dispatch runs
- service: preview, creation, listing and reports
"""
from app.services.campaigns.dispatcher import CampaignDispatcher
from app.services.campaigns.outcomes import (
    OutcomeSource,
    RandomOutcomeSource,
    ScriptedOutcomeSource,
)
from app.services.campaigns.service import CampaignService
from app.services.campaigns.types import (
    Campaign,
    CampaignReport,
    CampaignStatus,
    DeliveryLogEntry,
    DeliveryStatus,
    DispatchResult,
    EnrichedDeliveryLog,
)

__all__ = [
    "CampaignDispatcher",
    "CampaignService",
    "OutcomeSource",
    "RandomOutcomeSource",
    "ScriptedOutcomeSource",
    "Campaign",
    "CampaignReport",
    "CampaignStatus",
    "DeliveryLogEntry",
    "DeliveryStatus",
    "DispatchResult",
    "EnrichedDeliveryLog",
]
