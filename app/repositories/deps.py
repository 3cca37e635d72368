"""
Dependency injection for repositories and campaign services.

Functions here are meant for FastAPI Depends.

Usage in endpoints:
    @router.post("/campaigns/{campaign_id}/send")
    async def send_campaign(
        campaign_id: str,
        dispatcher: CampaignDispatcher = Depends(get_dispatcher),
    ):
        return await dispatcher.dispatch_campaign(campaign_id)

Usage in tests:
    app.dependency_overrides[get_dispatcher] = lambda: fake_dispatcher
"""
from functools import lru_cache

from fastapi import Depends

from app.core.config import settings
from app.services.campaigns.dispatcher import CampaignDispatcher
from app.services.campaigns.outcomes import OutcomeSource, RandomOutcomeSource
from app.services.campaigns.service import CampaignService
from app.services.supabase import get_supabase_client

from .campaign import CampaignRepository
from .customer import CustomerRepository
from .delivery_log import DeliveryLogRepository


@lru_cache()
def get_customer_repo() -> CustomerRepository:
    """Singleton CustomerRepository."""
    return CustomerRepository(get_supabase_client(), page_size=settings.CUSTOMER_PAGE_SIZE)


@lru_cache()
def get_campaign_repo() -> CampaignRepository:
    """Singleton CampaignRepository."""
    return CampaignRepository(get_supabase_client())


@lru_cache()
def get_delivery_log_repo() -> DeliveryLogRepository:
    """Singleton DeliveryLogRepository."""
    return DeliveryLogRepository(get_supabase_client())


@lru_cache()
def get_outcome_source() -> OutcomeSource:
    """Process-wide random outcome source."""
    return RandomOutcomeSource(seed=settings.DISPATCH_RANDOM_SEED)


def get_campaign_service(
    customers: CustomerRepository = Depends(get_customer_repo),
    campaigns: CampaignRepository = Depends(get_campaign_repo),
    delivery_log: DeliveryLogRepository = Depends(get_delivery_log_repo),
) -> CampaignService:
    return CampaignService(customers, campaigns, delivery_log)


def get_dispatcher(
    customers: CustomerRepository = Depends(get_customer_repo),
    campaigns: CampaignRepository = Depends(get_campaign_repo),
    delivery_log: DeliveryLogRepository = Depends(get_delivery_log_repo),
    outcome_source: OutcomeSource = Depends(get_outcome_source),
) -> CampaignDispatcher:
    return CampaignDispatcher(
        customer_store=customers,
        campaign_store=campaigns,
        delivery_log=delivery_log,
        outcome_source=outcome_source,
        success_probability=settings.DELIVERY_SUCCESS_PROBABILITY,
        concurrency=settings.DISPATCH_CONCURRENCY,
    )


# Factories wiring every repository over one client (tests, scripts)
def create_campaign_service(db_client) -> CampaignService:
    """CampaignService over a custom database client."""
    return CampaignService(
        CustomerRepository(db_client),
        CampaignRepository(db_client),
        DeliveryLogRepository(db_client),
    )


def create_dispatcher(db_client, outcome_source: OutcomeSource, **kwargs) -> CampaignDispatcher:
    """CampaignDispatcher over a custom database client."""
    return CampaignDispatcher(
        customer_store=CustomerRepository(db_client),
        campaign_store=CampaignRepository(db_client),
        delivery_log=DeliveryLogRepository(db_client),
        outcome_source=outcome_source,
        **kwargs,
    )
