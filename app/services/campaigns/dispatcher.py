"""
Campaign dispatcher.

Responsible for:
- Re-matching the audience against the current population
- Simulating one delivery per matched customer
- Appending one delivery log entry per recipient
- Replacing the campaign totals and saving the campaign

Dispatching twice re-matches and replaces the totals. Earlier log rows are
kept, so a re-dispatch adds a second set of rows for the same campaign.
"""

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Sequence, Tuple, TypeVar

from app.core.exceptions import NotFoundError, StoreError
from app.core.timezone import utc_now
from app.repositories.customer import Customer
from app.services.audience.matcher import match_audience
from app.services.campaigns.outcomes import OutcomeSource
from app.services.campaigns.stores import CampaignStore, CustomerStore, DeliveryLogStore
from app.services.campaigns.types import (
    Campaign,
    DeliveryLogEntry,
    DeliveryStatus,
    DispatchResult,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SUCCESS_PROBABILITY = 0.9


class CampaignDispatcher:
    """Dispatcher for campaign sends."""

    def __init__(
        self,
        customer_store: CustomerStore,
        campaign_store: CampaignStore,
        delivery_log: DeliveryLogStore,
        outcome_source: OutcomeSource,
        success_probability: float = DEFAULT_SUCCESS_PROBABILITY,
        concurrency: int = 1,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Args:
            customer_store: Source of the population
            campaign_store: Where the updated campaign is saved
            delivery_log: Sink for delivery log entries
            outcome_source: Decides each simulated delivery
            success_probability: Chance of a successful delivery
            concurrency: Maximum parallel log appends (1 = sequential)
            clock: Timestamp provider for log entries
        """
        if not 0.0 <= success_probability <= 1.0:
            raise ValueError(f"success_probability must be within [0, 1], got {success_probability}")

        self.customer_store = customer_store
        self.campaign_store = campaign_store
        self.delivery_log = delivery_log
        self.outcome_source = outcome_source
        self.success_probability = success_probability
        self.concurrency = max(1, concurrency)
        self._clock = clock

    async def dispatch_campaign(self, campaign_id: str) -> DispatchResult:
        """
        Load a campaign and the current population, then dispatch.

        Args:
            campaign_id: Campaign ID

        Returns:
            Totals of the run

        Raises:
            NotFoundError: campaign does not exist (nothing is logged)
            StoreError: a store call failed
        """
        campaign = await self._store_call(
            "load_campaign", campaign_id, self.campaign_store.get(campaign_id)
        )
        if campaign is None:
            logger.error(f"Campaign {campaign_id} not found", extra={"campaign_id": campaign_id})
            raise NotFoundError("Campaign", identifier=str(campaign_id))

        population = await self._store_call(
            "load_population", campaign_id, self.customer_store.list_all()
        )
        return await self.dispatch(campaign, population)

    async def dispatch(self, campaign: Campaign, population: Sequence[Customer]) -> DispatchResult:
        """
        Run one dispatch of a campaign over a population snapshot.

        Args:
            campaign: Campaign to dispatch (its totals are replaced)
            population: Customers to match against

        Returns:
            DispatchResult with sent, failed, total and log append failures
        """
        matched = match_audience(population, campaign.rule_set)
        logger.info(
            f"Dispatching campaign {campaign.id}: {len(matched)}/{len(population)} customers matched",
            extra={"campaign_id": campaign.id},
        )

        if self.concurrency == 1:
            results = [
                await self._deliver(campaign, customer, self._draw()) for customer in matched
            ]
        else:
            results = await self._deliver_parallel(campaign, matched)

        sent = sum(1 for entry, _ in results if entry.status == DeliveryStatus.SENT)
        failed = len(results) - sent
        log_errors = sum(1 for _, appended in results if not appended)

        campaign.mark_dispatched(sent, failed, self._clock())
        await self._store_call("save_campaign", campaign.id, self.campaign_store.save(campaign))

        if log_errors:
            logger.warning(
                f"Campaign {campaign.id}: {log_errors} delivery log entries could not be written",
                extra={"campaign_id": campaign.id},
            )
        logger.info(
            f"Campaign {campaign.id}: {sent} sent, {failed} failed, {len(matched)} total",
            extra={"campaign_id": campaign.id},
        )
        return DispatchResult(sent=sent, failed=failed, total=len(matched), log_errors=log_errors)

    def _draw(self) -> bool:
        return self.outcome_source.next_outcome(self.success_probability)

    async def _deliver_parallel(
        self, campaign: Campaign, matched: List[Customer]
    ) -> List[Tuple[DeliveryLogEntry, bool]]:
        # Outcomes are drawn in iteration order before fanning out
        outcomes = [self._draw() for _ in matched]
        semaphore = asyncio.Semaphore(self.concurrency)

        async def bounded(customer: Customer, delivered: bool):
            async with semaphore:
                return await self._deliver(campaign, customer, delivered)

        return list(
            await asyncio.gather(
                *(bounded(customer, ok) for customer, ok in zip(matched, outcomes))
            )
        )

    async def _deliver(
        self, campaign: Campaign, customer: Customer, delivered: bool
    ) -> Tuple[DeliveryLogEntry, bool]:
        """
        Record one recipient's outcome.

        Returns:
            The log entry and whether it was appended
        """
        entry = DeliveryLogEntry(
            campaign_id=campaign.id,
            customer_id=customer.id,
            status=DeliveryStatus.SENT if delivered else DeliveryStatus.FAILED,
            timestamp=self._clock(),
        )
        try:
            await self.delivery_log.append(entry)
        except Exception as e:
            logger.error(
                f"Error appending delivery log for {customer.id}: {e}",
                extra={"campaign_id": campaign.id, "customer_id": customer.id},
            )
            return entry, False
        return entry, True

    async def _store_call(self, stage: str, campaign_id: str, call: Awaitable[T]) -> T:
        """Await a store call, attaching the campaign id and stage to failures."""
        try:
            return await call
        except StoreError as e:
            e.details.setdefault("campaign_id", campaign_id)
            raise
        except Exception as e:
            raise StoreError(
                f"Store call failed during {stage}",
                stage=stage,
                details={"campaign_id": campaign_id},
                original_error=e,
            ) from e
