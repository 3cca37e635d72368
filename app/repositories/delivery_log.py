"""
Repository for the delivery log.

Append-only: rows are never updated or deleted.
"""

import logging
from typing import List

from app.services.campaigns.types import (
    DeliveryLogEntry,
    DeliveryStatus,
    EnrichedDeliveryLog,
)

from .base import BaseRepository

logger = logging.getLogger(__name__)

# PostgREST embedding through the campaign_id / customer_id foreign keys
ENRICHED_SELECT = "*, customer:customers(*), campaign:campaigns(*)"


class DeliveryLogRepository(BaseRepository[EnrichedDeliveryLog]):
    """Delivery Log Store."""

    @property
    def table_name(self) -> str:
        return "delivery_logs"

    async def append(self, entry: DeliveryLogEntry) -> None:
        """Append one entry."""
        self._execute(
            self._table().insert(entry.to_db_row()),
            "append_delivery_log",
            campaign_id=entry.campaign_id,
            customer_id=entry.customer_id,
        )

    async def list_all(self) -> List[EnrichedDeliveryLog]:
        """Entries joined with customer and campaign, newest first."""
        query = self._table().select(ENRICHED_SELECT).order("timestamp", desc=True)
        response = self._execute(query, "list_delivery_logs")
        return [EnrichedDeliveryLog.from_db_row(row) for row in (response.data or [])]

    async def list_by_campaign(self, campaign_id: str) -> List[EnrichedDeliveryLog]:
        """Entries of one campaign, across all dispatch runs, newest first."""
        query = (
            self._table()
            .select(ENRICHED_SELECT)
            .eq("campaign_id", campaign_id)
            .order("timestamp", desc=True)
        )
        response = self._execute(query, "list_delivery_logs", campaign_id=campaign_id)
        return [EnrichedDeliveryLog.from_db_row(row) for row in (response.data or [])]

    async def count_by_status(self, campaign_id: str) -> dict[DeliveryStatus, int]:
        """
        Count logged deliveries of a campaign, across all dispatch runs.

        Returns:
            Count per delivery status
        """
        counts = {}
        for status in DeliveryStatus:
            query = (
                self._table()
                .select("id", count="exact")
                .eq("campaign_id", campaign_id)
                .eq("status", status.value)
            )
            response = self._execute(query, "count_delivery_logs", campaign_id=campaign_id)
            counts[status] = response.count or 0
        return counts
