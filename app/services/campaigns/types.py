"""
Types and enums for campaigns and delivery logs.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional

from app.core.exceptions import ValidationError
from app.core.timezone import iso_utc
from app.repositories.base import parse_datetime
from app.services.audience.rules import Logic, Rule, RuleSet

logger = logging.getLogger(__name__)


class CampaignStatus(str, Enum):
    """
    Campaign lifecycle.

    CREATED -> DISPATCHED on the first dispatch run; every later run keeps
    DISPATCHED and replaces the totals.
    """

    CREATED = "created"
    DISPATCHED = "dispatched"


class DeliveryStatus(str, Enum):
    """Simulated outcome for one recipient."""

    SENT = "sent"
    FAILED = "failed"


def _iso(dt: Optional[datetime]) -> Optional[str]:
    return iso_utc(dt) if dt else None


@dataclass
class Campaign:
    """Campaign configuration plus the totals of its latest dispatch run."""

    id: str
    name: str
    rule_set: RuleSet = field(default_factory=RuleSet)
    audience_size_estimate: int = 0
    sent: int = 0
    failed: int = 0
    status: CampaignStatus = CampaignStatus.CREATED
    created_at: Optional[datetime] = None
    dispatched_at: Optional[datetime] = None

    def mark_dispatched(self, sent: int, failed: int, at: datetime) -> None:
        """Replace the totals with the ones of a finished run."""
        self.sent = sent
        self.failed = failed
        self.status = CampaignStatus.DISPATCHED
        self.dispatched_at = at

    @classmethod
    def from_db_row(cls, row: dict) -> "Campaign":
        """Build from a database row."""
        # Older rows stored AND/OR; anything unknown combines like OR
        try:
            logic = Logic.parse(row.get("logic"))
        except ValidationError:
            logger.warning(f"Campaign {row.get('id')} has unknown logic {row.get('logic')!r}")
            logic = Logic.ANY

        try:
            status = CampaignStatus(row.get("status", "created"))
        except ValueError:
            status = CampaignStatus.CREATED

        return cls(
            id=str(row["id"]),
            name=row.get("name", ""),
            rule_set=RuleSet(
                rules=tuple(Rule.from_dict(r) for r in (row.get("rules") or [])),
                logic=logic,
            ),
            audience_size_estimate=row.get("audience_size_estimate") or 0,
            sent=row.get("sent") or 0,
            failed=row.get("failed") or 0,
            status=status,
            created_at=parse_datetime(row.get("created_at")),
            dispatched_at=parse_datetime(row.get("dispatched_at")),
        )

    def to_dict(self) -> dict:
        """Wire representation."""
        return {
            "id": self.id,
            "name": self.name,
            "rules": self.rule_set.rules_to_list(),
            "logic": self.rule_set.logic.value,
            "audienceSize": self.audience_size_estimate,
            "sent": self.sent,
            "failed": self.failed,
            "status": self.status.value,
            "createdAt": _iso(self.created_at),
            "dispatchedAt": _iso(self.dispatched_at),
        }


@dataclass(frozen=True)
class DeliveryLogEntry:
    """One recipient's outcome in one dispatch run. Append-only."""

    campaign_id: str
    customer_id: str
    status: DeliveryStatus
    timestamp: datetime

    def to_db_row(self) -> dict:
        return {
            "campaign_id": self.campaign_id,
            "customer_id": self.customer_id,
            "status": self.status.value,
            "timestamp": iso_utc(self.timestamp),
        }


@dataclass(frozen=True)
class EnrichedDeliveryLog:
    """Delivery log row joined with its customer and campaign."""

    id: str
    campaign_id: str
    customer_id: str
    status: DeliveryStatus
    timestamp: Optional[datetime]
    customer: Optional[dict] = None
    campaign: Optional[dict] = None

    @classmethod
    def from_db_row(cls, row: dict) -> "EnrichedDeliveryLog":
        return cls(
            id=str(row.get("id", "")),
            campaign_id=str(row.get("campaign_id", "")),
            customer_id=str(row.get("customer_id", "")),
            status=DeliveryStatus(row.get("status", "sent")),
            timestamp=parse_datetime(row.get("timestamp")),
            customer=row.get("customer"),
            campaign=row.get("campaign"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "campaignId": self.campaign_id,
            "customerId": self.customer_id,
            "status": self.status.value,
            "timestamp": _iso(self.timestamp),
            "customer": self.customer,
            "campaign": self.campaign,
        }


@dataclass(frozen=True)
class DispatchResult:
    """Totals of one dispatch run."""

    sent: int
    failed: int
    total: int
    log_errors: int = 0

    def to_dict(self) -> dict:
        return {
            "sent": self.sent,
            "failed": self.failed,
            "total": self.total,
            "logErrors": self.log_errors,
        }


@dataclass(frozen=True)
class CampaignReport:
    """
    Delivery report for a campaign.

    `last_run_*` come from the campaign aggregate (latest run only);
    `logged_*` count every delivery log row, across all runs.
    """

    campaign_id: str
    name: str
    status: CampaignStatus
    audience_size_estimate: int
    last_run_sent: int
    last_run_failed: int
    logged_sent: int
    logged_failed: int
    dispatched_at: Optional[datetime] = None

    @property
    def total_logged(self) -> int:
        return self.logged_sent + self.logged_failed

    @property
    def delivery_rate(self) -> float:
        if not self.total_logged:
            return 0.0
        return self.logged_sent / self.total_logged

    def to_dict(self) -> dict:
        return {
            "campaignId": self.campaign_id,
            "name": self.name,
            "status": self.status.value,
            "audienceSize": self.audience_size_estimate,
            "lastRun": {
                "sent": self.last_run_sent,
                "failed": self.last_run_failed,
                "total": self.last_run_sent + self.last_run_failed,
                "dispatchedAt": _iso(self.dispatched_at),
            },
            "deliveries": {
                "total": self.total_logged,
                "sent": self.logged_sent,
                "failed": self.logged_failed,
                "deliveryRate": self.delivery_rate,
            },
        }
