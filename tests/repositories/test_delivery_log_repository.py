"""
Tests for DeliveryLogRepository.
"""
import pytest

from app.core.exceptions import StoreError
from app.repositories.delivery_log import ENRICHED_SELECT, DeliveryLogRepository
from app.services.campaigns.types import DeliveryLogEntry, DeliveryStatus
from tests.factories import make_response


class TestAppend:
    @pytest.mark.asyncio
    async def test_inserts_row(self, mock_supabase_factory, fixed_now):
        mock = mock_supabase_factory([{"id": 1}])
        repo = DeliveryLogRepository(mock)

        await repo.append(DeliveryLogEntry("camp-1", "c-1", DeliveryStatus.SENT, fixed_now))

        mock.table.assert_called_with("delivery_logs")
        mock.insert.assert_called_once_with({
            "campaign_id": "camp-1",
            "customer_id": "c-1",
            "status": "sent",
            "timestamp": "2026-02-01T09:30:00+00:00",
        })

    @pytest.mark.asyncio
    async def test_failure_raises_store_error(self, mock_supabase_factory, fixed_now):
        mock = mock_supabase_factory()
        mock.execute.side_effect = Exception("insert rejected")
        repo = DeliveryLogRepository(mock)

        with pytest.raises(StoreError) as exc_info:
            await repo.append(DeliveryLogEntry("camp-1", "c-1", DeliveryStatus.FAILED, fixed_now))

        assert exc_info.value.stage == "append_delivery_log"
        assert exc_info.value.details["customer_id"] == "c-1"


class TestListAll:
    @pytest.mark.asyncio
    async def test_enriched_newest_first(self, mock_supabase_factory):
        mock = mock_supabase_factory([
            {
                "id": 2,
                "campaign_id": "camp-1",
                "customer_id": "c-1",
                "status": "failed",
                "timestamp": "2026-02-01T09:30:00+00:00",
                "customer": {"id": "c-1", "name": "Ana"},
                "campaign": {"id": "camp-1", "name": "Big spenders"},
            },
        ])
        repo = DeliveryLogRepository(mock)

        logs = await repo.list_all()

        mock.select.assert_called_once_with(ENRICHED_SELECT)
        mock.order.assert_called_once_with("timestamp", desc=True)
        assert logs[0].status == DeliveryStatus.FAILED
        assert logs[0].customer["name"] == "Ana"


class TestCountByStatus:
    @pytest.mark.asyncio
    async def test_one_count_per_status(self, mock_supabase_factory):
        mock = mock_supabase_factory()
        mock.execute.side_effect = [make_response(count=17), make_response(count=3)]
        repo = DeliveryLogRepository(mock)

        counts = await repo.count_by_status("camp-1")

        assert counts == {DeliveryStatus.SENT: 17, DeliveryStatus.FAILED: 3}
        mock.select.assert_called_with("id", count="exact")

    @pytest.mark.asyncio
    async def test_missing_count_is_zero(self, mock_supabase_factory):
        mock = mock_supabase_factory()
        mock.execute.side_effect = [make_response(), make_response()]
        repo = DeliveryLogRepository(mock)

        counts = await repo.count_by_status("camp-1")

        assert counts == {DeliveryStatus.SENT: 0, DeliveryStatus.FAILED: 0}


class TestListByCampaign:
    @pytest.mark.asyncio
    async def test_filters_by_campaign(self, mock_supabase_factory):
        mock = mock_supabase_factory([
            {"id": 3, "campaign_id": "camp-1", "customer_id": "c-2", "status": "sent"},
            {"id": 1, "campaign_id": "camp-1", "customer_id": "c-2", "status": "failed"},
        ])
        repo = DeliveryLogRepository(mock)

        logs = await repo.list_by_campaign("camp-1")

        mock.eq.assert_called_once_with("campaign_id", "camp-1")
        assert [log.id for log in logs] == ["3", "1"]
        assert logs[0].timestamp is None
