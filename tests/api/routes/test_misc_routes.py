"""
Tests for logs, customers, suggestions and health endpoints.
"""
from datetime import datetime, timezone

from app.services.campaigns.types import DeliveryStatus, EnrichedDeliveryLog
from tests.factories import make_customer


class TestLogs:
    def test_logs_are_enriched(self, client, mock_service):
        mock_service.list_delivery_logs.return_value = [
            EnrichedDeliveryLog(
                id="1",
                campaign_id="camp-1",
                customer_id="c-1",
                status=DeliveryStatus.SENT,
                timestamp=datetime(2026, 2, 1, 9, 30, tzinfo=timezone.utc),
                customer={"id": "c-1", "name": "Ana"},
                campaign={"id": "camp-1", "name": "Big spenders"},
            )
        ]

        response = client.get("/api/logs")

        assert response.status_code == 200
        entry = response.json()[0]
        assert entry["status"] == "sent"
        assert entry["customer"]["name"] == "Ana"
        assert entry["campaign"]["name"] == "Big spenders"


class TestCustomers:
    def test_create_customer_maps_wire_names(self, client, mock_service):
        mock_service.create_customer.return_value = make_customer("c-3", name="Carla", spend=40.0)

        response = client.post("/api/customers", json={
            "name": "Carla",
            "email": "carla@example.com",
            "totalSpend": 40,
            "visitCount": 2,
            "lastOrderDate": "2026-01-15T00:00:00Z",
        })

        assert response.status_code == 201
        assert response.json()["customer"]["id"] == "c-3"
        row = mock_service.create_customer.await_args.args[0]
        assert row == {
            "name": "Carla",
            "email": "carla@example.com",
            "spend": 40.0,
            "visits": 2,
            "last_order_date": "2026-01-15T00:00:00+00:00",
        }


class TestSuggestions:
    def test_suggestion_mentions_context(self, client):
        response = client.post("/api/ai-message-suggestions", json={
            "messageContext": "winter sale",
            "userPreferences": "loyal customers",
        })

        assert response.status_code == 200
        message = response.json()["suggestedMessage"]
        assert "winter sale" in message
        assert "loyal customers" in message


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client):
        assert client.get("/").json()["status"] == "running"
