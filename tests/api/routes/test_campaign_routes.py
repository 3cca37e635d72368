"""
Tests for the campaign endpoints.
"""
from app.core.exceptions import NotFoundError, StoreError, ValidationError
from app.services.audience.rules import Logic, Rule
from app.services.campaigns.types import (
    CampaignReport,
    CampaignStatus,
    DispatchResult,
)


class TestCreateCampaign:
    def test_create_returns_201_with_server_estimate(self, client, mock_service, campaign):
        mock_service.create_campaign.return_value = campaign

        response = client.post("/api/campaigns", json={
            "name": "Big spenders",
            "rules": [{"field": "spend", "operator": ">", "value": 50}],
            "logic": "ALL",
            "audienceSize": 999,
        })

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == "camp-1"
        assert data["audienceSize"] == 1
        assert data["status"] == "created"

        name, rule_set = mock_service.create_campaign.await_args.args
        assert name == "Big spenders"
        assert rule_set.rules == (Rule("spend", ">", 50),)
        assert rule_set.logic == Logic.ALL

    def test_or_logic_is_accepted(self, client, mock_service, campaign):
        mock_service.create_campaign.return_value = campaign

        response = client.post("/api/campaigns", json={
            "name": "Anyone",
            "rules": [],
            "logic": "OR",
        })

        assert response.status_code == 201
        assert mock_service.create_campaign.await_args.args[1].logic == Logic.ANY

    def test_unknown_logic_returns_400(self, client, mock_service):
        response = client.post("/api/campaigns", json={
            "name": "Broken",
            "rules": [],
            "logic": "XOR",
        })

        assert response.status_code == 400
        assert response.json()["error"] == "ValidationError"
        mock_service.create_campaign.assert_not_awaited()

    def test_blank_name_returns_400(self, client, mock_service):
        mock_service.create_campaign.side_effect = ValidationError("Campaign name is required")

        response = client.post("/api/campaigns", json={"name": " ", "rules": []})

        assert response.status_code == 400

    def test_missing_name_is_rejected_by_schema(self, client):
        response = client.post("/api/campaigns", json={"rules": []})

        assert response.status_code == 422


class TestListCampaigns:
    def test_list(self, client, mock_service, campaign):
        mock_service.list_campaigns.return_value = [campaign]

        response = client.get("/api/campaigns")

        assert response.status_code == 200
        assert [c["id"] for c in response.json()] == ["camp-1"]


class TestSendCampaign:
    def test_send_returns_totals(self, client, mock_dispatcher):
        mock_dispatcher.dispatch_campaign.return_value = DispatchResult(sent=9, failed=1, total=10)

        response = client.post("/api/campaigns/camp-1/send")

        assert response.status_code == 200
        assert response.json() == {
            "message": "Campaign sent",
            "sent": 9,
            "failed": 1,
            "total": 10,
            "logErrors": 0,
        }
        mock_dispatcher.dispatch_campaign.assert_awaited_once_with("camp-1")

    def test_log_write_failures_are_reported(self, client, mock_dispatcher):
        mock_dispatcher.dispatch_campaign.return_value = DispatchResult(
            sent=8, failed=2, total=10, log_errors=10
        )

        response = client.post("/api/campaigns/camp-1/send")

        assert response.status_code == 200
        data = response.json()
        assert data["logErrors"] == 10
        assert (data["sent"], data["failed"], data["total"]) == (8, 2, 10)

    def test_unknown_campaign_returns_404(self, client, mock_dispatcher):
        mock_dispatcher.dispatch_campaign.side_effect = NotFoundError("Campaign", identifier="nope")

        response = client.post("/api/campaigns/nope/send")

        assert response.status_code == 404
        assert response.json()["details"] == {"id": "nope"}

    def test_store_failure_returns_503(self, client, mock_dispatcher):
        mock_dispatcher.dispatch_campaign.side_effect = StoreError(
            "customers store failed during load_population",
            stage="load_population",
            details={"campaign_id": "camp-1"},
        )

        response = client.post("/api/campaigns/camp-1/send")

        assert response.status_code == 503
        assert response.json()["details"]["stage"] == "load_population"


class TestCampaignReport:
    def test_report(self, client, mock_service):
        mock_service.campaign_report.return_value = CampaignReport(
            campaign_id="camp-1",
            name="Big spenders",
            status=CampaignStatus.DISPATCHED,
            audience_size_estimate=1,
            last_run_sent=1,
            last_run_failed=0,
            logged_sent=3,
            logged_failed=1,
        )

        response = client.get("/api/campaigns/camp-1/report")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "dispatched"
        assert data["deliveries"]["deliveryRate"] == 0.75
        assert data["lastRun"]["total"] == 1


class TestCampaignLogs:
    def test_logs_of_campaign(self, client, mock_service):
        mock_service.list_campaign_logs.return_value = []

        response = client.get("/api/campaigns/camp-1/logs")

        assert response.status_code == 200
        assert response.json() == []
        mock_service.list_campaign_logs.assert_awaited_once_with("camp-1")

    def test_unknown_campaign_returns_404(self, client, mock_service):
        mock_service.list_campaign_logs.side_effect = NotFoundError("Campaign", identifier="nope")

        assert client.get("/api/campaigns/nope/logs").status_code == 404
