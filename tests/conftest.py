"""
Global test configuration - shared fixtures.

Usage:
    Fixtures defined here are available to every test.
    Builders that tests call directly live in tests/factories.py.
"""

import pytest
from datetime import datetime, timezone

from app.services.audience.rules import Logic, Rule, RuleSet
from app.services.campaigns.types import Campaign
from tests.factories import make_customer, make_mock_supabase


@pytest.fixture
def population():
    """The two-customer population used by the reference scenarios."""
    return [
        make_customer("c-1", name="Ana", spend=100, visits=5),
        make_customer("c-2", name="Bruno", spend=10, visits=1),
    ]


@pytest.fixture
def big_spenders():
    """spend > 50, ALL."""
    return RuleSet(rules=(Rule("spend", ">", 50),), logic=Logic.ALL)


@pytest.fixture
def campaign(big_spenders):
    """Freshly created campaign targeting big spenders."""
    return Campaign(
        id="camp-1",
        name="Big spenders",
        rule_set=big_spenders,
        audience_size_estimate=1,
        created_at=datetime(2026, 1, 10, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def fixed_now():
    return datetime(2026, 2, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def mock_supabase_factory():
    """
    Factory for Supabase mocks with specific rows.

    Usage:
        def test_something(mock_supabase_factory):
            mock = mock_supabase_factory([{"id": "123"}])
    """
    return make_mock_supabase
