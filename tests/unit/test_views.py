"""Unit tests for page views and snapshot ownership"""

import asyncio

import pytest
from unittest.mock import AsyncMock
from fraud_insight.config import Settings
from fraud_insight.domain.exceptions import StatisticsAPIError
from fraud_insight.domain.models import Decision, FilterCriteria, FraudStatus, RiskBand, RiskLevel, SortKey
from fraud_insight.infrastructure.clients import parsing
from fraud_insight.infrastructure.session import AuthSession, SessionStorage
from fraud_insight.views.analysis import TransactionAnalysisView
from fraud_insight.views.customer import CustomerView
from fraud_insight.views.dashboard import DashboardView
from fraud_insight.views.registry import Clients, ViewRegistry
from fraud_insight.views.timeline import TimelineView
from mock_backend.stats_server.main import CUSTOMERS, DASHBOARD


class GatedTransactionClient:
    """Each call blocks until the test releases it with a result or an error"""

    def __init__(self):
        self.calls = []

    async def list_transactions(self, page=0, size=50):
        gate = asyncio.Event()
        outcome = {}
        self.calls.append((gate, outcome))
        await gate.wait()
        if "error" in outcome:
            raise outcome["error"]
        return outcome["records"]

    def release(self, index, records=None, error=None):
        gate, outcome = self.calls[index]
        if error is not None:
            outcome["error"] = error
        else:
            outcome["records"] = records
        gate.set()


async def wait_for_calls(client, count):
    while len(client.calls) < count:
        await asyncio.sleep(0)


async def test_late_older_response_is_discarded(sample_records):
    """A slow first fetch completing after a newer one never replaces it"""
    client = GatedTransactionClient()
    view = TimelineView(client)

    first = asyncio.create_task(view.refresh())
    second = asyncio.create_task(view.refresh())
    await wait_for_calls(client, 2)
    assert view.loading

    client.release(1, records=sample_records[:2])
    assert await second is True
    assert not view.loading

    client.release(0, records=sample_records)
    assert await first is False
    assert [r.id for r in view.snapshot] == [1, 2]


async def test_late_older_failure_is_discarded(sample_records):
    client = GatedTransactionClient()
    view = TimelineView(client)

    first = asyncio.create_task(view.refresh())
    second = asyncio.create_task(view.refresh())
    await wait_for_calls(client, 2)

    client.release(1, records=sample_records)
    assert await second is True

    client.release(0, error=StatisticsAPIError("boom"))
    assert await first is False
    assert view.error is None
    assert len(view.snapshot) == 5


async def test_failure_keeps_previous_snapshot(sample_records):
    client = AsyncMock()
    client.list_transactions.return_value = sample_records
    view = TimelineView(client)
    await view.refresh()

    client.list_transactions.side_effect = StatisticsAPIError("Statistics API timeout after 10s")
    with pytest.raises(StatisticsAPIError):
        await view.refresh()

    assert view.snapshot == sample_records
    assert view.error == "Statistics API timeout after 10s"
    assert not view.loading

    # Manual retry clears the error
    client.list_transactions.side_effect = None
    assert await view.refresh() is True
    assert view.error is None


async def test_reset_discards_in_flight_fetch(sample_records):
    client = GatedTransactionClient()
    view = TimelineView(client)

    pending = asyncio.create_task(view.refresh())
    await wait_for_calls(client, 1)
    view.reset()

    client.release(0, records=sample_records)
    assert await pending is False
    assert view.snapshot is None


async def test_ensure_loaded_fetches_once(sample_records):
    client = AsyncMock()
    client.list_transactions.return_value = sample_records
    view = TimelineView(client, fetch_size=1000)

    await view.ensure_loaded()
    await view.ensure_loaded()

    client.list_transactions.assert_awaited_once_with(page=0, size=1000)


async def test_timeline_render(sample_records):
    client = AsyncMock()
    client.list_transactions.return_value = sample_records
    view = TimelineView(client)
    await view.refresh()

    page = view.render(FilterCriteria(sort_by=SortKey.AMOUNT))

    assert [row.transaction.id for row in page.rows] == [4, 2, 1, 3, 5]
    assert [row.decision for row in page.rows] == [
        Decision.BLOCK,
        Decision.BLOCK,
        Decision.APPROVE,
        Decision.REVIEW,
        Decision.UNKNOWN,
    ]
    assert [row.probability_display for row in page.rows] == ["97%", "90%", "20%", "55%", "N/A"]
    assert (page.shown, page.matched, page.total) == (5, 5, 5)

    assert [bar.bucket.count for bar in page.buckets] == [2, 1, 2]
    assert [bar.count_height for bar in page.buckets] == [100.0, 50.0, 100.0]
    assert [bar.device_height for bar in page.buckets] == [100.0, 50.0, 50.0]
    assert max(bar.amount_height for bar in page.buckets) == 100.0
    assert page.summary.total_amount == 13870


async def test_timeline_render_is_deterministic(sample_records):
    client = AsyncMock()
    client.list_transactions.return_value = sample_records
    view = TimelineView(client)
    await view.refresh()

    criteria = FilterCriteria(fraud_status=FraudStatus.SAFE, sort_by=SortKey.RISK)
    assert view.render(criteria) == view.render(criteria)


async def test_timeline_render_limits(sample_records):
    client = AsyncMock()
    client.list_transactions.return_value = sample_records
    view = TimelineView(client, window_days=2, row_limit=2)
    await view.refresh()

    page = view.render(FilterCriteria())

    assert [row.transaction.id for row in page.rows] == [5, 4]
    assert (page.shown, page.matched) == (2, 5)
    assert [str(bar.bucket.date) for bar in page.buckets] == ["2024-01-02", "2024-01-03"]


def test_timeline_render_without_snapshot():
    view = TimelineView(AsyncMock())
    page = view.render(FilterCriteria())
    assert page.rows == []
    assert page.buckets == []
    assert page.total == 0


async def test_dashboard_render():
    client = AsyncMock()
    client.get_dashboard_stats.return_value = parsing.parse_dashboard(DASHBOARD)
    view = DashboardView(client, top_limit=2)
    assert view.render() is None

    await view.refresh()
    page = view.render()

    assert page.model_metrics.precision == pytest.approx(0.8)
    assert page.model_metrics.accuracy == pytest.approx(0.93)
    assert page.model_metrics.roc_auc == 0.94
    assert page.counts_consistent
    assert page.prevented_losses == 410000.0
    assert page.decisions.blocked == 100

    assert [(c.rank, c.customer.customer_id, c.risk_level) for c in page.top_risky_customers] == [
        (1, "CUST-300", RiskLevel.CRITICAL),
        (2, "CUST-100", RiskLevel.HIGH),
    ]

    assert [bar.height for bar in page.fraud_trend] == [50.0, 5.0, 100.0]
    assert page.fraud_trend_summary.average_per_day == 4
    assert page.fraud_trend_summary.peak == 8


async def test_dashboard_flags_inconsistent_counts():
    client = AsyncMock()
    client.get_dashboard_stats.return_value = parsing.parse_dashboard(dict(DASHBOARD, totalTransactions=999))
    view = DashboardView(client)
    await view.refresh()

    assert view.render().counts_consistent is False


async def test_customer_render():
    client = AsyncMock()
    client.get_customer_analytics.return_value = parsing.parse_customer_analytics(CUSTOMERS["CUST-100"])
    view = CustomerView(client, "CUST-100", timeline_limit=1)
    await view.refresh()

    page = view.render()

    client.get_customer_analytics.assert_awaited_once_with("CUST-100")
    assert page.profile.risk_level == RiskLevel.HIGH
    assert page.profile.login_anomaly is True
    assert len(page.timeline) == 1
    assert page.timeline[0].risk_band == RiskBand.HIGH
    assert page.more_transactions == 1
    assert [bar.height for bar in page.amount_series] == [100.0]


async def test_analysis_render_tabs(sample_records):
    client = AsyncMock()
    client.list_transactions.return_value = sample_records
    view = TransactionAnalysisView(client)
    await view.refresh()

    page = view.render(FraudStatus.FRAUD)

    assert (page.counts.all, page.counts.fraud, page.counts.safe) == (5, 2, 3)
    assert [row.transaction.id for row in page.rows] == [2, 4]
    assert len(view.render(FraudStatus.SAFE).rows) == 3


async def test_registry_resets_views_on_logout(tmp_path, sample_records):
    session = AuthSession(SessionStorage(tmp_path / "session.json"))
    session.load()
    transactions = AsyncMock()
    transactions.list_transactions.return_value = sample_records
    clients = Clients(statistics=AsyncMock(), transactions=transactions, auth=AsyncMock())
    registry = ViewRegistry(Settings(session_file=str(tmp_path / "session.json")), clients, session)

    await registry.timeline.refresh()
    await registry.analysis.refresh()
    assert registry.timeline.has_snapshot

    await session.logout(clients.auth)

    assert registry.timeline.snapshot is None
    assert registry.analysis.snapshot is None
    assert registry.dashboard.snapshot is None


def test_registry_customer_views_are_independent(tmp_path):
    session = AuthSession(SessionStorage(tmp_path / "session.json"))
    clients = Clients(statistics=AsyncMock(), transactions=AsyncMock(), auth=AsyncMock())
    registry = ViewRegistry(Settings(customer_timeline_limit=5), clients, session)

    first = registry.customer("CUST-1")
    second = registry.customer("CUST-1")

    assert first is not second
    assert first.timeline_limit == 5
