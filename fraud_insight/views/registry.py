"""Per-process set of page views and the clients they share"""

from dataclasses import dataclass

import httpx

from fraud_insight.config import Settings
from fraud_insight.infrastructure.clients.auth import AuthClient
from fraud_insight.infrastructure.clients.statistics import StatisticsClient
from fraud_insight.infrastructure.clients.transactions import TransactionClient
from fraud_insight.infrastructure.session import AuthSession
from fraud_insight.views.analysis import TransactionAnalysisView
from fraud_insight.views.customer import CustomerView
from fraud_insight.views.dashboard import DashboardView
from fraud_insight.views.timeline import TimelineView


@dataclass
class Clients:
    statistics: StatisticsClient
    transactions: TransactionClient
    auth: AuthClient


def build_clients(
    config: Settings,
    session: AuthSession,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Clients:
    """Clients read the bearer token from the session at call time"""
    options = dict(
        base_url=config.statistics_api_base,
        timeout=config.http_timeout_seconds,
        token_provider=session.current_token,
        transport=transport,
    )
    return Clients(
        statistics=StatisticsClient(**options),
        transactions=TransactionClient(**options),
        auth=AuthClient(**options),
    )


class ViewRegistry:
    """
    One view per page, each owning its own snapshot. Nothing is shared
    between views. All snapshots are dropped when the session logs out.
    """

    def __init__(self, config: Settings, clients: Clients, session: AuthSession):
        self.config = config
        self.clients = clients
        thresholds = config.risk_thresholds()
        self.thresholds = thresholds

        self.dashboard = DashboardView(
            clients.statistics,
            top_limit=config.top_customers_limit,
            thresholds=thresholds,
        )
        self.timeline = TimelineView(
            clients.transactions,
            fetch_size=config.timeline_fetch_size,
            window_days=config.timeline_window_days,
            row_limit=config.timeline_row_limit,
            thresholds=thresholds,
        )
        self.analysis = TransactionAnalysisView(
            clients.transactions,
            fetch_size=config.analysis_fetch_size,
            row_limit=config.analysis_row_limit,
            thresholds=thresholds,
        )
        session.subscribe(self.reset)

    def customer(self, customer_id: str) -> CustomerView:
        """Fresh view per visit; customer pages keep no state between navigations"""
        return CustomerView(
            self.clients.statistics,
            customer_id,
            timeline_limit=self.config.customer_timeline_limit,
            thresholds=self.thresholds,
        )

    def reset(self) -> None:
        self.dashboard.reset()
        self.timeline.reset()
        self.analysis.reset()
