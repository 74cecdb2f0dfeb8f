"""Dashboard: KPIs, model metrics, trends and top risky customers"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional

from fraud_insight.domain.bucketing import scale_to_percent, summarize_trend
from fraud_insight.domain.classifier import classify_customer_risk_level
from fraud_insight.domain.kpi import summarize
from fraud_insight.domain.models import (
    BehavioralInsights,
    DashboardStats,
    ModelMetrics,
    RiskLevel,
    RiskThresholds,
    RiskyCustomer,
    TrendPoint,
    TrendSummary,
    DEFAULT_THRESHOLDS,
)
from fraud_insight.infrastructure.clients.statistics import StatisticsClient
from fraud_insight.infrastructure.observability.logging import log_view_render
from fraud_insight.views.base import SnapshotView

logger = logging.getLogger(__name__)

TREND_BAR_FLOOR = 5.0


@dataclass(frozen=True)
class RankedCustomer:
    rank: int
    customer: RiskyCustomer
    risk_level: RiskLevel


@dataclass(frozen=True)
class TrendBar:
    point: TrendPoint
    height: float


@dataclass(frozen=True)
class DecisionBreakdown:
    blocked: int
    review: int
    approved: int


@dataclass(frozen=True)
class DashboardPage:
    total_transactions: int
    fraud_count: int
    legitimate_count: int
    fraud_rate: float
    total_amount: float
    fraud_amount: float
    avg_transaction_amount: float
    prevented_losses: float
    decisions: DecisionBreakdown
    model_metrics: ModelMetrics
    counts_consistent: bool
    top_risky_customers: List[RankedCustomer]
    fraud_trend: List[TrendBar]
    fraud_trend_summary: TrendSummary
    amount_trend: List[TrendBar]
    amount_trend_summary: TrendSummary
    behavioral_insights: BehavioralInsights
    error: Optional[str] = None


class DashboardView(SnapshotView[DashboardStats]):
    """Owns the dashboard statistics snapshot"""

    name = "dashboard"

    def __init__(
        self,
        client: StatisticsClient,
        top_limit: int = 10,
        thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
    ):
        super().__init__()
        self.client = client
        self.top_limit = top_limit
        self.thresholds = thresholds

    async def _fetch(self) -> DashboardStats:
        return await self.client.get_dashboard_stats()

    def render(self, request_id: str = "unknown") -> Optional[DashboardPage]:
        """Derive the dashboard page; None until a snapshot has been loaded"""
        stats = self.snapshot
        if stats is None:
            return None

        start_time = time.time()

        # Metrics are recomputed from the raw counts, not taken from the backend's ratios
        metrics = summarize(stats.confusion, roc_auc=stats.roc_auc, last_updated=stats.metrics_updated)
        consistent = stats.confusion.matches_total(stats.total_transactions)
        if not consistent:
            logger.warning(
                "Confusion counts do not add up to scored transactions",
                extra={"counts_total": stats.confusion.total, "total_transactions": stats.total_transactions},
            )

        top = [
            RankedCustomer(
                rank=index + 1,
                customer=customer,
                risk_level=classify_customer_risk_level(customer.fraud_rate, self.thresholds),
            )
            for index, customer in enumerate(stats.top_risky_customers[: self.top_limit])
        ]

        fraud_counts = [p.count for p in stats.fraud_trend]
        amounts = [p.amount for p in stats.amount_trend]

        page = DashboardPage(
            total_transactions=stats.total_transactions,
            fraud_count=stats.fraud_count,
            legitimate_count=stats.legitimate_count,
            fraud_rate=stats.fraud_rate,
            total_amount=stats.total_amount,
            fraud_amount=stats.fraud_amount,
            avg_transaction_amount=stats.avg_transaction_amount,
            prevented_losses=stats.prevented_losses or stats.fraud_amount,
            decisions=DecisionBreakdown(
                blocked=stats.blocked_count,
                review=stats.review_count,
                approved=stats.approved_count,
            ),
            model_metrics=metrics,
            counts_consistent=consistent,
            top_risky_customers=top,
            fraud_trend=[
                TrendBar(point=p, height=h)
                for p, h in zip(stats.fraud_trend, scale_to_percent(fraud_counts, TREND_BAR_FLOOR))
            ],
            fraud_trend_summary=summarize_trend(fraud_counts),
            amount_trend=[
                TrendBar(point=p, height=h)
                for p, h in zip(stats.amount_trend, scale_to_percent(amounts, TREND_BAR_FLOOR))
            ],
            amount_trend_summary=summarize_trend(amounts),
            behavioral_insights=stats.behavioral_insights,
            error=self.error,
        )

        log_view_render(self.name, stats.total_transactions, len(top), (time.time() - start_time) * 1000, request_id)
        return page
