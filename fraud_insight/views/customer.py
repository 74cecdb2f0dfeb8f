"""Customer analytics page: risk profile, recent timeline and amount series"""

from dataclasses import dataclass
from typing import List, Optional

from fraud_insight.domain.bucketing import scale_to_percent
from fraud_insight.domain.classifier import classify_risk_score
from fraud_insight.domain.models import (
    AmountPoint,
    CustomerAnalytics,
    CustomerRiskProfile,
    DeviceUsage,
    RiskBand,
    RiskThresholds,
    TimelineEntry,
    DEFAULT_THRESHOLDS,
)
from fraud_insight.domain.profiles import build_customer_profile
from fraud_insight.infrastructure.clients.statistics import StatisticsClient
from fraud_insight.views.base import SnapshotView


@dataclass(frozen=True)
class CustomerTimelineRow:
    entry: TimelineEntry
    risk_band: RiskBand


@dataclass(frozen=True)
class AmountBar:
    point: AmountPoint
    height: float


@dataclass(frozen=True)
class CustomerPage:
    profile: CustomerRiskProfile
    latest_phone_model: Optional[str]
    latest_os_version: Optional[str]
    timeline: List[CustomerTimelineRow]
    more_transactions: int
    amount_series: List[AmountBar]
    device_usage: List[DeviceUsage]
    main_risk_factors: List[str]
    behavioral_anomalies: List[str]
    recommendations: List[str]
    error: Optional[str] = None


class CustomerView(SnapshotView[CustomerAnalytics]):
    """Snapshot of one customer's analytics; discarded when the analyst navigates away"""

    name = "customer"

    def __init__(
        self,
        client: StatisticsClient,
        customer_id: str,
        timeline_limit: int = 20,
        thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
    ):
        super().__init__()
        self.client = client
        self.customer_id = customer_id
        self.timeline_limit = timeline_limit
        self.thresholds = thresholds

    async def _fetch(self) -> CustomerAnalytics:
        return await self.client.get_customer_analytics(self.customer_id)

    def render(self) -> Optional[CustomerPage]:
        analytics = self.snapshot
        if analytics is None:
            return None

        entries = analytics.transaction_timeline
        heights = scale_to_percent([p.amount for p in analytics.amount_timeline])

        return CustomerPage(
            profile=build_customer_profile(analytics, self.thresholds),
            latest_phone_model=analytics.latest_phone_model,
            latest_os_version=analytics.latest_os_version,
            timeline=[
                CustomerTimelineRow(entry=e, risk_band=classify_risk_score(e.risk_score, self.thresholds))
                for e in entries[: self.timeline_limit]
            ],
            more_transactions=max(len(entries) - self.timeline_limit, 0),
            amount_series=[AmountBar(point=p, height=h) for p, h in zip(analytics.amount_timeline, heights)],
            device_usage=analytics.device_usage,
            main_risk_factors=analytics.main_risk_factors,
            behavioral_anomalies=analytics.behavioral_anomalies,
            recommendations=analytics.recommendations,
            error=self.error,
        )
