"""Transaction timeline: filter, rank, classify and bucket the full snapshot"""

import time
from dataclasses import dataclass
from typing import List, Optional

from fraud_insight.domain.bucketing import bucket_by_day, latest_window, scale_to_percent
from fraud_insight.domain.classifier import classify_decision, format_probability
from fraud_insight.domain.filtering import filter_records
from fraud_insight.domain.models import (
    Decision,
    FilterCriteria,
    FilteredTransactionsSummary,
    RiskThresholds,
    TimeBucket,
    TransactionRecord,
    DEFAULT_THRESHOLDS,
)
from fraud_insight.domain.profiles import summarize_records
from fraud_insight.domain.ranking import rank_records
from fraud_insight.infrastructure.clients.transactions import TransactionClient
from fraud_insight.infrastructure.observability.logging import log_view_render
from fraud_insight.infrastructure.observability.metrics import record_decisions, render_duration_histogram
from fraud_insight.views.base import SnapshotView

# Minimum bar heights (percent) so small days stay visible
COUNT_BAR_FLOOR = 5.0
DEVICE_BAR_FLOOR = 10.0


@dataclass(frozen=True)
class TimelineRow:
    transaction: TransactionRecord
    decision: Decision
    probability_display: str


@dataclass(frozen=True)
class BucketBar:
    bucket: TimeBucket
    count_height: float
    amount_height: float
    device_height: float


@dataclass(frozen=True)
class TimelinePage:
    criteria: FilterCriteria
    rows: List[TimelineRow]
    shown: int
    matched: int
    total: int
    buckets: List[BucketBar]
    summary: FilteredTransactionsSummary
    error: Optional[str] = None


class TimelineView(SnapshotView[List[TransactionRecord]]):
    """Owns the batch timeline snapshot (one large page of transactions)"""

    name = "timeline"

    def __init__(
        self,
        client: TransactionClient,
        fetch_size: int = 1000,
        window_days: int = 30,
        row_limit: int = 100,
        thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
    ):
        super().__init__()
        self.client = client
        self.fetch_size = fetch_size
        self.window_days = window_days
        self.row_limit = row_limit
        self.thresholds = thresholds

    async def _fetch(self) -> List[TransactionRecord]:
        return await self.client.list_transactions(page=0, size=self.fetch_size)

    def render(self, criteria: FilterCriteria, request_id: str = "unknown") -> TimelinePage:
        """
        Derive the timeline page from the current snapshot.

        Flow: filter -> rank by criteria.sort_by -> classify decisions ->
        bucket by day (window of the latest N days) -> bar heights.
        Identical snapshot and criteria always give an identical page.
        """
        start_time = time.time()
        records = self.snapshot or []

        with render_duration_histogram.labels(view=self.name).time():
            filtered = filter_records(records, criteria)
            matched = rank_records(filtered, criteria.sort_by)

            rows = [
                TimelineRow(
                    transaction=record,
                    decision=classify_decision(record.fraud_probability, self.thresholds),
                    probability_display=format_probability(record.fraud_probability),
                )
                for record in matched[: self.row_limit]
            ]

            # Bucket in chronological order so the window holds the most recent days
            chronological = sorted(filtered, key=lambda record: record.timestamp)
            window = latest_window(bucket_by_day(chronological), self.window_days)
            count_heights = scale_to_percent([b.count for b in window], COUNT_BAR_FLOOR)
            amount_heights = scale_to_percent([b.total_amount for b in window], COUNT_BAR_FLOOR)
            device_heights = scale_to_percent([b.device_changes for b in window], DEVICE_BAR_FLOOR)

            bars = [
                BucketBar(bucket=b, count_height=c, amount_height=a, device_height=d)
                for b, c, a, d in zip(window, count_heights, amount_heights, device_heights)
            ]

        record_decisions(row.decision for row in rows)
        log_view_render(self.name, len(records), len(rows), (time.time() - start_time) * 1000, request_id)

        return TimelinePage(
            criteria=criteria,
            rows=rows,
            shown=len(rows),
            matched=len(matched),
            total=len(records),
            buckets=bars,
            summary=summarize_records(matched),
            error=self.error,
        )
