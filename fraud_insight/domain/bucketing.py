"""Time-bucket aggregation - per-calendar-day rollups for timeline charts"""

from datetime import date
from typing import Dict, List, Sequence, Set

from fraud_insight.domain.models import TimeBucket, TransactionRecord, TrendSummary
from fraud_insight.utils.date_utils import local_day


def bucket_by_day(records: Sequence[TransactionRecord]) -> List[TimeBucket]:
    """
    Group records by local calendar day.

    Per bucket:
    - count: records that day
    - fraud_count: records flagged as fraud
    - total_amount: sum of amounts
    - device_changes: distinct non-empty device models seen that day

    Buckets come out in first-seen order of their date key, which is
    chronological when the input is chronologically sorted. Windowing is
    left to the caller (see latest_window).
    """
    counts: Dict[date, int] = {}
    fraud_counts: Dict[date, int] = {}
    amounts: Dict[date, float] = {}
    devices: Dict[date, Set[str]] = {}

    for record in records:
        day = local_day(record.timestamp)
        if day not in counts:
            counts[day] = 0
            fraud_counts[day] = 0
            amounts[day] = 0.0
            devices[day] = set()

        counts[day] += 1
        if record.is_fraud:
            fraud_counts[day] += 1
        amounts[day] += record.amount
        if record.device_model:
            devices[day].add(record.device_model)

    return [
        TimeBucket(
            date=day,
            count=counts[day],
            fraud_count=fraud_counts[day],
            total_amount=amounts[day],
            device_changes=len(devices[day]),
        )
        for day in counts
    ]


def latest_window(buckets: Sequence[TimeBucket], size: int = 30) -> List[TimeBucket]:
    """Last `size` buckets"""
    if size <= 0:
        return []
    return list(buckets[-size:])


def scale_to_percent(values: Sequence[float], floor: float = 0.0) -> List[float]:
    """
    Bar heights as a percentage of the largest value.

    The denominator is max(1, largest value) so an all-zero or empty series
    never divides by zero. Each height is raised to at least `floor` percent.
    """
    if not values:
        return []
    denominator = max(max(values), 1)
    return [max(value / denominator * 100, floor) for value in values]


def summarize_trend(values: Sequence[float]) -> TrendSummary:
    """Average per point and peak of a series; zeros when empty"""
    if not values:
        return TrendSummary(average_per_day=0.0, peak=0.0)
    return TrendSummary(average_per_day=sum(values) / len(values), peak=max(values))
