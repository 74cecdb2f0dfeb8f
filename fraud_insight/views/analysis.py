"""Transaction analysis page: status tabs and on-demand analysis of one transaction"""

from dataclasses import dataclass
from typing import List, Optional

from fraud_insight.domain.classifier import classify_decision, format_probability
from fraud_insight.domain.filtering import filter_records
from fraud_insight.domain.models import (
    Decision,
    FilterCriteria,
    FraudStatus,
    RiskThresholds,
    TransactionAnalysis,
    TransactionRecord,
    DEFAULT_THRESHOLDS,
)
from fraud_insight.infrastructure.clients.transactions import TransactionClient
from fraud_insight.views.base import SnapshotView


@dataclass(frozen=True)
class StatusCounts:
    all: int
    fraud: int
    safe: int


@dataclass(frozen=True)
class AnalysisRow:
    transaction: TransactionRecord
    decision: Decision
    probability_display: str


@dataclass(frozen=True)
class AnalysisPage:
    status: FraudStatus
    counts: StatusCounts
    rows: List[AnalysisRow]
    error: Optional[str] = None


class TransactionAnalysisView(SnapshotView[List[TransactionRecord]]):
    """Owns the recent-transactions snapshot of the analysis page"""

    name = "analysis"

    def __init__(
        self,
        client: TransactionClient,
        fetch_size: int = 100,
        row_limit: int = 50,
        thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
    ):
        super().__init__()
        self.client = client
        self.fetch_size = fetch_size
        self.row_limit = row_limit
        self.thresholds = thresholds

    async def _fetch(self) -> List[TransactionRecord]:
        return await self.client.list_transactions(page=0, size=self.fetch_size)

    def render(self, status: FraudStatus = FraudStatus.ALL) -> AnalysisPage:
        records = self.snapshot or []
        selected = filter_records(records, FilterCriteria(fraud_status=status))
        fraud = sum(1 for r in records if r.is_fraud)

        return AnalysisPage(
            status=status,
            counts=StatusCounts(all=len(records), fraud=fraud, safe=len(records) - fraud),
            rows=[
                AnalysisRow(
                    transaction=r,
                    decision=classify_decision(r.fraud_probability, self.thresholds),
                    probability_display=format_probability(r.fraud_probability),
                )
                for r in selected[: self.row_limit]
            ],
            error=self.error,
        )

    async def analyze(self, transaction_id: int) -> TransactionAnalysis:
        """Ask the backend to score one transaction; the snapshot is left untouched"""
        return await self.client.analyze_transaction(transaction_id)
