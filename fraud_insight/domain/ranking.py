"""Ranking engine - orders transaction records by a selectable key"""

from typing import Callable, Dict, List, Sequence

from fraud_insight.domain.models import SortKey, TransactionRecord

# All keys sort descending; sorted() keeps equal keys in input order even with reverse=True
_SORT_KEYS: Dict[SortKey, Callable[[TransactionRecord], object]] = {
    SortKey.DATE: lambda record: record.timestamp,
    SortKey.AMOUNT: lambda record: record.amount,
    SortKey.RISK: lambda record: record.risk_sort_value,
}


def rank_records(records: Sequence[TransactionRecord], key: SortKey) -> List[TransactionRecord]:
    """
    Stable descending sort.

    - date: most recent first
    - amount: largest first
    - risk: highest fraud probability first, unscored records count as 0
    """
    return sorted(records, key=_SORT_KEYS[key], reverse=True)
