"""Unit tests for the ranking engine"""

from datetime import datetime
from fraud_insight.domain.models import SortKey
from fraud_insight.domain.ranking import rank_records


def ids(records):
    return [r.id for r in records]


def test_rank_by_date_most_recent_first(sample_records):
    assert ids(rank_records(sample_records, SortKey.DATE)) == [5, 4, 3, 2, 1]


def test_rank_by_amount_descending(sample_records):
    assert ids(rank_records(sample_records, SortKey.AMOUNT)) == [4, 2, 1, 3, 5]


def test_rank_by_risk_treats_missing_probability_as_zero(record_factory):
    records = [
        record_factory(1, probability=None),
        record_factory(2, probability=0.3),
        record_factory(3, probability=0.0),
        record_factory(4, probability=0.95),
    ]
    # Unscored 1 ties with 3 at zero and keeps its position ahead of it
    assert ids(rank_records(records, SortKey.RISK)) == [4, 2, 1, 3]


def test_rank_is_stable_for_equal_keys(record_factory):
    when = datetime(2024, 1, 1, 12, 0)
    records = [
        record_factory(1, amount=500, when=when, probability=0.5),
        record_factory(2, amount=900, when=when, probability=0.5),
        record_factory(3, amount=500, when=when, probability=0.5),
        record_factory(4, amount=900, when=when, probability=0.5),
    ]

    assert ids(rank_records(records, SortKey.DATE)) == [1, 2, 3, 4]
    assert ids(rank_records(records, SortKey.RISK)) == [1, 2, 3, 4]
    assert ids(rank_records(records, SortKey.AMOUNT)) == [2, 4, 1, 3]


def test_rank_returns_new_list(sample_records):
    before = list(sample_records)
    ranked = rank_records(sample_records, SortKey.AMOUNT)
    assert ranked is not sample_records
    assert sample_records == before
