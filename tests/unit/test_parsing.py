"""Unit tests for statistics payload parsing"""

import pytest
from datetime import datetime
from fraud_insight.domain.models import Decision
from fraud_insight.infrastructure.clients import parsing
from fraud_insight.utils.date_utils import to_local
from mock_backend.stats_server.main import CUSTOMERS, DASHBOARD, TRANSACTIONS


def test_parse_transaction_maps_fields():
    record = parsing.parse_transaction(TRANSACTIONS[1])

    assert record.id == 2
    assert record.transaction_id == "TX-002"
    assert record.customer_id == "CUST-100"
    assert record.amount == 5000
    assert record.timestamp == to_local(datetime(2024, 1, 1, 15, 30))
    assert record.is_fraud is True
    assert record.fraud_probability == 0.9
    assert record.device_model == "Galaxy S21"
    assert record.decision is None


def test_parse_transaction_keeps_missing_probability_unscored():
    record = parsing.parse_transaction(TRANSACTIONS[4])
    assert record.fraud_probability is None
    assert record.device_model is None


def test_parse_transaction_clamps_negative_amount():
    raw = dict(TRANSACTIONS[0], amount=-50)
    assert parsing.parse_transaction(raw).amount == 0


def test_parse_transaction_utc_suffix():
    raw = dict(TRANSACTIONS[0], transactionDateTime="2024-01-01T10:00:00Z")
    record = parsing.parse_transaction(raw)
    assert record.timestamp.utcoffset() is not None
    assert record.timestamp == datetime.fromisoformat("2024-01-01T10:00:00+00:00")


def test_parse_transaction_unknown_decision():
    raw = dict(TRANSACTIONS[0], decision="escalate")
    assert parsing.parse_transaction(raw).decision == Decision.UNKNOWN
    raw = dict(TRANSACTIONS[0], decision="review")
    assert parsing.parse_transaction(raw).decision == Decision.REVIEW


def test_parse_transaction_reads_string_flags_and_counts():
    record = parsing.parse_transaction(dict(TRANSACTIONS[1], isFraud="false", loginCount="7"))
    assert record.is_fraud is False
    assert record.login_count == 7

    assert parsing.parse_transaction(dict(TRANSACTIONS[0], isFraud="TRUE")).is_fraud is True
    assert parsing.parse_transaction(dict(TRANSACTIONS[0], isFraud=0)).is_fraud is False
    assert parsing.parse_transaction(TRANSACTIONS[0]).login_count is None


def test_parse_transactions_skips_unreadable_fraud_flag():
    items = [TRANSACTIONS[0], dict(TRANSACTIONS[1], isFraud="maybe"), dict(TRANSACTIONS[2], loginCount="many")]
    assert [r.id for r in parsing.parse_transactions(items)] == [1]


def test_parse_user_disabled_flag_as_string():
    assert parsing.parse_user({"email": "a@b.c", "enabled": "false"}).enabled is False
    assert parsing.parse_user({"email": "a@b.c"}).enabled is True


def test_parse_transactions_skips_unusable_records():
    items = [
        TRANSACTIONS[0],
        {k: v for k, v in TRANSACTIONS[1].items() if k != "transactionDateTime"},
        dict(TRANSACTIONS[2], transactionDateTime="not a date"),
        dict(TRANSACTIONS[3], transactionDateTime=None),
    ]
    assert [r.id for r in parsing.parse_transactions(items)] == [1]


def test_parse_dashboard():
    stats = parsing.parse_dashboard(DASHBOARD)

    assert stats.total_transactions == 1000
    assert stats.confusion.true_positives == 80
    assert stats.confusion.false_negatives == 50
    assert stats.roc_auc == 0.94
    assert stats.metrics_updated == "2024-01-15T00:00:00"
    assert [c.customer_id for c in stats.top_risky_customers] == ["CUST-300", "CUST-100", "CUST-200"]
    assert stats.top_risky_customers[2].device_changes == 0
    assert [p.count for p in stats.fraud_trend] == [4, 0, 8]
    assert stats.behavioral_insights.suspicious_login_patterns == 12


def test_parse_dashboard_defaults_missing_sections():
    stats = parsing.parse_dashboard({"totalTransactions": 3})

    assert stats.fraud_count == 0
    assert stats.confusion.total == 0
    assert stats.roc_auc is None
    assert stats.top_risky_customers == []
    assert stats.fraud_trend == []
    assert stats.behavioral_insights.avg_device_changes == 0


def test_parse_dashboard_rejects_negative_counts():
    raw = dict(DASHBOARD, modelMetrics={"truePositives": -3})
    with pytest.raises(ValueError):
        parsing.parse_dashboard(raw)


def test_parse_model_metrics_recomputes_from_counts():
    """Reported ratios are ignored in favour of values derived from the counts"""
    raw = dict(DASHBOARD["modelMetrics"], precision=0.1, recall=0.99)
    metrics = parsing.parse_model_metrics(raw)

    assert metrics.precision == pytest.approx(0.8)
    assert metrics.recall == pytest.approx(80 / 130)
    assert metrics.roc_auc == 0.94


def test_parse_customer_analytics():
    analytics = parsing.parse_customer_analytics(CUSTOMERS["CUST-100"])

    assert analytics.customer_id == "CUST-100"
    assert analytics.total_transactions == 40
    assert analytics.os_version_changes == 1
    assert analytics.login_frequency_change == 0.8
    assert analytics.avg_risk_score == 41.0
    assert analytics.main_risk_factors == ["New device"]
    assert [t.decision for t in analytics.transaction_timeline] == [Decision.BLOCK, Decision.APPROVE]
    assert analytics.device_usage[0].usage_count == 30
    assert analytics.burstiness_score is None


def test_parse_feature_importance():
    features = parsing.parse_feature_importance([{"featureName": "amount", "importance": "0.3"}])
    assert features[0].feature_name == "amount"
    assert features[0].importance == 0.3
    assert features[0].category == ""


def test_parse_filtered_transactions_defaults_total_to_record_count():
    result = parsing.parse_filtered_transactions({"transactions": TRANSACTIONS[:2]})
    assert len(result.transactions) == 2
    assert result.summary.total == 2
    assert result.summary.fraud_count == 0


def test_parse_analysis():
    analysis = parsing.parse_analysis({
        "transactionId": 4,
        "customerId": "CUST-300",
        "fraudProbability": 0.97,
        "isFraud": True,
        "decision": "BLOCK",
        "riskScore": 97,
        "riskFactors": [{"name": "amount", "description": "Large", "score": 0.7, "weight": 0.4}],
    })
    assert analysis.decision == Decision.BLOCK
    assert analysis.risk_factors[0].weight == 0.4
    assert analysis.analyzed_at is None


def test_parse_login_requires_token():
    with pytest.raises(KeyError):
        parsing.parse_login({"user": {"email": "a@b.c"}})

    result = parsing.parse_login({"accessToken": "t", "user": {"id": 7, "email": "a@b.c"}})
    assert result.token_type == "Bearer"
    assert result.user.role == "USER"
    assert result.user.id == 7
