"""Customer risk profiling and transaction summaries"""

from typing import Sequence

from fraud_insight.domain.classifier import classify_customer_risk_level
from fraud_insight.domain.models import (
    CustomerAnalytics,
    CustomerRiskProfile,
    FilteredTransactionsSummary,
    RiskThresholds,
    TransactionRecord,
    DEFAULT_THRESHOLDS,
)

# Relative change in login frequency beyond which behaviour is flagged
LOGIN_ANOMALY_THRESHOLD = 0.5
# Counters strictly above these limits are flagged
DEVICE_CHANGE_THRESHOLD = 3
OS_CHANGE_THRESHOLD = 2
LOGIN_BURST_THRESHOLD = 20


def fraud_rate_percent(fraud_count: int, total_count: int) -> float:
    """Fraud share in percent, 0 when there are no transactions"""
    if total_count <= 0:
        return 0.0
    return fraud_count / total_count * 100


def build_customer_profile(
    analytics: CustomerAnalytics,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> CustomerRiskProfile:
    """Derive fraud rate, risk level and behavioural flags for one customer"""
    rate = fraud_rate_percent(analytics.fraud_transactions, analytics.total_transactions)

    return CustomerRiskProfile(
        customer_id=analytics.customer_id,
        transaction_count=analytics.total_transactions,
        fraud_count=analytics.fraud_transactions,
        total_amount=analytics.total_amount,
        avg_amount=analytics.avg_amount,
        avg_risk_score=analytics.avg_risk_score,
        fraud_rate=rate,
        risk_level=classify_customer_risk_level(rate, thresholds),
        device_changes=analytics.device_changes,
        os_changes=analytics.os_version_changes,
        logins_last_7_days=analytics.logins_last_7_days,
        logins_last_30_days=analytics.logins_last_30_days,
        login_frequency_change=analytics.login_frequency_change,
        login_anomaly=abs(analytics.login_frequency_change) > LOGIN_ANOMALY_THRESHOLD,
        device_anomaly=analytics.device_changes > DEVICE_CHANGE_THRESHOLD,
        os_anomaly=analytics.os_version_changes > OS_CHANGE_THRESHOLD,
        login_burst=analytics.logins_last_7_days > LOGIN_BURST_THRESHOLD,
    )


def summarize_records(records: Sequence[TransactionRecord]) -> FilteredTransactionsSummary:
    """
    Totals over a (filtered) record set.

    avg_risk_score is the mean fraud probability on a 0-100 scale, taken only
    over records that carry a probability; unscored records are not counted
    as zero.
    """
    scored = [r.fraud_probability for r in records if r.fraud_probability is not None]
    avg_risk = sum(scored) / len(scored) * 100 if scored else 0.0

    return FilteredTransactionsSummary(
        total=len(records),
        fraud_count=sum(1 for r in records if r.is_fraud),
        total_amount=sum(r.amount for r in records),
        avg_risk_score=avg_risk,
    )
