"""Payload parsing for statistics service responses

Optional fields are defaulted (numbers to 0, decisions to UNKNOWN) rather
than treated as fatal. Structural problems raise KeyError/TypeError/ValueError,
which the clients translate into InvalidPayloadError.
"""

import logging
from typing import Any, Dict, List, Optional

from fraud_insight.domain.kpi import summarize
from fraud_insight.domain.models import (
    AmountPoint,
    BehavioralInsights,
    ConfusionCounts,
    CustomerAnalytics,
    DashboardStats,
    Decision,
    DeviceUsage,
    FeatureImportance,
    FilteredTransactions,
    FilteredTransactionsSummary,
    LoginResult,
    ModelMetrics,
    RiskFactor,
    RiskyCustomer,
    TimelineEntry,
    TransactionAnalysis,
    TransactionRecord,
    TrendPoint,
    User,
)
from fraud_insight.utils.date_utils import parse_timestamp

logger = logging.getLogger(__name__)


def _num(raw: Dict[str, Any], key: str, default: float = 0.0) -> float:
    value = raw.get(key)
    return float(value) if value is not None else default


def _int(raw: Dict[str, Any], key: str, default: int = 0) -> int:
    value = raw.get(key)
    return int(value) if value is not None else default


def _opt_num(raw: Dict[str, Any], key: str) -> Optional[float]:
    value = raw.get(key)
    return float(value) if value is not None else None


def _opt_int(raw: Dict[str, Any], key: str) -> Optional[int]:
    value = raw.get(key)
    return int(value) if value is not None else None


def _bool(raw: Dict[str, Any], key: str, default: bool = False) -> bool:
    """Read a flag sent either as a JSON bool or as its string spelling ("false", "0")"""
    value = raw.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1"):
            return True
        if text in ("false", "0"):
            return False
        raise ValueError(f"Invalid boolean for {key}: {value!r}")
    return bool(value)


def _str(raw: Dict[str, Any], key: str, default: str = "") -> str:
    value = raw.get(key)
    return str(value) if value is not None else default


def _decision(value: Any) -> Optional[Decision]:
    if value is None:
        return None
    try:
        return Decision(str(value).upper())
    except ValueError:
        return Decision.UNKNOWN


def parse_transaction(raw: Dict[str, Any]) -> TransactionRecord:
    """Build a TransactionRecord; raises ValueError/KeyError on an unusable timestamp or flag"""
    return TransactionRecord(
        id=_int(raw, "id"),
        transaction_id=_str(raw, "transactionId"),
        customer_id=_str(raw, "customerId"),
        recipient_id=_str(raw, "recipientId"),
        amount=max(_num(raw, "amount"), 0.0),
        timestamp=parse_timestamp(raw["transactionDateTime"]),
        is_fraud=_bool(raw, "isFraud"),
        fraud_probability=_opt_num(raw, "fraudProbability"),
        decision=_decision(raw.get("decision")),
        device_model=raw.get("deviceModel") or None,
        os_version=raw.get("osVersion") or None,
        login_count=_opt_int(raw, "loginCount"),
    )


def parse_transactions(items: List[Dict[str, Any]]) -> List[TransactionRecord]:
    """Parse a list of transactions, skipping records that fail to parse"""
    records = []
    for raw in items:
        try:
            records.append(parse_transaction(raw))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(
                "Skipping transaction with unusable fields",
                extra={"transaction_id": raw.get("transactionId"), "error": str(e)},
            )
    return records


def parse_confusion_counts(raw: Dict[str, Any]) -> ConfusionCounts:
    return ConfusionCounts(
        true_positives=_int(raw, "truePositives"),
        false_positives=_int(raw, "falsePositives"),
        true_negatives=_int(raw, "trueNegatives"),
        false_negatives=_int(raw, "falseNegatives"),
    )


def parse_model_metrics(raw: Dict[str, Any]) -> ModelMetrics:
    """Recompute quality metrics from the reported counts"""
    return summarize(
        parse_confusion_counts(raw),
        roc_auc=_opt_num(raw, "rocAuc"),
        last_updated=raw.get("lastUpdated"),
    )


def parse_behavioral_insights(raw: Optional[Dict[str, Any]]) -> BehavioralInsights:
    raw = raw or {}
    return BehavioralInsights(
        avg_device_changes=_num(raw, "avgDeviceChanges"),
        avg_os_changes=_num(raw, "avgOsChanges"),
        suspicious_login_patterns=_int(raw, "suspiciousLoginPatterns"),
        high_frequency_users=_int(raw, "highFrequencyUsers"),
        anomalous_session_patterns=_int(raw, "anomalousSessionPatterns"),
    )


def _parse_risky_customer(raw: Dict[str, Any]) -> RiskyCustomer:
    return RiskyCustomer(
        customer_id=_str(raw, "customerId"),
        transaction_count=_int(raw, "transactionCount"),
        fraud_count=_int(raw, "fraudCount"),
        fraud_rate=_num(raw, "fraudRate"),
        total_amount=_num(raw, "totalAmount"),
        avg_risk_score=_num(raw, "avgRiskScore"),
        device_changes=_int(raw, "deviceChanges"),
        os_changes=_int(raw, "osChanges"),
        login_frequency_change=_num(raw, "loginFrequencyChange"),
        burstiness_score=_opt_num(raw, "burstinessScore"),
    )


def _parse_trend(items: Optional[List[Dict[str, Any]]]) -> List[TrendPoint]:
    return [
        TrendPoint(
            date=_str(raw, "date"),
            count=_int(raw, "count"),
            amount=_num(raw, "amount"),
            avg_risk_score=_opt_num(raw, "avgRiskScore"),
        )
        for raw in items or []
    ]


def parse_dashboard(raw: Dict[str, Any]) -> DashboardStats:
    metrics = raw.get("modelMetrics") or {}
    return DashboardStats(
        total_transactions=_int(raw, "totalTransactions"),
        fraud_count=_int(raw, "fraudCount"),
        legitimate_count=_int(raw, "legitimateCount"),
        fraud_rate=_num(raw, "fraudRate"),
        total_amount=_num(raw, "totalAmount"),
        fraud_amount=_num(raw, "fraudAmount"),
        avg_transaction_amount=_num(raw, "avgTransactionAmount"),
        prevented_losses=_num(raw, "preventedLosses"),
        blocked_count=_int(raw, "blockedCount"),
        review_count=_int(raw, "reviewCount"),
        approved_count=_int(raw, "approvedCount"),
        confusion=parse_confusion_counts(metrics),
        roc_auc=_opt_num(metrics, "rocAuc"),
        metrics_updated=metrics.get("lastUpdated"),
        top_risky_customers=[_parse_risky_customer(c) for c in raw.get("topRiskyCustomers") or []],
        fraud_trend=_parse_trend(raw.get("fraudTrend")),
        amount_trend=_parse_trend(raw.get("amountTrend")),
        behavioral_insights=parse_behavioral_insights(raw.get("behavioralInsights")),
    )


def parse_customer_analytics(raw: Dict[str, Any]) -> CustomerAnalytics:
    profile = raw.get("riskProfile") or {}
    return CustomerAnalytics(
        customer_id=_str(raw, "customerId"),
        total_transactions=_int(raw, "totalTransactions"),
        fraud_transactions=_int(raw, "fraudTransactions"),
        total_amount=_num(raw, "totalAmount"),
        avg_amount=_num(raw, "avgAmount"),
        device_changes=_int(raw, "deviceChanges"),
        os_version_changes=_int(raw, "osVersionChanges"),
        logins_last_7_days=_int(raw, "loginsLast7Days"),
        logins_last_30_days=_int(raw, "loginsLast30Days"),
        login_frequency_change=_num(raw, "loginFrequencyChange"),
        avg_risk_score=_num(profile, "riskScore"),
        latest_phone_model=raw.get("latestPhoneModel"),
        latest_os_version=raw.get("latestOsVersion"),
        burstiness_score=_opt_num(raw, "burstinessScore"),
        main_risk_factors=list(profile.get("mainRiskFactors") or []),
        behavioral_anomalies=list(profile.get("behavioralAnomalies") or []),
        recommendations=list(profile.get("recommendations") or []),
        transaction_timeline=[
            TimelineEntry(
                transaction_id=_int(t, "transactionId"),
                transaction_date=_str(t, "transactionDate"),
                amount=_num(t, "amount"),
                is_fraud=_bool(t, "isFraud"),
                recipient_id=_str(t, "recipientId"),
                risk_score=_num(t, "riskScore"),
                decision=_decision(t.get("decision")) or Decision.UNKNOWN,
            )
            for t in raw.get("transactionTimeline") or []
        ],
        amount_timeline=[
            AmountPoint(
                date=_str(p, "date"),
                amount=_num(p, "amount"),
                is_fraud=_bool(p, "isFraud"),
                transaction_count=_int(p, "transactionCount"),
            )
            for p in raw.get("amountTimeline") or []
        ],
        device_usage=[
            DeviceUsage(
                device_model=_str(d, "deviceModel"),
                os_version=_str(d, "osVersion"),
                usage_count=_int(d, "usageCount"),
                last_used=_str(d, "lastUsed"),
            )
            for d in raw.get("deviceUsage") or []
        ],
    )


def parse_feature_importance(items: List[Dict[str, Any]]) -> List[FeatureImportance]:
    return [
        FeatureImportance(
            feature_name=_str(raw, "featureName"),
            importance=_num(raw, "importance"),
            category=_str(raw, "category"),
            description=_str(raw, "description"),
        )
        for raw in items
    ]


def parse_filtered_transactions(raw: Dict[str, Any]) -> FilteredTransactions:
    records = parse_transactions(raw.get("transactions") or [])
    return FilteredTransactions(
        transactions=records,
        summary=FilteredTransactionsSummary(
            total=_int(raw, "total", len(records)),
            fraud_count=_int(raw, "fraudCount"),
            total_amount=_num(raw, "totalAmount"),
            avg_risk_score=_num(raw, "avgRiskScore"),
        ),
    )


def parse_analysis(raw: Dict[str, Any]) -> TransactionAnalysis:
    return TransactionAnalysis(
        transaction_id=_int(raw, "transactionId"),
        customer_id=_str(raw, "customerId"),
        fraud_probability=_num(raw, "fraudProbability"),
        is_fraud=_bool(raw, "isFraud"),
        decision=_decision(raw.get("decision")) or Decision.UNKNOWN,
        risk_score=_num(raw, "riskScore"),
        risk_factors=[
            RiskFactor(
                name=_str(f, "name"),
                description=_str(f, "description"),
                score=_num(f, "score"),
                weight=_num(f, "weight"),
            )
            for f in raw.get("riskFactors") or []
        ],
        ai_explanation=_str(raw, "aiExplanation"),
        recommendations=_str(raw, "recommendations"),
        analyzed_at=raw.get("analyzedAt"),
    )


def parse_user(raw: Dict[str, Any]) -> User:
    return User(
        id=_int(raw, "id"),
        email=raw["email"],
        full_name=_str(raw, "fullName"),
        role=_str(raw, "role", "USER"),
        enabled=_bool(raw, "enabled", True),
    )


def parse_login(raw: Dict[str, Any]) -> LoginResult:
    return LoginResult(
        access_token=raw["accessToken"],
        token_type=_str(raw, "tokenType", "Bearer"),
        user=parse_user(raw["user"]),
        expires_in=_int(raw, "expiresIn"),
    )
