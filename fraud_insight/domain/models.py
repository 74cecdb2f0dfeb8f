"""Domain models - immutable dataclasses representing analytics entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class Decision(str, Enum):
    """Action derived from a fraud probability"""

    APPROVE = "APPROVE"
    REVIEW = "REVIEW"
    BLOCK = "BLOCK"
    UNKNOWN = "UNKNOWN"


class RiskLevel(str, Enum):
    """Customer-level severity bucket derived from fraud rate"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class RiskBand(str, Enum):
    """Per-transaction band derived from a 0-100 risk score"""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


class FraudStatus(str, Enum):
    ALL = "all"
    FRAUD = "fraud"
    SAFE = "safe"


class SortKey(str, Enum):
    DATE = "date"
    AMOUNT = "amount"
    RISK = "risk"


@dataclass(frozen=True)
class RiskThresholds:
    """Classifier policy: every threshold used to derive decisions and levels"""

    block: float = 0.85
    review: float = 0.50
    high_fraud_rate: float = 5.0  # percent
    critical_fraud_rate: float = 20.0  # percent
    high_risk_score: float = 70.0
    medium_risk_score: float = 40.0


DEFAULT_THRESHOLDS = RiskThresholds()


@dataclass(frozen=True)
class TransactionRecord:
    """Scored transaction fetched from the transaction service"""

    id: int
    transaction_id: str
    customer_id: str
    recipient_id: str
    amount: float
    timestamp: datetime  # timezone-aware, local time
    is_fraud: bool
    fraud_probability: Optional[float] = None  # None means "not scored", shown as N/A
    decision: Optional[Decision] = None
    device_model: Optional[str] = None
    os_version: Optional[str] = None
    login_count: Optional[int] = None

    @property
    def risk_sort_value(self) -> float:
        """Probability used for ordering; unscored records rank as 0"""
        return self.fraud_probability if self.fraud_probability is not None else 0.0


@dataclass(frozen=True)
class FilterCriteria:
    """Fixed set of view parameters for the transaction timeline"""

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    min_amount: Optional[float] = None
    max_amount: Optional[float] = None
    fraud_status: FraudStatus = FraudStatus.ALL
    device: Optional[str] = None
    customer_id: Optional[str] = None
    sort_by: SortKey = SortKey.DATE


@dataclass(frozen=True)
class TimeBucket:
    """Per-calendar-day rollup of transaction records"""

    date: date
    count: int
    fraud_count: int
    total_amount: float
    device_changes: int


@dataclass(frozen=True)
class TrendPoint:
    """Point of a backend-provided trend series"""

    date: str
    count: int = 0
    amount: float = 0.0
    avg_risk_score: Optional[float] = None


@dataclass(frozen=True)
class TrendSummary:
    average_per_day: float
    peak: float


@dataclass(frozen=True)
class ConfusionCounts:
    """TP/FP/TN/FN tallies reported by the statistics service"""

    true_positives: int = 0
    false_positives: int = 0
    true_negatives: int = 0
    false_negatives: int = 0

    def __post_init__(self) -> None:
        for name in ("true_positives", "false_positives", "true_negatives", "false_negatives"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{name} must be a non-negative integer, got {value!r}")

    @property
    def total(self) -> int:
        return self.true_positives + self.false_positives + self.true_negatives + self.false_negatives

    def matches_total(self, scored_transactions: int) -> bool:
        return self.total == scored_transactions


@dataclass(frozen=True)
class ModelMetrics:
    """Model-quality metrics derived from confusion counts"""

    precision: float
    recall: float
    f1_score: float
    fbeta_score: float
    accuracy: float
    true_positives: int
    false_positives: int
    true_negatives: int
    false_negatives: int
    roc_auc: Optional[float] = None
    last_updated: Optional[str] = None


@dataclass(frozen=True)
class BehavioralInsights:
    avg_device_changes: float = 0.0
    avg_os_changes: float = 0.0
    suspicious_login_patterns: int = 0
    high_frequency_users: int = 0
    anomalous_session_patterns: int = 0


@dataclass(frozen=True)
class RiskyCustomer:
    """Customer entry of the backend's top-risk list"""

    customer_id: str
    transaction_count: int
    fraud_count: int
    fraud_rate: float  # percent
    total_amount: float
    avg_risk_score: float
    device_changes: int = 0
    os_changes: int = 0
    login_frequency_change: float = 0.0
    burstiness_score: Optional[float] = None


@dataclass(frozen=True)
class DashboardStats:
    """Aggregate snapshot returned by the dashboard endpoint"""

    total_transactions: int
    fraud_count: int
    legitimate_count: int
    fraud_rate: float
    total_amount: float
    fraud_amount: float
    avg_transaction_amount: float
    prevented_losses: float
    blocked_count: int
    review_count: int
    approved_count: int
    confusion: ConfusionCounts
    roc_auc: Optional[float] = None
    metrics_updated: Optional[str] = None
    top_risky_customers: List[RiskyCustomer] = field(default_factory=list)
    fraud_trend: List[TrendPoint] = field(default_factory=list)
    amount_trend: List[TrendPoint] = field(default_factory=list)
    behavioral_insights: BehavioralInsights = field(default_factory=BehavioralInsights)


@dataclass(frozen=True)
class TimelineEntry:
    """Transaction as listed on a customer's timeline"""

    transaction_id: int
    transaction_date: str
    amount: float
    is_fraud: bool
    recipient_id: str
    risk_score: float
    decision: Decision = Decision.UNKNOWN


@dataclass(frozen=True)
class AmountPoint:
    date: str
    amount: float
    is_fraud: bool
    transaction_count: int


@dataclass(frozen=True)
class DeviceUsage:
    device_model: str
    os_version: str
    usage_count: int
    last_used: str


@dataclass(frozen=True)
class CustomerAnalytics:
    """Single customer's analytics payload"""

    customer_id: str
    total_transactions: int
    fraud_transactions: int
    total_amount: float
    avg_amount: float
    device_changes: int
    os_version_changes: int
    logins_last_7_days: int
    logins_last_30_days: int
    login_frequency_change: float
    avg_risk_score: float = 0.0
    latest_phone_model: Optional[str] = None
    latest_os_version: Optional[str] = None
    burstiness_score: Optional[float] = None
    main_risk_factors: List[str] = field(default_factory=list)
    behavioral_anomalies: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    transaction_timeline: List[TimelineEntry] = field(default_factory=list)
    amount_timeline: List[AmountPoint] = field(default_factory=list)
    device_usage: List[DeviceUsage] = field(default_factory=list)


@dataclass(frozen=True)
class CustomerRiskProfile:
    """Derived per-customer risk view"""

    customer_id: str
    transaction_count: int
    fraud_count: int
    total_amount: float
    avg_amount: float
    avg_risk_score: float
    fraud_rate: float  # percent
    risk_level: RiskLevel
    device_changes: int
    os_changes: int
    logins_last_7_days: int
    logins_last_30_days: int
    login_frequency_change: float
    login_anomaly: bool
    device_anomaly: bool
    os_anomaly: bool
    login_burst: bool


@dataclass(frozen=True)
class FilteredTransactionsSummary:
    total: int
    fraud_count: int
    total_amount: float
    avg_risk_score: float


@dataclass(frozen=True)
class FilteredTransactions:
    """Server-side filter result"""

    transactions: List[TransactionRecord]
    summary: FilteredTransactionsSummary


@dataclass(frozen=True)
class FeatureImportance:
    feature_name: str
    importance: float
    category: str
    description: str = ""


@dataclass(frozen=True)
class RiskFactor:
    name: str
    description: str
    score: float
    weight: float


@dataclass(frozen=True)
class TransactionAnalysis:
    """Backend analysis of a single transaction"""

    transaction_id: int
    customer_id: str
    fraud_probability: float
    is_fraud: bool
    decision: Decision
    risk_score: float
    risk_factors: List[RiskFactor] = field(default_factory=list)
    ai_explanation: str = ""
    recommendations: str = ""
    analyzed_at: Optional[str] = None


@dataclass(frozen=True)
class User:
    id: int
    email: str
    full_name: str
    role: str
    enabled: bool = True


@dataclass(frozen=True)
class LoginResult:
    access_token: str
    token_type: str
    user: User
    expires_in: int = 0
