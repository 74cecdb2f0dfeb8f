"""Risk classifier - maps probabilities, fraud rates and scores to discrete levels"""

from typing import Optional
from fraud_insight.domain.models import Decision, RiskBand, RiskLevel, RiskThresholds, DEFAULT_THRESHOLDS


def classify_decision(
    probability: Optional[float],
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> Decision:
    """
    Map a fraud probability to a decision.

    Bands (defaults):
    - p >= 0.85:        BLOCK
    - 0.50 <= p < 0.85: REVIEW
    - p < 0.50:         APPROVE
    - missing:          UNKNOWN
    """
    if probability is None:
        return Decision.UNKNOWN
    if probability >= thresholds.block:
        return Decision.BLOCK
    elif probability >= thresholds.review:
        return Decision.REVIEW
    else:
        return Decision.APPROVE


def classify_customer_risk_level(
    fraud_rate_percent: float,
    thresholds: RiskThresholds = DEFAULT_THRESHOLDS,
) -> RiskLevel:
    """
    Map a customer's fraud rate (percent) to a risk level.

    - 0 (or below):  LOW
    - (0, 5):        MEDIUM
    - [5, 20):       HIGH
    - 20 and above:  CRITICAL
    """
    if fraud_rate_percent <= 0:
        return RiskLevel.LOW
    elif fraud_rate_percent < thresholds.high_fraud_rate:
        return RiskLevel.MEDIUM
    elif fraud_rate_percent < thresholds.critical_fraud_rate:
        return RiskLevel.HIGH
    else:
        return RiskLevel.CRITICAL


def classify_risk_score(score: float, thresholds: RiskThresholds = DEFAULT_THRESHOLDS) -> RiskBand:
    """Band a 0-100 risk score: above 70 HIGH, above 40 MEDIUM, otherwise LOW"""
    if score > thresholds.high_risk_score:
        return RiskBand.HIGH
    elif score > thresholds.medium_risk_score:
        return RiskBand.MEDIUM
    return RiskBand.LOW


def format_probability(probability: Optional[float]) -> str:
    """Display form of a probability; unscored records show N/A"""
    if probability is None:
        return "N/A"
    return f"{probability * 100:.0f}%"
