"""KPI summarizer - model-quality metrics from confusion counts"""

from typing import Optional

from fraud_insight.domain.models import ConfusionCounts, ModelMetrics


def _ratio(numerator: float, denominator: float) -> float:
    return numerator / denominator if denominator > 0 else 0.0


def _clamp(value: float) -> float:
    return min(max(value, 0.0), 1.0)


def summarize(
    counts: ConfusionCounts,
    beta: float = 2.0,
    roc_auc: Optional[float] = None,
    last_updated: Optional[str] = None,
) -> ModelMetrics:
    """
    Derive precision, recall, F1, F-beta and accuracy from TP/FP/TN/FN.

    Every ratio is 0 when its denominator is 0, and every output is clamped
    to [0, 1]. F-beta defaults to beta=2, weighting recall above precision:

        F_beta = (1 + beta^2) * P * R / (beta^2 * P + R)

    ROC-AUC cannot be derived from counts; it is passed through as reported.
    """
    tp = counts.true_positives
    fp = counts.false_positives
    tn = counts.true_negatives
    fn = counts.false_negatives

    precision = _ratio(tp, tp + fp)
    recall = _ratio(tp, tp + fn)
    f1 = _ratio(2 * precision * recall, precision + recall)

    beta_sq = beta**2
    fbeta = _ratio((1 + beta_sq) * precision * recall, beta_sq * precision + recall)

    accuracy = _ratio(tp + tn, counts.total)

    return ModelMetrics(
        precision=_clamp(precision),
        recall=_clamp(recall),
        f1_score=_clamp(f1),
        fbeta_score=_clamp(fbeta),
        accuracy=_clamp(accuracy),
        true_positives=tp,
        false_positives=fp,
        true_negatives=tn,
        false_negatives=fn,
        roc_auc=roc_auc,
        last_updated=last_updated,
    )
