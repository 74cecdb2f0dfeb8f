"""Statistics API client - dashboard, customer analytics, model metrics and reports"""

from typing import List, Optional

from fraud_insight.domain.exceptions import InvalidPayloadError
from fraud_insight.domain.models import (
    BehavioralInsights,
    CustomerAnalytics,
    DashboardStats,
    Decision,
    FeatureImportance,
    FilterCriteria,
    FilteredTransactions,
    FraudStatus,
    ModelMetrics,
    RiskLevel,
)
from fraud_insight.infrastructure.clients.base import ApiClient
from fraud_insight.infrastructure.clients import parsing

EXPORT_FORMATS = ("pdf", "excel")


def criteria_to_body(
    criteria: FilterCriteria,
    risk_level: Optional[RiskLevel] = None,
    decision: Optional[Decision] = None,
) -> dict:
    """
    Serialize criteria into the backend's filter request shape, omitting unset fields.

    risk_level and decision only exist server-side; the backend expects the
    risk level in lower case and the decision in upper case.
    """
    body = {}
    if risk_level is not None:
        body["riskLevel"] = risk_level.value.lower()
    if decision is not None and decision is not Decision.UNKNOWN:
        body["decision"] = decision.value
    if criteria.fraud_status is not FraudStatus.ALL:
        body["fraudStatus"] = criteria.fraud_status.value
    if criteria.date_from is not None:
        body["dateFrom"] = criteria.date_from.isoformat()
    if criteria.date_to is not None:
        body["dateTo"] = criteria.date_to.isoformat()
    if criteria.min_amount is not None:
        body["minAmount"] = criteria.min_amount
    if criteria.max_amount is not None:
        body["maxAmount"] = criteria.max_amount
    if criteria.customer_id:
        body["customerId"] = criteria.customer_id
    return body


class StatisticsClient(ApiClient):
    """Client for the /statistics endpoints"""

    async def get_dashboard_stats(self) -> DashboardStats:
        data = await self._fetch_json("GET", "/statistics/dashboard")
        try:
            return parsing.parse_dashboard(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid dashboard data: {e}") from e

    async def get_customer_analytics(self, customer_id: str) -> CustomerAnalytics:
        data = await self._fetch_json("GET", f"/statistics/customer/{customer_id}")
        try:
            return parsing.parse_customer_analytics(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid customer analytics data: {e}") from e

    async def get_model_metrics(self) -> ModelMetrics:
        data = await self._fetch_json("GET", "/statistics/model-metrics")
        try:
            return parsing.parse_model_metrics(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid model metrics: {e}") from e

    async def get_feature_importance(self) -> List[FeatureImportance]:
        data = await self._fetch_json("GET", "/statistics/feature-importance")
        try:
            return parsing.parse_feature_importance(data or [])
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid feature importance data: {e}") from e

    async def get_behavioral_insights(self) -> BehavioralInsights:
        data = await self._fetch_json("GET", "/statistics/behavioral-insights")
        try:
            return parsing.parse_behavioral_insights(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid behavioral insights: {e}") from e

    async def filter_transactions(
        self,
        criteria: FilterCriteria,
        risk_level: Optional[RiskLevel] = None,
        decision: Optional[Decision] = None,
    ) -> FilteredTransactions:
        """Server-side filtering for sets too large to pull into a snapshot"""
        data = await self._fetch_json(
            "POST",
            "/statistics/transactions/filter",
            json=criteria_to_body(criteria, risk_level, decision),
        )
        try:
            return parsing.parse_filtered_transactions(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid filter result: {e}") from e

    async def export_report(self, report_format: str) -> bytes:
        """Download a binary report; format is 'pdf' or 'excel'"""
        if report_format not in EXPORT_FORMATS:
            raise ValueError(f"Unsupported export format: {report_format}")
        response = await self._request("GET", "/statistics/export", params={"format": report_format})
        return response.content
