"""Batch transaction timeline with client-side and server-side filtering"""

from typing import Optional, Union

from fastapi import APIRouter, Depends, Query, Request

from fraud_insight.api.dependencies import get_clients, get_request_id, get_views, require_user
from fraud_insight.api.errors import to_http_exception
from fraud_insight.api.v1.schemas import RefreshResponse, ServerFilterRequest
from fraud_insight.domain.exceptions import DomainException
from fraud_insight.domain.filtering import criteria_from_query
from fraud_insight.domain.models import Decision, RiskLevel
from fraud_insight.views.registry import Clients, ViewRegistry

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("/timeline")
async def get_timeline(
    request: Request,
    date_from: Optional[str] = Query(None, description="ISO date or datetime, inclusive"),
    date_to: Optional[str] = Query(None, description="ISO date or datetime, inclusive"),
    min_amount: Optional[str] = Query(None),
    max_amount: Optional[str] = Query(None),
    fraud_status: str = Query("all", description="all | fraud | safe"),
    device: Optional[str] = Query(None, description="Device model substring"),
    customer_id: Optional[str] = Query(None, description="Customer id substring"),
    sort_by: str = Query("date", description="date | amount | risk"),
    views: ViewRegistry = Depends(get_views),
):
    """
    Filtered, ranked and bucketed view of the timeline snapshot.

    Bounds are taken as raw strings: a malformed bound is ignored rather
    than rejected, so a typo never blanks the page.
    """
    request_id = get_request_id(request)
    try:
        await views.timeline.ensure_loaded()
    except DomainException as e:
        raise to_http_exception(e, request_id)

    criteria = criteria_from_query(
        date_from=date_from,
        date_to=date_to,
        min_amount=min_amount,
        max_amount=max_amount,
        fraud_status=fraud_status,
        device=device,
        customer_id=customer_id,
        sort_by=sort_by,
    )
    return views.timeline.render(criteria, request_id)


@router.post("/timeline/refresh", response_model=RefreshResponse)
async def refresh_timeline(request: Request, views: ViewRegistry = Depends(get_views)):
    """Manual retry/reload of the timeline snapshot"""
    try:
        applied = await views.timeline.refresh()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))

    return RefreshResponse(view="timeline", applied=applied, records=len(views.timeline.snapshot or []))


def _as_text(value: Optional[Union[float, str]]) -> Optional[str]:
    return None if value is None else str(value)


@router.post("/timeline/server-filter")
async def server_filter(
    body: ServerFilterRequest,
    request: Request,
    clients: Clients = Depends(get_clients),
):
    """Delegate filtering of large sets to the statistics service"""
    criteria = criteria_from_query(
        date_from=body.date_from,
        date_to=body.date_to,
        min_amount=_as_text(body.min_amount),
        max_amount=_as_text(body.max_amount),
        fraud_status=body.fraud_status,
        customer_id=body.customer_id,
    )
    risk_level = RiskLevel(body.risk_level.upper()) if body.risk_level else None
    decision = Decision(body.decision) if body.decision else None
    try:
        return await clients.statistics.filter_transactions(criteria, risk_level=risk_level, decision=decision)
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))
