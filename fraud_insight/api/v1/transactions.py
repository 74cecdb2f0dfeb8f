"""Transaction analysis page and single-transaction analysis"""

from fastapi import APIRouter, Depends, Query, Request

from fraud_insight.api.dependencies import get_clients, get_request_id, get_views, require_user
from fraud_insight.api.errors import to_http_exception
from fraud_insight.api.v1.schemas import RefreshResponse
from fraud_insight.domain.exceptions import DomainException
from fraud_insight.domain.models import FraudStatus
from fraud_insight.views.registry import Clients, ViewRegistry

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("/transactions")
async def list_transactions(
    request: Request,
    status: FraudStatus = Query(FraudStatus.ALL, description="all | fraud | safe"),
    views: ViewRegistry = Depends(get_views),
):
    """Recent transactions with per-status counts and classified decisions"""
    try:
        await views.analysis.ensure_loaded()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))

    return views.analysis.render(status)


@router.post("/transactions/refresh", response_model=RefreshResponse)
async def refresh_transactions(request: Request, views: ViewRegistry = Depends(get_views)):
    try:
        applied = await views.analysis.refresh()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))
    return RefreshResponse(view="analysis", applied=applied, records=len(views.analysis.snapshot or []))


@router.get("/transactions/fraudulent")
async def list_fraudulent(request: Request, clients: Clients = Depends(get_clients)):
    try:
        return await clients.transactions.get_fraudulent_transactions()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))


@router.post("/transactions/{transaction_id}/analyze")
async def analyze_transaction(transaction_id: int, request: Request, views: ViewRegistry = Depends(get_views)):
    """Run backend analysis for one transaction"""
    try:
        return await views.analysis.analyze(transaction_id)
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))
