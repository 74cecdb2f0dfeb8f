"""Dashboard, model metrics, feature importance, behavioral insights and report export"""

from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from starlette.responses import Response

from fraud_insight.api.dependencies import get_clients, get_request_id, get_views, require_user
from fraud_insight.api.errors import to_http_exception
from fraud_insight.api.v1.schemas import RefreshResponse
from fraud_insight.domain.exceptions import DomainException
from fraud_insight.views.registry import Clients, ViewRegistry

router = APIRouter(dependencies=[Depends(require_user)])

EXPORT_MEDIA_TYPES = {
    "pdf": ("application/pdf", "pdf"),
    "excel": ("application/vnd.openxmlformats-officedocument.spreadsheetml.sheet", "xlsx"),
}


@router.get("/dashboard")
async def get_dashboard(request: Request, views: ViewRegistry = Depends(get_views)):
    """
    Dashboard page: KPIs, recomputed model metrics, decision mix,
    top risky customers and trend charts.

    Loads the snapshot on first access; later calls reuse it until refreshed.
    """
    request_id = get_request_id(request)
    try:
        await views.dashboard.ensure_loaded()
    except DomainException as e:
        raise to_http_exception(e, request_id)

    return views.dashboard.render(request_id)


@router.post("/dashboard/refresh", response_model=RefreshResponse)
async def refresh_dashboard(request: Request, views: ViewRegistry = Depends(get_views)):
    """Manual retry/reload of the dashboard snapshot"""
    try:
        applied = await views.dashboard.refresh()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))

    snapshot = views.dashboard.snapshot
    return RefreshResponse(
        view="dashboard",
        applied=applied,
        records=snapshot.total_transactions if snapshot else None,
    )


@router.get("/model-metrics")
async def get_model_metrics(request: Request, clients: Clients = Depends(get_clients)):
    try:
        return await clients.statistics.get_model_metrics()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))


@router.get("/feature-importance")
async def get_feature_importance(request: Request, clients: Clients = Depends(get_clients)):
    try:
        features = await clients.statistics.get_feature_importance()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))
    return sorted(features, key=lambda f: f.importance, reverse=True)


@router.get("/behavioral-insights")
async def get_behavioral_insights(request: Request, clients: Clients = Depends(get_clients)):
    try:
        return await clients.statistics.get_behavioral_insights()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))


@router.get("/export")
async def export_report(
    request: Request,
    format: Literal["pdf", "excel"] = Query("pdf", description="Report format"),
    clients: Clients = Depends(get_clients),
):
    """Stream the backend-generated report through unchanged"""
    try:
        content = await clients.statistics.export_report(format)
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    media_type, extension = EXPORT_MEDIA_TYPES[format]
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="fraud-report.{extension}"'},
    )
