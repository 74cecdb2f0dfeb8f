"""GET /v1/customers/{customer_id} - customer risk profile page"""

from fastapi import APIRouter, Depends, Request

from fraud_insight.api.dependencies import get_request_id, get_views, require_user
from fraud_insight.api.errors import to_http_exception
from fraud_insight.domain.exceptions import DomainException
from fraud_insight.views.registry import ViewRegistry

router = APIRouter(dependencies=[Depends(require_user)])


@router.get("/customers/{customer_id}")
async def get_customer(customer_id: str, request: Request, views: ViewRegistry = Depends(get_views)):
    """
    Retrieve a customer's analytics and derive the risk profile.

    Returns:
        Profile with fraud rate and risk level, first 20 timeline entries
        with risk bands, amount series and device usage
    """
    view = views.customer(customer_id)
    try:
        await view.refresh()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))

    return view.render()
