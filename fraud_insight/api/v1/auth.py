"""POST /v1/auth/login, POST /v1/auth/logout, GET /v1/auth/me"""

from fastapi import APIRouter, Depends, HTTPException, Request

from fraud_insight.api.dependencies import get_clients, get_request_id, get_session
from fraud_insight.api.errors import to_http_exception
from fraud_insight.api.v1.schemas import LoginRequest, MeResponse, UserResponse
from fraud_insight.domain.exceptions import DomainException
from fraud_insight.infrastructure.session import AuthSession
from fraud_insight.views.registry import Clients

router = APIRouter()


@router.post("/auth/login", response_model=UserResponse)
async def login(
    body: LoginRequest,
    request: Request,
    session: AuthSession = Depends(get_session),
    clients: Clients = Depends(get_clients),
):
    """Authenticate against the backend and persist the session"""
    try:
        user = await session.login(clients.auth, body.email, body.password)
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))

    return UserResponse(id=user.id, email=user.email, full_name=user.full_name, role=user.role)


@router.post("/auth/logout", status_code=204)
async def logout(
    session: AuthSession = Depends(get_session),
    clients: Clients = Depends(get_clients),
):
    """Clear the session; page snapshots are dropped with it"""
    await session.logout(clients.auth)


@router.get("/auth/me", response_model=MeResponse)
async def me(
    request: Request,
    session: AuthSession = Depends(get_session),
    clients: Clients = Depends(get_clients),
):
    if not session.is_authenticated:
        raise HTTPException(status_code=401, detail="Not signed in")
    try:
        email = await clients.auth.get_current_user()
    except DomainException as e:
        raise to_http_exception(e, get_request_id(request))
    return MeResponse(email=email)
