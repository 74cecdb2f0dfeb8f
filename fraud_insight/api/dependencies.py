"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, HTTPException, Request

from fraud_insight.domain.models import User
from fraud_insight.infrastructure.session import AuthSession
from fraud_insight.views.registry import Clients, ViewRegistry


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_session(request: Request) -> AuthSession:
    """Provide the process-wide analyst session"""
    return request.app.state.session


def get_clients(request: Request) -> Clients:
    """Provide statistics/transaction/auth clients"""
    return request.app.state.clients


def get_views(request: Request) -> ViewRegistry:
    """Provide the page views"""
    return request.app.state.views


def require_user(session: AuthSession = Depends(get_session)) -> User:
    """Reject requests when no analyst is signed in"""
    if not session.is_authenticated:
        raise HTTPException(status_code=401, detail="Not signed in")
    return session.user
