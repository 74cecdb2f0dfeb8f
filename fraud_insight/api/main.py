"""FastAPI application factory"""

import httpx
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fraud_insight.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fraud_insight.api.v1 import auth, customers, dashboard, timeline, transactions
from fraud_insight.infrastructure.observability.logging import setup_logging
from fraud_insight.infrastructure.session import AuthSession, SessionStorage
from fraud_insight.views.registry import ViewRegistry, build_clients
from fraud_insight.config import Settings, settings as default_settings


def create_app(
    config: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    Create and configure the analyst console gateway.

    The session is loaded once here and injected into clients and views;
    `transport` lets tests route backend calls to an in-process stub.
    """
    config = config or default_settings
    setup_logging(config.log_level, config.service_name)

    app = FastAPI(
        title="Fraud Insight",
        description="Fraud-risk analytics views for bank analysts",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    session = AuthSession(SessionStorage(config.session_file))
    session.load()
    clients = build_clients(config, session, transport)

    app.state.settings = config
    app.state.session = session
    app.state.clients = clients
    app.state.views = ViewRegistry(config, clients, session)

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": config.service_name, "session_ready": session.ready}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(auth.router, prefix="/v1", tags=["auth"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(customers.router, prefix="/v1", tags=["customers"])
    app.include_router(timeline.router, prefix="/v1", tags=["timeline"])
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])

    return app


app = create_app()
