"""
E2E tests for analyst workflows through the gateway.

The gateway talks to the mock statistics service over an in-process ASGI
transport, so every call goes through the real clients, envelope handling
and session token plumbing.

Workflows:
- morning review: sign in, dashboard, drill into the riskiest customer
- investigation: narrow the timeline, then analyze a flagged transaction
- session restore: a persisted session survives a gateway restart
- sign out: snapshots are dropped and pages are closed again
"""

import pytest
from fastapi.testclient import TestClient
from fraud_insight.api.main import create_app
from mock_backend.stats_server.main import MOCK_EMAIL, MOCK_PASSWORD


@pytest.mark.integration
def test_morning_review(signed_in_client: TestClient):
    """
    Dashboard first, then the customer page of a ranked customer.
    Expected: customer risk level agrees with the dashboard ranking
    """
    dashboard = signed_in_client.get("/v1/dashboard").json()
    ranked = {c["customer"]["customer_id"]: c["risk_level"] for c in dashboard["top_risky_customers"]}
    assert ranked["CUST-100"] == "HIGH"

    customer = signed_in_client.get("/v1/customers/CUST-100").json()
    assert customer["profile"]["risk_level"] == ranked["CUST-100"]
    assert customer["profile"]["fraud_rate"] == pytest.approx(5.0)
    assert customer["main_risk_factors"] == ["New device"]


@pytest.mark.integration
def test_investigation(signed_in_client: TestClient):
    """
    Narrow the timeline to high-value fraud, then analyze the top hit.
    Expected: the analysis decision agrees with the timeline classification
    """
    timeline = signed_in_client.get(
        "/v1/timeline",
        params={"fraud_status": "fraud", "min_amount": "6000", "sort_by": "risk"},
    ).json()
    assert [row["transaction"]["id"] for row in timeline["rows"]] == [4]
    top = timeline["rows"][0]
    assert top["decision"] == "BLOCK"

    analysis = signed_in_client.post(f"/v1/transactions/{top['transaction']['id']}/analyze").json()
    assert analysis["decision"] == top["decision"]
    assert analysis["customer_id"] == "CUST-300"


@pytest.mark.integration
def test_refresh_keeps_filters_independent(signed_in_client: TestClient):
    """
    Re-rendering with different criteria never refetches or mutates the snapshot.
    Expected: the unfiltered view is unchanged after a filtered one
    """
    before = signed_in_client.get("/v1/timeline").json()
    signed_in_client.get("/v1/timeline", params={"device": "iphone"})
    after = signed_in_client.get("/v1/timeline").json()
    assert before["rows"] == after["rows"]

    refreshed = signed_in_client.post("/v1/timeline/refresh").json()
    assert refreshed == {"view": "timeline", "applied": True, "records": 5}


@pytest.mark.integration
def test_session_survives_restart(test_settings, mock_transport):
    """
    A signed-in session is persisted and restored by a new gateway instance.
    Expected: pages are available without signing in again
    """
    first = TestClient(create_app(test_settings, transport=mock_transport))
    response = first.post("/v1/auth/login", json={"email": MOCK_EMAIL, "password": MOCK_PASSWORD})
    assert response.status_code == 200

    second = TestClient(create_app(test_settings, transport=mock_transport))
    assert second.get("/v1/auth/me").json() == {"email": MOCK_EMAIL}
    assert second.get("/v1/transactions").status_code == 200


@pytest.mark.integration
def test_sign_out(test_settings, mock_transport):
    """
    Sign out, then restart.
    Expected: no session is restored and pages stay closed
    """
    client = TestClient(create_app(test_settings, transport=mock_transport))
    client.post("/v1/auth/login", json={"email": MOCK_EMAIL, "password": MOCK_PASSWORD})
    client.get("/v1/dashboard")

    assert client.post("/v1/auth/logout").status_code == 204
    assert client.app.state.views.dashboard.snapshot is None

    restarted = TestClient(create_app(test_settings, transport=mock_transport))
    assert restarted.get("/v1/dashboard").status_code == 401
