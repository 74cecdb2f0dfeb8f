"""Pytest fixtures for testing"""

import pytest
import httpx
from datetime import datetime
from typing import Callable, Optional
from fastapi.testclient import TestClient

from fraud_insight.api.main import create_app
from fraud_insight.config import Settings
from fraud_insight.domain.models import TransactionRecord
from fraud_insight.utils.date_utils import to_local
from mock_backend.stats_server.main import app as mock_app, MOCK_EMAIL, MOCK_PASSWORD

MOCK_BASE_URL = "http://stats.test/api"


def make_record(
    id: int = 1,
    amount: float = 100.0,
    when: datetime = datetime(2024, 1, 1, 12, 0),
    is_fraud: bool = False,
    probability: Optional[float] = None,
    customer_id: str = "CUST-1",
    device: Optional[str] = None,
) -> TransactionRecord:
    """Build a transaction record with local-time timestamp"""
    return TransactionRecord(
        id=id,
        transaction_id=f"TX-{id}",
        customer_id=customer_id,
        recipient_id="R-1",
        amount=amount,
        timestamp=to_local(when),
        is_fraud=is_fraud,
        fraud_probability=probability,
        device_model=device,
    )


@pytest.fixture
def record_factory() -> Callable[..., TransactionRecord]:
    return make_record


@pytest.fixture
def sample_records() -> list[TransactionRecord]:
    """Small snapshot spanning three days"""
    return [
        make_record(1, 1000, datetime(2024, 1, 1, 10, 0), False, 0.2, "CUST-100", "iPhone 13"),
        make_record(2, 5000, datetime(2024, 1, 1, 15, 30), True, 0.9, "CUST-100", "Galaxy S21"),
        make_record(3, 250, datetime(2024, 1, 2, 8, 15), False, 0.55, "CUST-200", "iPhone 13"),
        make_record(4, 7500, datetime(2024, 1, 3, 21, 45), True, 0.97, "cust-300", None),
        make_record(5, 120, datetime(2024, 1, 3, 22, 0), False, None, "CUST-200", "Pixel 8"),
    ]


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at the mock backend with an isolated session file"""
    return Settings(
        statistics_api_base=MOCK_BASE_URL,
        session_file=str(tmp_path / "session.json"),
        log_level="WARNING",
    )


@pytest.fixture
def mock_transport() -> httpx.ASGITransport:
    """Route backend calls to the in-process mock statistics service"""
    return httpx.ASGITransport(app=mock_app)


@pytest.fixture
def client(test_settings: Settings, mock_transport: httpx.ASGITransport) -> TestClient:
    """Gateway test client wired to the mock backend, not signed in"""
    app = create_app(test_settings, transport=mock_transport)
    return TestClient(app)


@pytest.fixture
def signed_in_client(client: TestClient) -> TestClient:
    """Gateway test client with an active analyst session"""
    response = client.post("/v1/auth/login", json={"email": MOCK_EMAIL, "password": MOCK_PASSWORD})
    assert response.status_code == 200
    return client
