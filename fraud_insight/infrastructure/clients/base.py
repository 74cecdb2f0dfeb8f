"""Shared HTTP plumbing for statistics service clients"""

from typing import Any, Callable, Optional

import httpx

from fraud_insight.config import settings
from fraud_insight.domain.exceptions import (
    AuthenticationError,
    InvalidPayloadError,
    NotFoundError,
    StatisticsAPIError,
)
from fraud_insight.infrastructure.observability.metrics import api_request_histogram

TokenProvider = Callable[[], Optional[str]]


class ApiClient:
    """
    Base client for the statistics/transaction backend.

    A fresh AsyncClient is opened per call; the bearer token is read from the
    token provider at call time so logout takes effect immediately. There is
    no automatic retry: failures surface to the caller, which offers a manual
    retry.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.statistics_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.token_provider = token_provider
        self.transport = transport

    def _headers(self) -> dict:
        token = self.token_provider() if self.token_provider else None
        return {"Authorization": f"Bearer {token}"} if token else {}

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """
        Send a request and return the successful response.

        Raises:
            AuthenticationError: On 401/403
            NotFoundError: On 404
            StatisticsAPIError: On timeout, network failure, or other HTTP errors
        """
        async with httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                with api_request_histogram.labels(method=method).time():
                    response = await client.request(method, path, headers=self._headers(), **kwargs)
                response.raise_for_status()
                return response

            except httpx.TimeoutException as e:
                raise StatisticsAPIError(f"Statistics API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                if status in (401, 403):
                    raise AuthenticationError(f"Statistics API rejected credentials: {status}") from e
                if status == 404:
                    raise NotFoundError(f"Not found: {path}") from e
                raise StatisticsAPIError(f"Statistics API error: {status}") from e
            except httpx.RequestError as e:
                raise StatisticsAPIError(f"Statistics API unreachable: {e}") from e

    async def _fetch_json(self, method: str, path: str, **kwargs: Any) -> Any:
        """Request JSON and unwrap the {success, message, data} envelope when present"""
        response = await self._request(method, path, **kwargs)
        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidPayloadError(f"Invalid JSON from statistics API: {e}") from e

        if isinstance(payload, dict) and "success" in payload and "data" in payload:
            if not payload["success"]:
                raise StatisticsAPIError(payload.get("message") or "Statistics API reported failure")
            return payload["data"]
        return payload
