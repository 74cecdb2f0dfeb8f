"""Auth API client"""

from fraud_insight.domain.exceptions import InvalidPayloadError
from fraud_insight.domain.models import LoginResult
from fraud_insight.infrastructure.clients.base import ApiClient
from fraud_insight.infrastructure.clients import parsing


class AuthClient(ApiClient):
    """Client for the /auth endpoints"""

    async def login(self, email: str, password: str) -> LoginResult:
        data = await self._fetch_json("POST", "/auth/login", json={"email": email, "password": password})
        try:
            return parsing.parse_login(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidPayloadError(f"Invalid login response: {e}") from e

    async def logout(self) -> None:
        await self._request("POST", "/auth/logout")

    async def get_current_user(self) -> str:
        """Email of the user owning the current token"""
        data = await self._fetch_json("GET", "/auth/me")
        return str(data)
