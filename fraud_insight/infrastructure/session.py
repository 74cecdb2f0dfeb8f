"""Analyst session: persisted bearer token and the context object built around it"""

import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from fraud_insight.domain.exceptions import AuthenticationError, StatisticsAPIError
from fraud_insight.domain.models import User
from fraud_insight.infrastructure.clients.auth import AuthClient

logger = logging.getLogger(__name__)


class SessionStorage:
    """JSON file holding the access token and signed-in user"""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Optional[Tuple[str, User]]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return data["access_token"], User(**data["user"])
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Ignoring unreadable session file: {e}", extra={"path": str(self.path)})
            return None

    def save(self, token: str, user: User) -> None:
        payload = {"access_token": token, "user": asdict(user)}
        self.path.write_text(json.dumps(payload), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AuthSession:
    """
    Session context, constructed once at startup and injected where needed.

    Lifecycle:
    - load(): restore a persisted session, if any, then ready
    - login(): authenticate against the backend and persist the token
    - logout(): best-effort backend logout, then clear storage and notify
      subscribers so dependent views drop their snapshots
    """

    def __init__(self, storage: SessionStorage):
        self.storage = storage
        self.user: Optional[User] = None
        self._token: Optional[str] = None
        self._listeners: List[Callable[[], None]] = []
        self.ready = False

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self._token is not None

    def current_token(self) -> Optional[str]:
        return self._token

    def subscribe(self, listener: Callable[[], None]) -> None:
        """Register a callback invoked after logout"""
        self._listeners.append(listener)

    def load(self) -> None:
        restored = self.storage.load()
        if restored:
            self._token, self.user = restored
            logger.info("Session restored", extra={"user_email": self.user.email})
        self.ready = True

    def require_user(self) -> User:
        if not self.is_authenticated:
            raise AuthenticationError("Not signed in")
        return self.user

    async def login(self, client: AuthClient, email: str, password: str) -> User:
        result = await client.login(email, password)
        self._token = result.access_token
        self.user = result.user
        self.storage.save(result.access_token, result.user)
        logger.info("Signed in", extra={"user_email": result.user.email})
        return result.user

    async def logout(self, client: AuthClient) -> None:
        try:
            await client.logout()
        except (StatisticsAPIError, AuthenticationError) as e:
            logger.warning(f"Backend logout failed: {e}")
        finally:
            self._token = None
            self.user = None
            self.storage.clear()
            for listener in self._listeners:
                listener()
            logger.info("Signed out")
