# File: projector/client/session.py

"""
Client-side user session.

Holds the signed-in user and their access token. Components that care
about the user get the session passed in and either read it directly
or ``subscribe()`` to hear about changes; nothing reads a global.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    id: str
    email: str


Listener = Callable[[Optional[CurrentUser]], None]


class UserSession:
    def __init__(self, user: Optional[CurrentUser] = None, token: Optional[str] = None):
        self._user = user
        self._token = token
        self._listeners: List[Listener] = []

    @property
    def user(self) -> Optional[CurrentUser]:
        return self._user

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None and self._token is not None

    def set_user(self, user: Optional[CurrentUser], token: Optional[str] = None) -> None:
        """Replace the current user and notify every subscriber."""
        self._user = user
        self._token = token if user is not None else None
        for listener in list(self._listeners):
            listener(user)

    def clear(self) -> None:
        self.set_user(None)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener`` for user changes. Returns a callable that
        removes it again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def auth_headers(self) -> dict:
        if not self._token:
            return {}
        return {"Authorization": f"Bearer {self._token}"}


def log_in(client: httpx.Client, session: UserSession, email: str, password: str) -> CurrentUser:
    """
    Log in against ``/auth/login`` and store the result on ``session``.

    Raises httpx.HTTPStatusError when the credentials are rejected.
    """
    resp = client.post("auth/login", json={"email": email, "password": password})
    resp.raise_for_status()
    token = resp.json()["access_token"]

    resp = client.get("auth/me", headers={"Authorization": f"Bearer {token}"})
    resp.raise_for_status()
    data = resp.json()

    user = CurrentUser(id=data["id"], email=data["email"])
    session.set_user(user, token)
    logger.info("Signed in as %s", user.email)
    return user
