"""
Signed-in user facade.

The identity itself comes from the bootstrap snapshot; only account deletion
goes over the wire.
"""

import logging

import httpx

from ci_dashboard.schemas.dashboard import User
from .base import BaseRemoteClient

logger = logging.getLogger(__name__)


class UserClient(BaseRemoteClient):
    """Current identity plus account deletion."""

    def __init__(self, http: httpx.AsyncClient, user: User, csrf_token: str = ""):
        super().__init__(http, csrf_token)
        self._user = user
        self._deleted = False

    def current(self) -> User:
        return self._user

    def deleted(self) -> bool:
        """True once the account was deleted during this session."""
        return self._deleted

    async def delete(self) -> None:
        """
        Delete the current account.

        The in-session flag is only raised once the service acknowledged.
        """
        await self._request("DELETE", "/api/user")
        self._deleted = True
        logger.info(f"Deleted account {self._user.login}")
