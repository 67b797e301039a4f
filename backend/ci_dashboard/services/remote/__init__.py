"""
Remote service facades.

RemoteClients bundles the four facades over one shared httpx.AsyncClient:
- RepoClient: list/activate/deactivate/validate repositories
- OrgClient: list enabled orgs, enable/disable an org
- UserClient: current identity, account deletion
- TeamDirectory: org memberships from the bootstrap snapshot
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ci_dashboard.config import DashboardSettings
from ci_dashboard.schemas.bootstrap import Bootstrap
from .base import BaseRemoteClient
from .orgs import OrgClient
from .repos import RepoClient
from .teams import TeamDirectory
from .users import UserClient

logger = logging.getLogger(__name__)


@dataclass
class RemoteClients:
    """The dashboard's remote collaborators, sharing one HTTP client."""

    repos: RepoClient
    orgs: OrgClient
    users: UserClient
    teams: TeamDirectory
    http: Optional[httpx.AsyncClient] = None

    @classmethod
    def create(
        cls,
        settings: DashboardSettings,
        bootstrap: Bootstrap,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "RemoteClients":
        """
        Build the facades for a bootstrap snapshot.

        Args:
            settings: API base and request timeout
            bootstrap: identity data and CSRF token
            transport: optional httpx transport (tests pass httpx.MockTransport)
        """
        http = httpx.AsyncClient(
            base_url=settings.api_base,
            timeout=settings.request_timeout,
            transport=transport,
        )
        csrf = bootstrap.csrf
        logger.info(f"Remote clients ready for {bootstrap.user.login} at {settings.api_base}")
        return cls(
            repos=RepoClient(http, csrf),
            orgs=OrgClient(http, csrf),
            users=UserClient(http, bootstrap.user, csrf),
            teams=TeamDirectory(bootstrap.user, bootstrap.teams),
            http=http,
        )

    async def aclose(self) -> None:
        if self.http is not None:
            await self.http.aclose()

    async def __aenter__(self) -> "RemoteClients":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


__all__ = [
    "BaseRemoteClient",
    "OrgClient",
    "RemoteClients",
    "RepoClient",
    "TeamDirectory",
    "UserClient",
]
