"""
Organization endpoints of the CI service.
"""

from typing import List

from ci_dashboard.schemas.dashboard import EnabledOrg
from .base import BaseRemoteClient


class OrgClient(BaseRemoteClient):
    """Facade over organization enablement."""

    async def list_enabled(self) -> List[EnabledOrg]:
        """Organizations currently monitored by the service."""
        path = "/api/user/orgs/enabled"
        data = await self._request("GET", path)
        return self._parse_list(f"GET {path}", EnabledOrg, data)

    async def add(self, login: str) -> None:
        await self._request("POST", f"/api/repos/{login}", json={})

    async def delete(self, login: str) -> None:
        await self._request("DELETE", f"/api/repos/{login}")
