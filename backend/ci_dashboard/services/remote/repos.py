"""
Repository endpoints of the CI service.

GET    /api/user/repos                   repos of the signed-in user
GET    /api/user/repos/{org}             repos of an organization
POST   /api/repos/{owner}/{name}         activate
DELETE /api/repos/{owner}/{name}         deactivate
GET    /api/repos/{owner}/{name}/validate
"""

import logging
from typing import List, Optional

from ci_dashboard.exceptions import RemoteOperationError, ValidationFailure
from ci_dashboard.schemas.dashboard import Repo, ValidationResponse
from .base import BaseRemoteClient

logger = logging.getLogger(__name__)


class RepoClient(BaseRemoteClient):
    """Facade over the repository endpoints."""

    async def list(self, user_login: str, org_login: str) -> List[Repo]:
        """List repos for the selected org; the user's own login selects the user's repos."""
        if user_login == org_login:
            path = "/api/user/repos"
        else:
            path = f"/api/user/repos/{org_login}"
        data = await self._request("GET", path)
        repos = self._parse_list(f"GET {path}", Repo, data)
        logger.debug(f"Listed {len(repos)} repositories for {org_login}")
        return repos

    async def create(self, owner: str, name: str, body: Optional[dict] = None) -> Repo:
        """Activate a repository. The response carries the server-issued id."""
        path = f"/api/repos/{owner}/{name}"
        data = await self._request("POST", path, json=body or {})
        return self._parse(f"POST {path}", Repo, data)

    async def delete(self, owner: str, name: str) -> None:
        await self._request("DELETE", f"/api/repos/{owner}/{name}")

    async def validate(self, owner: str, name: str) -> ValidationResponse:
        """
        Validate the repository's configuration files.

        Raises:
            ValidationFailure: the service rejected the configuration or the call failed
        """
        path = f"/api/repos/{owner}/{name}/validate"
        try:
            data = await self._request("GET", path)
            return self._parse(f"GET {path}", ValidationResponse, data)
        except RemoteOperationError as e:
            raise ValidationFailure(e.operation, status_code=e.status_code, data=e.data) from e
