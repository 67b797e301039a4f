"""
Navigation side effects.

Leaving the dashboard (logout after account deletion) is a full navigation:
the session ends and no state is reconciled afterwards.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)


@runtime_checkable
class Navigator(Protocol):
    """Protocol for leaving the dashboard."""

    async def navigate(self, path: str) -> None:
        ...


class HttpNavigator:
    """
    Navigator that follows the target through the shared HTTP client.

    The logout endpoint ends the server session; its response is not needed.
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http
        self.location: Optional[str] = None

    async def navigate(self, path: str) -> None:
        self.location = path
        try:
            response = await self.http.get(path, follow_redirects=True)
            logger.info(f"Navigated to {path} (HTTP {response.status_code})")
        except httpx.HTTPError as e:
            logger.warning(f"Navigation to {path} failed: {e}", extra={"error": str(e)})
