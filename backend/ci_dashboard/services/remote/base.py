"""
Base remote client with unified request handling.

Provides:
- Path building against the configured API base
- CSRF header on every request
- JSON decoding with a text fallback
- Conversion of non-2xx responses and transport errors into RemoteOperationError

Usage:
    class OrgClient(BaseRemoteClient):
        async def add(self, login: str) -> None:
            await self._request("POST", f"/api/repos/{login}", json={})
"""

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ci_dashboard.exceptions import RemoteOperationError

logger = logging.getLogger(__name__)

CSRF_HEADER = "X-CSRF-TOKEN"
T = TypeVar("T", bound=BaseModel)


class BaseRemoteClient:
    """
    Base class for the dashboard's remote service facades.

    All facades share one httpx.AsyncClient owned by RemoteClients.
    """

    def __init__(self, http: httpx.AsyncClient, csrf_token: str = ""):
        self.http = http
        self.csrf_token = csrf_token

    # =========================================================================
    # Request Helpers
    # =========================================================================

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.csrf_token:
            headers[CSRF_HEADER] = self.csrf_token
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Any] = None,
    ) -> Any:
        """
        Issue a request and return the decoded payload.

        Raises:
            RemoteOperationError: non-2xx status or transport failure
        """
        operation = f"{method} {path}"
        try:
            response = await self.http.request(
                method,
                path,
                json=json,
                headers=self._headers(),
            )
        except httpx.HTTPError as e:
            logger.warning(f"{operation} transport error: {e}", extra={"error": str(e)})
            raise RemoteOperationError(operation, reason=type(e).__name__) from e

        data = self._decode(response)

        if not response.is_success:
            raise RemoteOperationError(operation, status_code=response.status_code, data=data)

        return data

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        """Decode a response body as JSON, falling back to text."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    @staticmethod
    def _parse(operation: str, model: type[T], data: Any) -> T:
        """
        Validate a payload against a schema.

        Raises:
            RemoteOperationError: the payload does not match the schema
        """
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning(f"{operation} returned malformed payload", extra={"error": str(e)})
            raise RemoteOperationError(operation, data=data, reason="malformed payload") from e

    @classmethod
    def _parse_list(cls, operation: str, model: type[T], data: Any) -> list[T]:
        """Validate a list payload; `null` is treated as an empty list."""
        if data is None:
            return []
        if not isinstance(data, list):
            raise RemoteOperationError(operation, data=data, reason="expected a list")
        return [cls._parse(operation, model, item) for item in data]
