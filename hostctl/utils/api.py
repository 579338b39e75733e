"""
HTTP client wrapper for the hosting platform API.

Provides a thin wrapper around httpx.AsyncClient with hostctl-specific
configuration and error mapping.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

import httpx

from ..config import HostctlConfig
from ..errors import RemoteFetchError, RemoteMutationError

if TYPE_CHECKING:
    from ..workflows.models import WorkflowHandle

logger = logging.getLogger(__name__)

USER_AGENT = "hostctl/0.1.0"


class HostctlApiClient:
    """
    Wrapper around httpx.AsyncClient for the hosting platform API.

    This class provides:
    1. Configured client with the session token as bearer credential
    2. Paged listing requests
    3. Mutating requests that return a workflow payload
    4. Workflow status polling

    Reads raise RemoteFetchError and writes raise RemoteMutationError.
    Nothing is retried here; a mutation must never be fired twice.

    Example:
        ```python
        from hostctl.utils.api import HostctlApiClient
        from hostctl.config import HostctlConfig

        config = HostctlConfig()
        api = await HostctlApiClient.create(config)

        records, has_more = await api.listing("users/abc/memberships/organizations")
        workflow = await api.mutate("organizations/xyz/workflows", {"type": "..."})
        ```
    """

    def __init__(self, config: HostctlConfig, http_client: httpx.AsyncClient) -> None:
        """
        Initialize the API client.

        Args:
            config: hostctl configuration
            http_client: Configured httpx.AsyncClient

        Note:
            Use HostctlApiClient.create() instead of direct instantiation.
        """
        self.config = config
        self._http = http_client

    @classmethod
    async def create(cls, config: HostctlConfig) -> "HostctlApiClient":
        """
        Create and initialize a HostctlApiClient.

        Args:
            config: hostctl configuration with API URL and session token

        Returns:
            Initialized HostctlApiClient
        """
        http_client = httpx.AsyncClient(
            base_url=f"{config.api_url}/",
            timeout=httpx.Timeout(config.http_timeout),
            headers={
                "Authorization": f"Bearer {config.session_token}",
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
        )
        return cls(config=config, http_client=http_client)

    async def _request(
        self,
        method: str,
        path: str,
        error_cls: type,
        **kwargs: Any,
    ) -> Any:
        """Send a request and map failures onto the hostctl error taxonomy."""
        try:
            response = await self._http.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise error_cls(
                f"{method} {path} failed with HTTP {status}",
                status_code=status,
                authorization=status in (401, 403),
            ) from e
        except httpx.HTTPError as e:
            raise error_cls(f"{method} {path} failed: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise error_cls(
                f"{method} {path} returned a non-JSON body",
                status_code=response.status_code,
            ) from e

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Fetch a single resource.

        Args:
            path: API path relative to the base URL
            params: Optional query parameters

        Returns:
            Decoded JSON body

        Raises:
            RemoteFetchError: On transport, HTTP or auth failure
        """
        return await self._request("GET", path, RemoteFetchError, params=params)

    async def listing(
        self,
        path: str,
        start: Optional[str] = None,
        paged: bool = True,
    ) -> Tuple[List[Dict[str, Any]], bool]:
        """
        Fetch one page of a listing endpoint.

        Args:
            path: Listing path (e.g., "users/{id}/memberships/organizations")
            start: Cursor; the ID of the last record of the previous page
            paged: If False, fetch the whole listing in one request

        Returns:
            Tuple of (raw records, has_more)

        Raises:
            RemoteFetchError: On transport, HTTP or auth failure
        """
        params: Dict[str, Any] = {}
        if paged:
            params["limit"] = self.config.page_size
            if start is not None:
                params["start"] = start

        logger.debug("GET %s %s", path, params)
        body = await self._request("GET", path, RemoteFetchError, params=params or None)

        if body is None:
            records: List[Dict[str, Any]] = []
        elif isinstance(body, list):
            records = body
        elif isinstance(body, dict) and isinstance(body.get("data"), list):
            records = body["data"]
        elif isinstance(body, dict):
            # Some listings are keyed by ID
            records = list(body.values())
        else:
            raise RemoteFetchError(f"GET {path} returned an unexpected body")

        has_more = paged and len(records) >= self.config.page_size
        return records, has_more

    async def mutate(
        self,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        method: str = "POST",
    ) -> Dict[str, Any]:
        """
        Send a mutating request that answers with a workflow payload.

        Args:
            path: API path
            payload: JSON body
            method: HTTP method (POST, PUT, DELETE)

        Returns:
            Raw workflow payload

        Raises:
            RemoteMutationError: On transport, HTTP or auth failure, or when
                the response carries no workflow
        """
        logger.debug("%s %s %s", method, path, payload)
        body = await self._request(method, path, RemoteMutationError, json=payload)
        if not isinstance(body, dict) or "id" not in body:
            raise RemoteMutationError(f"{method} {path} did not return a workflow")
        return body

    async def workflow_status(self, handle: "WorkflowHandle") -> Dict[str, Any]:
        """
        Poll the status of a workflow.

        Args:
            handle: Workflow handle returned by a mutation

        Returns:
            Raw workflow payload

        Raises:
            RemoteFetchError: On transport, HTTP or auth failure
        """
        body = await self.get(handle.status_path)
        if not isinstance(body, dict):
            raise RemoteFetchError(f"GET {handle.status_path} returned an unexpected body")
        return body

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()


async def create_api_client(config: HostctlConfig) -> HostctlApiClient:
    """
    Convenience function to create a HostctlApiClient.

    Args:
        config: hostctl configuration

    Returns:
        Initialized HostctlApiClient
    """
    return await HostctlApiClient.create(config)
