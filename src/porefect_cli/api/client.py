"""API client for Porefect."""

from collections.abc import Callable
from typing import Any, Optional

import httpx

from porefect_cli.api.errors import from_request_error, from_status_error
from porefect_cli.config import get_config_manager
from porefect_cli.utils.logger import get_logger

TokenProvider = Callable[[], Optional[str]]


class APIClient:
    """HTTP client for the Porefect API.

    The bearer token is looked up on every request through ``token_provider``.
    When no provider is given the profile's saved credentials are used. A
    missing token sends the request unauthenticated.
    """

    def __init__(
        self,
        profile: str = "default",
        *,
        token_provider: Optional[TokenProvider] = None,
    ):
        self.config_manager = get_config_manager(profile)
        self.config = self.config_manager.config
        self.base_url = self.config.api.endpoint.rstrip("/")
        self.timeout = self.config.api.timeout
        self.token_provider = token_provider or self._saved_token
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _saved_token(self) -> Optional[str]:
        credentials = self.config_manager.load_credentials()
        if credentials:
            return credentials.get("token")
        return None

    def _get_headers(self, skip_auth: bool = False) -> dict[str, str]:
        """Get HTTP headers with authentication."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        if not skip_auth:
            token = self.token_provider()
            if token:
                headers["Authorization"] = f"Bearer {token}"

        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
        skip_auth: bool = False,
    ) -> httpx.Response:
        """Make a single HTTP request to the API.

        Failures are never retried. They are logged and raised as one of the
        ``porefect_cli.api.errors`` types.
        """
        logger = get_logger()
        client = await self._get_client()
        url = path if path.startswith("/") else f"/{path}"

        # The token is fetched per request so a refreshed one is always used
        headers = self._get_headers(skip_auth=skip_auth)
        logger.debug("%s %s", method, url)

        try:
            response = await client.request(
                method=method,
                url=url,
                json=json,
                params=params,
                headers=headers,
            )
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            error = from_status_error(e, url)
            logger.error(
                "API request failed: %s %s -> %s %r",
                method,
                url,
                e.response.status_code,
                error.body,
            )
            raise error from e
        except httpx.RequestError as e:
            logger.error("API request failed: %s %s -> %s", method, url, e)
            raise from_request_error(e) from e

    async def get(
        self, path: str, *, params: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a GET request."""
        return await self.request("GET", path, params=params)

    async def post(
        self, path: str, *, json: Optional[dict[str, Any]] = None
    ) -> httpx.Response:
        """Make a POST request."""
        return await self.request("POST", path, json=json)


def get_client(
    profile: str = "default", *, token_provider: Optional[TokenProvider] = None
) -> APIClient:
    """Get an API client instance."""
    return APIClient(profile, token_provider=token_provider)
