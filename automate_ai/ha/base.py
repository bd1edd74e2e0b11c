"""HTTP plumbing for the Home Assistant REST API.

One httpx.AsyncClient per HAClient, bearer-token auth, and one attempt
per request. Callers decide what a status code means.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, Field

from automate_ai.exceptions import HAClientError
from automate_ai.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Status codes HA returns for a successful delete or service call
SUCCESS_CODES = frozenset({200, 204})


class HAClientConfig(BaseModel):
    """Connection details for one Home Assistant instance."""

    ha_url: str = Field(..., description="Base URL without trailing slash")
    ha_token: str = Field(..., description="Long-lived access token")
    timeout: int = Field(default=30, description="Per-request timeout in seconds")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "HAClientConfig":
        """Read URL, token and timeout from settings."""
        settings = settings or get_settings()
        return cls(
            ha_url=settings.ha_url.rstrip("/"),
            ha_token=settings.ha_token.get_secret_value(),
            timeout=settings.ha_timeout,
        )


class BaseHAClient:
    """Transport layer shared by the automation registry operations.

    AutomationMixin adds the automation endpoints on top; see HAClient.
    """

    def __init__(
        self,
        config: HAClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize client.

        Args:
            config: Connection details (read from settings when omitted)
            http_client: Pre-built httpx client, e.g. one with a MockTransport
        """
        self.config = config or HAClientConfig.from_settings()
        self._http_client = http_client

    def _get_http_client(self) -> httpx.AsyncClient:
        """Create the httpx client on first use."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.config.timeout)
        return self._http_client

    async def close(self) -> None:
        """Release the underlying connections."""
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> "BaseHAClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _send(
        self,
        method: str,
        path: str,
        json: dict | None = None,
    ) -> httpx.Response:
        """Send one request to HA and return the raw response.

        A single attempt is made; transport failures become HAClientError.

        Args:
            method: HTTP method
            path: Path below the base URL, e.g. /api/states
            json: Optional request body

        Returns:
            The httpx response, whatever its status code
        """
        client = self._get_http_client()
        url = f"{self.config.ha_url}{path}"
        try:
            return await client.request(
                method,
                url,
                headers={
                    "Authorization": f"Bearer {self.config.ha_token}",
                    "Content-Type": "application/json",
                },
                json=json,
            )
        except httpx.TimeoutException as e:
            raise HAClientError(f"{method} {path}: Timeout", "request") from e
        except httpx.HTTPError as e:
            raise HAClientError(f"{method} {path}: {type(e).__name__}", "request") from e

    async def _request(self, method: str, path: str, json: dict | None = None) -> Any:
        """Make a request to HA and decode the JSON body.

        Returns:
            Response JSON, or None when the response is not a usable 2xx JSON body
        """
        response = await self._send(method, path, json=json)
        if response.status_code not in (200, 201) or not response.content:
            logger.debug("%s %s returned HTTP %s", method, path, response.status_code)
            return None
        try:
            return response.json()
        except ValueError:
            logger.debug("%s %s returned a non-JSON body", method, path)
            return None
