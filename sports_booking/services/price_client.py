"""Price master API client.

Reads hourly rates from the remote price master
(``GET {base}/api/prices/sport/{sport}``). Rows come back with the column
casing of the price table, e.g. ``{"Id": 3, "Sports": "Cricket", "Price": 600}``.
"""
import asyncio
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from sports_booking.core.config import settings
from sports_booking.domain.models import Sport

logger = logging.getLogger(__name__)


class PriceApiClient:
    """Client for the remote price master."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        """Initialize the price client."""
        self.base_url = (base_url or settings.PRICE_API_BASE_URL or "").rstrip("/")
        self.token = token if token is not None else settings.PRICE_API_TOKEN
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.max_retries = max_retries if max_retries is not None else settings.MAX_RETRIES

        self.endpoints = {
            "by_sport": f"{self.base_url}/api/prices/sport/{{sport}}",
        }

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _make_request(self, method: str, url: str) -> Any:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Request URL

        Returns:
            Response JSON data

        Raises:
            httpx.HTTPError: If request fails after retries
        """
        async with httpx.AsyncClient() as client:
            for attempt in range(self.max_retries):
                try:
                    logger.info(f"Making {method} request to {url} (attempt {attempt + 1}/{self.max_retries})")

                    response = await client.request(
                        method=method,
                        url=url,
                        headers=self._headers(),
                        timeout=self.timeout,
                    )
                    response.raise_for_status()

                    return response.json()

                except httpx.HTTPStatusError as e:
                    # A missing price row will not appear on retry
                    if e.response.status_code == 404:
                        raise
                    logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                    if attempt == self.max_retries - 1:
                        raise

                except httpx.HTTPError as e:
                    logger.warning(f"Request failed (attempt {attempt + 1}/{self.max_retries}): {e}")
                    if attempt == self.max_retries - 1:
                        raise

                # Exponential backoff
                await asyncio.sleep(2 ** attempt)

            raise httpx.HTTPError("Max retries exceeded")

    async def get_by_sport(self, sport: Sport) -> Optional[Any]:
        """
        Get the hourly price for a sport.

        Returns:
            The raw ``Price`` value, or None when the response carries none
        """
        url = self.endpoints["by_sport"].format(sport=quote(sport.value))
        data = await self._make_request("GET", url)

        if not isinstance(data, dict):
            return None
        return data.get("Price", data.get("price"))
