"""
Geographic IP lookup via iplocate.io
"""

import asyncio
import logging
from typing import Optional

import httpx

from ..config import Settings
from ..models import GeoLookupError, LocationRecord
from .ip_classifier import IPClassifier, IPType


logger = logging.getLogger(__name__)


class GeoResolver:
    """
    Geographic IP lookup over HTTP.

    One AsyncClient is shared by every concurrent lookup. Local and
    non-routable addresses are never sent to the provider.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 client: Optional[httpx.AsyncClient] = None):
        self.settings = settings or Settings()
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.settings.timeout,
                headers={'Accept': 'application/json'},
                follow_redirects=True,
            )
        return self._client

    async def resolve(self, ip: str) -> Optional[LocationRecord]:
        """
        Lookup the location of a single IP.

        Args:
            ip: IPv4 address

        Returns:
            LocationRecord, or None when the address is local and
            there is nothing to resolve

        Raises:
            GeoLookupError: On network error, timeout, non-2xx status
                or an unusable response body
        """
        ip_type = IPClassifier.classify(ip)
        if ip_type is not IPType.PUBLIC:
            logger.debug("Skipping %s address %s", ip_type.value, ip)
            return None

        url = self.settings.lookup_url(ip)
        try:
            # get() reads the whole body, so this bounds the entire lookup
            response = await asyncio.wait_for(
                self._get_client().get(url), self.settings.timeout)
        except asyncio.TimeoutError as e:
            raise GeoLookupError(ip, f"no response within {self.settings.timeout:g}s") from e
        except httpx.HTTPError as e:
            raise GeoLookupError(ip, f"request failed: {e!r}") from e

        if not response.is_success:
            raise GeoLookupError(ip, f"HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise GeoLookupError(ip, "response is not JSON") from e

        try:
            record = LocationRecord.from_payload(data)
        except ValueError as e:
            raise GeoLookupError(ip, str(e)) from e

        logger.debug("Resolved %s to %s (%.2f, %.2f)",
                     ip, record.label, record.latitude, record.longitude)
        return record

    async def close(self):
        """Close HTTP client"""
        if self._client and self._owns_client:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False
