"""Client for the public IP lookup service."""

import httpx
from structlog import get_logger

from findme.errors import IpLookupFailure

logger = get_logger()

IP_LOOKUP_URL = "https://api.ipify.org"


class IpLookupClient:
    """Client for an ipify-style endpoint answering {"ip": "..."}."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize IP lookup client."""
        self.base_url = base_url or IP_LOOKUP_URL
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        # Only override the timeout when one was configured
        if self.timeout is None:
            return httpx.AsyncClient(transport=self.transport)
        return httpx.AsyncClient(transport=self.transport, timeout=self.timeout)

    async def fetch_public_ip(self) -> str:
        """
        Resolve the public IP address of this device.

        Returns:
            The IP address as reported by the service

        Raises:
            httpx.HTTPError: If the request fails
            IpLookupFailure: If the body has no usable "ip" field
        """
        async with self._client() as client:
            logger.debug("Looking up public IP", url=self.base_url)
            response = await client.get(self.base_url, params={"format": "json"})
            response.raise_for_status()

            try:
                data = response.json()
            except ValueError as e:
                raise IpLookupFailure("IP lookup returned a non-JSON body") from e

        ip = data.get("ip") if isinstance(data, dict) else None
        if not isinstance(ip, str) or not ip:
            raise IpLookupFailure(f"IP lookup returned no address: {data!r}")
        return ip
