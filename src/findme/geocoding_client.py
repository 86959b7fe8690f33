"""Client for the reverse geocoding service."""

from typing import Any

import httpx
from structlog import get_logger

from findme.models import ReverseGeocodeResult

logger = get_logger()

REVERSE_GEOCODE_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"


def body_is_present(body: Any) -> bool:
    """
    Decide whether a decoded JSON body counts as an answer.

    null, false, 0 and "" count as absent. Every object counts as present,
    including {} which simply carries no place names.
    """
    if body is None or isinstance(body, (int, float, str)):
        return bool(body)
    return True


def parse_reverse_geocode(body: dict[str, Any]) -> ReverseGeocodeResult:
    """Pull country and city names out of a geocoder response body.

    Any truthy value is kept, converted to text; falsy ones become "".
    """
    country = body.get("countryName")
    city = body.get("city")
    return ReverseGeocodeResult(
        country_name=str(country) if country else "",
        city=str(city) if city else "",
    )


class ReverseGeocodingClient:
    """Client for a BigDataCloud-style reverse geocoding endpoint."""

    def __init__(
        self,
        base_url: str | None = None,
        locality_language: str = "en",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize reverse geocoding client."""
        self.base_url = base_url or REVERSE_GEOCODE_URL
        self.locality_language = locality_language
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        if self.timeout is None:
            return httpx.AsyncClient(transport=self.transport)
        return httpx.AsyncClient(transport=self.transport, timeout=self.timeout)

    async def reverse_geocode(self, latitude: float, longitude: float) -> Any:
        """
        Look up the place at a coordinate.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            The decoded JSON body, untouched. May be None for a null body.

        Raises:
            httpx.HTTPError: If the request fails
            ValueError: If the body is not JSON
        """
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "localityLanguage": self.locality_language,
        }
        async with self._client() as client:
            logger.debug("Reverse geocoding", url=self.base_url, **params)
            response = await client.get(self.base_url, params=params)
            response.raise_for_status()
            return response.json()
