"""Forward geocoding against a Nominatim-compatible search API."""

import typing as t
from dataclasses import dataclass

import requests
import structlog
from django.conf import settings

logger = structlog.get_logger(__name__)

MIN_QUERY_LENGTH = 2


class GeocodingError(Exception):
    """The geocoding backend could not be reached or returned something unusable."""


@dataclass(frozen=True)
class GeocodeResult:
    name: str
    lat: float
    lng: float


class GeocodingClient:
    """Thin client for the Nominatim ``/search`` endpoint.

    Nominatim's usage policy requires an identifying User-Agent, which is taken from
    ``GEOCODING_USER_AGENT``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        user_agent: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url or settings.GEOCODING_URL
        self.user_agent = user_agent or settings.GEOCODING_USER_AGENT
        self.timeout = timeout or settings.GEOCODING_TIMEOUT
        self.session = session or requests.Session()

    def _request(self, params: dict[str, t.Any]) -> list[dict[str, t.Any]]:
        try:
            response = self.session.get(
                self.base_url,
                params=params,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.warning("geocoding_request_failed", query=params.get("q"), error=str(e))
            raise GeocodingError(f"Geocoding request failed: {e}") from e
        except ValueError as e:
            logger.warning("geocoding_invalid_response", query=params.get("q"), error=str(e))
            raise GeocodingError("Geocoding service returned invalid JSON.") from e
        if not isinstance(data, list):
            raise GeocodingError("Geocoding service returned an unexpected payload.")
        return data

    @staticmethod
    def _parse(item: dict[str, t.Any]) -> GeocodeResult | None:
        try:
            return GeocodeResult(name=str(item["display_name"]), lat=float(item["lat"]), lng=float(item["lon"]))
        except (KeyError, TypeError, ValueError):
            return None

    def search(self, query: str, limit: int | None = None, countrycodes: str = "") -> list[GeocodeResult]:
        """Look up places matching ``query``.

        Queries shorter than two characters return an empty list without calling the backend.

        Raises:
            GeocodingError: On network, HTTP or decoding errors.
        """
        query = (query or "").strip()
        if len(query) < MIN_QUERY_LENGTH:
            return []
        params: dict[str, t.Any] = {
            "format": "json",
            "q": query,
            "limit": limit or settings.GEOCODING_RESULT_LIMIT,
            "addressdetails": 1,
        }
        if countrycodes:
            params["countrycodes"] = countrycodes
        results = [parsed for item in self._request(params) if (parsed := self._parse(item)) is not None]
        logger.debug("geocoding_search", query=query, results=len(results))
        return results

    def geocode(self, query: str) -> GeocodeResult | None:
        """The best match for ``query``, or None."""
        results = self.search(query, limit=1)
        return results[0] if results else None
