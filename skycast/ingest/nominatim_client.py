"""Nominatim geocoding client: free-text/postal-code search and reverse lookup."""

import logging
import re

from skycast.config.schema import IngestConfig
from skycast.ingest.http_retry import get_json
from skycast.models.common import Location

logger = logging.getLogger(__name__)

_US_ZIP_RE = re.compile(r"^\d{5}$")
UNKNOWN_COUNTRY = "Unknown"
UNKNOWN_LOCATION = "Unknown Location"


class NominatimClient:
    def __init__(self, config: IngestConfig | None = None):
        self.config = config or IngestConfig()

    def _get(self, endpoint: str, params: dict) -> object:
        return get_json(
            f"{self.config.geocoding_base_url}/{endpoint}",
            params=params,
            headers={"User-Agent": self.config.user_agent},
            timeout=self.config.timeout_seconds,
            max_retries=self.config.max_retries,
            retry_base_delay=self.config.retry_base_delay_seconds,
        )

    def search(self, query: str) -> list[Location]:
        """Search for places matching a name or a US ZIP code.

        Results without an address, a usable name, or a known country are
        dropped; at most ``search_limit`` locations are returned.
        """
        query = query.strip()
        params: dict = {
            "q": query,
            "format": "json",
            "limit": self.config.search_limit,
            "addressdetails": 1,
        }
        if _US_ZIP_RE.match(query):
            params["countrycodes"] = "us"

        raw = self._get("search", params)
        results = parse_search_results(raw if isinstance(raw, list) else [])
        return results[: self.config.search_limit]

    def reverse(self, lat: float, lon: float) -> Location:
        """Resolve coordinates to the nearest named place."""
        raw = self._get("reverse", {"lat": lat, "lon": lon, "format": "json"})
        return parse_reverse_result(raw if isinstance(raw, dict) else {}, lat, lon)


def parse_search_results(items: list[dict]) -> list[Location]:
    locations: list[Location] = []
    for item in items:
        address = item.get("address")
        if not address:
            continue
        name = (
            address.get("city")
            or address.get("town")
            or address.get("village")
            or item.get("display_name", "").split(",")[0].strip()
        )
        country = address.get("country") or UNKNOWN_COUNTRY
        if not name or country == UNKNOWN_COUNTRY:
            logger.debug("Discarding search result %r", item.get("display_name"))
            continue
        try:
            lat = float(item["lat"])
            lon = float(item["lon"])
        except (KeyError, TypeError, ValueError):
            logger.warning("Search result %r has no usable coordinates", name)
            continue
        locations.append(
            Location(
                name=name,
                latitude=lat,
                longitude=lon,
                country=country,
                state=address.get("state") or None,
            )
        )
    return locations


def parse_reverse_result(raw: dict, lat: float, lon: float) -> Location:
    """Build a Location from a reverse lookup, keeping the queried point if absent."""
    address = raw.get("address") or {}
    name = (
        address.get("city")
        or address.get("town")
        or address.get("village")
        or address.get("suburb")
        or UNKNOWN_LOCATION
    )
    return Location(
        name=name,
        latitude=float(raw.get("lat", lat)),
        longitude=float(raw.get("lon", lon)),
        country=address.get("country") or UNKNOWN_COUNTRY,
        state=address.get("state") or None,
    )
