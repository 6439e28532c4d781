import logging
import re
from typing import List

import httpx

from love_odds.core.errors import NetworkError, UpstreamCityLookupError
from love_odds.core.models.city import DEFAULT_POPULATION, City
from love_odds.interfaces.external import CityLookupPort

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2

_SPECIAL_CHARS = re.compile(r"[^\w\s-]")


def normalize_city_query(query: str) -> str:
    """Lowercase, drop special characters (hyphens survive), keep the first word."""
    cleaned = _SPECIAL_CHARS.sub("", query.strip().lower())
    words = cleaned.split()
    return words[0] if words else ""


class CityLookupHTTPClient(CityLookupPort):
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str,
        limit: int = 10,
        timeout: float = 10.0,
        default_population: int = DEFAULT_POPULATION,
    ):
        self.client = client
        self._api_key = api_key
        self.base_url = base_url
        self.limit = limit
        self.timeout = timeout
        self.default_population = default_population

    @property
    def _headers(self) -> dict:
        return {"X-Api-Key": self._api_key, "Accept": "application/json"}

    async def search(self, query: str) -> List[City]:
        if len(query.strip()) < MIN_QUERY_LENGTH:
            return []

        formatted = normalize_city_query(query)
        if not formatted:
            return []

        logger.debug(f"Searching cities for '{formatted}'")
        try:
            response = await self.client.get(
                self.base_url,
                params={"name": formatted},
                headers=self._headers,
                timeout=self.timeout,
            )
        except httpx.RequestError as e:
            raise NetworkError(f"City search request failed: {e!r}") from e

        if not response.is_success:
            raise UpstreamCityLookupError(f"API Error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamCityLookupError("Invalid API response format") from e
        if not isinstance(data, list):
            raise UpstreamCityLookupError("Invalid API response format")

        cities = [
            City.from_api(record, self.default_population)
            for record in data
            if isinstance(record, dict) and record.get("name") and record.get("country")
        ]
        return cities[: self.limit]

    async def check_health(self) -> bool:
        try:
            resp = await self.client.get(
                self.base_url,
                params={"name": "london"},
                headers=self._headers,
                timeout=3.0,
            )
            return resp.status_code == 200
        except httpx.HTTPError as e:
            logger.warning(f"City lookup health check failed: {e!r}")
            return False
