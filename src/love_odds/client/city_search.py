import asyncio
import contextlib
import logging
from typing import List, Optional

from love_odds.core.errors import NetworkError, UpstreamCityLookupError
from love_odds.core.models.city import City
from love_odds.interfaces.external import CityLookupPort

logger = logging.getLogger(__name__)

DEBOUNCE_SECONDS = 0.75


class CitySearch:
    """
    Typeahead controller over a CityLookupPort.

    Each input restarts the debounce timer and cancels any search still
    running; a result is committed only if its input is still the latest.
    """

    def __init__(self, lookup: CityLookupPort, debounce: float = DEBOUNCE_SECONDS):
        self.lookup = lookup
        self.debounce = debounce
        self.query = ""
        self.cities: List[City] = []
        self.error: Optional[str] = None
        self.is_loading = False
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    def on_input(self, value: str) -> None:
        self.query = value
        self._generation += 1
        self._cancel_pending()
        self._task = asyncio.create_task(self._debounced(value, self._generation))

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def _debounced(self, value: str, generation: int) -> None:
        await asyncio.sleep(self.debounce)

        trimmed = value.strip()
        if not trimmed:
            self.cities = []
            self.error = None
            self.is_loading = False
            return

        self.is_loading = True
        self.error = None
        try:
            cities = await self.lookup.search(trimmed)
        except (NetworkError, UpstreamCityLookupError) as e:
            if self._is_current(generation):
                logger.error(f"Error fetching cities: {e}")
                self.error = str(e) or "Failed to fetch cities"
                self.cities = []
                self.is_loading = False
            return

        if self._is_current(generation):
            self.cities = cities
            self.error = None
            self.is_loading = False

    async def wait(self) -> None:
        """Wait for the latest scheduled search to settle."""
        task = self._task
        if task is None:
            return
        with contextlib.suppress(asyncio.CancelledError):
            await task

    async def close(self) -> None:
        self._generation += 1
        self._cancel_pending()
        await self.wait()
        self._task = None
        self.is_loading = False
