from abc import ABC, abstractmethod
from typing import List

from love_odds.core.models.city import City


class CityLookupPort(ABC):
    @abstractmethod
    async def search(self, query: str) -> List[City]:
        pass

    @abstractmethod
    async def check_health(self) -> bool:
        pass
