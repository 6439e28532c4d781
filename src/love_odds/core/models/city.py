from typing import Any, Dict, Optional

from pydantic import BaseModel

DEFAULT_POPULATION = 1_000_000


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


class City(BaseModel):
    name: str
    country: str
    population: int = DEFAULT_POPULATION
    latitude: float = 0.0
    longitude: float = 0.0
    is_capital: bool = False

    @property
    def label(self) -> str:
        suffix = " (Capital)" if self.is_capital else ""
        return f"{self.name}, {self.country}{suffix}"

    @classmethod
    def from_api(
        cls, record: Dict[str, Any], default_population: int = DEFAULT_POPULATION
    ) -> "City":
        """Build a City from an upstream record, filling gaps with defaults."""
        population = _number(record.get("population"))
        latitude = _number(record.get("latitude"))
        longitude = _number(record.get("longitude"))

        return cls(
            name=str(record["name"]),
            country=str(record["country"]),
            population=int(population) if population is not None else default_population,
            latitude=latitude if latitude is not None else 0.0,
            longitude=longitude if longitude is not None else 0.0,
            is_capital=bool(record.get("is_capital")),
        )
