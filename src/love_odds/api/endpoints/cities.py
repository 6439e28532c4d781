import logging
from typing import Annotated, Any, List

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from love_odds.core.deps import get_city_client
from love_odds.core.errors import NetworkError, UpstreamCityLookupError
from love_odds.core.models.city import City
from love_odds.core.models.input import ErrorResponse
from love_odds.interfaces.external import CityLookupPort

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=List[City],
    responses={502: {"model": ErrorResponse}},
)
async def search_cities(
    lookup: Annotated[CityLookupPort, Depends(get_city_client)],
    q: Annotated[str, Query(description="Partial city name")] = "",
) -> Any:
    try:
        return await lookup.search(q)
    except (NetworkError, UpstreamCityLookupError) as e:
        logger.error(f"City search failed for {q!r}: {e}")
        return JSONResponse(status_code=502, content={"error": "Failed to fetch cities"})
