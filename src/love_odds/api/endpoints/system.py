import asyncio
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends

from love_odds.core.deps import get_analysis_engine, get_city_client
from love_odds.core.engine.analysis_engine import AnalysisEngine
from love_odds.interfaces.external import CityLookupPort

router = APIRouter()


@router.get("/status")
async def check_system_status(
    engine: Annotated[AnalysisEngine, Depends(get_analysis_engine)],
    city_client: Annotated[CityLookupPort, Depends(get_city_client)],
) -> Dict[str, Any]:
    """
    Checks the health of all upstream services:
    - Transcription
    - Text generation
    - City lookup
    """
    results = {
        "transcription": "unknown",
        "generation": "unknown",
        "city_lookup": "unknown",
    }

    async def check_service(name: str, client: Any):
        try:
            is_healthy = await client.check_health()
            results[name] = "ok" if is_healthy else "error"
        except Exception as e:
            results[name] = f"error: {str(e)}"

    await asyncio.gather(
        check_service("transcription", engine.transcriber),
        check_service("generation", engine.llm),
        check_service("city_lookup", city_client),
    )

    overall_status = "ok" if all(v == "ok" for v in results.values()) else "degraded"

    return {"status": overall_status, "services": results}
