import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from love_odds.core.deps import get_analysis_engine
from love_odds.core.engine.analysis_engine import AnalysisEngine
from love_odds.core.errors import BadRequestError, ProcessingError
from love_odds.core.models.input import AnalyzeRequest, AnalyzeResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()

PROCESSING_FAILED = "Failed to process story"


@router.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_story(
    payload: AnalyzeRequest,
    engine: Annotated[AnalysisEngine, Depends(get_analysis_engine)],
) -> Any:
    try:
        return await engine.analyze(payload)
    except BadRequestError as e:
        logger.warning(f"Rejected analysis request: {e}")
        return JSONResponse(status_code=400, content={"error": str(e)})
    except ProcessingError as e:
        cause = e.__cause__
        logger.exception(
            f"Error processing story ({type(cause).__name__}); "
            f"partial transcription: {e.transcription!r}"
        )
        return JSONResponse(status_code=500, content={"error": PROCESSING_FAILED})
    except Exception:
        logger.exception("Unexpected error processing story")
        return JSONResponse(status_code=500, content={"error": PROCESSING_FAILED})
