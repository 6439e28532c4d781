import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Dict

import httpx
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from love_odds.api.api import api_router
from love_odds.core.config import settings
from love_odds.core.deps import build_analysis_engine, build_city_client

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings.validate_credentials()

    http_client = httpx.AsyncClient()
    app.state.engine = build_analysis_engine(settings, http_client)
    app.state.city_client = build_city_client(settings, http_client)

    logger.info("Server starting... Swagger UI: http://localhost:8000/docs")
    yield

    await http_client.aclose()
    logger.info("HTTP client closed.")


_configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix=settings.API_PREFIX)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(f"Invalid request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


@app.get("/")
async def root() -> Dict[str, str]:
    return {"message": f"{settings.PROJECT_NAME} is running"}


@app.get("/health")
async def health_check() -> Dict[str, str]:
    return {"status": "ok", "version": settings.VERSION}


def run() -> None:
    uvicorn.run("love_odds.main:app", host="0.0.0.0", port=8000)
