from fastapi import APIRouter

from love_odds.api.endpoints import analysis, cities, system

api_router = APIRouter()
api_router.include_router(analysis.router, tags=["analysis"])
api_router.include_router(cities.router, prefix="/cities", tags=["cities"])
api_router.include_router(system.router, prefix="/system", tags=["system"])
