from fastapi import APIRouter

from stock_agent.api.v1 import analysis, health

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(health.router)
api_router.include_router(analysis.router)
