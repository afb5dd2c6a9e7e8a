from fastapi import APIRouter

from stock_agent.config import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    return {"status": "ok", "mock_mode": settings.mock_mode}
