import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from stock_agent.agents.graph import degraded_report
from stock_agent.config import settings, validate_settings
from stock_agent.exceptions import AnalysisFailedError, ConfigurationError
from stock_agent.schemas import (
    AnalyzeRequest,
    BatchAnalyzeRequest,
    BatchItemResult,
    HistoryResponse,
)
from stock_agent.services.analysis_service import AnalysisService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/analysis", tags=["analysis"])

# Shared service (history lives here); built on first request
_service: AnalysisService | None = None


def get_analysis_service() -> AnalysisService:
    global _service

    if _service is None:
        try:
            validate_settings(settings)
        except ConfigurationError as e:
            raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
        _service = AnalysisService.from_settings(settings)

    return _service


@router.post("/analyze")
async def analyze_stock(
    data: AnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
) -> dict[str, Any]:
    """Analyze one security. Failed analyses come back as a degraded report."""
    try:
        return await service.analyze(data.input)
    except AnalysisFailedError as e:
        logger.warning(f"Analysis failed: {e.errors}")
        return degraded_report(e.errors)


@router.post("/batch", response_model=list[BatchItemResult])
async def analyze_batch(
    data: BatchAnalyzeRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Analyze several securities one after another."""
    return await service.analyze_batch(data.inputs)


@router.get("/history", response_model=HistoryResponse)
async def get_history(service: AnalysisService = Depends(get_analysis_service)):
    return HistoryResponse(history=service.get_history(), summary=service.summary_stats())
