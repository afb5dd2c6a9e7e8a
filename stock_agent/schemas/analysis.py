from typing import Any

from pydantic import BaseModel, Field


class AnalyzeRequest(BaseModel):
    input: dict[str, Any] = Field(..., examples=[{"stock": {"symbol": "AAPL"}}])


class BatchAnalyzeRequest(BaseModel):
    inputs: list[dict[str, Any]]


class BatchItemResult(BaseModel):
    success: bool
    symbol: str
    data: dict[str, Any] | None = None
    error: str | None = None


class HistoryEntry(BaseModel):
    timestamp: str
    symbol: str
    recommendation: str | None
    score: float | None


class HistoryResponse(BaseModel):
    history: list[HistoryEntry]
    summary: dict[str, Any]
