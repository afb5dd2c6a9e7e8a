from stock_agent.schemas.analysis import (
    AnalyzeRequest,
    BatchAnalyzeRequest,
    BatchItemResult,
    HistoryEntry,
    HistoryResponse,
)
from stock_agent.schemas.report import (
    REPORT_SECTIONS,
    AnalysisReportContent,
    KeyMetricsSummary,
    ReportMetadata,
)
from stock_agent.schemas.stock import StockInput
from stock_agent.schemas.validation import (
    ValidationResult,
    validate,
    validate_input,
    validate_output,
)

__all__ = [
    "AnalyzeRequest",
    "BatchAnalyzeRequest",
    "BatchItemResult",
    "HistoryEntry",
    "HistoryResponse",
    "REPORT_SECTIONS",
    "AnalysisReportContent",
    "KeyMetricsSummary",
    "ReportMetadata",
    "StockInput",
    "ValidationResult",
    "validate",
    "validate_input",
    "validate_output",
]
