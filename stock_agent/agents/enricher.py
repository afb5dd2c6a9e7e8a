"""Report enrichment: attach metadata to the parsed model report."""
import logging
from datetime import datetime, timezone
from typing import Any, Callable

from stock_agent.config import Settings
from stock_agent.schemas.report import KeyMetricsSummary, ReportMetadata

logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReportEnricher:
    def __init__(
        self,
        model_name: str,
        version: str = "1.0.0",
        clock: Callable[[], datetime] = _utc_now,
    ):
        self.model_name = model_name
        self.version = version
        self.clock = clock

    @classmethod
    def from_settings(cls, config: Settings, model_name: str) -> "ReportEnricher":
        return cls(model_name=model_name, version=config.report_version)

    def enrich(
        self,
        parsed_report: dict[str, Any],
        key_metrics: KeyMetricsSummary | None,
        data: dict[str, Any],
    ) -> dict[str, Any]:
        """
        Return a copy of ``parsed_report`` with a ``metadata`` block added.

        Fields of the parsed report are kept as they are; a ``metadata`` key
        returned by the model is replaced.
        """
        stock = data.get("stock") or {}

        metadata = ReportMetadata(
            stock_symbol=stock.get("symbol"),
            stock_name=stock.get("name"),
            analysis_date=self.clock().isoformat(),
            as_of_date=stock.get("asOf"),
            key_metrics=key_metrics,
            model_used=self.model_name,
            version=self.version,
        )

        logger.info(f"Report enriched: {metadata.stock_symbol} ({self.model_name})")

        return {
            **parsed_report,
            "metadata": metadata.model_dump(by_alias=True),
        }
