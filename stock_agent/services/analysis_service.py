"""Analysis pipeline execution service"""

import logging
from datetime import datetime, timezone
from typing import Any

from stock_agent.agents.graph import WorkflowEngine, is_degraded
from stock_agent.config import Settings
from stock_agent.exceptions import AnalysisFailedError
from stock_agent.llm.provider import InferenceClient

logger = logging.getLogger(__name__)


def symbol_hint(data: Any) -> str:
    try:
        return data["stock"]["symbol"] or "Unknown"
    except (KeyError, TypeError):
        return "Unknown"


class AnalysisService:
    """Runs analyses one security at a time and keeps a history of results."""

    def __init__(self, engine: WorkflowEngine):
        self.engine = engine
        self.history: list[dict[str, Any]] = []

    @classmethod
    def from_settings(
        cls,
        config: Settings,
        client: InferenceClient | None = None,
    ) -> "AnalysisService":
        return cls(WorkflowEngine.from_settings(config, client=client))

    async def analyze(self, data: dict[str, Any]) -> dict[str, Any]:
        """
        Analyze one security.

        Args:
            data: Input document

        Returns:
            Enriched report

        Raises:
            AnalysisFailedError: the workflow ended in a degraded report
        """
        symbol = symbol_hint(data)
        logger.info(f"Analysis started: {symbol}")

        report = await self.engine.execute(data)

        if is_degraded(report):
            raise AnalysisFailedError(report.get("errors", []))

        self.history.append({
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "symbol": symbol,
            "recommendation": report.get("recommendation"),
            "score": report.get("overallScore"),
        })

        logger.info(
            f"Analysis finished: {symbol} score={report.get('overallScore')}, "
            f"recommendation={report.get('recommendation')}"
        )

        return report

    async def analyze_batch(self, inputs: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """
        Analyze several securities sequentially.

        A failing item does not stop the batch; result ``i`` belongs to
        input ``i``.

        Returns:
            [{"success": True, "data": report, "symbol": ...} |
             {"success": False, "error": message, "symbol": ...}]
        """
        total = len(inputs)
        logger.info(f"Batch analysis started: {total} securities")

        results = []

        for idx, data in enumerate(inputs, 1):
            symbol = symbol_hint(data)
            logger.info(f"[{idx}/{total}] {symbol}")

            try:
                report = await self.analyze(data)
                results.append({"success": True, "data": report, "symbol": symbol})
            except Exception as e:
                logger.error(f"Analysis failed for item {idx} ({symbol}): {e}")
                results.append({"success": False, "error": str(e), "symbol": symbol})

        success = sum(1 for r in results if r["success"])
        logger.info(f"Batch analysis complete: {success}/{total} successful")

        return results

    def get_history(self) -> list[dict[str, Any]]:
        return list(self.history)

    def summary_stats(self) -> dict[str, Any]:
        """Aggregate statistics over the analysis history."""
        if not self.history:
            return {"message": "No analyses performed yet"}

        recommendations: dict[str, int] = {}
        for item in self.history:
            key = item["recommendation"]
            recommendations[key] = recommendations.get(key, 0) + 1

        scores = [item["score"] for item in self.history if isinstance(item["score"], (int, float))]
        average = sum(scores) / len(scores) if scores else 0.0

        return {
            "totalAnalyses": len(self.history),
            "averageScore": f"{average:.2f}",
            "recommendations": recommendations,
            "latestAnalysis": self.history[-1],
        }
