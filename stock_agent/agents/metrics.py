"""Key metric aggregation over a validated input document."""
import logging
from typing import Any

from stock_agent.schemas.report import KeyMetricsSummary

logger = logging.getLogger(__name__)

METRIC_GROUPS = (
    "fundamentalResilience",
    "asymmetricRiskReward",
    "technicalConfirmation",
)


def extract_key_metrics(data: dict[str, Any]) -> KeyMetricsSummary:
    """
    Summarize pass/fail counts across the quantitative metric groups.

    Metrics whose ``pass`` flag is unset count toward neither side.

    Args:
        data: Input document that already passed input validation

    Returns:
        KeyMetricsSummary
    """
    quantitative = data["quantitative"]

    all_metrics = []
    for group in METRIC_GROUPS:
        all_metrics.extend(quantitative[group]["metrics"])

    passed_metrics = []
    failed_metrics = []

    for metric in all_metrics:
        flag = metric.get("pass")
        if flag is True:
            passed_metrics.append(metric["name"])
        elif flag is False:
            failed_metrics.append(metric["name"])

    total = len(all_metrics)
    pass_rate = round(len(passed_metrics) / total * 100, 1) if total else 0.0

    summary = KeyMetricsSummary(
        total_metrics=total,
        passed_count=len(passed_metrics),
        failed_count=len(failed_metrics),
        pass_rate=f"{pass_rate:.1f}",
        sis_score=data["sis"]["overall"],
        ssis_score=data["ssis"]["overall"],
        qualitative_rating=data["qualitative"]["overallRating"],
        passed_metrics=passed_metrics,
        failed_metrics=failed_metrics,
    )

    logger.debug(
        f"Key metrics: total={total}, passed={summary.passed_count}, "
        f"failed={summary.failed_count}, pass_rate={summary.pass_rate}%"
    )

    return summary
