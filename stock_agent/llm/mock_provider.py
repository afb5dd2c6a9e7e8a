"""Offline inference client returning a fixed, schema-conforming report."""
import json
import logging

logger = logging.getLogger(__name__)

MOCK_REPORT = {
    "overallScore": 70,
    "recommendation": "Watchlist",
    "financialHealth": (
        "• Free cash flow yield and ROIC clear their thresholds, showing efficient capital use\n"
        "• Net debt to EBITDA sits well above the leverage limit\n"
        "• Revenue growth trails the five-year target"
    ),
    "valuation": (
        "• Forward P/E trades above the sector median\n"
        "• Peer multiples suggest the stock carries a premium\n"
        "• Current price looks full relative to growth"
    ),
    "futureGrowth": (
        "• Revenue CAGR is below the growth threshold\n"
        "• Operating leverage is contracting instead of expanding\n"
        "• Peers compound earnings noticeably faster"
    ),
    "competitiveAdvantage": (
        "• Insider ownership and buying are significant\n"
        "• Relative strength versus the sector is negative\n"
        "• Slower growth hints at a narrowing moat"
    ),
    "managementQuality": (
        "• Overall qualitative rating is strong\n"
        "• Investment process and valuation approach score well\n"
        "• Catalyst recognition is adequate but not outstanding"
    ),
    "riskFactors": (
        "• Leverage is the main balance sheet risk\n"
        "• Growth and operating leverage are both weak\n"
        "• Sector peers show large drawdowns and high beta"
    ),
    "technicalTrend": (
        "• Price holds above the 200-day moving average\n"
        "• Accumulation/distribution indicator is positive\n"
        "• Sector-relative strength remains negative"
    ),
    "portfolioFit": (
        "• Suits balanced or quality-focused investors\n"
        "• Requires moderate to high risk tolerance\n"
        "• Keep position size small until leverage improves"
    ),
    "timeHorizon": (
        "• Medium to long-term holding period\n"
        "• Few near-term catalysts for re-rating\n"
        "• Allow time for deleveraging and growth recovery"
    ),
    "aiSummary": (
        "• Strong cash generation, ROIC and management quality form a solid base\n"
        "• High leverage, weak growth and a premium valuation hold the case back\n"
        "• Progress on debt reduction and top-line growth is the key decision factor"
    ),
    "finalVerdict": (
        "• Fundamentally sound but currently imbalanced\n"
        "• Watchlist rather than Buy until growth and leverage improve\n"
        "• Revisit after the next earnings cycle"
    ),
}


class MockLLMProvider:
    """Inference client that never touches the network."""

    model = "mock"

    def __init__(self, report: dict | None = None):
        self.report = report or MOCK_REPORT
        self.calls = 0

    async def invoke(self, prompt: str) -> str:
        self.calls += 1
        logger.debug(f"Mock LLM invoked (call #{self.calls}, prompt {len(prompt)} chars)")
        return json.dumps(self.report)
