"""Stock analysis prompts"""
import json
from typing import Any

SYSTEM_PROMPT = """You are a senior investment analyst producing institutional-grade stock evaluation reports.

Base every statement STRICTLY on the JSON data you are given.

Rules:
1. Use only the provided input. Do not fetch, assume or invent external data.
2. Ground conclusions in the quantitative metrics, SIS/SSIS scores, qualitative ratings and peer comparisons.
3. Be objective and precise, and name both strengths and weaknesses.
4. Consider risk-adjusted returns and portfolio fit.
"""

ANALYSIS_PROMPT_TEMPLATE = """Analyze the following stock data and produce an evaluation report.

INPUT DATA:
{input_data}

Cover these sections:

1. overallScore (0-100) with a recommendation of Buy, Watchlist or Avoid
2. financialHealth: fundamental resilience metrics and risk sensitivity signals
3. valuation: forward P/E versus sector and peer valuations
4. futureGrowth: revenue growth, operating leverage, compounding scores
5. competitiveAdvantage: relative strength, peer performance, insider activity
6. managementQuality: qualitative criteria and overall rating
7. riskFactors: failed thresholds, drawdown, leverage, volatility
8. technicalTrend: moving averages, RSI, accumulation/distribution, momentum
9. portfolioFit: investor profile, allocation and risk tolerance
10. timeHorizon: suggested holding period
11. aiSummary: key strengths, weaknesses and the investment thesis
12. finalVerdict: the decision in a few sentences

Formatting:
- Bullet points (•), at most 3 per section
- Plain, concise English

Return ONLY a valid JSON object with exactly this structure:
{{
  "overallScore": number (0-100),
  "recommendation": "Buy" | "Watchlist" | "Avoid",
  "financialHealth": string,
  "valuation": string,
  "futureGrowth": string,
  "competitiveAdvantage": string,
  "managementQuality": string,
  "riskFactors": string,
  "technicalTrend": string,
  "portfolioFit": string,
  "timeHorizon": string,
  "aiSummary": string,
  "finalVerdict": string
}}
"""


def build_analysis_prompt(data: dict[str, Any]) -> str:
    """
    Render the analysis prompt for one input document.

    Args:
        data: Input document

    Returns:
        User prompt text
    """
    return ANALYSIS_PROMPT_TEMPLATE.format(
        input_data=json.dumps(data, indent=2, ensure_ascii=False)
    )
