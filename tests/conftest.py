import copy
import json

import pytest

from stock_agent.llm.mock_provider import MOCK_REPORT

SAMPLE_INPUT = {
    "stock": {
        "symbol": "DEMO",
        "name": "Demo Semiconductor Corp",
        "asOf": "2025-06-30",
        "overallResult": "Mixed",
    },
    "quantitative": {
        "fundamentalResilience": {
            "overall": "Pass",
            "metrics": [
                {"name": "Free Cash Flow Yield", "value": "3%", "threshold": ">2%", "pass": True},
                {"name": "Net Debt/EBITDA", "value": "4x", "threshold": "<2.5x", "pass": False},
                {"name": "ROIC", "value": "11%", "threshold": ">10%", "pass": True},
                {"name": "Insider Ownership/Buying", "actual": "Significant", "threshold": "Significant", "pass": True},
            ],
        },
        "asymmetricRiskReward": {
            "overall": "Fail",
            "metrics": [
                {"name": "Forward P/E vs Sector", "value": "Above", "threshold": "Below Sector Median", "pass": False},
                {"name": "Revenue Growth (5y CAGR)", "value": 3.5, "threshold": ">5%", "pass": False},
                {"name": "Max Drawdown", "actual": 22.5, "threshold": "<30%", "pass": True},
            ],
        },
        "technicalConfirmation": {
            "overall": "Pass",
            "metrics": [
                {"name": "Price vs 200-DMA", "value": "Above", "threshold": "Above", "pass": True},
                {"name": "Relative Strength vs Sector", "value": "Negative", "threshold": "Positive", "pass": False},
                {"name": "Accumulation/Distribution", "value": "Positive", "threshold": "Positive", "pass": True},
            ],
        },
        "riskSensitivityAlignment": {
            "overall": "Mixed",
            "signals": [
                {"name": "FCF Yield", "pass": True},
                {"name": "Net Debt/EBITDA", "pass": False},
            ],
        },
    },
    "sis": {
        "overall": 62,
        "stocks": [
            {
                "symbol": "JD",
                "name": "JD.com",
                "sisScore": 80,
                "metrics": [{"name": "Compounding Score", "value": 80}],
            }
        ],
    },
    "ssis": {
        "overall": 55.5,
        "peers": [
            {
                "symbol": "ETSY",
                "name": "Etsy",
                "overallScore": 50,
                "metrics": [{"name": "Momentum", "value": 10}],
            }
        ],
    },
    "qualitative": {
        "overallRating": 4.5,
        "criteria": [
            {"name": "Investment Process", "score": 4, "notes": None},
            {"name": "Valuation Approach", "score": 4, "notes": "Disciplined"},
            {"name": "Catalyst Recognition", "score": 3, "notes": None},
        ],
    },
    "peerComparison": {
        "baseSymbol": "DEMO",
        "peers": [
            {"name": "Advanced Micro Devices", "symbol": "AMD", "metrics": {"P/E": "31.1", "RSI": "54.6"}},
            {"name": "Intel", "symbol": "INTC", "metrics": {"P/E": "24.4", "RSI": "57.3"}},
        ],
    },
}


def make_input(symbol: str = "DEMO", **stock_overrides) -> dict:
    data = copy.deepcopy(SAMPLE_INPUT)
    data["stock"]["symbol"] = symbol
    data["stock"].update(stock_overrides)
    return data


class StubClient:
    """Inference client that replays a scripted list of results or exceptions."""

    model = "stub-model"

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0
        self.prompts = []

    async def invoke(self, prompt: str) -> str:
        self.calls += 1
        self.prompts.append(prompt)
        outcome = self.outcomes[min(self.calls, len(self.outcomes)) - 1]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self):
        self.waits = []

    async def __call__(self, seconds: float):
        self.waits.append(seconds)


@pytest.fixture
def stock_input():
    return make_input()


@pytest.fixture
def report_json():
    return json.dumps(MOCK_REPORT)


@pytest.fixture
def recording_sleep():
    return RecordingSleep()
