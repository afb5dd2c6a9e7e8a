import asyncio

import pytest

from stock_agent.exceptions import InvocationError
from stock_agent.llm.invoker import ModelInvoker
from conftest import StubClient


def test_succeeds_on_third_attempt(recording_sleep):
    client = StubClient([RuntimeError("boom 1"), RuntimeError("boom 2"), "final text"])
    invoker = ModelInvoker(client, max_retries=3, backoff_base=0.5, sleep=recording_sleep)

    result = asyncio.run(invoker.invoke("prompt"))

    assert result == "final text"
    assert client.calls == 3
    assert invoker.attempts == 3
    assert recording_sleep.waits == [0.5, 1.0]
    assert sum(recording_sleep.waits) >= 0.5 * (1 + 2)


def test_first_success_does_not_wait(recording_sleep):
    client = StubClient(["hello"])
    invoker = ModelInvoker(client, max_retries=3, sleep=recording_sleep)

    assert asyncio.run(invoker.invoke("prompt")) == "hello"
    assert client.calls == 1
    assert recording_sleep.waits == []


def test_always_failing_stops_after_max_retries(recording_sleep):
    client = StubClient([ConnectionError("service unavailable")])
    invoker = ModelInvoker(client, max_retries=4, backoff_base=1.0, sleep=recording_sleep)

    with pytest.raises(InvocationError) as exc_info:
        asyncio.run(invoker.invoke("prompt"))

    assert client.calls == 4
    assert exc_info.value.attempts == 4
    assert exc_info.value.last_error_message == "service unavailable"
    assert "Failed after 4 attempts" in str(exc_info.value)
    # no wait after the last attempt
    assert recording_sleep.waits == [1.0, 2.0, 4.0]


def test_max_retries_override_per_call(recording_sleep):
    client = StubClient([RuntimeError("nope")])
    invoker = ModelInvoker(client, max_retries=5, sleep=recording_sleep)

    with pytest.raises(InvocationError):
        asyncio.run(invoker.invoke("prompt", max_retries=2))

    assert client.calls == 2


class SlowClient:
    model = "slow"

    def __init__(self):
        self.calls = 0

    async def invoke(self, prompt: str) -> str:
        self.calls += 1
        await asyncio.sleep(5)
        return "too late"


def test_timeout_counts_as_failed_attempt(recording_sleep):
    client = SlowClient()
    invoker = ModelInvoker(client, max_retries=2, timeout=0.01, sleep=recording_sleep)

    with pytest.raises(InvocationError) as exc_info:
        asyncio.run(invoker.invoke("prompt"))

    assert client.calls == 2
    assert "timed out" in exc_info.value.last_error_message


def test_rejects_empty_retry_budget():
    with pytest.raises(ValueError):
        ModelInvoker(StubClient(["x"]), max_retries=0)


def test_model_name_comes_from_client():
    assert ModelInvoker(StubClient(["x"])).model_name == "stub-model"
