"""Retry with exponential backoff around an inference client."""
import asyncio
import logging
from typing import Awaitable, Callable

from stock_agent.config import Settings
from stock_agent.exceptions import InvocationError
from stock_agent.llm.provider import InferenceClient

logger = logging.getLogger(__name__)


class ModelInvoker:
    def __init__(
        self,
        client: InferenceClient,
        max_retries: int = 3,
        backoff_base: float = 1.0,
        timeout: float | None = 60.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            client: Inference client (real or mock)
            max_retries: Attempts per invoke() call
            backoff_base: Seconds to wait after the first failure; doubles per attempt
            timeout: Per-attempt timeout in seconds (None disables it)
            sleep: Awaitable sleep, replaceable in tests
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")

        self.client = client
        self.max_retries = max_retries
        self.backoff_base = backoff_base
        self.timeout = timeout
        self._sleep = sleep
        self.attempts = 0

    @classmethod
    def from_settings(cls, client: InferenceClient, config: Settings) -> "ModelInvoker":
        return cls(
            client,
            max_retries=config.max_retries,
            backoff_base=config.backoff_base_seconds,
            timeout=config.timeout_seconds,
        )

    @property
    def model_name(self) -> str:
        return getattr(self.client, "model", "unknown")

    async def _attempt(self, prompt: str) -> str:
        if self.timeout is None:
            return await self.client.invoke(prompt)
        return await asyncio.wait_for(self.client.invoke(prompt), timeout=self.timeout)

    async def invoke(self, prompt: str, max_retries: int | None = None) -> str:
        """
        Call the client until it succeeds or the retry budget runs out.

        Args:
            prompt: Prompt text
            max_retries: Overrides the configured attempt count for this call

        Returns:
            Response text of the first successful attempt

        Raises:
            InvocationError: Every attempt failed
        """
        retries = self.max_retries if max_retries is None else max_retries
        if retries < 1:
            raise ValueError("max_retries must be at least 1")

        self.attempts = 0
        last_error: Exception | None = None

        for attempt in range(retries):
            self.attempts = attempt + 1
            try:
                return await self._attempt(prompt)
            except asyncio.TimeoutError:
                last_error = TimeoutError(f"LLM call timed out after {self.timeout}s")
            except Exception as e:
                last_error = e

            logger.warning(f"Attempt {attempt + 1}/{retries} failed: {last_error}")

            if attempt < retries - 1:
                wait_time = self.backoff_base * (2 ** attempt)
                logger.info(f"Retrying in {wait_time:.1f}s...")
                await self._sleep(wait_time)

        logger.error(f"LLM invocation failed after {retries} attempts: {last_error}")
        raise InvocationError(str(last_error), attempts=retries)
