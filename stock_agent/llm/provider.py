"""
LLM provider

Calls the inference service through LiteLLM. Both LLMProvider and
MockLLMProvider expose the same ``await invoke(prompt) -> str`` contract; the
choice between them is made once in build_provider().
"""
import logging
from typing import Protocol

from litellm import acompletion

from stock_agent.agents.prompts import SYSTEM_PROMPT
from stock_agent.config import Settings
from stock_agent.exceptions import EmptyResponseError
from stock_agent.llm.mock_provider import MockLLMProvider

logger = logging.getLogger(__name__)


class InferenceClient(Protocol):
    model: str

    async def invoke(self, prompt: str) -> str:
        ...


class LLMProvider:
    """LiteLLM based provider"""

    def __init__(
        self,
        model: str,
        api_key: str | None = None,
        system_prompt: str = SYSTEM_PROMPT,
        temperature: float = 0.3,
        max_tokens: int = 8192,
        top_p: float = 0.95,
        top_k: int | None = None,
    ):
        """
        Args:
            model: LiteLLM model string, e.g. "gemini/gemini-2.5-flash"
            api_key: Provider API key (None falls back to LiteLLM's env lookup)
            system_prompt: System message sent with every request
            temperature: Sampling temperature
            max_tokens: Maximum output tokens
            top_p: Nucleus sampling
            top_k: Top-k sampling (provider specific)
        """
        self.model = model
        self.api_key = api_key or None
        self.system_prompt = system_prompt
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.top_p = top_p
        self.top_k = top_k

        logger.info(
            f"LLMProvider initialized: model={self.model}, "
            f"temperature={temperature}, max_tokens={max_tokens}"
        )

    async def invoke(self, prompt: str) -> str:
        """
        Send one prompt and return the response text.

        Raises whatever LiteLLM raises on transport or provider errors, and
        EmptyResponseError when the response carries no content. Retrying is
        the caller's job.
        """
        messages = [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": prompt},
        ]

        extra = {}
        if self.top_k is not None:
            extra["top_k"] = self.top_k

        logger.debug(f"LLM completion request: model={self.model}")

        response = await acompletion(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            api_key=self.api_key,
            **extra,
        )

        content = None
        if response and response.choices:
            content = response.choices[0].message.content

        if not content:
            raise EmptyResponseError(f"LLM response has no content: model={self.model}")

        # cost tracking
        usage = getattr(response, "usage", None)
        if usage:
            logger.info(
                f"LLM usage: model={self.model}, "
                f"prompt_tokens={usage.prompt_tokens}, "
                f"completion_tokens={usage.completion_tokens}, "
                f"total_tokens={usage.total_tokens}"
            )

        logger.debug(f"LLM completion succeeded: {len(content)} chars")
        return content


def build_provider(config: Settings) -> InferenceClient:
    """
    Pick the inference client for the given settings.

    Returns:
        MockLLMProvider in mock mode, otherwise LLMProvider
    """
    if config.mock_mode:
        logger.info("Mock mode enabled: using canned model responses")
        return MockLLMProvider()

    return LLMProvider(
        model=config.llm_model,
        api_key=config.google_api_key,
        temperature=config.temperature,
        max_tokens=config.max_output_tokens,
        top_p=config.top_p,
        top_k=config.top_k,
    )
