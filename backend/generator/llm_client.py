"""
LLM Completion Clients

One capability shared by every model-driven handler:

    text = await client.complete(prompt)

Backends:
- OpenAI chat completions (also any OpenAI-compatible proxy via base_url)
- Anthropic messages

Both SDK clients are built with max_retries=0; failures surface once as
ModelError.
"""

import logging
from typing import Optional, Protocol

import anthropic
from openai import AsyncOpenAI, APIError as OpenAIAPIError

from core.config import ServiceConfig
from core.errors import ModelError

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    """Prompt in, text out"""

    async def complete(self, prompt: str) -> str:
        ...


class OpenAICompletionClient:
    """Chat completions API, single user message"""

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 4096,
        base_url: Optional[str] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self.base_url = base_url
        self._client: Optional[AsyncOpenAI] = None

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise ModelError("Model completion failed", "OPENAI_API_KEY is not set")
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                max_retries=0,
            )
        return self._client

    async def complete(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except OpenAIAPIError as e:
            logger.error(f"[LLM] OpenAI API error: {e}")
            raise ModelError("Model completion failed", str(e)) from e

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""


class AnthropicCompletionClient:
    """Messages API, single user message"""

    def __init__(self, api_key: str, model: str, max_tokens: int = 4096):
        self.api_key = api_key
        self.model = model
        self.max_tokens = max_tokens
        self._client: Optional[anthropic.AsyncAnthropic] = None

    def _get_client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            if not self.api_key:
                raise ModelError("Model completion failed", "ANTHROPIC_API_KEY is not set")
            self._client = anthropic.AsyncAnthropic(api_key=self.api_key, max_retries=0)
        return self._client

    async def complete(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.APIError as e:
            logger.error(f"[LLM] Anthropic API error: {e}")
            raise ModelError("Model completion failed", str(e)) from e

        return "".join(
            block.text for block in response.content if block.type == "text"
        )


def create_completion_client(config: ServiceConfig) -> CompletionClient:
    """Pick the backend named by config.llm_provider"""
    if config.llm_provider == "anthropic":
        logger.info(f"[LLM] Using Anthropic API, model={config.llm_model}")
        return AnthropicCompletionClient(
            api_key=config.anthropic_api_key,
            model=config.llm_model,
            max_tokens=config.llm_max_tokens,
        )

    if config.openai_base_url:
        logger.info(f"[LLM] Using OpenAI-compatible proxy: {config.openai_base_url}, model={config.llm_model}")
    else:
        logger.info(f"[LLM] Using OpenAI API, model={config.llm_model}")
    return OpenAICompletionClient(
        api_key=config.openai_api_key,
        model=config.llm_model,
        max_tokens=config.llm_max_tokens,
        base_url=config.openai_base_url,
    )
