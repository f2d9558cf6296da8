"""
LLM client 测试

The SDK clients are replaced by stubs; no request leaves the process.
"""

from types import SimpleNamespace

import anthropic
import httpx
import openai
import pytest

from core.config import ServiceConfig
from core.errors import ModelError
from generator.llm_client import (
    AnthropicCompletionClient,
    OpenAICompletionClient,
    create_completion_client,
)


def _request(url: str) -> httpx.Request:
    return httpx.Request("POST", url)


class StubCreate:
    """Async callable recording kwargs; returns a reply or raises"""

    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def __call__(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.reply


def stub_openai(create: StubCreate):
    return SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))


def stub_anthropic(create: StubCreate):
    return SimpleNamespace(messages=SimpleNamespace(create=create))


class TestOpenAICompletionClient:

    @pytest.mark.asyncio
    async def test_complete_returns_message_content(self):
        create = StubCreate(reply=SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="1. Quiz"))]
        ))
        client = OpenAICompletionClient(api_key="sk-test", model="gpt-4o", max_tokens=512)
        client._client = stub_openai(create)

        assert await client.complete("Suggest ideas") == "1. Quiz"
        assert create.calls[0]["model"] == "gpt-4o"
        assert create.calls[0]["max_tokens"] == 512
        assert create.calls[0]["messages"] == [{"role": "user", "content": "Suggest ideas"}]

    @pytest.mark.asyncio
    async def test_none_content_becomes_empty_string(self):
        create = StubCreate(reply=SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=None))]
        ))
        client = OpenAICompletionClient(api_key="sk-test", model="gpt-4o")
        client._client = stub_openai(create)

        assert await client.complete("x") == ""

    @pytest.mark.asyncio
    async def test_api_error_becomes_model_error(self):
        error = openai.APIConnectionError(request=_request("https://api.openai.com/v1/chat/completions"))
        client = OpenAICompletionClient(api_key="sk-test", model="gpt-4o")
        client._client = stub_openai(StubCreate(error=error))

        with pytest.raises(ModelError):
            await client.complete("x")

    @pytest.mark.asyncio
    async def test_missing_key_is_model_error(self):
        client = OpenAICompletionClient(api_key="", model="gpt-4o")

        with pytest.raises(ModelError) as exc_info:
            await client.complete("x")

        assert "OPENAI_API_KEY" in exc_info.value.details


class TestAnthropicCompletionClient:

    @pytest.mark.asyncio
    async def test_complete_joins_text_blocks(self):
        create = StubCreate(reply=SimpleNamespace(content=[
            SimpleNamespace(type="text", text="<style></style>"),
            SimpleNamespace(type="text", text="<div></div>"),
        ]))
        client = AnthropicCompletionClient(api_key="sk-ant-test", model="claude-sonnet-4-5-20250929")
        client._client = stub_anthropic(create)

        assert await client.complete("Build it") == "<style></style><div></div>"

    @pytest.mark.asyncio
    async def test_api_error_becomes_model_error(self):
        error = anthropic.APIConnectionError(request=_request("https://api.anthropic.com/v1/messages"))
        client = AnthropicCompletionClient(api_key="sk-ant-test", model="claude-sonnet-4-5-20250929")
        client._client = stub_anthropic(StubCreate(error=error))

        with pytest.raises(ModelError):
            await client.complete("x")


class TestCreateCompletionClient:

    def test_openai_by_default(self):
        client = create_completion_client(ServiceConfig(openai_api_key="sk-test"))

        assert isinstance(client, OpenAICompletionClient)

    def test_anthropic_provider(self):
        config = ServiceConfig(llm_provider="anthropic", llm_model="claude-sonnet-4-5-20250929")

        assert isinstance(create_completion_client(config), AnthropicCompletionClient)

    def test_sdk_clients_do_not_retry(self):
        client = OpenAICompletionClient(api_key="sk-test", model="gpt-4o")

        assert client._get_client().max_retries == 0
