from types import SimpleNamespace

import pytest

from bhashaantar.llm_client import LLMNotConfiguredError, LLMResponseError, OpenAIChatClient
from bhashaantar.settings import LLMSettings, OpenAISettings


class _StubCompletions:
    def __init__(self, content=None, exc: Exception | None = None) -> None:
        self.content = content
        self.exc = exc
        self.calls: list[dict] = []

    async def create(self, **params):
        self.calls.append(params)
        if self.exc is not None:
            raise self.exc
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _make_client(completions: _StubCompletions) -> OpenAIChatClient:
    stub = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIChatClient(
        OpenAISettings(api_key=None, organization=None, base_url=None),
        LLMSettings(model="dummy", temperature=0.0, max_tokens=64, timeout=1.0),
        client=stub,
    )


@pytest.mark.asyncio
async def test_complete_json_requests_json_mode():
    completions = _StubCompletions(content='{"englishText": "Hello"}')
    client = _make_client(completions)

    data = await client.complete_json([{"role": "user", "content": "नमस्ते"}])

    assert data == {"englishText": "Hello"}
    params = completions.calls[0]
    assert params["model"] == "dummy"
    assert params["response_format"] == {"type": "json_object"}
    assert params["timeout"] == 1.0


@pytest.mark.asyncio
async def test_complete_json_strips_markdown_fence():
    completions = _StubCompletions(content='```json\n{"enhancedText": "x"}\n```')
    client = _make_client(completions)

    assert await client.complete_json([]) == {"enhancedText": "x"}


@pytest.mark.asyncio
@pytest.mark.parametrize("content", [None, "   ", "not json", "[1, 2]"])
async def test_complete_json_rejects_unusable_content(content):
    client = _make_client(_StubCompletions(content=content))

    with pytest.raises(LLMResponseError):
        await client.complete_json([])


@pytest.mark.asyncio
async def test_complete_json_propagates_transport_errors():
    client = _make_client(_StubCompletions(exc=ConnectionError("down")))

    with pytest.raises(ConnectionError):
        await client.complete_json([])


def test_client_requires_api_key_without_injected_client():
    with pytest.raises(LLMNotConfiguredError):
        OpenAIChatClient(
            OpenAISettings(api_key=None, organization=None, base_url=None),
            LLMSettings(model="dummy", temperature=0.0, max_tokens=64, timeout=1.0),
        )
