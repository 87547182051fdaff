import dataclasses
import json
from types import SimpleNamespace

import pytest

from bhashaantar.asr.providers.mock import MOCK_TRANSCRIPT, MockAsrProvider
from bhashaantar.asr.providers.openai_audio_chat import OpenAIAudioChatAsrProvider
from bhashaantar.asr.providers.openai_transcribe import OpenAITranscriptionAsrProvider
from bhashaantar.asr.service import AsrService
from bhashaantar.asr.types import AsrOptions, AsrResult
from bhashaantar.audio import AudioPayload, UnsupportedAudioError
from bhashaantar.schemas import SchemaMismatchError
from bhashaantar.settings import AsrSettings


def _default_asr_settings() -> AsrSettings:
    return AsrSettings(
        enabled=True,
        provider="mock",
        transcribe_model="gpt-4o-transcribe",
        audio_chat_model="gpt-4o-audio-preview",
        language="hi",
        max_bytes=1024 * 1024,
        default_accent="Indian",
    )


class _StubTranscriptions:
    def __init__(self, text: str) -> None:
        self.text = text
        self.calls: list[dict] = []

    async def create(self, **params):
        self.calls.append(params)
        return SimpleNamespace(text=self.text)


class _StubChatCompletions:
    def __init__(self, content: str) -> None:
        self.content = content
        self.calls: list[dict] = []

    async def create(self, **params):
        self.calls.append(params)
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def test_asr_service_from_settings_mock():
    service = AsrService.from_settings(_default_asr_settings())

    assert isinstance(service.provider, MockAsrProvider)


def test_asr_service_from_settings_unknown_provider():
    cfg = dataclasses.replace(_default_asr_settings(), provider="unknown")

    with pytest.raises(RuntimeError):
        AsrService.from_settings(cfg)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("openai-transcribe", OpenAITranscriptionAsrProvider),
        ("openai-audio-chat", OpenAIAudioChatAsrProvider),
    ],
)
def test_asr_service_from_settings_openai_providers(name, expected):
    cfg = dataclasses.replace(_default_asr_settings(), provider=name)

    service = AsrService.from_settings(cfg, client_factory=lambda: SimpleNamespace())

    assert isinstance(service.provider, expected)


@pytest.mark.asyncio
async def test_mock_provider_returns_empty_text_for_empty_audio():
    service = AsrService()

    spoken = await service.transcribe(AudioPayload(data=b"\x00", content_type="audio/webm"))
    silent = await service.transcribe(AudioPayload(data=b"", content_type="audio/webm"))

    assert spoken.text == MOCK_TRANSCRIPT
    assert spoken.provider == "mock"
    assert silent.text == ""


@pytest.mark.asyncio
async def test_asr_service_fills_default_language():
    seen: list[AsrOptions] = []

    class _RecordingProvider(MockAsrProvider):
        async def transcribe(self, *, audio, options):
            seen.append(options)
            return AsrResult(text="ठीक है")

    service = AsrService(provider=_RecordingProvider(), language="hi")
    result = await service.transcribe(AudioPayload(data=b"1", content_type="audio/wav"), options=AsrOptions(accent="General"))

    assert seen[0].language == "hi"
    assert seen[0].accent == "General"
    assert result.provider == "mock"


@pytest.mark.asyncio
async def test_transcription_provider_sends_file_language_and_accent_hint():
    transcriptions = _StubTranscriptions(text="  नमस्ते  ")
    client = SimpleNamespace(audio=SimpleNamespace(transcriptions=transcriptions))
    cfg = dataclasses.replace(_default_asr_settings(), provider="openai-transcribe", request_timeout=12.5)
    service = AsrService.from_settings(cfg, client_factory=lambda: client)

    result = await service.transcribe(
        AudioPayload(data=b"webm-bytes", content_type="audio/webm"),
        options=AsrOptions(accent="Indian"),
    )

    params = transcriptions.calls[0]
    assert params["model"] == "gpt-4o-transcribe"
    assert params["file"] == ("audio.webm", b"webm-bytes", "audio/webm")
    assert params["language"] == "hi"
    assert params["timeout"] == 12.5
    assert "Indian accent" in params["prompt"]
    assert result.text == "नमस्ते"
    assert result.alternatives is None


@pytest.mark.asyncio
async def test_audio_chat_provider_receives_request_timeout():
    content = json.dumps({"transcription": "नमस्ते", "alternativeTranscriptions": []}, ensure_ascii=False)
    completions = _StubChatCompletions(content)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    cfg = dataclasses.replace(_default_asr_settings(), provider="openai-audio-chat", request_timeout=7.0)
    service = AsrService.from_settings(cfg, client_factory=lambda: client)

    await service.transcribe(AudioPayload(data=b"RIFF", content_type="audio/wav"))

    assert completions.calls[0]["timeout"] == 7.0


@pytest.mark.asyncio
async def test_audio_chat_provider_returns_alternatives():
    content = json.dumps(
        {
            "transcription": "मैं कल आऊंगा",
            "alternativeTranscriptions": [{"word": "कल", "alternatives": ["काल"]}],
        },
        ensure_ascii=False,
    )
    completions = _StubChatCompletions(content)
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    provider = OpenAIAudioChatAsrProvider(client)

    result = await provider.transcribe(
        audio=AudioPayload(data=b"ID3", content_type="audio/mpeg"),
        options=AsrOptions(accent="General"),
    )

    user_content = completions.calls[0]["messages"][1]["content"]
    assert user_content[0]["text"].startswith("Accent: General")
    assert user_content[1]["input_audio"]["format"] == "mp3"
    assert result.text == "मैं कल आऊंगा"
    assert result.alternatives[0].word == "कल"
    assert result.alternatives[0].alternatives == ["काल"]


@pytest.mark.asyncio
async def test_audio_chat_provider_rejects_webm():
    client = SimpleNamespace(chat=SimpleNamespace(completions=_StubChatCompletions("{}")))
    provider = OpenAIAudioChatAsrProvider(client)

    with pytest.raises(UnsupportedAudioError):
        await provider.transcribe(audio=AudioPayload(data=b"x", content_type="audio/webm"), options=AsrOptions())


@pytest.mark.asyncio
async def test_audio_chat_provider_fails_closed_on_schema_mismatch():
    client = SimpleNamespace(chat=SimpleNamespace(completions=_StubChatCompletions('{"text": "नमस्ते"}')))
    provider = OpenAIAudioChatAsrProvider(client)

    with pytest.raises(SchemaMismatchError):
        await provider.transcribe(audio=AudioPayload(data=b"x", content_type="audio/wav"), options=AsrOptions())
