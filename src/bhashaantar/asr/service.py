from __future__ import annotations

from typing import Any, Callable, Optional

from ..audio import AudioPayload
from ..llm_client import build_async_openai
from ..settings import AsrSettings, OpenAISettings
from .providers.base import AsrProvider
from .providers.mock import MockAsrProvider
from .providers.openai_audio_chat import OpenAIAudioChatAsrProvider
from .providers.openai_transcribe import OpenAITranscriptionAsrProvider
from .types import AsrOptions, AsrResult


class AsrService:
    """Coordinates ASR provider usage."""

    def __init__(self, *, provider: Optional[AsrProvider] = None, language: Optional[str] = "hi") -> None:
        self._provider = provider or MockAsrProvider()
        self._language = language

    @classmethod
    def from_settings(
        cls,
        cfg: AsrSettings | None,
        openai_cfg: OpenAISettings | None = None,
        *,
        client_factory: Optional[Callable[[], Any]] = None,
    ) -> "AsrService":
        provider: Optional[AsrProvider] = None
        language: Optional[str] = "hi"
        if cfg is not None:
            language = cfg.language or None
            provider_name = (cfg.provider or "mock").strip().lower()
            factory = client_factory or (lambda: build_async_openai(openai_cfg))
            if provider_name in {"mock", "fake"}:
                provider = MockAsrProvider()
            elif provider_name in {"openai-transcribe", "openai", "whisper"}:
                provider = OpenAITranscriptionAsrProvider(
                    factory(), model=cfg.transcribe_model, timeout=cfg.request_timeout
                )
            elif provider_name in {"openai-audio-chat", "audio-chat"}:
                provider = OpenAIAudioChatAsrProvider(
                    factory(), model=cfg.audio_chat_model, timeout=cfg.request_timeout
                )
            else:
                raise RuntimeError(f"unsupported ASR provider: {cfg.provider}")
        return cls(provider=provider, language=language)

    async def transcribe(self, audio: AudioPayload, *, options: Optional[AsrOptions] = None) -> AsrResult:
        opts = options or AsrOptions()
        if opts.language is None:
            opts.language = self._language
        result = await self._provider.transcribe(audio=audio, options=opts)
        return AsrResult(
            text=result.text or "",
            alternatives=result.alternatives,
            provider=result.provider or self._provider.name,
        )

    @property
    def provider(self) -> AsrProvider:
        return self._provider
