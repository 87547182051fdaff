from __future__ import annotations

import logging
from typing import Any, Optional

from ...audio import AudioPayload
from ...audio.ingest import extension_for
from ...prompts import accent_hint
from ..types import AsrOptions, AsrResult
from .base import AsrProvider

logger = logging.getLogger(__name__)


class OpenAITranscriptionAsrProvider(AsrProvider):
    """ASR provider backed by the OpenAI audio transcription endpoint.

    Accepts every container the browser records (webm, ogg, mp4) as well as
    uploaded mp3/wav. The endpoint does not report word-level alternatives.
    """

    name = "openai-transcribe"

    def __init__(
        self,
        client: Any,
        *,
        model: str = "gpt-4o-transcribe",
        timeout: Optional[float] = None,
    ) -> None:
        self._client = client
        self._model = model
        self._timeout = timeout

    async def transcribe(self, *, audio: AudioPayload, options: AsrOptions) -> AsrResult:
        filename = audio.filename or f"audio{extension_for(audio.content_type)}"
        params: dict[str, Any] = {
            "model": self._model,
            "file": (filename, audio.data, audio.content_type),
            "prompt": accent_hint(options.accent),
            "response_format": "json",
        }
        if options.language:
            params["language"] = options.language
        if self._timeout is not None:
            params["timeout"] = self._timeout

        result = await self._client.audio.transcriptions.create(**params)

        text = getattr(result, "text", None)
        if text is None and isinstance(result, dict):
            text = result.get("text")
        text = (text or "").strip()
        logger.info(
            "asr.transcribe.complete",
            extra={"provider": self.name, "model": self._model, "chars": len(text)},
        )
        return AsrResult(text=text, alternatives=None, provider=self.name)
