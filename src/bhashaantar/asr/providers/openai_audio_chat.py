from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from ...audio import AudioPayload, UnsupportedAudioError
from ...llm_client import LLMResponseError, extract_message_text, parse_json_object
from ...prompts import TRANSCRIBE_SYSTEM_PROMPT, transcribe_user_prompt
from ...schemas import TranscribeHindiOutput, validate_response
from ..types import AsrOptions, AsrResult, WordAlternatives
from .base import AsrProvider

logger = logging.getLogger(__name__)

# chat input_audio only understands these two containers
_INPUT_AUDIO_FORMATS = {
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
}


class OpenAIAudioChatAsrProvider(AsrProvider):
    """ASR provider that sends audio to an audio-capable chat model.

    The model answers with JSON holding the transcription and word-level
    alternatives for ambiguous words.
    """

    name = "openai-audio-chat"

    def __init__(
        self,
        client: Any,
        *,
        model: str = "gpt-4o-audio-preview",
        timeout: Optional[float] = None,
    ) -> None:
        self._client = client
        self._model = model
        self._timeout = timeout

    async def transcribe(self, *, audio: AudioPayload, options: AsrOptions) -> AsrResult:
        audio_format = _INPUT_AUDIO_FORMATS.get(audio.content_type)
        if audio_format is None:
            raise UnsupportedAudioError(f"{self.name} cannot read {audio.content_type}; send wav or mp3")

        messages = [
            {"role": "system", "content": TRANSCRIBE_SYSTEM_PROMPT},
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": transcribe_user_prompt(options.accent)},
                    {
                        "type": "input_audio",
                        "input_audio": {
                            "data": base64.b64encode(audio.data).decode("ascii"),
                            "format": audio_format,
                        },
                    },
                ],
            },
        ]
        params: dict[str, Any] = {
            "model": self._model,
            "modalities": ["text"],
            "messages": messages,
            "temperature": 0.0,
        }
        if self._timeout is not None:
            params["timeout"] = self._timeout

        resp = await self._client.chat.completions.create(**params)
        content = extract_message_text(resp)
        if content is None:
            raise LLMResponseError("audio chat completion produced no content")

        parsed = validate_response(TranscribeHindiOutput, parse_json_object(content))
        alternatives = [
            WordAlternatives(word=item.word, alternatives=list(item.alternatives))
            for item in parsed.alternative_transcriptions or []
        ]
        logger.info(
            "asr.transcribe.complete",
            extra={
                "provider": self.name,
                "model": self._model,
                "chars": len(parsed.transcription),
                "ambiguous_words": len(alternatives),
            },
        )
        return AsrResult(text=parsed.transcription, alternatives=alternatives, provider=self.name)
