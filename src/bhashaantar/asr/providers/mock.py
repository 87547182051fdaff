from __future__ import annotations

from ...audio import AudioPayload
from ..types import AsrOptions, AsrResult
from .base import AsrProvider

MOCK_TRANSCRIPT = "नमस्ते, आप कैसे हैं?"


class MockAsrProvider(AsrProvider):
    name = "mock"

    async def transcribe(self, *, audio: AudioPayload, options: AsrOptions) -> AsrResult:
        text = MOCK_TRANSCRIPT if audio.data else ""
        return AsrResult(text=text, alternatives=[], provider=self.name)
