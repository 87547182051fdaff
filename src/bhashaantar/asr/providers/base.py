from __future__ import annotations

import abc

from ...audio import AudioPayload
from ..types import AsrOptions, AsrResult


class AsrProvider(abc.ABC):
    """Interface for ASR providers."""

    name: str

    @abc.abstractmethod
    async def transcribe(self, *, audio: AudioPayload, options: AsrOptions) -> AsrResult:
        """Produce a transcription for the provided audio."""
        raise NotImplementedError
