"""ASR provider implementations."""

from .base import AsrProvider
from .mock import MockAsrProvider
from .openai_audio_chat import OpenAIAudioChatAsrProvider
from .openai_transcribe import OpenAITranscriptionAsrProvider

__all__ = [
    "AsrProvider",
    "MockAsrProvider",
    "OpenAIAudioChatAsrProvider",
    "OpenAITranscriptionAsrProvider",
]
