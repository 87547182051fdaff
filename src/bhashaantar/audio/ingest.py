from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from .types import AudioPayload

UPLOAD_CONTENT_TYPES = frozenset({"audio/mpeg", "audio/wav", "audio/mp3"})
UNSUPPORTED_UPLOAD_MESSAGE = "Unsupported file format. Please upload .mp3 or .wav"

_DATA_URI_RE = re.compile(
    r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)(?P<params>(?:;[\w.+-]+=[^;,]+)*);base64,(?P<body>.*)$",
    re.DOTALL,
)

_EXTENSIONS = {
    "audio/mpeg": ".mp3",
    "audio/mp3": ".mp3",
    "audio/wav": ".wav",
    "audio/x-wav": ".wav",
    "audio/webm": ".webm",
    "audio/ogg": ".ogg",
    "audio/mp4": ".m4a",
}


class UnsupportedAudioError(ValueError):
    """Raised when audio is malformed or of a type we refuse to process."""


class AudioTooLargeError(ValueError):
    """Raised when an audio payload exceeds the configured size limit."""


def decode_data_uri(value: str) -> AudioPayload:
    """Split ``data:<mime>[;k=v]*;base64,<body>`` into an AudioPayload."""

    match = _DATA_URI_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise UnsupportedAudioError("audio must be a base64 data URI with a MIME type")
    body = "".join(match.group("body").split())
    if not body:
        raise UnsupportedAudioError("audio data URI has an empty body")
    try:
        data = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise UnsupportedAudioError("audio data URI is not valid base64") from exc

    params: dict[str, str] = {}
    for item in filter(None, match.group("params").split(";")):
        key, _, val = item.partition("=")
        params[key.strip().lower()] = val.strip()
    return AudioPayload(data=data, content_type=match.group("mime").lower(), params=params)


def encode_data_uri(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def extension_for(content_type: str) -> str:
    return _EXTENSIONS.get(content_type.lower(), ".bin")


def is_supported_upload(content_type: str | None) -> bool:
    return bool(content_type) and content_type.strip().lower() in UPLOAD_CONTENT_TYPES


@dataclass(slots=True)
class IngestLimits:
    max_bytes: int


class AudioIngestor:
    """Turns recordings and uploads into AudioPayload objects."""

    def __init__(self, *, limits: IngestLimits) -> None:
        self._limits = limits

    def from_data_uri(self, value: str) -> AudioPayload:
        payload = decode_data_uri(value)
        self._enforce_size(payload.size)
        return payload

    async def from_upload(
        self,
        *,
        file_reader: Callable[[], Awaitable[bytes]],
        content_type: Optional[str],
        filename: Optional[str] = None,
    ) -> AudioPayload:
        # Type is checked before the body is read so rejected uploads cost nothing.
        if not is_supported_upload(content_type):
            raise UnsupportedAudioError(UNSUPPORTED_UPLOAD_MESSAGE)
        data = await file_reader()
        if not data:
            raise UnsupportedAudioError("uploaded file is empty")
        self._enforce_size(len(data))
        return AudioPayload(data=data, content_type=content_type.strip().lower(), filename=filename)

    def _enforce_size(self, size: int) -> None:
        if size > self._limits.max_bytes:
            raise AudioTooLargeError("audio payload exceeds configured size limit")
