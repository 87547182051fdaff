"""Audio payload ingestion."""

from .ingest import (
    UNSUPPORTED_UPLOAD_MESSAGE,
    UPLOAD_CONTENT_TYPES,
    AudioIngestor,
    AudioTooLargeError,
    IngestLimits,
    UnsupportedAudioError,
    decode_data_uri,
    encode_data_uri,
    is_supported_upload,
)
from .types import AudioPayload

__all__ = [
    "AudioIngestor",
    "IngestLimits",
    "AudioPayload",
    "AudioTooLargeError",
    "UnsupportedAudioError",
    "UNSUPPORTED_UPLOAD_MESSAGE",
    "UPLOAD_CONTENT_TYPES",
    "decode_data_uri",
    "encode_data_uri",
    "is_supported_upload",
]
