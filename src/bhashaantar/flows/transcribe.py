from __future__ import annotations

"""Hindi speech to Hindi text, with optional word-level alternatives."""

import logging
from typing import Any, Dict, Union

from ..asr import AsrOptions, AsrService
from ..audio import decode_data_uri
from ..schemas import TranscribeHindiInput, TranscribeHindiOutput, validate_response

logger = logging.getLogger(__name__)


async def transcribe_hindi(
    payload: Union[TranscribeHindiInput, Dict[str, Any]],
    *,
    asr_service: AsrService,
) -> TranscribeHindiOutput:
    """Transcribe a data-URI audio payload.

    An empty ``transcription`` is returned unchanged; deciding that it means
    unrecognized speech is the caller's job.
    """

    request = payload if isinstance(payload, TranscribeHindiInput) else TranscribeHindiInput.model_validate(payload)
    audio = decode_data_uri(request.audio_data_uri)

    result = await asr_service.transcribe(audio, options=AsrOptions(accent=request.accent))

    response: Dict[str, Any] = {"transcription": result.text}
    if result.alternatives is not None:
        response["alternativeTranscriptions"] = [
            {"word": item.word, "alternatives": list(item.alternatives)} for item in result.alternatives
        ]
    output = validate_response(TranscribeHindiOutput, response)
    logger.info(
        "flow.transcribe.complete",
        extra={
            "provider": result.provider,
            "content_type": audio.content_type,
            "bytes": audio.size,
            "accent": request.accent,
            "ambiguous_words": len(output.alternative_transcriptions or []),
        },
    )
    return output
