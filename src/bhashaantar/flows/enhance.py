from __future__ import annotations

import logging
from typing import Any, Dict, Union

from ..llm_client import OpenAIChatClient
from ..prompts import ENHANCE_SYSTEM_PROMPT, enhance_user_prompt
from ..schemas import EnhanceTranscriptionInput, EnhanceTranscriptionOutput, validate_response

logger = logging.getLogger(__name__)


async def enhance_transcription(
    payload: Union[EnhanceTranscriptionInput, Dict[str, Any]],
    *,
    llm_client: OpenAIChatClient,
) -> EnhanceTranscriptionOutput:
    """Merge word-level alternatives inline into the transcription text."""

    request = (
        payload
        if isinstance(payload, EnhanceTranscriptionInput)
        else EnhanceTranscriptionInput.model_validate(payload)
    )
    messages = [
        {"role": "system", "content": ENHANCE_SYSTEM_PROMPT},
        {"role": "user", "content": enhance_user_prompt(request.original_text, request.alternative_words)},
    ]
    data = await llm_client.complete_json(messages)
    output = validate_response(EnhanceTranscriptionOutput, data)
    logger.info(
        "flow.enhance.complete",
        extra={"ambiguous_words": len(request.alternative_words), "chars": len(output.enhanced_text)},
    )
    return output
