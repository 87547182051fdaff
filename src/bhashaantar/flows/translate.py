from __future__ import annotations

import logging
from typing import Any, Dict, Union

from ..llm_client import OpenAIChatClient
from ..prompts import TRANSLATE_SYSTEM_PROMPT, translate_user_prompt
from ..schemas import TranslateHindiToEnglishInput, TranslateHindiToEnglishOutput, validate_response

logger = logging.getLogger(__name__)


async def translate_hindi_to_english(
    payload: Union[TranslateHindiToEnglishInput, Dict[str, Any]],
    *,
    llm_client: OpenAIChatClient,
) -> TranslateHindiToEnglishOutput:
    request = (
        payload
        if isinstance(payload, TranslateHindiToEnglishInput)
        else TranslateHindiToEnglishInput.model_validate(payload)
    )
    messages = [
        {"role": "system", "content": TRANSLATE_SYSTEM_PROMPT},
        {"role": "user", "content": translate_user_prompt(request.hindi_text)},
    ]
    data = await llm_client.complete_json(messages)
    output = validate_response(TranslateHindiToEnglishOutput, data)
    logger.info(
        "flow.translate.complete",
        extra={"source_chars": len(request.hindi_text), "chars": len(output.english_text)},
    )
    return output
