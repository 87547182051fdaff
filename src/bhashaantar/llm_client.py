from __future__ import annotations

"""OpenAI client wrappers for bhashaantar."""

import json
import logging
from collections.abc import Sequence
from typing import Any, Dict, Optional

from openai import AsyncOpenAI

from .settings import LLMSettings, OpenAISettings, settings

logger = logging.getLogger(__name__)

ChatMessage = Dict[str, Any]


class LLMNotConfiguredError(RuntimeError):
    """Raised when trying to use the LLM client without runtime configuration."""


class LLMResponseError(RuntimeError):
    """Raised when a completion carries no usable JSON content."""


def build_async_openai(openai_cfg: Optional[OpenAISettings] = None) -> AsyncOpenAI:
    cfg = openai_cfg or settings.openai
    if not cfg.api_key:
        raise LLMNotConfiguredError("OPENAI_API_KEY is required for remote speech and text services")
    return AsyncOpenAI(
        api_key=cfg.api_key,
        base_url=cfg.base_url,
        organization=cfg.organization,
    )


def extract_message_text(resp: Any) -> Optional[str]:
    """Return the first non-empty message content of a chat completion."""

    for choice in getattr(resp, "choices", None) or []:
        message = getattr(choice, "message", None)
        if not message:
            continue
        content = getattr(message, "content", None)
        if isinstance(content, str) and content.strip():
            return content
    return None


def parse_json_object(content: str) -> Dict[str, Any]:
    text = content.strip()
    # Some models still wrap JSON mode output in a markdown fence.
    if text.startswith("```"):
        text = text.strip("`")
        if text.lower().startswith("json"):
            text = text[4:]
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise LLMResponseError("completion is not valid JSON") from exc
    if not isinstance(data, dict):
        raise LLMResponseError("completion JSON is not an object")
    return data


class OpenAIChatClient:
    """Thin wrapper around AsyncOpenAI for single-shot JSON completions."""

    def __init__(
        self,
        openai_cfg: Optional[OpenAISettings] = None,
        llm_cfg: Optional[LLMSettings] = None,
        *,
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self._openai_cfg = openai_cfg or settings.openai
        self._llm_cfg = llm_cfg or settings.llm
        if client is None:
            self._client = build_async_openai(self._openai_cfg)
            self._owns_client = True
        else:
            self._client = client
            self._owns_client = False

    @property
    def client(self) -> AsyncOpenAI:
        return self._client

    async def close(self) -> None:
        if self._owns_client:
            await self._client.close()

    async def complete_json(
        self,
        messages: Sequence[ChatMessage],
        *,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Issue one JSON-mode chat completion and return the decoded object."""

        cfg = self._llm_cfg
        params: Dict[str, Any] = {
            "model": model or cfg.model,
            "messages": list(messages),
            "temperature": temperature if temperature is not None else cfg.temperature,
            "max_tokens": max_tokens if max_tokens is not None else cfg.max_tokens,
            "response_format": {"type": "json_object"},
            "timeout": timeout if timeout is not None else cfg.timeout,
        }

        try:
            resp = await self._client.chat.completions.create(**params)
        except Exception as exc:
            logger.warning(
                "llm.complete.error",
                extra={"model": params.get("model"), "error": repr(exc)},
            )
            raise

        content = extract_message_text(resp)
        if content is None:
            logger.warning("llm.complete.empty", extra={"model": params.get("model")})
            raise LLMResponseError("completion produced no content")

        logger.info(
            "llm.complete.done",
            extra={"model": params.get("model"), "max_tokens": params.get("max_tokens")},
        )
        return parse_json_object(content)


__all__ = [
    "OpenAIChatClient",
    "LLMNotConfiguredError",
    "LLMResponseError",
    "ChatMessage",
    "build_async_openai",
    "extract_message_text",
    "parse_json_object",
]
