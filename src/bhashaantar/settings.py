from __future__ import annotations

"""Runtime configuration helpers for bhashaantar."""

import os
from dataclasses import dataclass

_BOOL_TRUTHY = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _BOOL_TRUTHY


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True)
class OpenAISettings:
    api_key: str | None
    organization: str | None
    base_url: str | None


@dataclass(frozen=True)
class LLMSettings:
    model: str
    temperature: float
    max_tokens: int
    timeout: float


@dataclass(frozen=True)
class AsrSettings:
    enabled: bool
    provider: str
    transcribe_model: str
    audio_chat_model: str
    language: str
    max_bytes: int
    default_accent: str
    request_timeout: float = 30.0


@dataclass(frozen=True)
class PipelineSettings:
    step_timeout_seconds: float
    enhance_enabled: bool


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    log_level: str
    log_format: str
    log_file: str | None


@dataclass(frozen=True)
class Settings:
    openai: OpenAISettings
    llm: LLMSettings
    asr: AsrSettings
    pipeline: PipelineSettings
    server: ServerSettings


def load_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""

    openai_settings = OpenAISettings(
        api_key=os.getenv("OPENAI_API_KEY"),
        organization=os.getenv("OPENAI_ORG_ID"),
        base_url=os.getenv("OPENAI_BASE_URL"),
    )

    llm_settings = LLMSettings(
        model=os.getenv("LLM_MODEL", "gpt-4o-mini"),
        temperature=_env_float("LLM_TEMPERATURE", 0.2),
        max_tokens=_env_int("LLM_MAX_TOKENS", 2048),
        timeout=_env_float("LLM_REQUEST_TIMEOUT", 30.0),
    )

    asr_settings = AsrSettings(
        enabled=_env_bool("ASR_ENABLED", True),
        provider=os.getenv("ASR_PROVIDER", "openai-transcribe"),
        transcribe_model=os.getenv("ASR_TRANSCRIBE_MODEL", "gpt-4o-transcribe"),
        audio_chat_model=os.getenv("ASR_AUDIO_CHAT_MODEL", "gpt-4o-audio-preview"),
        language=os.getenv("ASR_LANGUAGE", "hi"),
        max_bytes=_env_int("ASR_MAX_BYTES", 10 * 1024 * 1024),
        default_accent=os.getenv("ASR_DEFAULT_ACCENT", "Indian"),
        request_timeout=_env_float("ASR_REQUEST_TIMEOUT", 30.0),
    )

    pipeline_settings = PipelineSettings(
        step_timeout_seconds=_env_float("PIPELINE_STEP_TIMEOUT_SECONDS", 60.0),
        enhance_enabled=_env_bool("ENABLE_ENHANCEMENT", True),
    )

    server_settings = ServerSettings(
        host=os.getenv("HOST", "0.0.0.0"),
        port=_env_int("PORT", 8200),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        log_format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
        log_file=os.getenv("LOG_FILE"),
    )

    return Settings(
        openai=openai_settings,
        llm=llm_settings,
        asr=asr_settings,
        pipeline=pipeline_settings,
        server=server_settings,
    )


settings = load_settings()

__all__ = [
    "Settings",
    "OpenAISettings",
    "LLMSettings",
    "AsrSettings",
    "PipelineSettings",
    "ServerSettings",
    "settings",
    "load_settings",
]
