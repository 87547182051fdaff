from __future__ import annotations

from typing import Any, List, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .audio.ingest import UnsupportedAudioError, decode_data_uri

Accent = Literal["Indian", "General"]
ACCENTS: tuple[str, ...] = ("Indian", "General")

ModelT = TypeVar("ModelT", bound=BaseModel)


class SchemaMismatchError(RuntimeError):
    """Raised when a remote response does not match its declared schema."""

    def __init__(self, message: str, *, schema: str, errors: Optional[list[Any]] = None) -> None:
        super().__init__(message)
        self.schema = schema
        self.errors = errors or []


def validate_response(model_cls: Type[ModelT], data: Any) -> ModelT:
    """Validate a decoded remote payload, rejecting anything off-schema."""

    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise SchemaMismatchError(
            f"response does not match {model_cls.__name__}",
            schema=model_cls.__name__,
            errors=exc.errors(include_url=False),
        ) from exc


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(populate_by_name=True)


# -----------------------------
# Transcribe
# -----------------------------
class AlternativeWord(_WireModel):
    word: str
    alternatives: List[str] = Field(default_factory=list)


class TranscribeHindiInput(_WireModel):
    audio_data_uri: str = Field(alias="audioDataUri")
    accent: Optional[Accent] = None

    @field_validator("audio_data_uri")
    @classmethod
    def must_be_data_uri(cls, v: str) -> str:
        try:
            decode_data_uri(v)
        except UnsupportedAudioError as exc:
            raise ValueError(str(exc)) from exc
        return v


class TranscribeHindiOutput(_WireModel):
    transcription: str
    alternative_transcriptions: Optional[List[AlternativeWord]] = Field(
        default=None, alias="alternativeTranscriptions"
    )


# -----------------------------
# Enhance
# -----------------------------
class EnhanceTranscriptionInput(_WireModel):
    original_text: str = Field(alias="originalText")
    alternative_words: List[AlternativeWord] = Field(alias="alternativeWords", min_length=1)


class EnhanceTranscriptionOutput(_WireModel):
    enhanced_text: str = Field(alias="enhancedText")


# -----------------------------
# Translate
# -----------------------------
class TranslateHindiToEnglishInput(_WireModel):
    hindi_text: str = Field(alias="hindiText")


class TranslateHindiToEnglishOutput(_WireModel):
    english_text: str = Field(alias="englishText")


# -----------------------------
# HTTP request bodies
# -----------------------------
class SubmissionRequest(_WireModel):
    session_id: str = Field(default="default", alias="sessionId")
    audio_data_uri: str = Field(alias="audioDataUri")
    accent: Optional[Accent] = None


__all__ = [
    "Accent",
    "ACCENTS",
    "SchemaMismatchError",
    "validate_response",
    "AlternativeWord",
    "TranscribeHindiInput",
    "TranscribeHindiOutput",
    "EnhanceTranscriptionInput",
    "EnhanceTranscriptionOutput",
    "TranslateHindiToEnglishInput",
    "TranslateHindiToEnglishOutput",
    "SubmissionRequest",
]
