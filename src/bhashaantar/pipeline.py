from __future__ import annotations

"""Submission controller: transcribe, best-effort enhance, translate."""

import asyncio
import dataclasses
import enum
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Optional

from .schemas import (
    Accent,
    EnhanceTranscriptionInput,
    EnhanceTranscriptionOutput,
    TranscribeHindiInput,
    TranscribeHindiOutput,
    TranslateHindiToEnglishInput,
    TranslateHindiToEnglishOutput,
)

logger = logging.getLogger(__name__)

SPEECH_NOT_RECOGNIZED_MESSAGE = "Speech could not be recognized. Please try again with clearer audio."
GENERIC_ERROR_MESSAGE = "An unexpected error occurred."
TIMEOUT_MESSAGE = "The request timed out. Please try again."

Transcriber = Callable[[TranscribeHindiInput], Awaitable[TranscribeHindiOutput]]
Enhancer = Callable[[EnhanceTranscriptionInput], Awaitable[EnhanceTranscriptionOutput]]
Translator = Callable[[TranslateHindiToEnglishInput], Awaitable[TranslateHindiToEnglishOutput]]


class SpeechNotRecognizedError(RuntimeError):
    """Raised when the recognizer answers with an empty transcription."""

    def __init__(self, message: str = SPEECH_NOT_RECOGNIZED_MESSAGE) -> None:
        super().__init__(message)


class SubmissionPhase(str, enum.Enum):
    IDLE = "idle"
    TRANSCRIBING = "transcribing"
    ENHANCING = "enhancing"
    TRANSLATING = "translating"
    DONE = "done"
    ERROR = "error"


@dataclass(frozen=True)
class SubmissionView:
    """Immutable snapshot of a controller's state."""

    generation: int = 0
    phase: SubmissionPhase = SubmissionPhase.IDLE
    accent: Optional[str] = None
    hindi_text: str = ""
    english_text: str = ""
    enhanced: bool = False
    is_transcribing: bool = False
    is_translating: bool = False
    error: Optional[str] = None

    @property
    def is_loading(self) -> bool:
        return self.is_transcribing or self.is_translating

    def to_dict(self) -> dict[str, Any]:
        return {
            "generation": self.generation,
            "phase": self.phase.value,
            "accent": self.accent,
            "hindiText": self.hindi_text,
            "englishText": self.english_text,
            "enhanced": self.enhanced,
            "isTranscribing": self.is_transcribing,
            "isTranslating": self.is_translating,
            "isLoading": self.is_loading,
            "error": self.error,
        }


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = "destructive"


Notifier = Callable[[Notification], None]


class SubmissionController:
    """Owns one page's submission state; the only writer of that state.

    Every submission bumps a generation counter. Results that come back for a
    generation other than the current one are dropped.
    """

    def __init__(
        self,
        *,
        transcriber: Transcriber,
        enhancer: Enhancer,
        translator: Translator,
        step_timeout: Optional[float] = 60.0,
        enhance_enabled: bool = True,
        accent: Accent = "Indian",
        notifier: Optional[Notifier] = None,
    ) -> None:
        self._transcriber = transcriber
        self._enhancer = enhancer
        self._translator = translator
        self._step_timeout = step_timeout
        self._enhance_enabled = enhance_enabled
        self._accent: Accent = accent
        self._notifier = notifier
        self._generation = 0
        self._state = SubmissionView(accent=accent)

    @property
    def state(self) -> SubmissionView:
        return self._state

    @property
    def accent(self) -> Accent:
        return self._accent

    def set_accent(self, accent: Accent) -> None:
        self._accent = accent
        self._update(self._generation, accent=accent)

    async def submit(self, audio_data_uri: str, *, accent: Optional[Accent] = None) -> SubmissionView:
        """Run one submission to completion and return the resulting view.

        If a newer submission started meanwhile, the newer state is returned
        untouched.
        """

        if accent is not None:
            self._accent = accent
        self._generation += 1
        generation = self._generation
        self._state = SubmissionView(
            generation=generation,
            phase=SubmissionPhase.TRANSCRIBING,
            accent=self._accent,
            is_transcribing=True,
        )
        logger.info("pipeline.submit.start", extra={"generation": generation, "accent": self._accent})

        try:
            asr = await self._call(
                self._transcriber(TranscribeHindiInput(audio_data_uri=audio_data_uri, accent=self._accent))
            )
            if self._is_stale(generation, "transcribe"):
                return self._state
            if asr.transcription == "":
                raise SpeechNotRecognizedError()

            display_text, enhanced = await self._maybe_enhance(generation, asr)
            if self._is_stale(generation, "enhance"):
                return self._state

            self._update(
                generation,
                phase=SubmissionPhase.TRANSLATING,
                hindi_text=display_text,
                enhanced=enhanced,
                is_transcribing=False,
                is_translating=True,
            )

            # Always translate the recognizer output, never the annotated display text.
            translation = await self._call(
                self._translator(TranslateHindiToEnglishInput(hindi_text=asr.transcription))
            )
            if self._is_stale(generation, "translate"):
                return self._state

            self._update(
                generation,
                phase=SubmissionPhase.DONE,
                english_text=translation.english_text,
                is_translating=False,
            )
            logger.info("pipeline.submit.done", extra={"generation": generation, "enhanced": enhanced})
        except asyncio.CancelledError:
            logger.info("pipeline.submit.cancelled", extra={"generation": generation})
            self._update(
                generation,
                phase=SubmissionPhase.IDLE,
                hindi_text="",
                english_text="",
                enhanced=False,
            )
            raise
        except Exception as exc:
            if self._is_stale(generation, "error"):
                return self._state
            message = self._error_message(exc)
            if isinstance(exc, SpeechNotRecognizedError):
                logger.warning("pipeline.submit.unrecognized", extra={"generation": generation})
            else:
                logger.exception("pipeline.submit.failed", extra={"generation": generation})
            self._update(
                generation,
                phase=SubmissionPhase.ERROR,
                hindi_text="",
                english_text="",
                enhanced=False,
                error=message,
            )
            self._notify(Notification(title="Error", description=message))
        finally:
            self._update(generation, is_transcribing=False, is_translating=False)

        return self._state

    async def _maybe_enhance(self, generation: int, asr: TranscribeHindiOutput) -> tuple[str, bool]:
        alternatives = asr.alternative_transcriptions or []
        if not alternatives or not self._enhance_enabled:
            return asr.transcription, False

        self._update(generation, phase=SubmissionPhase.ENHANCING)
        try:
            result = await self._call(
                self._enhancer(
                    EnhanceTranscriptionInput(original_text=asr.transcription, alternative_words=alternatives)
                )
            )
        except Exception as exc:
            logger.warning(
                "pipeline.enhance.failed",
                extra={"generation": generation, "error": repr(exc)},
            )
            return asr.transcription, False
        return result.enhanced_text, True

    async def _call(self, awaitable: Awaitable[Any]) -> Any:
        if self._step_timeout is None or self._step_timeout <= 0:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout=self._step_timeout)

    def _is_stale(self, generation: int, step: str) -> bool:
        if generation == self._generation:
            return False
        logger.info(
            "pipeline.submit.superseded",
            extra={"generation": generation, "current": self._generation, "step": step},
        )
        return True

    def _update(self, generation: int, **changes: Any) -> None:
        if generation != self._generation:
            return
        self._state = dataclasses.replace(self._state, **changes)

    def _notify(self, notification: Notification) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier(notification)
        except Exception:  # pragma: no cover - notifier bugs must not break the pipeline
            logger.debug("pipeline.notify.failed", exc_info=True)

    @staticmethod
    def _error_message(exc: BaseException) -> str:
        if isinstance(exc, asyncio.TimeoutError):
            return TIMEOUT_MESSAGE
        return str(exc).strip() or GENERIC_ERROR_MESSAGE


ControllerFactory = Callable[[str], SubmissionController]


class ControllerRegistry:
    """One controller per browser session, oldest evicted first."""

    def __init__(self, factory: ControllerFactory, *, max_sessions: int = 256) -> None:
        self._factory = factory
        self._max_sessions = max(1, max_sessions)
        self._controllers: "OrderedDict[str, SubmissionController]" = OrderedDict()

    def get(self, session_id: str) -> SubmissionController:
        controller = self._controllers.get(session_id)
        if controller is None:
            controller = self._factory(session_id)
            self._controllers[session_id] = controller
            while len(self._controllers) > self._max_sessions:
                evicted, _ = self._controllers.popitem(last=False)
                logger.info("pipeline.session.evicted", extra={"session_id": evicted})
        else:
            self._controllers.move_to_end(session_id)
        return controller

    def peek(self, session_id: str) -> Optional[SubmissionController]:
        return self._controllers.get(session_id)

    def __len__(self) -> int:
        return len(self._controllers)


__all__ = [
    "SPEECH_NOT_RECOGNIZED_MESSAGE",
    "GENERIC_ERROR_MESSAGE",
    "TIMEOUT_MESSAGE",
    "SpeechNotRecognizedError",
    "SubmissionPhase",
    "SubmissionView",
    "Notification",
    "SubmissionController",
    "ControllerRegistry",
]
