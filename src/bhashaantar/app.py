import asyncio
import logging
from collections import defaultdict
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, Response
from openai import APITimeoutError
from pydantic import ValidationError

from .asr import AsrService
from .audio import (
    UNSUPPORTED_UPLOAD_MESSAGE,
    AudioIngestor,
    AudioTooLargeError,
    IngestLimits,
    UnsupportedAudioError,
    encode_data_uri,
)
from .flows import enhance_transcription, transcribe_hindi, translate_hindi_to_english
from .llm_client import LLMNotConfiguredError, OpenAIChatClient
from .pipeline import ControllerRegistry, Notification, SubmissionController, SubmissionView
from .presentation import (
    TRANSLATION_FILENAME,
    TRANSLATION_MEDIA_TYPE,
    ResultsPanel,
    translation_file_bytes,
)
from .schemas import (
    ACCENTS,
    EnhanceTranscriptionInput,
    SubmissionRequest,
    TranscribeHindiInput,
    TranscribeHindiOutput,
    TranslateHindiToEnglishInput,
)
from .settings import settings as runtime_settings

logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"

asr_cfg = runtime_settings.asr
pipeline_cfg = runtime_settings.pipeline
_asr_enabled = bool(asr_cfg.enabled)

audio_ingestor = AudioIngestor(limits=IngestLimits(max_bytes=asr_cfg.max_bytes))

asr_service: Optional[AsrService]
try:
    asr_service = AsrService.from_settings(asr_cfg, runtime_settings.openai)
except Exception:
    logger.exception("app.asr.provider_init_failed", extra={"provider": asr_cfg.provider})
    asr_service = None

_llm_client: Optional[OpenAIChatClient] = None


class ServiceNotConfiguredError(RuntimeError):
    """Raised when a remote capability was requested but never configured."""


def get_llm_client() -> OpenAIChatClient:
    global _llm_client
    if _llm_client is None:
        _llm_client = OpenAIChatClient(runtime_settings.openai, runtime_settings.llm)
    return _llm_client


async def close_llm_client() -> None:
    global _llm_client
    if _llm_client is not None:
        try:
            await _llm_client.close()
        except Exception:  # pragma: no cover - best effort cleanup
            logger.debug("app.llm.close_failed", exc_info=True)
        _llm_client = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("app.started", extra={"asr_enabled": _asr_enabled})
    yield
    await close_llm_client()


app = FastAPI(title="bhashaantar", lifespan=lifespan)


async def run_transcribe(request: TranscribeHindiInput) -> TranscribeHindiOutput:
    if not _asr_enabled:
        raise ServiceNotConfiguredError("audio input disabled")
    if asr_service is None:
        raise ServiceNotConfiguredError("speech recognition is not configured")
    return await transcribe_hindi(request, asr_service=asr_service)


async def run_enhance(request: EnhanceTranscriptionInput):
    return await enhance_transcription(request, llm_client=get_llm_client())


async def run_translate(request: TranslateHindiToEnglishInput):
    return await translate_hindi_to_english(request, llm_client=get_llm_client())


_notifications: Dict[str, List[Notification]] = defaultdict(list)


def _build_controller(session_id: str) -> SubmissionController:
    # Late-bound lambdas so the module-level call wrappers stay patchable.
    return SubmissionController(
        transcriber=lambda req: run_transcribe(req),
        enhancer=lambda req: run_enhance(req),
        translator=lambda req: run_translate(req),
        step_timeout=pipeline_cfg.step_timeout_seconds,
        enhance_enabled=pipeline_cfg.enhance_enabled,
        accent=asr_cfg.default_accent if asr_cfg.default_accent in ACCENTS else "Indian",
        notifier=lambda notification: _notifications[session_id].append(notification),
    )


registry = ControllerRegistry(_build_controller)


def _rpc_http_error(exc: Exception, operation: str) -> HTTPException:
    if isinstance(exc, (LLMNotConfiguredError, ServiceNotConfiguredError)):
        return HTTPException(status_code=503, detail=str(exc))
    if isinstance(exc, (asyncio.TimeoutError, APITimeoutError)):
        return HTTPException(status_code=504, detail=f"{operation}_timeout")
    if isinstance(exc, AudioTooLargeError):
        return HTTPException(status_code=413, detail="audio payload too large")
    if isinstance(exc, UnsupportedAudioError):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(status_code=422, detail=str(exc))
    logger.exception("app.%s.failed", operation)
    return HTTPException(status_code=502, detail=f"{operation}_failed")


async def _with_timeout(awaitable):
    timeout = pipeline_cfg.step_timeout_seconds
    if timeout and timeout > 0:
        return await asyncio.wait_for(awaitable, timeout=timeout)
    return await awaitable


def _submission_payload(session_id: str, view: SubmissionView, *, drain: bool = True) -> Dict[str, Any]:
    # Polling reads leave queued toasts for the submitting request to deliver.
    if drain:
        notifications = _notifications.pop(session_id, [])
    else:
        notifications = list(_notifications.get(session_id, []))
    return {
        "sessionId": session_id,
        "state": view.to_dict(),
        "panel": ResultsPanel.from_view(view).to_dict(),
        "notifications": [
            {"title": n.title, "description": n.description, "variant": n.variant} for n in notifications
        ],
    }


@app.get("/", response_class=HTMLResponse)
async def index() -> HTMLResponse:
    return HTMLResponse((_STATIC_DIR / "index.html").read_text(encoding="utf-8"))


@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "service": "bhashaantar",
        "asr_enabled": _asr_enabled,
        "asr_provider": asr_service.provider.name if (_asr_enabled and asr_service is not None) else None,
        "llm_configured": bool(runtime_settings.openai.api_key),
        "sessions": len(registry),
    }


@app.post("/api/transcribe")
async def api_transcribe(body: TranscribeHindiInput) -> JSONResponse:
    try:
        audio_ingestor.from_data_uri(body.audio_data_uri)
        output = await _with_timeout(run_transcribe(body))
    except Exception as exc:
        raise _rpc_http_error(exc, "transcribe") from exc
    return JSONResponse(output.model_dump(by_alias=True, exclude_none=True))


@app.post("/api/enhance")
async def api_enhance(body: EnhanceTranscriptionInput) -> JSONResponse:
    try:
        output = await _with_timeout(run_enhance(body))
    except Exception as exc:
        raise _rpc_http_error(exc, "enhance") from exc
    return JSONResponse(output.model_dump(by_alias=True))


@app.post("/api/translate")
async def api_translate(body: TranslateHindiToEnglishInput) -> JSONResponse:
    try:
        output = await _with_timeout(run_translate(body))
    except Exception as exc:
        raise _rpc_http_error(exc, "translate") from exc
    return JSONResponse(output.model_dump(by_alias=True))


@app.post("/api/submissions")
async def create_submission(body: SubmissionRequest) -> JSONResponse:
    try:
        audio_ingestor.from_data_uri(body.audio_data_uri)
    except AudioTooLargeError as exc:
        raise HTTPException(status_code=413, detail="audio payload too large") from exc
    except UnsupportedAudioError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    controller = registry.get(body.session_id)
    view = await controller.submit(body.audio_data_uri, accent=body.accent)
    return JSONResponse(_submission_payload(body.session_id, view))


@app.post("/api/submissions/upload")
async def create_submission_from_upload(
    file: UploadFile = File(...),
    accent: Optional[str] = Form(None),
    session_id: str = Form("default", alias="sessionId"),
) -> JSONResponse:
    if accent is not None and accent not in ACCENTS:
        raise HTTPException(status_code=422, detail=f"accent must be one of {', '.join(ACCENTS)}")
    try:
        payload = await audio_ingestor.from_upload(
            file_reader=file.read,
            content_type=file.content_type,
            filename=file.filename,
        )
    except AudioTooLargeError as exc:
        raise HTTPException(status_code=413, detail="audio payload too large") from exc
    except UnsupportedAudioError as exc:
        status = 415 if str(exc) == UNSUPPORTED_UPLOAD_MESSAGE else 400
        logger.info("app.upload.rejected", extra={"content_type": file.content_type})
        raise HTTPException(status_code=status, detail=str(exc)) from exc

    controller = registry.get(session_id)
    view = await controller.submit(encode_data_uri(payload.data, payload.content_type), accent=accent)
    return JSONResponse(_submission_payload(session_id, view))


@app.get("/api/submissions/{session_id}")
async def get_submission(session_id: str) -> JSONResponse:
    controller = registry.peek(session_id)
    view = controller.state if controller is not None else SubmissionView()
    return JSONResponse(_submission_payload(session_id, view, drain=False))


@app.get("/api/submissions/{session_id}/translation.txt")
async def download_translation(session_id: str) -> Response:
    controller = registry.peek(session_id)
    english_text = controller.state.english_text if controller is not None else ""
    if not english_text:
        raise HTTPException(status_code=404, detail="no translation available")
    return Response(
        content=translation_file_bytes(english_text),
        media_type=TRANSLATION_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{TRANSLATION_FILENAME}"'},
    )

