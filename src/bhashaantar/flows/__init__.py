"""Schema-validated remote calls: transcribe, enhance, translate."""

from .enhance import enhance_transcription
from .transcribe import transcribe_hindi
from .translate import translate_hindi_to_english

__all__ = ["transcribe_hindi", "enhance_transcription", "translate_hindi_to_english"]
