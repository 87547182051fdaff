from __future__ import annotations

"""View models consumed by the browser page."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .pipeline import SubmissionView

TRANSLATION_FILENAME = "bhashaantar_translation.txt"
TRANSLATION_MEDIA_TYPE = "text/plain; charset=utf-8"


@dataclass(frozen=True)
class ResultsPanel:
    mode: str
    loading_label: Optional[str] = None
    progress: Optional[int] = None
    error: Optional[str] = None
    hindi_text: str = ""
    english_text: str = ""
    can_download: bool = False

    @classmethod
    def from_view(cls, view: SubmissionView) -> "ResultsPanel":
        if view.error:
            return cls(mode="error", error=view.error)
        if view.is_loading:
            label = "Transcribing..." if view.is_transcribing else "Translating..."
            progress = 40 if view.is_transcribing else 80
            return cls(mode="loading", loading_label=label, progress=progress)
        if view.hindi_text and view.english_text:
            return cls(
                mode="results",
                hindi_text=view.hindi_text,
                english_text=view.english_text,
                can_download=bool(view.english_text),
            )
        return cls(mode="hidden")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode,
            "loadingLabel": self.loading_label,
            "progress": self.progress,
            "error": self.error,
            "hindiText": self.hindi_text,
            "englishText": self.english_text,
            "canDownload": self.can_download,
        }


def translation_file_bytes(english_text: str) -> bytes:
    """The download artifact holds only the English text, UTF-8 encoded."""
    return english_text.encode("utf-8")
