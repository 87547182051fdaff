"""Hindi speech recognition."""

from .service import AsrService
from .types import AsrOptions, AsrResult, WordAlternatives

__all__ = ["AsrService", "AsrOptions", "AsrResult", "WordAlternatives"]
