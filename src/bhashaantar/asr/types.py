from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class AsrOptions:
    accent: Optional[str] = None
    language: Optional[str] = None


@dataclass(slots=True)
class WordAlternatives:
    word: str
    alternatives: List[str] = field(default_factory=list)


@dataclass(slots=True)
class AsrResult:
    text: str
    alternatives: Optional[List[WordAlternatives]] = None
    provider: Optional[str] = None
