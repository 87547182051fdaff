from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(slots=True)
class AudioPayload:
    """Raw audio decoded from a data URI or an upload."""

    data: bytes
    content_type: str
    params: Mapping[str, str] = field(default_factory=dict)
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)
