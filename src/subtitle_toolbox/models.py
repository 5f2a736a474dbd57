"""Data models for subtitle entries and blocks."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .timestamps import format_srt_timestamp


class SubtitleFormat(str, Enum):
    """Supported timed-text containers."""
    LRC = "LRC"
    SRT = "SRT"
    VTT = "VTT"

    @property
    def extension(self) -> str:
        return f".{self.value.lower()}"

    @classmethod
    def coerce(cls, value) -> Optional["SubtitleFormat"]:
        """Resolve an enum member or a case-insensitive name, None if unknown."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError:
            return None


@dataclass
class LrcEntry:
    """One timestamp-to-text association from an LRC line."""

    time_ms: int
    text: str
    raw_tag: str


@dataclass
class LrcGroup:
    """All texts sharing one LRC timestamp, in order of appearance."""

    raw_tag: str
    texts: List[str] = field(default_factory=list)


@dataclass
class SrtBlock:
    """Represents a single subtitle block in SRT format."""

    index: int
    start_ms: int
    end_ms: int
    text_lines: List[str]
    # 原始时间行，提取时原样输出
    timing_line: str = ""

    @property
    def timecode(self) -> str:
        """Return the timecode line in SRT format."""
        return f"{format_srt_timestamp(self.start_ms)} --> {format_srt_timestamp(self.end_ms)}"

    @property
    def text(self) -> str:
        return "\n".join(self.text_lines)

    def to_srt(self, new_idx: int | None = None) -> str:
        """Convert block to SRT format string (no trailing blank line)."""
        idx = new_idx if new_idx is not None else self.index
        return f"{idx}\n{self.timecode}\n{self.text}"


@dataclass
class SubtitleOutput:
    """Result of a conversion or extraction call."""

    output_file_name: str
    output_content: str
