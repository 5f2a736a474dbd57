"""Timestamp parsing and formatting for LRC, SRT and VTT.

All timestamps are integer milliseconds from the start of the media.
"""

from __future__ import annotations

import re
from typing import Optional


# [mm:ss], [mm:ss.x], [mm:ss.xx], [mm:ss.xxx]；分钟不限位数
LRC_TAG_PATTERN = re.compile(r"\[(\d+):(\d{1,2})(?:\.(\d{1,3}))?\]")

# 去除一行中的所有方括号标签（包括 [ar:...] 等元数据标签）
LRC_ANY_TAG_PATTERN = re.compile(r"\[[^\]]+\]")

SRT_TIMESTAMP_PATTERN = re.compile(r"(\d{2}):(\d{2}):(\d{2}),(\d{3})")

SRT_TIMING_PATTERN = re.compile(
    r"(\d{2}:\d{2}:\d{2},\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2},\d{3})"
)

VTT_TIMESTAMP_PATTERN = re.compile(r"(?:(\d{2}):)?(\d{2}):(\d{2})\.(\d{3})")

VTT_TIMING_PATTERN = re.compile(
    r"((?:\d{2}:)?\d{2}:\d{2}\.\d{3})\s*-->\s*((?:\d{2}:)?\d{2}:\d{2}\.\d{3})"
)


def _fraction_to_ms(fraction: str | None) -> int:
    """Scale an LRC fraction by its width: 1 digit = tenths, 2 = hundredths, 3 = ms."""
    if not fraction:
        return 0
    if len(fraction) == 3:
        return int(fraction)
    if len(fraction) == 2:
        return int(fraction) * 10
    return int(fraction) * 100


def lrc_match_to_ms(match: re.Match) -> int:
    """Convert an ``LRC_TAG_PATTERN`` match to milliseconds."""
    minutes = int(match.group(1) or "0")
    seconds = int(match.group(2) or "0")
    return minutes * 60000 + seconds * 1000 + _fraction_to_ms(match.group(3))


def parse_lrc_tag(tag: str) -> Optional[int]:
    """
    Parse a single LRC time tag such as ``[01:02.34]``.

    Args:
        tag: Tag text including the brackets

    Returns:
        Milliseconds, or None if the text is not a time tag
    """
    match = LRC_TAG_PATTERN.fullmatch(tag.strip())
    if not match:
        return None
    return lrc_match_to_ms(match)


def format_lrc_tag(ms: int) -> str:
    """
    Format milliseconds as ``[MM:SS.CC]``.

    Minutes never roll over into hours. Hundredths are rounded half-up and
    clamped at 99, so e.g. 999ms becomes ``.99`` rather than the next second.
    """
    ms = max(0, int(ms))
    total_seconds = ms // 1000
    minutes = total_seconds // 60
    seconds = total_seconds % 60
    hundredths = min(99, (ms % 1000 + 5) // 10)
    return f"[{minutes:02d}:{seconds:02d}.{hundredths:02d}]"


def parse_srt_timestamp(ts: str) -> int:
    """Parse ``HH:MM:SS,mmm`` to milliseconds, 0 if it does not match."""
    match = SRT_TIMESTAMP_PATTERN.search(ts)
    if not match:
        return 0
    hours, minutes, seconds, millis = (int(g) for g in match.groups())
    return hours * 3600000 + minutes * 60000 + seconds * 1000 + millis


def _split_ms(ms: int) -> tuple[int, int, int, int]:
    ms = max(0, int(ms))
    hours = ms // 3600000
    minutes = (ms % 3600000) // 60000
    seconds = (ms % 60000) // 1000
    millis = ms % 1000
    return hours, minutes, seconds, millis


def format_srt_timestamp(ms: int) -> str:
    """Format milliseconds as ``HH:MM:SS,mmm`` (hours are not capped)."""
    hours, minutes, seconds, millis = _split_ms(ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d},{millis:03d}"


def parse_vtt_timestamp(ts: str) -> int:
    """Parse ``HH:MM:SS.mmm`` or ``MM:SS.mmm`` to milliseconds, 0 if it does not match."""
    match = VTT_TIMESTAMP_PATTERN.search(ts)
    if not match:
        return 0
    hh, mm, ss, mmm = match.groups()
    hours = int(hh) if hh else 0
    return hours * 3600000 + int(mm) * 60000 + int(ss) * 1000 + int(mmm)


def format_vtt_timestamp(ms: int) -> str:
    """Format milliseconds as ``HH:MM:SS.mmm``."""
    hours, minutes, seconds, millis = _split_ms(ms)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"
