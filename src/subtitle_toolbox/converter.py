"""Conversion between LRC, SRT and WebVTT subtitle content."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

from .config import DEFAULT_DURATION_MS, MIN_BLOCK_DURATION_MS
from .exceptions import UnsupportedConversionError
from .models import SrtBlock, SubtitleFormat, SubtitleOutput
from .parser import group_lrc_entries, parse_lrc, parse_srt, parse_vtt
from .text_utils import dedupe_preserving_order
from .timestamps import format_lrc_tag, format_srt_timestamp, format_vtt_timestamp

logger = logging.getLogger(__name__)

VTT_HEADER = "WEBVTT\n\n"


def build_lrc_timeline(
    content: str,
    default_duration_ms: int = DEFAULT_DURATION_MS,
    min_duration_ms: int = MIN_BLOCK_DURATION_MS,
) -> List[Tuple[int, int, str]]:
    """
    Turn LRC content into ``(start_ms, end_ms, text)`` cues.

    Lines sharing a timestamp (e.g. a bilingual pair) become one cue whose
    text is the de-duplicated lines joined by newlines. A cue ends at the
    next timestamp, the last one after ``default_duration_ms``; no cue is
    shorter than ``min_duration_ms``.
    """
    groups = group_lrc_entries(parse_lrc(content))
    times = sorted(groups)

    cues: List[Tuple[int, int, str]] = []
    for i, start in enumerate(times):
        next_start = times[i + 1] if i + 1 < len(times) else start + default_duration_ms
        end = max(start + min_duration_ms, next_start)
        # 去重并拼接多语言行
        merged = "\n".join(dedupe_preserving_order(groups[start].texts))
        cues.append((start, end, merged))

    return cues


def lrc_to_srt(
    content: str,
    default_duration_ms: int = DEFAULT_DURATION_MS,
    min_duration_ms: int = MIN_BLOCK_DURATION_MS,
) -> str:
    """Convert LRC content to SRT content."""
    blocks = [
        SrtBlock(idx, start, end, text.split("\n")).to_srt() + "\n"
        for idx, (start, end, text) in enumerate(
            build_lrc_timeline(content, default_duration_ms, min_duration_ms), 1
        )
    ]
    return "\n".join(blocks).strip()


def lrc_to_vtt(
    content: str,
    default_duration_ms: int = DEFAULT_DURATION_MS,
    min_duration_ms: int = MIN_BLOCK_DURATION_MS,
) -> str:
    """Convert LRC content to WebVTT content."""
    cues = [
        f"{format_vtt_timestamp(start)} --> {format_vtt_timestamp(end)}\n{text}\n"
        for start, end, text in build_lrc_timeline(content, default_duration_ms, min_duration_ms)
    ]
    return VTT_HEADER + "\n".join(cues).strip()


def blocks_to_lrc(blocks: Sequence[SrtBlock]) -> str:
    """
    Render blocks as LRC lines.

    Only the start time survives; multi-line text is joined with a space.
    """
    lines = [
        f"{format_lrc_tag(block.start_ms)}{' '.join(block.text_lines).strip()}"
        for block in blocks
    ]
    return "\n".join(lines).strip()


def srt_to_lrc(content: str) -> str:
    """Convert SRT content to LRC content."""
    return blocks_to_lrc(parse_srt(content))


def vtt_to_lrc(content: str) -> str:
    """Convert WebVTT content to LRC content."""
    return blocks_to_lrc(parse_vtt(content))


def srt_to_vtt(content: str) -> str:
    """Convert SRT content to WebVTT content."""
    cues = [
        f"{format_vtt_timestamp(b.start_ms)} --> {format_vtt_timestamp(b.end_ms)}\n{b.text}"
        for b in parse_srt(content)
    ]
    return VTT_HEADER + "\n\n".join(cues).strip()


def vtt_to_srt(content: str) -> str:
    """Convert WebVTT content to SRT content."""
    blocks = [b.to_srt(idx) for idx, b in enumerate(parse_vtt(content), 1)]
    return "\n\n".join(blocks).strip()


_CONVERTERS: Dict[Tuple[SubtitleFormat, SubtitleFormat], Callable[..., str]] = {
    (SubtitleFormat.LRC, SubtitleFormat.SRT): lrc_to_srt,
    (SubtitleFormat.LRC, SubtitleFormat.VTT): lrc_to_vtt,
    (SubtitleFormat.SRT, SubtitleFormat.LRC): srt_to_lrc,
    (SubtitleFormat.SRT, SubtitleFormat.VTT): srt_to_vtt,
    (SubtitleFormat.VTT, SubtitleFormat.LRC): vtt_to_lrc,
    (SubtitleFormat.VTT, SubtitleFormat.SRT): vtt_to_srt,
}

# 这些方向需要时长参数
_TIMED_SOURCES = {SubtitleFormat.LRC}


def convert(
    file_name: str,
    file_content: str,
    from_format: SubtitleFormat | str,
    to_format: SubtitleFormat | str,
    default_duration_ms: int = DEFAULT_DURATION_MS,
) -> SubtitleOutput:
    """
    Convert subtitle content between formats.

    Args:
        file_name: Original file name, used to derive the output name
        file_content: Full file content
        from_format: Source format ("LRC", "SRT" or "VTT")
        to_format: Target format
        default_duration_ms: Display time of the last LRC line

    Returns:
        SubtitleOutput with the new extension and converted content

    Raises:
        UnsupportedConversionError: If the format pair is not supported
    """
    src = SubtitleFormat.coerce(from_format)
    dst = SubtitleFormat.coerce(to_format)
    func = _CONVERTERS.get((src, dst)) if src and dst else None
    if func is None:
        raise UnsupportedConversionError(
            getattr(from_format, "value", from_format),
            getattr(to_format, "value", to_format),
        )

    if src in _TIMED_SOURCES:
        output_content = func(file_content, default_duration_ms)
    else:
        output_content = func(file_content)

    if output_content.strip() in ("", VTT_HEADER.strip()):
        logger.warning(f"No valid subtitle entries found in {file_name}")

    output_file_name = f"{Path(file_name).stem}{dst.extension}"
    logger.debug(f"Converted {file_name} ({src.value} -> {dst.value}) as {output_file_name}")
    return SubtitleOutput(output_file_name, output_content)
