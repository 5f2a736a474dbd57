"""LRC / SRT / VTT content segmentation.

Parsing is best-effort: malformed tags, blocks without a timing line and
blocks without text are skipped instead of failing the whole file.
"""

from __future__ import annotations

import re
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .models import LrcEntry, LrcGroup, SrtBlock
from .text_utils import truncate_text
from .timestamps import (
    LRC_ANY_TAG_PATTERN,
    LRC_TAG_PATTERN,
    SRT_TIMING_PATTERN,
    VTT_TIMING_PATTERN,
    lrc_match_to_ms,
    parse_srt_timestamp,
    parse_vtt_timestamp,
)

logger = logging.getLogger(__name__)

BLOCK_SEPARATOR = re.compile(r"\n\s*\n+")
VTT_HEADER = re.compile(r"^WEBVTT[^\n]*\n+")
INDEX_LINE = re.compile(r"^\d+$")

MAX_FILE_SIZE = 50 * 1024 * 1024  # 50MB


def normalize_newlines(content: str) -> str:
    """Convert CRLF / CR line endings to LF."""
    return content.replace('\r\n', '\n').replace('\r', '\n')


def parse_lrc(content: str, keep_empty: bool = False) -> List[LrcEntry]:
    """
    Parse LRC content into timestamp/text entries.

    A line carrying several time tags yields one entry per tag, all with the
    same text. Lines without a time tag (including ``[ar:...]`` metadata)
    are ignored.

    Args:
        content: Raw LRC file content
        keep_empty: Keep entries whose text is empty after stripping tags

    Returns:
        Entries in file order
    """
    entries: List[LrcEntry] = []
    if not content:
        return entries

    for raw in normalize_newlines(content).split('\n'):
        line = raw.strip()
        if not line:
            continue

        tags = list(LRC_TAG_PATTERN.finditer(line))
        if not tags:
            continue

        text = LRC_ANY_TAG_PATTERN.sub('', line).strip()
        if not text and not keep_empty:
            continue

        for match in tags:
            entries.append(LrcEntry(lrc_match_to_ms(match), text, match.group(0)))

    return entries


def group_lrc_entries(entries: Iterable[LrcEntry]) -> Dict[int, LrcGroup]:
    """
    Group entries by exact timestamp.

    The first tag seen for a timestamp is kept as the group's raw tag.
    Empty texts do not enter the group's text list.
    """
    groups: Dict[int, LrcGroup] = {}
    for entry in entries:
        group = groups.get(entry.time_ms)
        if group is None:
            group = LrcGroup(raw_tag=entry.raw_tag)
            groups[entry.time_ms] = group
        if entry.text:
            group.texts.append(entry.text)
    return groups


def _split_normalized(content: str) -> List[List[str]]:
    blocks: List[List[str]] = []
    for block in BLOCK_SEPARATOR.split(content):
        lines = [line.strip() for line in block.split('\n')]
        lines = [line for line in lines if line]
        if lines:
            blocks.append(lines)
    return blocks


def split_blocks(content: str) -> List[List[str]]:
    """
    Split SRT-like content into blocks of trimmed, non-empty lines.

    Blocks are separated by one or more blank lines.
    """
    if not content:
        return []
    normalized = normalize_newlines(content).strip()
    if not normalized:
        return []
    return _split_normalized(normalized)


def is_srt_timing_line(line: str) -> bool:
    return SRT_TIMING_PATTERN.search(line) is not None


def find_timing_line(lines: List[str]) -> Optional[int]:
    """
    Locate the ``start --> end`` line of an SRT block.

    Returns:
        1 if the block starts with a bare index followed by the timing line,
        0 if the block starts with the timing line, None if malformed
    """
    if len(lines) >= 2 and INDEX_LINE.match(lines[0]) and is_srt_timing_line(lines[1]):
        return 1
    if lines and is_srt_timing_line(lines[0]):
        return 0
    return None


def parse_srt(content: str) -> List[SrtBlock]:
    """
    Parse SRT content into SrtBlock objects.

    Args:
        content: Raw SRT file content as string

    Returns:
        List of parsed blocks; malformed or text-less blocks are skipped
    """
    result: List[SrtBlock] = []

    for lines in split_blocks(content):
        ts_idx = find_timing_line(lines)
        if ts_idx is None:
            logger.debug(f"Skipping block without timing line: {truncate_text(lines[0], 40)!r}")
            continue

        text_lines = lines[ts_idx + 1:]
        if not text_lines:
            logger.debug(f"Skipping block without text: {truncate_text(lines[ts_idx], 40)!r}")
            continue

        timing_line = lines[ts_idx]
        match = SRT_TIMING_PATTERN.search(timing_line)
        index = int(lines[0]) if ts_idx == 1 else len(result) + 1
        result.append(SrtBlock(
            index=index,
            start_ms=parse_srt_timestamp(match.group(1)),
            end_ms=parse_srt_timestamp(match.group(2)),
            text_lines=text_lines,
            timing_line=timing_line,
        ))

    return result


def parse_vtt(content: str) -> List[SrtBlock]:
    """
    Parse WebVTT content into SrtBlock objects.

    The ``WEBVTT`` header, cue identifiers and blocks without a cue timing
    (``NOTE``, ``STYLE``) are dropped.
    """
    if not content:
        return []
    normalized = normalize_newlines(content).strip()
    normalized = VTT_HEADER.sub('', normalized)

    result: List[SrtBlock] = []
    for lines in _split_normalized(normalized):
        ts_idx = next(
            (i for i, line in enumerate(lines)
             if '-->' in line and VTT_TIMING_PATTERN.search(line)),
            None,
        )
        if ts_idx is None:
            continue

        text_lines = lines[ts_idx + 1:]
        if not text_lines:
            continue

        match = VTT_TIMING_PATTERN.search(lines[ts_idx])
        result.append(SrtBlock(
            index=len(result) + 1,
            start_ms=parse_vtt_timestamp(match.group(1)),
            end_ms=parse_vtt_timestamp(match.group(2)),
            text_lines=text_lines,
            timing_line=lines[ts_idx],
        ))

    return result


def validate_subtitle_file(path: Path, allowed_suffixes: Iterable[str]) -> Optional[str]:
    """
    Validate subtitle file before processing.

    Args:
        path: Path to subtitle file
        allowed_suffixes: Accepted extensions, e.g. {".lrc", ".srt"}

    Returns:
        Error message if invalid, None if valid
    """
    if not path.exists():
        return f"File not found: {path}"

    if not path.is_file():
        return f"Not a file: {path}"

    allowed = {s.lower() for s in allowed_suffixes}
    suffix = path.suffix.lower()
    if suffix not in allowed:
        expected = ", ".join(sorted(allowed))
        return f"Invalid file extension: {suffix} (expected {expected})"

    size = path.stat().st_size
    if size == 0:
        return "File is empty"
    if size > MAX_FILE_SIZE:
        return f"File too large: {size / 1024 / 1024:.1f}MB (max 50MB)"

    return None
