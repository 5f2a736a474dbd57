"""Keep one language from bilingual (Chinese/Japanese) LRC or SRT subtitles."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from .classifier import Language, classify_line
from .exceptions import UnsupportedFileTypeError, UnsupportedLanguageError
from .models import SubtitleFormat, SubtitleOutput
from .parser import find_timing_line, group_lrc_entries, parse_lrc, split_blocks

logger = logging.getLogger(__name__)

KEEPABLE_LANGUAGES = (Language.ZH, Language.JA)


def choose_lines_for_keep(lines: Sequence[str], keep: Language | str) -> List[str]:
    """
    Select the lines of one timing unit that belong to ``keep``.

    ZH keeps only lines classified ZH and never guesses. JA keeps lines
    classified JA; failing that, in a two-line block with one ZH line the
    other line is taken as Japanese, and in larger blocks containing ZH all
    non-ZH lines are kept.

    Args:
        lines: Candidate text lines sharing one timestamp / block
        keep: Language to keep

    Returns:
        Retained lines in original order, possibly empty
    """
    keep = _coerce_language(keep)
    types = [classify_line(line) for line in lines]

    if keep == Language.ZH:
        # 无中文则不保留（避免把纯日文/英文误判为中文）
        return [line for line, t in zip(lines, types) if t == Language.ZH]

    ja = [line for line, t in zip(lines, types) if t == Language.JA]
    if ja:
        return ja

    # 兜底：恰好两行且其中一行被判为中文，则另一行视为日文
    if len(lines) == 2 and Language.ZH in types:
        other = 1 if types.index(Language.ZH) == 0 else 0
        return [lines[other]]

    # 多行场景：存在中文则保留非中文的行作为日文候选
    if Language.ZH in types:
        return [line for line, t in zip(lines, types) if t != Language.ZH]

    return []


def extract_from_lrc(content: str, keep: Language | str) -> str:
    """
    Keep one line per LRC timestamp.

    The first-seen tag for each timestamp is reused verbatim, so the
    original tag precision is preserved.
    """
    groups = group_lrc_entries(parse_lrc(content, keep_empty=True))
    out_lines: List[str] = []

    for time_ms in sorted(groups):
        group = groups[time_ms]
        if not group.texts:
            continue

        kept = choose_lines_for_keep(group.texts, keep)
        if not kept:
            continue

        # 每个时间点保留一行（取第一候选）
        out_lines.append(f"{group.raw_tag}{kept[0]}")

    return "\n".join(out_lines)


def extract_from_srt(content: str, keep: Language | str) -> str:
    """
    Keep matching lines in each SRT block.

    Timing lines are copied unchanged; blocks left without text are dropped
    and the remaining blocks are renumbered from 1.
    """
    result_blocks: List[str] = []
    skipped = 0

    for lines in split_blocks(content):
        ts_idx = find_timing_line(lines)
        if ts_idx is None:
            skipped += 1
            continue

        text_lines = lines[ts_idx + 1:]
        if not text_lines:
            skipped += 1
            continue

        kept = choose_lines_for_keep(text_lines, keep)
        if not kept:
            continue

        index = len(result_blocks) + 1
        result_blocks.append(f"{index}\n{lines[ts_idx]}\n" + "\n".join(kept))

    if skipped:
        logger.debug(f"Skipped {skipped} malformed SRT blocks")

    return "\n\n".join(result_blocks)


def extract(
    file_name: str,
    file_content: str,
    file_type: SubtitleFormat | str,
    keep: Language | str,
) -> SubtitleOutput:
    """
    Extract one language from bilingual subtitle content.

    Args:
        file_name: Original file name; the output keeps name and extension
        file_content: Full file content
        file_type: "LRC" or "SRT"
        keep: "ZH" or "JA"

    Returns:
        SubtitleOutput with the same container format as the input

    Raises:
        UnsupportedFileTypeError: If file_type is not LRC or SRT
        UnsupportedLanguageError: If keep is not ZH or JA
    """
    fmt = SubtitleFormat.coerce(file_type)
    if fmt not in (SubtitleFormat.LRC, SubtitleFormat.SRT):
        raise UnsupportedFileTypeError(getattr(file_type, "value", file_type))

    language = _coerce_language(keep)

    if fmt == SubtitleFormat.LRC:
        output_content = extract_from_lrc(file_content, language)
    else:
        output_content = extract_from_srt(file_content, language)

    if not output_content:
        logger.warning(f"No {language.value} lines found in {file_name}")

    # 保持原扩展名
    return SubtitleOutput(Path(file_name).name, output_content)


def _coerce_language(keep: Language | str) -> Language:
    try:
        language = Language(str(getattr(keep, "value", keep)).strip().upper())
    except ValueError:
        raise UnsupportedLanguageError(str(keep)) from None
    if language not in KEEPABLE_LANGUAGES:
        raise UnsupportedLanguageError(language.value)
    return language
