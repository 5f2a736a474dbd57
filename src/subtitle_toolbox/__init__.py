"""
Subtitle Toolbox - LRC/SRT/VTT conversion and bilingual language extraction.

Features:
- LRC <-> SRT conversion with bilingual line merging
- WebVTT import/export
- Heuristic Chinese/Japanese line classification
- Keep-one-language extraction that preserves the container format
- Batch processing of files and directories from the command line
"""

__version__ = "1.0.0"

from .models import LrcEntry, LrcGroup, SrtBlock, SubtitleFormat, SubtitleOutput
from .timestamps import (
    parse_lrc_tag,
    format_lrc_tag,
    parse_srt_timestamp,
    format_srt_timestamp,
    parse_vtt_timestamp,
    format_vtt_timestamp,
)
from .parser import parse_lrc, group_lrc_entries, parse_srt, parse_vtt, split_blocks
from .converter import convert, lrc_to_srt, srt_to_lrc
from .classifier import Language, classify_line
from .extractor import extract, choose_lines_for_keep
from .config import ToolboxConfig
from .file_io import scan_directory, write_output, ensure_unique_path
from .exceptions import (
    SubtitleToolboxError,
    UnsupportedConversionError,
    UnsupportedFileTypeError,
    UnsupportedLanguageError,
    FileSystemError,
)

__all__ = [
    # Models
    "LrcEntry",
    "LrcGroup",
    "SrtBlock",
    "SubtitleFormat",
    "SubtitleOutput",
    "ToolboxConfig",
    "Language",
    # Timestamps
    "parse_lrc_tag",
    "format_lrc_tag",
    "parse_srt_timestamp",
    "format_srt_timestamp",
    "parse_vtt_timestamp",
    "format_vtt_timestamp",
    # Parsing
    "parse_lrc",
    "group_lrc_entries",
    "parse_srt",
    "parse_vtt",
    "split_blocks",
    # Conversion
    "convert",
    "lrc_to_srt",
    "srt_to_lrc",
    # Extraction
    "classify_line",
    "extract",
    "choose_lines_for_keep",
    # Files
    "scan_directory",
    "write_output",
    "ensure_unique_path",
    # Errors
    "SubtitleToolboxError",
    "UnsupportedConversionError",
    "UnsupportedFileTypeError",
    "UnsupportedLanguageError",
    "FileSystemError",
]
