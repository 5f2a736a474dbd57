"""Configuration and constants."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables once
load_dotenv()


# LRC 最后一行（或无后续时间戳时）的默认显示时长
DEFAULT_DURATION_MS = 2000

# 每个 SRT 块的最短显示时长
MIN_BLOCK_DURATION_MS = 300

# Directory scan limits
DEFAULT_MAX_DEPTH = 20
DEFAULT_MAX_FILES = 10000

# Supported file extensions
SUPPORTED_EXTENSIONS = {".lrc", ".srt", ".vtt"}
EXTRACTABLE_EXTENSIONS = {".lrc", ".srt"}

DURATION_ENV = "SUBTITLE_DEFAULT_DURATION_MS"
OUTPUT_DIR_ENV = "SUBTITLE_OUTPUT_DIR"


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class ToolboxConfig:
    """Configuration for subtitle conversion and extraction runs."""

    # Conversion settings
    default_duration_ms: Optional[int] = None

    # Output settings
    output_dir: Optional[Path] = None
    overwrite: bool = False

    # Input discovery
    recursive: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH
    max_files: int = DEFAULT_MAX_FILES
    input_encoding: str = "utf-8-sig"

    def __post_init__(self):
        """Fill unset values from the environment."""
        if self.default_duration_ms is None:
            self.default_duration_ms = _env_int(DURATION_ENV, DEFAULT_DURATION_MS)
        if self.output_dir is None:
            env_dir = os.environ.get(OUTPUT_DIR_ENV)
            if env_dir:
                self.output_dir = Path(env_dir).expanduser()

    @classmethod
    def from_args(cls, args) -> "ToolboxConfig":
        """Create config from argparse namespace."""
        output_dir = getattr(args, 'output_dir', None)
        return cls(
            default_duration_ms=getattr(args, 'duration', None),
            output_dir=Path(output_dir).expanduser() if output_dir else None,
            overwrite=getattr(args, 'overwrite', False),
            recursive=getattr(args, 'recursive', False),
            max_depth=getattr(args, 'max_depth', DEFAULT_MAX_DEPTH),
            max_files=getattr(args, 'max_files', DEFAULT_MAX_FILES),
        )

    def output_dir_for(self, input_path: Path) -> Path:
        """Directory results are written to: the configured one, else next to the input."""
        return self.output_dir if self.output_dir is not None else input_path.parent

    def validate(self) -> Optional[str]:
        """
        Validate configuration.

        Returns:
            Error message if invalid, None if valid
        """
        if self.default_duration_ms <= 0 or self.default_duration_ms > 60000:
            return f"Default duration must be 1-60000 ms, got {self.default_duration_ms}"

        if self.max_depth < 1:
            return f"Max depth must be at least 1, got {self.max_depth}"

        if self.max_files < 1:
            return f"Max files must be at least 1, got {self.max_files}"

        if self.output_dir is not None and self.output_dir.exists() and not self.output_dir.is_dir():
            return f"Output path is not a directory: {self.output_dir}"

        return None
