"""File-system helpers: discovering inputs and writing results."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .config import DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILES
from .exceptions import FileSystemError
from .models import SubtitleFormat

logger = logging.getLogger(__name__)


@dataclass
class FileMetadata:
    """Basic information about a candidate input file."""

    absolute_path: Path
    file_name: str
    extension: str  # 大写、不带点，例如 "SRT"
    size: int
    modified_at: float
    source_directory: Path

    @classmethod
    def from_path(cls, path: Path) -> "FileMetadata":
        stat = path.stat()
        return cls(
            absolute_path=path,
            file_name=path.name,
            extension=path.suffix[1:].upper(),
            size=stat.st_size,
            modified_at=stat.st_mtime,
            source_directory=path.parent,
        )


@dataclass
class ScanResult:
    """Files found by a directory scan."""

    files: List[FileMetadata] = field(default_factory=list)
    scanned_dirs: int = 0
    truncated: bool = False


def _normalize_extensions(extensions: Iterable[str]) -> set[str]:
    return {ext.strip().lstrip('.').upper() for ext in extensions if ext.strip()}


def scan_directory(
    directory: Path,
    extensions: Iterable[str] = (),
    recursive: bool = True,
    max_depth: int = DEFAULT_MAX_DEPTH,
    max_files: int = DEFAULT_MAX_FILES,
) -> ScanResult:
    """
    Collect files with matching extensions under a directory.

    Hidden directories are not descended into. Directories or files that
    cannot be read are skipped.

    Args:
        directory: Root directory
        extensions: Extensions to accept ("srt", ".LRC", ...); empty accepts all
        recursive: Descend into subdirectories
        max_depth: Maximum depth below ``directory``
        max_files: Stop after this many files (result is marked truncated)

    Returns:
        ScanResult with file metadata in directory order
    """
    wanted = _normalize_extensions(extensions)
    result = ScanResult()
    result.truncated = _scan(Path(directory), wanted, recursive, max_depth, max_files, 0, result)
    logger.debug(
        f"Scanned {result.scanned_dirs} directories, found {len(result.files)} files"
        + (" (truncated)" if result.truncated else "")
    )
    return result


def _scan(
    directory: Path,
    wanted: set[str],
    recursive: bool,
    max_depth: int,
    max_files: int,
    depth: int,
    result: ScanResult,
) -> bool:
    """Walk one directory; returns True once ``max_files`` is reached."""
    if depth > max_depth:
        return False
    if len(result.files) >= max_files:
        return True

    try:
        entries = sorted(os.scandir(directory), key=lambda e: e.name)
    except OSError as e:
        logger.debug(f"Cannot read directory {directory}: {e}")
        return False

    result.scanned_dirs += 1

    for entry in entries:
        if len(result.files) >= max_files:
            return True

        path = Path(entry.path)
        try:
            if entry.is_file():
                ext = path.suffix[1:].upper()
                if not wanted or ext in wanted:
                    result.files.append(FileMetadata.from_path(path))
            elif entry.is_dir() and recursive and not entry.name.startswith('.'):
                if _scan(path, wanted, recursive, max_depth, max_files, depth + 1, result):
                    return True
        except OSError as e:
            logger.debug(f"Skipping {path}: {e}")

    return False


def get_file_metadata(path: Path) -> Optional[FileMetadata]:
    """Return metadata for a single file, None if it cannot be stat'ed."""
    try:
        return FileMetadata.from_path(Path(path))
    except OSError:
        return None


def read_file_head(path: Path, lines: int, encoding: str = "utf-8-sig") -> str:
    """Read the first ``lines`` lines of a text file."""
    content = Path(path).read_text(encoding=encoding)
    return "\n".join(content.split("\n")[:lines])


def detect_format(path: Path) -> Optional[SubtitleFormat]:
    """Guess the subtitle format from the file extension."""
    suffix = Path(path).suffix
    if not suffix:
        return None
    return SubtitleFormat.coerce(suffix[1:])


def ensure_unique_path(directory: Path, file_name: str) -> Path:
    """
    Return a path in ``directory`` that does not exist yet.

    ``name.srt`` becomes ``name (1).srt``, ``name (2).srt``... on collision.
    """
    directory = Path(directory)
    name = Path(file_name)
    candidate = directory / name.name
    index = 1
    while candidate.exists():
        candidate = directory / f"{name.stem} ({index}){name.suffix}"
        index += 1
    return candidate


def write_output(
    directory: Path,
    file_name: str,
    content: str,
    overwrite: bool = False,
) -> Path:
    """
    Write a result file.

    Args:
        directory: Output directory, created if missing
        file_name: Desired file name
        content: Text to write (UTF-8)
        overwrite: Replace an existing file instead of adding an index suffix

    Returns:
        The path actually written

    Raises:
        FileSystemError: If the directory or file cannot be written
    """
    directory = Path(directory)
    try:
        directory.mkdir(parents=True, exist_ok=True)
        target = directory / Path(file_name).name if overwrite else ensure_unique_path(directory, file_name)
        target.write_text(content, encoding="utf-8")
    except OSError as e:
        logger.error(f"Failed to write {file_name} to {directory}: {e}")
        raise FileSystemError(f"Could not write {file_name} to {directory}: {e}") from e

    logger.info(f"Saved {target}")
    return target
