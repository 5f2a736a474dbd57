"""Command-line interface for Subtitle Toolbox."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from tqdm import tqdm

from .classifier import Language
from .config import ToolboxConfig, SUPPORTED_EXTENSIONS, EXTRACTABLE_EXTENSIONS
from .converter import convert
from .exceptions import SubtitleToolboxError
from .extractor import extract
from .file_io import detect_format, scan_directory, write_output
from .models import SubtitleFormat, SubtitleOutput
from .parser import validate_subtitle_file

logger = logging.getLogger(__name__)

FORMAT_CHOICES = [f.value for f in SubtitleFormat]
EXTRACT_TYPES = [SubtitleFormat.LRC.value, SubtitleFormat.SRT.value]
KEEP_CHOICES = [Language.ZH.value, Language.JA.value]


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S"
    )


def _upper(value: str) -> str:
    return value.strip().upper()


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("inputs", nargs="+", help="Input files or directories")
    parser.add_argument("-o", "--output-dir", help="Output directory (default: next to each input)")
    parser.add_argument("--overwrite", action="store_true", help="Overwrite existing output files")
    parser.add_argument("-r", "--recursive", action="store_true", help="Scan input directories recursively")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="subtitle-toolbox",
        description="Convert LRC/SRT/VTT subtitles and extract one language from bilingual files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s convert song.lrc --to SRT            # LRC -> SRT next to the input
  %(prog)s convert subs/ --from SRT --to LRC -r # Convert a whole folder
  %(prog)s extract movie.srt --keep JA -o out/  # Keep only Japanese lines
  %(prog)s scan subs/ --ext srt lrc -r          # List candidate files
        """
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_convert = sub.add_parser("convert", help="Convert between subtitle formats")
    _add_common_options(p_convert)
    p_convert.add_argument("--from", dest="from_format", type=_upper, choices=FORMAT_CHOICES,
                           help="Source format (default: from file extension)")
    p_convert.add_argument("--to", dest="to_format", type=_upper, choices=FORMAT_CHOICES, required=True)
    p_convert.add_argument("--duration", type=int, default=None,
                           help="Duration of the last LRC line in ms (default: 2000)")

    p_extract = sub.add_parser("extract", help="Keep only Chinese or Japanese lines")
    _add_common_options(p_extract)
    p_extract.add_argument("--keep", type=_upper, choices=KEEP_CHOICES, required=True)
    p_extract.add_argument("--type", dest="file_type", type=_upper, choices=EXTRACT_TYPES,
                           help="Input type (default: from file extension)")

    p_scan = sub.add_parser("scan", help="List subtitle files in a directory")
    p_scan.add_argument("directory")
    p_scan.add_argument("--ext", nargs="+", default=["lrc", "srt", "vtt"], help="Extensions to list")
    p_scan.add_argument("-r", "--recursive", action="store_true")
    p_scan.add_argument("--max-depth", type=int, default=20)
    p_scan.add_argument("--max-files", type=int, default=10000)
    p_scan.add_argument("-v", "--verbose", action="store_true", help="Verbose logging")

    return parser


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    return build_parser().parse_args(argv)


def collect_inputs(paths: Iterable[str], extensions: Iterable[str], config: ToolboxConfig) -> List[Path]:
    """
    Expand input arguments into a list of files.

    Directories are scanned for the given extensions; files are taken as-is.
    Missing paths are reported and skipped.
    """
    extensions = list(extensions)
    files: List[Path] = []
    for raw in paths:
        path = Path(raw).expanduser().resolve()
        if path.is_dir():
            result = scan_directory(
                path, extensions, config.recursive, config.max_depth, config.max_files
            )
            if result.truncated:
                logger.warning(f"Stopped scanning {path} after {config.max_files} files")
            files.extend(f.absolute_path for f in result.files)
        elif path.exists():
            files.append(path)
        else:
            logger.error(f"File not found: {path}")
    return files


def process_files(
    files: List[Path],
    handler: Callable[[Path, str], SubtitleOutput],
    config: ToolboxConfig,
    desc: str,
) -> int:
    """
    Run ``handler`` on each file and write its output.

    Returns:
        Number of files that failed
    """
    failed = 0
    for path in tqdm(files, desc=desc, unit="file", disable=len(files) < 2):
        try:
            content = path.read_text(encoding=config.input_encoding)
            output = handler(path, content)
            write_output(
                config.output_dir_for(path),
                output.output_file_name,
                output.output_content,
                overwrite=config.overwrite,
            )
        except (SubtitleToolboxError, OSError, ValueError) as e:
            logger.error(f"{path.name}: {e}")
            failed += 1
    return failed


def run_convert(args: argparse.Namespace, config: ToolboxConfig) -> int:
    if args.from_format:
        extensions = [SubtitleFormat(args.from_format).extension]
    else:
        # 目录中已是目标格式的文件不参与转换
        target_ext = SubtitleFormat(args.to_format).extension
        extensions = sorted(SUPPORTED_EXTENSIONS - {target_ext})
    files = collect_inputs(args.inputs, extensions, config)
    if not files:
        logger.error("No input files found")
        return 1

    def handle(path: Path, content: str) -> SubtitleOutput:
        allowed = set(SUPPORTED_EXTENSIONS)
        if args.from_format:
            allowed.add(path.suffix.lower())
        error = validate_subtitle_file(path, allowed)
        if error:
            raise ValueError(error)
        src = args.from_format or detect_format(path)
        return convert(path.name, content, src, args.to_format, config.default_duration_ms)

    failed = process_files(files, handle, config, "Converting")
    logger.info(f"Done! {len(files) - failed}/{len(files)} converted.")
    return 1 if failed else 0


def run_extract(args: argparse.Namespace, config: ToolboxConfig) -> int:
    extensions = (
        [SubtitleFormat(args.file_type).extension] if args.file_type else sorted(EXTRACTABLE_EXTENSIONS)
    )
    files = collect_inputs(args.inputs, extensions, config)
    if not files:
        logger.error("No input files found")
        return 1

    def handle(path: Path, content: str) -> SubtitleOutput:
        allowed = set(EXTRACTABLE_EXTENSIONS)
        if args.file_type:
            allowed.add(path.suffix.lower())
        error = validate_subtitle_file(path, allowed)
        if error:
            raise ValueError(error)
        file_type = args.file_type or detect_format(path)
        return extract(path.name, content, file_type, args.keep)

    failed = process_files(files, handle, config, "Extracting")
    logger.info(f"Done! {len(files) - failed}/{len(files)} extracted.")
    return 1 if failed else 0


def run_scan(args: argparse.Namespace, config: ToolboxConfig) -> int:
    directory = Path(args.directory).expanduser().resolve()
    if not directory.is_dir():
        logger.error(f"Not a directory: {directory}")
        return 1

    result = scan_directory(directory, args.ext, config.recursive, config.max_depth, config.max_files)
    for meta in result.files:
        print(f"{meta.extension}\t{meta.size}\t{meta.absolute_path}")

    logger.info(
        f"Found {len(result.files)} files in {result.scanned_dirs} directories"
        + (" (truncated)" if result.truncated else "")
    )
    return 0


COMMANDS = {
    "convert": run_convert,
    "extract": run_extract,
    "scan": run_scan,
}


def run(args: argparse.Namespace) -> int:
    """Dispatch a parsed command line, returning the exit code."""
    config = ToolboxConfig.from_args(args)

    error = config.validate()
    if error:
        logger.error(error)
        return 1

    return COMMANDS[args.command](args, config)


def main(argv: Optional[List[str]] = None) -> None:
    """CLI entry point."""
    args = parse_arguments(argv)
    setup_logging(args.verbose)

    try:
        sys.exit(run(args))
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        sys.exit(130)
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
