"""Exceptions raised by subtitle toolbox operations."""


class SubtitleToolboxError(Exception):
    """Base class for subtitle toolbox errors."""


class UnsupportedConversionError(SubtitleToolboxError, ValueError):
    """Requested source/target format pair cannot be converted."""

    def __init__(self, from_format: str, to_format: str):
        self.from_format = from_format
        self.to_format = to_format
        super().__init__(f"Unsupported conversion: {from_format} -> {to_format}")


class UnsupportedFileTypeError(SubtitleToolboxError, ValueError):
    """File type is not handled by the requested operation."""

    def __init__(self, file_type: str):
        self.file_type = file_type
        super().__init__(f"Unsupported file type: {file_type}")


class UnsupportedLanguageError(SubtitleToolboxError, ValueError):
    """Kept language is neither ZH nor JA."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Unsupported language: {language}")


class FileSystemError(SubtitleToolboxError):
    """Output file could not be written."""
