"""Exceptions raised by tabextract."""


class ExtractionError(Exception):
    """Base exception for extraction failures."""
    pass


class EmptyInputError(ExtractionError):
    """Source text has no non-blank lines."""
    pass


class FileTooLargeError(ExtractionError):
    """Document exceeds the configured size limit."""

    def __init__(self, path: str, size: int, max_bytes: int):
        self.path = path
        self.size = size
        self.max_bytes = max_bytes
        super().__init__(
            f"File size exceeds {max_bytes / (1024 * 1024):g}MB. Please choose a smaller file."
        )


class NoDataExtractedError(ExtractionError):
    """Extraction finished but produced no rows."""

    def __init__(self, message: str = None):
        super().__init__(
            message
            or "No data could be extracted. Please check your file format or try different patterns."
        )
