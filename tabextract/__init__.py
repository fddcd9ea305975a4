"""tabextract - extract tables from documents with regex patterns or CSV parsing."""

from .exceptions import EmptyInputError, ExtractionError, FileTooLargeError, NoDataExtractedError
from .extractor import Extractor, extract_from_csv, extract_from_text
from .models import ExtractionResult, Row, TabularResult
from .patterns import PatternSet, compile_patterns, parse_pattern_spec

__version__ = "0.1.0"
__all__ = [
    "Extractor",
    "ExtractionResult",
    "Row",
    "TabularResult",
    "PatternSet",
    "compile_patterns",
    "parse_pattern_spec",
    "extract_from_text",
    "extract_from_csv",
    "ExtractionError",
    "EmptyInputError",
    "FileTooLargeError",
    "NoDataExtractedError",
]
