"""Extract tabular rows from decoded document text."""

import time
from pathlib import Path
from typing import List, Optional, Union

import structlog

from .exceptions import EmptyInputError
from .models import (
    LINE_NUMBER_FIELD,
    RAW_TEXT_FIELD,
    ExtractionResult,
    Row,
    TabularResult,
)
from .patterns import PatternSet, compile_patterns
from .reader import DEFAULT_MAX_BYTES, read_document

logger = structlog.get_logger(__name__, service="extractor")


def _non_blank_lines(content: str) -> List[str]:
    return [line for line in content.split("\n") if line.strip()]


def _match_line(line: str, pattern_set: PatternSet) -> Optional[Row]:
    """Apply every pattern to one line; None when nothing matched."""
    row: Row = {}

    for field_name, regex in pattern_set.patterns.items():
        match = regex.search(line)
        if match:
            captured = match.group(1) if regex.groups else None
            row[field_name] = captured or match.group(0)

    return row or None


def extract_from_text(
    content: str,
    patterns: str,
    pattern_set: Optional[PatternSet] = None,
) -> TabularResult:
    """
    Extract one row per line that matches at least one pattern.

    Each row holds the matched fields in pattern order followed by
    `line_number` (1-based, counting non-blank lines) and the untouched
    `raw_text` of the line.

    Args:
        content: Decoded document text
        patterns: Specification text, one `name: regex` per line
        pattern_set: Already compiled patterns; compiled from `patterns` if None

    Returns:
        Extracted rows, possibly empty

    Raises:
        EmptyInputError: If content has no non-blank lines
    """
    lines = _non_blank_lines(content)
    if not lines:
        raise EmptyInputError("Empty file")

    if pattern_set is None:
        pattern_set = compile_patterns(patterns)

    rows: TabularResult = []
    for index, line in enumerate(lines, start=1):
        row = _match_line(line, pattern_set)
        if row is None:
            continue
        row[LINE_NUMBER_FIELD] = str(index)
        row[RAW_TEXT_FIELD] = line
        rows.append(row)

    logger.debug(
        "text_extracted",
        lines=len(lines),
        rows=len(rows),
        fields=list(pattern_set.patterns),
    )
    return rows


def _split_csv_line(line: str) -> List[str]:
    # Naive split: quotes are stripped wherever they appear, commas inside
    # quoted fields still split.
    return [value.strip().replace('"', "") for value in line.split(",")]


def extract_from_csv(content: str) -> TabularResult:
    """
    Parse comma-delimited text using the first line as the header.

    Every line after the header produces exactly one row. Missing trailing
    values become empty strings; surplus values are dropped.

    Args:
        content: Decoded CSV text

    Returns:
        One row per data line

    Raises:
        EmptyInputError: If content has no non-blank lines
    """
    lines = _non_blank_lines(content)
    if not lines:
        raise EmptyInputError("Empty CSV file")

    headers = _split_csv_line(lines[0])

    rows: TabularResult = []
    for line in lines[1:]:
        values = _split_csv_line(line)
        row: Row = {}
        for index, header in enumerate(headers):
            row[header] = values[index] if index < len(values) else ""
        rows.append(row)

    logger.debug("csv_extracted", columns=len(headers), rows=len(rows))
    return rows


def is_csv(source: Union[str, Path]) -> bool:
    """True when the file name selects the delimited-text pipeline."""
    return str(source).lower().endswith(".csv")


class Extractor:
    """Pick an extraction pipeline for a document and run it."""

    def __init__(self, max_bytes: int = DEFAULT_MAX_BYTES, encoding: str = "utf-8"):
        """
        Initialize extractor.

        Args:
            max_bytes: Largest document accepted by extract_file
            encoding: Text encoding used to decode documents
        """
        self.max_bytes = max_bytes
        self.encoding = encoding

    async def extract_file(self, path: Union[str, Path], patterns: str = "") -> ExtractionResult:
        """
        Read a document and extract rows from it.

        Args:
            path: Document path; `.csv` files use the delimited parser
            patterns: Specification text for non-CSV documents

        Returns:
            ExtractionResult with rows and pattern warnings
        """
        logger.info("extraction_started", source=str(path))
        content = await read_document(path, max_bytes=self.max_bytes, encoding=self.encoding)
        return self.extract_content(content, source=str(path), patterns=patterns)

    def extract_content(self, content: str, source: str, patterns: str = "") -> ExtractionResult:
        """
        Extract rows from already decoded content.

        Args:
            content: Decoded document text
            source: File name, used to choose the pipeline
            patterns: Specification text for non-CSV documents

        Returns:
            ExtractionResult with rows and pattern warnings
        """
        started = time.monotonic()
        warnings: List[str] = []

        if is_csv(source):
            method = "csv"
            rows = extract_from_csv(content)
        else:
            method = "pattern"
            if not _non_blank_lines(content):
                raise EmptyInputError("Empty file")
            pattern_set = compile_patterns(patterns)
            warnings.extend(pattern_set.warnings)
            rows = extract_from_text(content, patterns, pattern_set=pattern_set)

        duration_ms = int((time.monotonic() - started) * 1000)

        if warnings:
            logger.warning("extraction_reported_warnings", source=source, warnings=warnings)

        logger.info(
            "extraction_completed",
            source=source,
            method=method,
            rows=len(rows),
            duration_ms=duration_ms,
        )

        return ExtractionResult(
            source=source,
            method=method,
            rows=rows,
            warnings=warnings,
            duration_ms=duration_ms,
        )

