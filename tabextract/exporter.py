"""Write extracted rows to CSV, XLSX and RTF files."""

import csv
from datetime import datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import openpyxl
import structlog
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from .models import TabularResult

logger = structlog.get_logger(__name__, service="exporter")

SHEET_NAME = "Data"


def _first_row_headers(rows: TabularResult) -> List[str]:
    return list(rows[0].keys())


def _sheet_value(value: Optional[str]) -> Optional[str]:
    # Worksheets reject ASCII control characters such as form feeds
    if value is None:
        return None
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def _all_headers(rows: TabularResult) -> List[str]:
    headers: Dict[str, None] = {}
    for row in rows:
        for key in row:
            headers.setdefault(key, None)
    return list(headers)


def export_csv(rows: TabularResult, path: Union[str, Path]) -> Optional[Path]:
    """
    Export rows to a CSV file.

    Columns follow the key order of the first row. The header line is written
    as is; every value is quoted.

    Args:
        rows: Rows to export
        path: Destination file

    Returns:
        Path written, or None if there was nothing to export
    """
    if not rows:
        logger.warning("export_skipped_empty", format="csv")
        return None

    path = Path(path)
    headers = _first_row_headers(rows)

    with open(path, "w", newline="", encoding="utf-8") as f:
        f.write(",".join(headers) + "\n")
        writer = csv.writer(f, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for row in rows:
            writer.writerow([row.get(header, "") for header in headers])

    logger.info("export_written", format="csv", path=str(path), rows=len(rows))
    return path


def export_xlsx(rows: TabularResult, path: Union[str, Path]) -> Optional[Path]:
    """
    Export rows to an Excel workbook with a single "Data" sheet.

    The header row is the union of keys across all rows, in first-seen order.

    Args:
        rows: Rows to export
        path: Destination file

    Returns:
        Path written, or None if there was nothing to export
    """
    if not rows:
        logger.warning("export_skipped_empty", format="xlsx")
        return None

    path = Path(path)
    headers = _all_headers(rows)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = SHEET_NAME

    ws.append([_sheet_value(header) for header in headers])
    for row in rows:
        ws.append([_sheet_value(row.get(header)) for header in headers])

    wb.save(str(path))

    logger.info("export_written", format="xlsx", path=str(path), rows=len(rows))
    return path


def _rtf_escape(value: str) -> str:
    out = []
    for char in value:
        if char in "\\{}":
            out.append("\\" + char)
        elif char == "\n":
            out.append("\\line ")
        elif ord(char) > 127:
            code = ord(char)
            # RTF \u takes a signed 16-bit value; astral characters are not split
            if code > 0xFFFF:
                out.append("?")
                continue
            if code > 32767:
                code -= 65536
            out.append(f"\\u{code}?")
        else:
            out.append(char)
    return "".join(out)


def render_rtf(rows: TabularResult, generated_at: Optional[datetime] = None) -> str:
    """Build the RTF report text for rows."""
    generated_at = generated_at or datetime.now()
    headers = _first_row_headers(rows)

    parts = [
        "{\\rtf1\\ansi\\deff0 {\\fonttbl {\\f0 Times New Roman;}}",
        "\\f0\\fs24",
        "\\b Extracted Data Report\\b0\\par",
        f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}\\par",
        f"Total Records: {len(rows)}\\par\\par",
        "\\b Data:\\b0\\par\\par",
    ]

    for index, row in enumerate(rows, start=1):
        parts.append(f"Record {index}:\\par")
        for header in headers:
            value = str(row.get(header) or "")
            parts.append(f"  {_rtf_escape(header)}: {_rtf_escape(value)}\\par")
        parts.append("\\par")

    parts.append("}")
    return "".join(parts)


def export_rtf(rows: TabularResult, path: Union[str, Path]) -> Optional[Path]:
    """
    Export rows to an RTF report readable by word processors.

    Args:
        rows: Rows to export
        path: Destination file

    Returns:
        Path written, or None if there was nothing to export
    """
    if not rows:
        logger.warning("export_skipped_empty", format="rtf")
        return None

    path = Path(path)
    path.write_text(render_rtf(rows), encoding="ascii")

    logger.info("export_written", format="rtf", path=str(path), rows=len(rows))
    return path


EXPORTERS: Dict[str, Callable[[TabularResult, Union[str, Path]], Optional[Path]]] = {
    "csv": export_csv,
    "xlsx": export_xlsx,
    "rtf": export_rtf,
}


def export_rows(
    rows: TabularResult,
    fmt: str,
    output_dir: Union[str, Path] = ".",
    basename: str = "extracted_data",
) -> Optional[Path]:
    """
    Export rows in the named format to `<output_dir>/<basename>.<fmt>`.

    Raises:
        ValueError: If the format is not supported
    """
    fmt = fmt.lower()
    if fmt not in EXPORTERS:
        raise ValueError(f"Unsupported export format: {fmt}")

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    return EXPORTERS[fmt](rows, output_dir / f"{basename}.{fmt}")
