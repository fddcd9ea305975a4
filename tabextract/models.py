"""Data models for tabextract."""

from datetime import datetime
from typing import Dict, List, Literal

from pydantic import BaseModel, Field

# A single extracted record: field name -> value, in insertion order
Row = Dict[str, str]

# Ordered sequence of rows handed to renderers and exporters
TabularResult = List[Row]

LINE_NUMBER_FIELD = "line_number"
RAW_TEXT_FIELD = "raw_text"


class ExtractionResult(BaseModel):
    """Result of extracting rows from one document."""

    source: str
    method: Literal["csv", "pattern"]
    rows: List[Row] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    duration_ms: int = 0
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def headers(self) -> List[str]:
        """Column names taken from the first row."""
        return list(self.rows[0].keys()) if self.rows else []
