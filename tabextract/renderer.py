"""Render extracted rows as terminal tables."""

from typing import List, Optional

from rich.markup import escape
from rich.table import Table

from .models import LINE_NUMBER_FIELD, RAW_TEXT_FIELD, TabularResult


def table_headers(rows: TabularResult) -> List[str]:
    """Column headers are the keys of the first row."""
    if not rows:
        return []
    return list(rows[0].keys())


def build_table(rows: TabularResult, title: Optional[str] = "Extracted Data") -> Table:
    """
    Build a rich Table for rows.

    Rows are laid out positionally under the first row's headers; keys a row
    lacks render as empty cells and keys the first row lacks are not shown.
    """
    headers = table_headers(rows)

    table = Table(title=title, show_header=True)
    for header in headers:
        style = "dim" if header in (LINE_NUMBER_FIELD, RAW_TEXT_FIELD) else "cyan"
        table.add_column(escape(header), style=style)

    for row in rows:
        table.add_row(*[escape(str(row.get(header) or "")) for header in headers])

    return table
