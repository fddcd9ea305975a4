"""Parse user-authored pattern specifications into compiled regexes.

A specification is free text with one declaration per line::

    name: ([A-Z][a-z]+ [A-Z][a-z]+)
    email: ([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\\.[a-zA-Z]{2,})
    phone: (\\d{3}-\\d{3}-\\d{4})

Everything before the first colon is the field name, everything after it is
the regex body.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

import structlog

logger = structlog.get_logger(__name__, service="extractor")

DEFAULT_FIELD = "text"
DEFAULT_PATTERN = "(.+)"


@dataclass
class PatternEntry:
    """A single `name: regex` declaration as written by the user."""
    field_name: str
    source: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"field_name": self.field_name, "source": self.source}


@dataclass
class PatternSet:
    """Compiled patterns for one extraction call."""
    patterns: Dict[str, "re.Pattern[str]"]
    warnings: List[str] = field(default_factory=list)
    used_default: bool = False

    def __len__(self) -> int:
        return len(self.patterns)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "patterns": {name: regex.pattern for name, regex in self.patterns.items()},
            "warnings": self.warnings,
            "used_default": self.used_default,
        }


def parse_pattern_spec(text: str) -> List[PatternEntry]:
    """
    Split a specification into (field name, regex source) declarations.

    Blank lines, lines without a colon and lines whose name or pattern is
    empty after trimming are skipped.

    Args:
        text: Multi-line specification text

    Returns:
        Declarations in the order they were written
    """
    entries: List[PatternEntry] = []

    for line in (text or "").split("\n"):
        if not line.strip():
            continue

        name, sep, source = line.partition(":")
        name = name.strip()
        source = source.strip()

        if not sep or not name or not source:
            logger.debug("pattern_line_skipped", line=line)
            continue

        entries.append(PatternEntry(field_name=name, source=source))

    return entries


def compile_patterns(text: str) -> PatternSet:
    """
    Compile a specification into case-insensitive regexes keyed by field name.

    Entries that fail to compile are dropped with a warning. A later entry
    with the same name replaces the earlier one. When nothing compiles, a
    single `text` entry matching the whole line is installed.

    Args:
        text: Multi-line specification text

    Returns:
        PatternSet with the compiled map and any diagnostics
    """
    patterns: Dict[str, "re.Pattern[str]"] = {}
    warnings: List[str] = []

    for entry in parse_pattern_spec(text):
        try:
            patterns[entry.field_name] = re.compile(entry.source, re.IGNORECASE)
        except re.error as e:
            logger.warning(
                "invalid_pattern",
                field=entry.field_name,
                pattern=entry.source,
                error=str(e),
            )
            warnings.append(f"Invalid regex pattern for {entry.field_name}: {entry.source}")

    if not patterns:
        logger.debug("default_pattern_installed", field=DEFAULT_FIELD)
        return PatternSet(
            patterns={DEFAULT_FIELD: re.compile(DEFAULT_PATTERN)},
            warnings=warnings,
            used_default=True,
        )

    return PatternSet(patterns=patterns, warnings=warnings)
