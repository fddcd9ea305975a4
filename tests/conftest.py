"""Pytest configuration and fixtures."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def sample_text():
    """Free text with one contact per line."""
    return (
        "== contacts ==\n"
        "John Smith john.smith@example.com 555-123-4567\n"
        "\n"
        "Jane Doe jane@example.org\n"
        "   \n"
        "555-987-6543\n"
    )


@pytest.fixture
def sample_patterns():
    """Pattern specification matching sample_text."""
    return (
        "name: ([A-Z][a-z]+ [A-Z][a-z]+)\n"
        "email: ([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\\.[a-zA-Z]{2,})\n"
        "phone: (\\d{3}-\\d{3}-\\d{4})\n"
    )


@pytest.fixture
def sample_csv():
    """Small CSV document."""
    return 'item,"quantity",price\nWidget,2,9.99\n"Gadget",1\n'


@pytest.fixture
def sample_rows():
    """Rows as produced by the pattern extractor."""
    return [
        {"name": "Alice", "age": "30", "line_number": "1", "raw_text": "Alice,30"},
        {"name": "Bob", "age": "25", "line_number": "2", "raw_text": "Bob,25"},
    ]
