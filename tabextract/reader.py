"""Read uploaded documents into memory."""

import asyncio
from pathlib import Path
from typing import Union

import structlog

from .exceptions import FileTooLargeError

logger = structlog.get_logger(__name__, service="reader")

DEFAULT_MAX_BYTES = 20 * 1024 * 1024


async def read_document(
    path: Union[str, Path],
    max_bytes: int = DEFAULT_MAX_BYTES,
    encoding: str = "utf-8",
) -> str:
    """
    Read a whole document as decoded text.

    The file is buffered completely before returning; nothing is streamed.

    Args:
        path: Path to the document
        max_bytes: Reject files larger than this
        encoding: Text encoding of the document

    Returns:
        Decoded file content with universal newlines

    Raises:
        FileNotFoundError: If the file does not exist
        FileTooLargeError: If the file exceeds max_bytes
    """
    path = Path(path)
    size = path.stat().st_size

    if size > max_bytes:
        logger.warning("file_too_large", path=str(path), size=size, max_bytes=max_bytes)
        raise FileTooLargeError(str(path), size, max_bytes)

    content = await asyncio.to_thread(path.read_text, encoding=encoding, errors="replace")
    logger.debug("document_read", path=str(path), size=size)
    return content
