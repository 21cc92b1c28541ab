"""Read a bookmark export from disk into text."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bs4 import UnicodeDammit

if TYPE_CHECKING:  # pragma: no cover
    from pathlib import Path

LOGGER = logging.getLogger(__name__)

# Browser exports are almost always one of these; tried before sniffing.
KNOWN_ENCODINGS: tuple[str, ...] = ("utf-8", "gbk")


class ExportReadError(OSError):
    """Raised when an export file cannot be decoded to text."""


def read_export(path: Path) -> str:
    """Return the decoded text of a bookmark export file."""
    LOGGER.debug("Reading bookmark export from %s", path)
    raw = path.read_bytes()
    dammit = UnicodeDammit(raw, list(KNOWN_ENCODINGS), is_html=True)
    if dammit.unicode_markup is None:
        msg = f"Unable to decode bookmark export: {path}"
        raise ExportReadError(msg)
    LOGGER.debug("Decoded %s as %s", path, dammit.original_encoding)
    return dammit.unicode_markup
