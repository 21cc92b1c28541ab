"""Cheap, advisory pre-scan of a bookmark export."""

from __future__ import annotations

import re

from .config import CHARSET_DECLARATIONS, UNKNOWN_ENCODING
from .models import ParseStats

_ANCHOR_ENTRY_RE = re.compile(r"<DT><A\s+[^>]+>", re.IGNORECASE)
_FOLDER_ENTRY_RE = re.compile(r"<DT><H3[^>]*>", re.IGNORECASE)


def detect_encoding(content: str) -> str:
    """Guess the declared charset by substring search."""
    for name, declarations in CHARSET_DECLARATIONS:
        if any(declaration in content for declaration in declarations):
            return name
    return UNKNOWN_ENCODING


def estimate_stats(content: str) -> ParseStats:
    """Count anchor and folder entries without a full parse.

    The bookmark estimate includes anchors that extraction later skips, so
    comparing it with the parsed count shows how many entries were dropped.
    """
    return ParseStats(
        estimated_bookmarks=len(_ANCHOR_ENTRY_RE.findall(content)),
        estimated_folders=len(_FOLDER_ENTRY_RE.findall(content)),
        file_size=len(content.encode("utf-8", errors="surrogatepass")),
        encoding=detect_encoding(content),
    )
