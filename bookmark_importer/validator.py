"""Data-quality validation of parsed import data."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from .config import TAG_COUNT_WARNING, TITLE_WARNING_LENGTH
from .models import Diagnostic, ValidationResult

if TYPE_CHECKING:  # pragma: no cover
    from urllib.parse import SplitResult

    from .models import ImportData, ParsedBookmark

LOGGER = logging.getLogger(__name__)

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
# Schemes that cannot be parsed without an authority component.
_HOST_REQUIRED_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
_INVALID_HOST_CHARS = frozenset(" \t\n<>^|%\\")


def _split(candidate: str) -> SplitResult:
    parts = urlsplit(candidate)
    if parts.scheme.lower() in _HOST_REQUIRED_SCHEMES and not parts.netloc:
        # ``http:example.com`` and ``https:/example.com`` gain their missing slashes.
        rest = candidate[len(parts.scheme) + 1:].lstrip("/\\")
        parts = urlsplit(f"{parts.scheme}://{rest}")
    _ = parts.port
    return parts


def is_valid_url(url: str) -> bool:
    """Return True when ``url`` is a syntactically valid absolute URI."""
    candidate = url.strip()
    if not _SCHEME_RE.match(candidate):
        return False
    try:
        parts = _split(candidate)
    except ValueError:
        return False
    if parts.scheme.lower() in _HOST_REQUIRED_SCHEMES:
        host = parts.hostname or ""
        if not host or _INVALID_HOST_CHARS.intersection(host):
            return False
    return True


def utf16_length(text: str) -> int:
    """Length of ``text`` in UTF-16 code units, as browsers count it."""
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


def _bookmark_errors(index: int, bookmark: ParsedBookmark) -> list[Diagnostic]:
    prefix = f"bookmarks[{index}]"
    errors: list[Diagnostic] = []
    if not bookmark.title.strip():
        errors.append(
            Diagnostic(field=f"{prefix}.title", message="Title is required", value=bookmark.title),
        )
    if not bookmark.url.strip():
        errors.append(
            Diagnostic(field=f"{prefix}.url", message="URL is required", value=bookmark.url),
        )
    elif not is_valid_url(bookmark.url):
        errors.append(
            Diagnostic(field=f"{prefix}.url", message="Invalid URL format", value=bookmark.url),
        )
    return errors


def _bookmark_warnings(index: int, bookmark: ParsedBookmark) -> list[Diagnostic]:
    prefix = f"bookmarks[{index}]"
    warnings: list[Diagnostic] = []
    title_length = utf16_length(bookmark.title)
    if title_length > TITLE_WARNING_LENGTH:
        warnings.append(
            Diagnostic(
                field=f"{prefix}.title",
                message="Title is very long, may be truncated",
                value=title_length,
            ),
        )
    if len(bookmark.tags) > TAG_COUNT_WARNING:
        warnings.append(
            Diagnostic(
                field=f"{prefix}.tags",
                message="Too many tags, some may be ignored",
                value=len(bookmark.tags),
            ),
        )
    return warnings


def validate_import(data: ImportData) -> ValidationResult:
    """Check every bookmark; errors block the import, warnings never do."""
    errors: list[Diagnostic] = []
    warnings: list[Diagnostic] = []
    for index, bookmark in enumerate(data.bookmarks):
        errors.extend(_bookmark_errors(index, bookmark))
        warnings.extend(_bookmark_warnings(index, bookmark))
    LOGGER.info(
        "Validated %d bookmarks: %d errors, %d warnings",
        len(data.bookmarks),
        len(errors),
        len(warnings),
    )
    return ValidationResult.from_diagnostics(errors, warnings)
