"""Import parser for Netscape bookmark HTML exports."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .config import IMPORT_FORMAT
from .models import ParseOutcome
from .parser import parse_content
from .stats import estimate_stats
from .tags import TagColorAssigner
from .validator import validate_import

if TYPE_CHECKING:  # pragma: no cover
    from .models import ImportData, ParseStats, ValidationResult

LOGGER = logging.getLogger(__name__)


class ParseFailure(Exception):
    """Raised when a whole-document parse fails unexpectedly."""


class HtmlImportParser:
    """Parse and validate Netscape bookmark HTML.

    ``parse`` and ``validate`` are coroutines so every import format can
    share one interface; the HTML work itself never suspends.
    """

    format = IMPORT_FORMAT

    def __init__(self, color_assigner: TagColorAssigner | None = None) -> None:
        """Initialise the parser, optionally with a custom colour assigner."""
        self._color_assigner = color_assigner or TagColorAssigner()

    def parse_outcome(self, content: str) -> ParseOutcome:
        """Parse ``content``, reporting an unexpected failure as a value."""
        try:
            data = parse_content(content, self._color_assigner)
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("HTML parsing failed")
            return ParseOutcome.failed(f"HTML parsing failed: {exc}")
        return ParseOutcome.success(data)

    async def parse(self, content: str) -> ImportData:
        """Parse ``content`` into ImportData.

        Raises:
            ParseFailure: the whole document could not be processed.

        """
        try:
            return parse_content(content, self._color_assigner)
        except Exception as exc:
            LOGGER.exception("HTML parsing failed")
            msg = f"HTML parsing failed: {exc}"
            raise ParseFailure(msg) from exc

    async def validate(self, data: ImportData) -> ValidationResult:
        """Run data-quality checks over parsed data."""
        return validate_import(data)

    def estimate_stats(self, content: str) -> ParseStats:
        """Return an advisory pre-scan of ``content``."""
        return estimate_stats(content)


def create_html_parser() -> HtmlImportParser:
    """Create an HTML import parser with the default palette."""
    return HtmlImportParser()


async def parse_html_bookmarks(content: str) -> ImportData:
    """Parse a bookmark HTML document with a default parser."""
    return await create_html_parser().parse(content)
