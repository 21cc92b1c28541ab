"""Extract bookmarks from a Netscape bookmark HTML export."""

from __future__ import annotations

import logging
import re
from bisect import bisect_right
from typing import TYPE_CHECKING

from .config import IMPORT_FORMAT, UNCATEGORISED_FOLDERS, UNTITLED_TITLE
from .models import ImportData, ImportMetadata, ParsedBookmark, ParsedTag
from .tags import TagColorAssigner, dedupe_tags
from .timestamps import to_iso, utc_now_iso

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable

LOGGER = logging.getLogger(__name__)

FOLDER_HEADER_RE = re.compile(r"<DT><H3[^>]*>([^<]+)</H3>", re.IGNORECASE)
BOOKMARK_RE = re.compile(
    r"<DT><A\s+([^>]+)>([^<]*)</A>(?:\s*<DD>([^<\n]*))?", re.IGNORECASE,
)
ATTRIBUTE_RE = re.compile(r"(\w+)=[\"']([^\"']*?)[\"']")

# Document-level entity fixes, applied in this order.
_DOCUMENT_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&quot;", '"'),
    ("&#39;", "'"),
)
# Value-level decoding of attribute values and anchor text; ``&amp;`` goes last.
_VALUE_ENTITIES: tuple[tuple[str, str], ...] = (
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&amp;", "&"),
)


def _replace_all(text: str, pairs: Iterable[tuple[str, str]]) -> str:
    for entity, literal in pairs:
        text = text.replace(entity, literal)
    return text


def preprocess(content: str) -> str:
    """Strip a BOM, normalise line endings and unescape the common entities."""
    content = content.removeprefix("\ufeff")
    content = content.replace("\r\n", "\n").replace("\r", "\n")
    return _replace_all(content, _DOCUMENT_ENTITIES)


def decode_html(text: str) -> str:
    """Decode the five standard entities in an attribute value or anchor text."""
    return _replace_all(text, _VALUE_ENTITIES)


def parse_attributes(attribute_text: str) -> dict[str, str]:
    """Parse ``KEY="value"`` pairs into a mapping with lower-cased keys."""
    return {
        match.group(1).lower(): match.group(2)
        for match in ATTRIBUTE_RE.finditer(attribute_text)
    }


class FolderTracker:
    """Resolve the nearest folder header preceding an offset.

    Folders are flat markers: the closest header before a bookmark wins,
    whatever the nesting of the surrounding ``<DL>`` lists.
    """

    def __init__(self, content: str) -> None:
        """Index every folder header in ``content`` once."""
        self._ends: list[int] = []
        self._names: list[str] = []
        for match in FOLDER_HEADER_RE.finditer(content):
            self._ends.append(match.end())
            self._names.append(match.group(1).strip())

    def __len__(self) -> int:
        return len(self._names)

    def folder_at(self, offset: int) -> str:
        """Return the last header ending at or before ``offset``, or ``""``."""
        index = bisect_right(self._ends, offset)
        return self._names[index - 1] if index else ""


def _tag_candidates(tags_attr: str | None, folder: str | None) -> list[str]:
    candidates: list[str] = []
    if tags_attr:
        candidates.extend(tag.strip() for tag in tags_attr.split(",") if tag.strip())
    if folder and folder not in UNCATEGORISED_FOLDERS:
        candidates.append(folder)
    return candidates


def _bookmark_from_match(match: re.Match[str], tracker: FolderTracker) -> ParsedBookmark | None:
    attribute_text, anchor_text, description = match.groups()
    attrs = parse_attributes(attribute_text)
    href = attrs.get("href")
    if not href:
        LOGGER.debug("Skipping anchor without href at offset %d", match.start())
        return None

    folder = tracker.folder_at(match.start()) or None
    description_text = decode_html(description).strip() if description else ""
    return ParsedBookmark(
        title=decode_html(anchor_text).strip() or UNTITLED_TITLE,
        url=decode_html(href),
        description=description_text or None,
        tags=dedupe_tags(_tag_candidates(attrs.get("tags"), folder)),
        created_at=to_iso(attrs.get("add_date")),
        folder=folder,
    )


def extract_bookmarks(content: str) -> list[ParsedBookmark]:
    """Scan preprocessed content for bookmark entries in document order."""
    tracker = FolderTracker(content)
    bookmarks: list[ParsedBookmark] = []
    for match in BOOKMARK_RE.finditer(content):
        bookmark = _bookmark_from_match(match, tracker)
        if bookmark is not None:
            bookmarks.append(bookmark)
    LOGGER.debug("Indexed %d folder headers", len(tracker))
    return bookmarks


def aggregate_tags(
    bookmarks: Iterable[ParsedBookmark], assigner: TagColorAssigner | None = None,
) -> list[ParsedTag]:
    """Collect the distinct tags of all bookmarks, first-seen order, with colours."""
    assigner = assigner or TagColorAssigner()
    names: dict[str, None] = {}
    for bookmark in bookmarks:
        names.update(dict.fromkeys(bookmark.tags))
    return [ParsedTag(name=name, color=assigner.color_for(name)) for name in names]


def parse_content(content: str, assigner: TagColorAssigner | None = None) -> ImportData:
    """Run preprocessing, extraction and tag aggregation over raw export text."""
    bookmarks = extract_bookmarks(preprocess(content))
    tags = aggregate_tags(bookmarks, assigner)
    LOGGER.info("Extracted %d bookmark entries with %d distinct tags", len(bookmarks), len(tags))
    return ImportData(
        bookmarks=bookmarks,
        tags=tags,
        metadata=ImportMetadata(
            source=IMPORT_FORMAT,
            total_items=len(bookmarks),
            parsed_at=utc_now_iso(),
        ),
    )
