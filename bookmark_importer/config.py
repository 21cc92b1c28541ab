"""Global configuration constants for bookmark importer."""

from __future__ import annotations

# Format tag reported in ImportData.metadata.source and exposed by the parser.
IMPORT_FORMAT: str = "html"

# Title substituted when an anchor carries no text.
UNTITLED_TITLE: str = "Untitled"

# Folder names that mean "no real folder" and are never turned into tags.
UNCATEGORISED_FOLDERS: frozenset[str] = frozenset({"未分类", "Bookmarks"})

# Normalised tags are cut to this many characters.
MAX_TAG_LENGTH: int = 50

# Validation warning thresholds (warnings never block an import).
TITLE_WARNING_LENGTH: int = 200
TAG_COUNT_WARNING: int = 20

# Ordered tag colour palette. Order is part of the colour contract: reordering
# changes which colour every existing tag receives.
TAG_COLOR_PALETTE: tuple[str, ...] = (
    "#3b82f6",
    "#ef4444",
    "#10b981",
    "#f59e0b",
    "#8b5cf6",
    "#06b6d4",
    "#84cc16",
    "#f97316",
    "#ec4899",
    "#6366f1",
    "#14b8a6",
    "#eab308",
)

# Charset declarations recognised by the advisory stats pre-scan, checked in order.
CHARSET_DECLARATIONS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("UTF-8", ("charset=UTF-8", 'charset="UTF-8"')),
    ("GBK", ("charset=GBK", 'charset="GBK"')),
)
UNKNOWN_ENCODING: str = "Unknown"
