"""Tag normalisation, de-duplication and deterministic colour assignment."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .config import MAX_TAG_LENGTH, TAG_COLOR_PALETTE

if TYPE_CHECKING:  # pragma: no cover
    from collections.abc import Iterable, Sequence

# Keep ASCII word characters, CJK unified ideographs, whitespace and hyphens.
_DISALLOWED_RE = re.compile(r"[^0-9A-Za-z_\u4e00-\u9fff\s-]")
_WHITESPACE_RE = re.compile(r"\s+")

_HASH_MASK = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def normalize_tag(raw: str) -> str:
    """Return the canonical form of a tag; may be empty for fully-filtered input."""
    tag = raw.strip().lower()
    tag = _DISALLOWED_RE.sub("", tag)
    tag = _WHITESPACE_RE.sub("-", tag)
    return tag[:MAX_TAG_LENGTH]


def dedupe_tags(candidates: Iterable[str]) -> list[str]:
    """Normalise candidates and keep the first occurrence of each non-empty result."""
    seen: set[str] = set()
    tags: list[str] = []
    for candidate in candidates:
        tag = normalize_tag(candidate)
        if not tag or tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)
    return tags


def _utf16_units(text: str) -> Iterable[int]:
    data = text.encode("utf-16-le")
    for offset in range(0, len(data), 2):
        yield data[offset] | (data[offset + 1] << 8)


def name_hash(name: str) -> int:
    """Signed 32-bit ``hash * 31 + unit`` over the UTF-16 code units of ``name``."""
    value = 0
    for unit in _utf16_units(name):
        value = ((value << 5) - value + unit) & _HASH_MASK
    if value & _SIGN_BIT:
        value -= 1 << 32
    return value


class TagColorAssigner:
    """Map tag names onto a fixed palette via a stable hash."""

    def __init__(self, palette: Sequence[str] = TAG_COLOR_PALETTE) -> None:
        """Initialise the assigner with an ordered, non-empty palette."""
        if not palette:
            msg = "Tag colour palette must not be empty"
            raise ValueError(msg)
        self._palette = tuple(palette)

    @property
    def palette(self) -> tuple[str, ...]:
        """The palette colours are drawn from."""
        return self._palette

    def color_for(self, name: str) -> str:
        """Return the palette colour for ``name``."""
        return self._palette[abs(name_hash(name)) % len(self._palette)]


_DEFAULT_ASSIGNER = TagColorAssigner()


def tag_color(name: str) -> str:
    """Return the default-palette colour for ``name``."""
    return _DEFAULT_ASSIGNER.color_for(name)
