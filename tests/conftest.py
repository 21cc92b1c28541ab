"""Shared pytest fixtures for bookmark importer tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

SAMPLE_EXPORT = """\ufeff<!DOCTYPE NETSCAPE-Bookmark-file-1>
<!-- This is an automatically generated file.
     It will be read and overwritten.
     DO NOT EDIT! -->
<META HTTP-EQUIV="Content-Type" CONTENT="text/html; charset=UTF-8">
<TITLE>Bookmarks</TITLE>
<H1>Bookmarks</H1>
<DL><p>\r
    <DT><A HREF="https://top.example" ADD_DATE="1700000000">Top level</A>\r
    <DT><H3 ADD_DATE="1600000000">News</H3>
    <DL><p>
        <DT><A HREF="https://news.example/a" TAGS="news, tech">Story A</A>
        <DD>First story
        <DT><A NAME="anchor-only">No link here</A>
        <DT><A HREF="https://news.example/b" TAGS="news, tech" ADD_DATE="not-a-number">Story B</A>
    </DL><p>
    <DT><H3>Work</H3>
    <DL><p>
        <DT><A HREF="http://a.com"></A>
    </DL><p>
</DL><p>
"""


@pytest.fixture
def sample_export_content() -> str:
    """Synthetic export exercising folders, tags, descriptions and a skipped anchor."""
    return SAMPLE_EXPORT


@pytest.fixture
def sample_export_html(tmp_path: Path) -> Path:
    """Write the synthetic export to disk as UTF-8."""
    p = tmp_path / "sample.html"
    p.write_bytes(SAMPLE_EXPORT.encode("utf-8"))
    return p
