"""Tests for bookmark extraction from HTML exports."""

from __future__ import annotations

from bookmark_importer import parser

EXPECTED_URLS = [
    "https://top.example",
    "https://news.example/a",
    "https://news.example/b",
    "http://a.com",
]


def _parse(content: str):
    return parser.parse_content(content).bookmarks


def test_parse_sample_export(sample_export_content: str) -> None:
    """Anchors with an href come back in document order; the rest are skipped."""
    bookmarks = _parse(sample_export_content)
    urls = [b.url for b in bookmarks]
    if urls != EXPECTED_URLS:
        msg = f"Unexpected URLs: {urls}"
        raise AssertionError(msg)

    top, story_a, story_b, untitled = bookmarks
    if top.folder is not None or top.tags:
        raise AssertionError("Bookmark before any folder header should have no folder or tags")
    if top.created_at != "2023-11-14T22:13:20.000Z":
        msg = f"Unexpected created_at: {top.created_at}"
        raise AssertionError(msg)
    if story_a.description != "First story":
        msg = f"Description not captured: {story_a.description!r}"
        raise AssertionError(msg)
    if story_a.tags != ["news", "tech"] or story_a.folder != "News":
        msg = f"Unexpected tags/folder: {story_a.tags} / {story_a.folder}"
        raise AssertionError(msg)
    if story_b.created_at is not None:
        raise AssertionError("Malformed ADD_DATE should be dropped")
    if story_b.description is not None:
        raise AssertionError("Bookmark without <DD> should have no description")
    if untitled.title != "Untitled" or untitled.folder != "Work" or untitled.tags != ["work"]:
        msg = f"Unexpected untitled bookmark: {untitled}"
        raise AssertionError(msg)


def test_missing_and_empty_href_are_skipped() -> None:
    content = (
        "<DL><p>"
        '<DT><A HREF="https://one.example">One</A>'
        '<DT><A NAME="x">Nothing</A>'
        '<DT><A HREF="">Empty</A>'
        '<DT><A HREF="https://two.example">Two</A>'
        "</DL><p>"
    )
    bookmarks = _parse(content)
    if [b.title for b in bookmarks] != ["One", "Two"]:
        msg = f"Expected only bookmarks with an href, got {bookmarks}"
        raise AssertionError(msg)


def test_folder_is_nearest_preceding_header() -> None:
    content = """<DL><p>
<DT><A HREF="https://before.example">Before</A>
<DT><H3>Outer</H3>
<DL><p>
    <DT><A HREF="https://outer.example">Outer link</A>
    <DT><H3>Inner</H3>
    <DL><p>
        <DT><A HREF="https://inner.example">Inner link</A>
    </DL><p>
    <DT><A HREF="https://after-inner.example">After inner</A>
</DL><p>
</DL><p>
"""
    folders = [b.folder for b in _parse(content)]
    # Flat resolution: closing the inner list does not restore the outer folder.
    if folders != [None, "Outer", "Inner", "Inner"]:
        msg = f"Unexpected folders: {folders}"
        raise AssertionError(msg)


def test_uncategorised_folders_are_not_tags() -> None:
    content = (
        "<DT><H3>Bookmarks</H3>"
        '<DT><A HREF="https://a.example" TAGS="Keep Me">A</A>'
        "<DT><H3>未分类</H3>"
        '<DT><A HREF="https://b.example">B</A>'
    )
    first, second = _parse(content)
    if first.folder != "Bookmarks" or first.tags != ["keep-me"]:
        msg = f"Unexpected first bookmark: {first}"
        raise AssertionError(msg)
    if second.folder != "未分类" or second.tags:
        msg = f"Unexpected second bookmark: {second}"
        raise AssertionError(msg)


def test_entities_and_case_insensitive_markup() -> None:
    content = (
        "<dt><h3>R&amp;D</h3>"
        "<dt><a href='https://x.example/?a=1&amp;b=2' add_date='0'>"
        "Tom &amp; Jerry</a>"
    )
    (bookmark,) = _parse(content)
    if bookmark.url != "https://x.example/?a=1&b=2":
        msg = f"URL not decoded: {bookmark.url}"
        raise AssertionError(msg)
    if bookmark.title != "Tom & Jerry":
        msg = f"Title not decoded: {bookmark.title}"
        raise AssertionError(msg)
    if bookmark.folder != "R&D" or bookmark.tags != ["rd"]:
        msg = f"Unexpected folder/tags: {bookmark.folder} / {bookmark.tags}"
        raise AssertionError(msg)
    if bookmark.created_at != "1970-01-01T00:00:00.000Z":
        msg = f"Unexpected created_at: {bookmark.created_at}"
        raise AssertionError(msg)


def test_double_escaped_markup_in_anchor_text_drops_entry() -> None:
    content = (
        '<DT><A HREF="https://kept.example">Kept</A>'
        '<DT><A HREF="https://dropped.example">I &amp;lt;3 it</A>'
    )
    # Document-level unescaping leaves a literal "<" inside the anchor text.
    urls = [b.url for b in _parse(content)]
    if urls != ["https://kept.example"]:
        msg = f"Expected the double-escaped entry to be dropped, got {urls}"
        raise AssertionError(msg)


def test_tags_attribute_dedupes_after_normalisation() -> None:
    content = '<DT><H3>Tech</H3><DT><A HREF="https://t.example" TAGS=" Tech ,tech,, !!, Py Thon">T</A>'
    (bookmark,) = _parse(content)
    if bookmark.tags != ["tech", "py-thon"]:
        msg = f"Unexpected tags: {bookmark.tags}"
        raise AssertionError(msg)


def test_preprocess_normalises_bom_newlines_and_entities() -> None:
    raw = "\ufeffa\r\nb\rc &amp; &lt;d&gt; &quot;e&quot; &#39;f&#39;"
    if parser.preprocess(raw) != "a\nb\nc & <d> \"e\" 'f'":
        raise AssertionError("Preprocessing did not normalise the document")


def test_parse_attributes_lowercases_keys() -> None:
    attrs = parser.parse_attributes('HREF="https://a.example" Add_Date=\'12\' ICON="data:x"')
    if attrs != {"href": "https://a.example", "add_date": "12", "icon": "data:x"}:
        msg = f"Unexpected attributes: {attrs}"
        raise AssertionError(msg)


def test_folder_tracker_offsets() -> None:
    content = "<DT><H3>One</H3>....<DT><H3>Two</H3>...."
    tracker = parser.FolderTracker(content)
    first_end = content.index("....")
    if tracker.folder_at(0) != "":
        raise AssertionError("No folder should precede offset 0")
    if tracker.folder_at(first_end) != "One":
        raise AssertionError("Header ending at the offset should apply")
    if tracker.folder_at(len(content)) != "Two":
        raise AssertionError("Last header should apply at the end of the document")
    if len(tracker) != 2:  # noqa: PLR2004
        raise AssertionError("Expected two indexed headers")


def test_empty_document_yields_empty_import() -> None:
    data = parser.parse_content("")
    if data.bookmarks or data.tags or data.metadata.total_items != 0:
        msg = f"Expected empty import, got {data}"
        raise AssertionError(msg)
