"""Data models for the bookmark import pipeline."""

from __future__ import annotations

from typing import Any

from attrs import define
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .config import IMPORT_FORMAT


class ParsedBookmark(BaseModel):
    """Bookmark entry captured from the HTML export."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: str | None = None
    folder: str | None = None


class ParsedTag(BaseModel):
    """Tag aggregated across all bookmarks of one import, with its display colour."""

    model_config = ConfigDict(frozen=True)

    name: str
    color: str


class ImportMetadata(BaseModel):
    """Provenance of a parse run."""

    model_config = ConfigDict(frozen=True)

    source: str = IMPORT_FORMAT
    total_items: int
    parsed_at: str


class ImportData(BaseModel):
    """Aggregate root handed to the persistence layer."""

    model_config = ConfigDict(frozen=True)

    bookmarks: list[ParsedBookmark] = Field(default_factory=list)
    tags: list[ParsedTag] = Field(default_factory=list)
    metadata: ImportMetadata

    @field_validator("tags")
    @classmethod
    def _unique_tag_names(cls, value: list[ParsedTag]) -> list[ParsedTag]:
        names = [tag.name for tag in value]
        if len(names) != len(set(names)):
            msg = "Tag names must be unique within an import"
            raise ValueError(msg)
        return value

    @model_validator(mode="after")
    def _check_consistency(self) -> ImportData:
        if self.metadata.total_items != len(self.bookmarks):
            msg = (
                "metadata.total_items does not match bookmark count: "
                f"{self.metadata.total_items} vs {len(self.bookmarks)}"
            )
            raise ValueError(msg)
        known = {tag.name for tag in self.tags}
        missing = {tag for b in self.bookmarks for tag in b.tags} - known
        if missing:
            msg = f"Bookmarks reference tags absent from the tag set: {sorted(missing)}"
            raise ValueError(msg)
        return self

    def tag_map(self) -> dict[str, ParsedTag]:
        """Return the tag set keyed by name."""
        return {tag.name: tag for tag in self.tags}


class Diagnostic(BaseModel):
    """A single validation error or warning."""

    model_config = ConfigDict(frozen=True)

    field: str
    message: str
    value: Any = None


class ValidationResult(BaseModel):
    """Outcome of data-quality checks over an ImportData."""

    model_config = ConfigDict(frozen=True)

    valid: bool
    errors: list[Diagnostic] = Field(default_factory=list)
    warnings: list[Diagnostic] = Field(default_factory=list)

    @classmethod
    def from_diagnostics(
        cls, errors: list[Diagnostic], warnings: list[Diagnostic],
    ) -> ValidationResult:
        """Build a result whose validity is derived from the error list."""
        return cls(valid=not errors, errors=list(errors), warnings=list(warnings))


class ParseStats(BaseModel):
    """Advisory composition estimate computed without a full parse."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    estimated_bookmarks: int
    estimated_folders: int
    file_size: int
    encoding: str


@define(frozen=True)
class ParseOutcome:
    """Either parsed data or the reason the whole parse failed."""

    data: ImportData | None = None
    failure: str | None = None

    @property
    def ok(self) -> bool:
        """True when the parse produced data."""
        return self.failure is None

    @classmethod
    def success(cls, data: ImportData) -> ParseOutcome:
        """Wrap a successful parse."""
        return cls(data=data)

    @classmethod
    def failed(cls, reason: str) -> ParseOutcome:
        """Wrap a fatal parse failure."""
        return cls(failure=reason)
