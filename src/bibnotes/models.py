from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


UNKNOWN_AUTHOR = "Unknown Author"
UNKNOWN_YEAR = "Unknown Year"
UNTITLED = "Untitled"


@dataclass(slots=True)
class ParsedEntry:
    key: str
    type: str
    fields: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class StructuredAuthor:
    first_name: str | None = None
    last_name: str | None = None
    literal: str | None = None


@dataclass(slots=True, frozen=True)
class StringAuthors:
    text: str


@dataclass(slots=True, frozen=True)
class StructuredAuthorList:
    authors: tuple[StructuredAuthor, ...]


@dataclass(slots=True, frozen=True)
class SingleStructuredAuthor:
    author: StructuredAuthor


RawAuthorValue = Union[StringAuthors, StructuredAuthorList, SingleStructuredAuthor]


@dataclass(slots=True, frozen=True)
class NormalizedAuthor:
    last_name: str
    first_name: str = ""

    @property
    def is_unknown(self) -> bool:
        return self.last_name == UNKNOWN_AUTHOR and not self.first_name

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}" if self.first_name else self.last_name


@dataclass(slots=True)
class AuthorTags:
    author_tags: list[str]
    file_name_author: str
    display: str


@dataclass(slots=True)
class KeywordTags:
    human_readable: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


@dataclass(slots=True)
class NoteMetadata:
    citekey: str
    title: str
    short_title: str
    publication: str
    year: str
    authors: list[NormalizedAuthor]
    author_tags: list[str]
    keyword_tags: list[str]
    keywords: list[str]
    authors_display: str
    file_name_author: str
    abstract: str
    journal_title: str
    publisher: str
    volume: str
    issue: str
    pages: str
    doi: str
    url: str
    entry_type: str
    entry_type_label: str
    created_date: str
    last_modified: str

    @property
    def all_tags(self) -> list[str]:
        return [f"#{tag}" for tag in self.author_tags] + list(self.keyword_tags)


class RunOutcome(str, Enum):
    DONE = "done"
    NO_FILES = "no_files"
    FAILED = "failed"


@dataclass(slots=True)
class FileResult:
    path: str
    ok: bool
    notes: list[str] = field(default_factory=list)
    reason: str | None = None
    unresolved: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RunSummary:
    outcome: RunOutcome
    message: str
    files: list[FileResult] = field(default_factory=list)

    @property
    def written(self) -> list[str]:
        return [path for result in self.files for path in result.notes]

    @property
    def failed(self) -> list[FileResult]:
        return [result for result in self.files if not result.ok]

    def as_dict(self) -> dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "message": self.message,
            "files": [
                {
                    "path": r.path,
                    "ok": r.ok,
                    "notes": r.notes,
                    "reason": r.reason,
                    "unresolved": r.unresolved,
                }
                for r in self.files
            ],
        }
