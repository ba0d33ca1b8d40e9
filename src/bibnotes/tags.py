from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from bibnotes.models import (
    UNKNOWN_AUTHOR,
    UNKNOWN_YEAR,
    UNTITLED,
    AuthorTags,
    KeywordTags,
    NormalizedAuthor,
)
from bibnotes.sanitize import sanitize
from bibnotes.utils import dedupe_preserving_order

if TYPE_CHECKING:
    from bibnotes.config import ImportConfig
    from bibnotes.models import NoteMetadata

NOTE_PREFIX = "LNL"
UNKNOWN_FILE_AUTHOR = "UnknownAuthor"

_RE_WS = re.compile(r"\s+")


def author_tag(author: NormalizedAuthor) -> str:
    first_initial = author.first_name[:1]
    return sanitize(f"{author.last_name}{first_initial}", for_tag_use=True)


def derive_tags(authors: list[NormalizedAuthor]) -> AuthorTags:
    known = [a for a in authors if not a.is_unknown]
    tags = dedupe_preserving_order(t for t in (author_tag(a) for a in known) if t)

    if not authors or authors[0].is_unknown:
        file_name_author = UNKNOWN_FILE_AUTHOR
    elif len(authors) > 1:
        file_name_author = f"{authors[0].last_name} et al"
    else:
        file_name_author = authors[0].last_name

    display = "; ".join(a.display_name for a in known) or UNKNOWN_AUTHOR
    return AuthorTags(author_tags=tags, file_name_author=file_name_author, display=display)


def derive_keyword_tags(raw: str | Sequence[object] | None) -> KeywordTags:
    if raw is None:
        return KeywordTags()
    if isinstance(raw, str):
        cleaned = raw.replace("{", "").replace("}", "").strip()
        human = [k.strip() for k in cleaned.split(",")] if cleaned else []
    else:
        human = [str(k).strip() for k in raw]
    human = [k for k in human if k]

    tags: list[str] = []
    for keyword in human:
        tag = sanitize(_RE_WS.sub("_", keyword), for_tag_use=True)
        if tag:
            tags.append(f"#{tag}")
    return KeywordTags(human_readable=human, tags=tags)


def title_fragment(metadata: NoteMetadata, word_count: int) -> str:
    if metadata.short_title:
        source = metadata.short_title
    elif metadata.title and metadata.title != UNTITLED:
        source = " ".join(metadata.title.split()[:word_count])
    else:
        source = metadata.publication
    return sanitize(source, preserve_spaces=True)


def build_file_name(metadata: NoteMetadata, date_stamp_fallback: str, config: ImportConfig) -> str:
    author = metadata.file_name_author
    if author in (UNKNOWN_FILE_AUTHOR, UNKNOWN_AUTHOR):
        author = ""
    year = metadata.year if metadata.year != UNKNOWN_YEAR else ""

    components = [
        sanitize(author),
        sanitize(year),
        title_fragment(metadata, config.title_words),
    ]
    components = [c for c in components if c]
    if not components:
        components = [sanitize(date_stamp_fallback)]
    return _join_name(config.file_prefix, components)


def combined_file_name(date_stamp: str, config: ImportConfig) -> str:
    return _join_name(config.file_prefix, ["Combined Entries", sanitize(date_stamp)])


def _join_name(prefix: str, components: list[str]) -> str:
    parts = [sanitize(prefix), NOTE_PREFIX, *components]
    return " ".join(p for p in parts if p) + ".md"


def disambiguate(
    path: str,
    taken: set[str] | None = None,
    exists: Callable[[str], bool] | None = None,
) -> str:
    """Append `` 1``, `` 2``... before ``.md`` until the path is free."""
    taken = taken or set()

    def _busy(candidate: str) -> bool:
        return candidate in taken or (exists is not None and exists(candidate))

    if not _busy(path):
        return path
    stem = path[: -len(".md")] if path.endswith(".md") else path
    counter = 1
    while True:
        candidate = f"{stem} {counter}.md"
        if not _busy(candidate):
            return candidate
        counter += 1
