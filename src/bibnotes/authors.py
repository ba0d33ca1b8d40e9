from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from bibnotes.models import (
    UNKNOWN_AUTHOR,
    NormalizedAuthor,
    RawAuthorValue,
    SingleStructuredAuthor,
    StringAuthors,
    StructuredAuthor,
    StructuredAuthorList,
)

RE_AND_SEPARATOR = re.compile(r"\s+and\s+", re.IGNORECASE)
RE_BRACES = re.compile(r"[{}]")


def unknown_authors() -> list[NormalizedAuthor]:
    return [NormalizedAuthor(last_name=UNKNOWN_AUTHOR, first_name="")]


def coerce_author_value(raw: Any) -> RawAuthorValue | None:
    """Map whatever a bibliography parser handed us onto one author variant."""
    if raw is None:
        return None
    if isinstance(raw, (StringAuthors, StructuredAuthorList, SingleStructuredAuthor)):
        return raw
    if isinstance(raw, str):
        return StringAuthors(raw)
    if isinstance(raw, StructuredAuthor):
        return SingleStructuredAuthor(raw)
    if isinstance(raw, Mapping):
        return SingleStructuredAuthor(_structured_from_mapping(raw))
    if isinstance(raw, Sequence):
        items = list(raw)
        if items and all(isinstance(item, str) for item in items):
            return StringAuthors(" and ".join(items))
        return StructuredAuthorList(
            tuple(
                item if isinstance(item, StructuredAuthor) else _structured_from_mapping(item)
                for item in items
                if isinstance(item, (StructuredAuthor, Mapping))
            )
        )
    return StringAuthors(str(raw))


def normalize_authors(raw: RawAuthorValue | None) -> list[NormalizedAuthor]:
    match raw:
        case None:
            return unknown_authors()
        case StringAuthors(text=text):
            if text == UNKNOWN_AUTHOR:
                return unknown_authors()
            return _from_string(text) or unknown_authors()
        case StructuredAuthorList(authors=authors):
            return [_from_structured(a) for a in authors] or unknown_authors()
        case SingleStructuredAuthor(author=author):
            return [_from_structured(author)]
    raise TypeError(f"Unsupported author value: {raw!r}")


def _from_string(text: str) -> list[NormalizedAuthor]:
    cleaned = RE_BRACES.sub("", text).strip()
    out: list[NormalizedAuthor] = []
    for segment in RE_AND_SEPARATOR.split(cleaned):
        segment = segment.strip()
        if not segment:
            continue
        out.append(_parse_segment(segment))
    return out


def _parse_segment(segment: str) -> NormalizedAuthor:
    if "," in segment:
        last, rest = segment.split(",", 1)
        return NormalizedAuthor(last_name=last.strip(), first_name=rest.strip())
    parts = segment.split()
    if len(parts) == 1:
        # corporate / organisational name
        return NormalizedAuthor(last_name=segment, first_name="")
    return NormalizedAuthor(last_name=parts[-1], first_name=" ".join(parts[:-1]))


def _from_structured(author: StructuredAuthor) -> NormalizedAuthor:
    if author.literal:
        return NormalizedAuthor(last_name=author.literal.strip(), first_name="")
    last = (author.last_name or "").strip() or "Unknown"
    first = (author.first_name or "").strip()
    return NormalizedAuthor(last_name=last, first_name=first)


def _structured_from_mapping(data: Mapping[str, Any]) -> StructuredAuthor:
    def _get(*names: str) -> str | None:
        for name in names:
            value = data.get(name)
            if value:
                return str(value)
        return None

    return StructuredAuthor(
        first_name=_get("firstName", "first_name", "given"),
        last_name=_get("lastName", "last_name", "family"),
        literal=_get("literal", "name"),
    )
