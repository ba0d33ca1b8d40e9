from __future__ import annotations

from datetime import date
from typing import Any

from bibnotes.authors import coerce_author_value, normalize_authors
from bibnotes.models import UNKNOWN_YEAR, UNTITLED, NoteMetadata, ParsedEntry
from bibnotes.tags import derive_keyword_tags, derive_tags
from bibnotes.utils import clean_ws, iso_date

ENTRY_TYPE_LABELS = {
    "article": "Journal Article",
    "book": "Book",
    "inbook": "Book Section",
    "incollection": "Book Section",
    "inproceedings": "Conference Paper",
    "report": "Report",
    "thesis": "Thesis",
    "phdthesis": "Thesis",
    "mastersthesis": "Thesis",
    "newspaper": "Newspaper Article",
    "online": "Webpage",
    "misc": "Miscellaneous",
    "patent": "Patent",
    "podcast": "Podcast",
    "presentation": "Presentation",
    "film": "Film",
    "software": "Software",
    "map": "Map",
}


def field_text(fields: dict[str, Any], *names: str) -> str:
    """First non-blank value among ``names``, braces removed, whitespace collapsed."""
    for name in names:
        value = fields.get(name)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(v) for v in value)
        text = clean_ws(str(value).replace("{", "").replace("}", ""))
        if text:
            return text
    return ""


def extract_year(fields: dict[str, Any]) -> str:
    raw_date = field_text(fields, "date")
    if raw_date:
        year = raw_date.split("-", 1)[0].strip()
        if year:
            return year
    return field_text(fields, "year") or UNKNOWN_YEAR


def entry_type_label(entry: ParsedEntry) -> str:
    subtype = field_text(entry.fields, "entrysubtype").lower()
    kind = subtype or (entry.type or "misc").lower()
    return ENTRY_TYPE_LABELS.get(kind, "Miscellaneous")


def extract_metadata(entry: ParsedEntry, *, today: date | None = None) -> NoteMetadata:
    fields = entry.fields or {}
    created = iso_date(today)

    authors = normalize_authors(coerce_author_value(fields.get("author")))
    author_info = derive_tags(authors)
    keyword_info = derive_keyword_tags(fields.get("keywords"))

    return NoteMetadata(
        citekey=(entry.key or "").strip() or "UnknownKey",
        title=field_text(fields, "title", "shorttitle") or UNTITLED,
        short_title=field_text(fields, "shorttitle"),
        publication=field_text(fields, "publication", "journaltitle", "journal"),
        year=extract_year(fields),
        authors=authors,
        author_tags=author_info.author_tags,
        keyword_tags=keyword_info.tags,
        keywords=keyword_info.human_readable,
        authors_display=author_info.display,
        file_name_author=author_info.file_name_author,
        abstract=field_text(fields, "abstract") or "No abstract provided.",
        journal_title=field_text(fields, "journaltitle", "journal") or "Unknown Journal",
        publisher=field_text(fields, "publisher") or "Unknown Publisher",
        volume=field_text(fields, "volume") or "N/A",
        issue=field_text(fields, "issue", "number") or "N/A",
        pages=field_text(fields, "pages") or "N/A",
        doi=field_text(fields, "doi") or "N/A",
        url=field_text(fields, "url") or "No link provided",
        entry_type=(entry.type or "").strip() or "Unknown Type",
        entry_type_label=entry_type_label(entry),
        created_date=created,
        last_modified=field_text(fields, "date-modified") or created,
    )
