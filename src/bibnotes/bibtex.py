from __future__ import annotations

import bibtexparser
from bibtexparser.bparser import BibTexParser

from bibnotes.exceptions import BibliographyParseError
from bibnotes.models import ParsedEntry

# keys bibtexparser adds to every entry dict
_META_KEYS = ("ID", "ENTRYTYPE")


def _make_parser() -> BibTexParser:
    return BibTexParser(
        common_strings=True,
        ignore_nonstandard_types=False,
        homogenize_fields=False,
    )


def parse_bibliography(text: str) -> list[ParsedEntry]:
    """Parse BibTeX/BibLaTeX source into ``ParsedEntry`` values, in file order."""
    if not text.strip():
        return []
    try:
        database = bibtexparser.loads(text, parser=_make_parser())
    except Exception as exc:  # bibtexparser surfaces pyparsing and its own errors
        raise BibliographyParseError(f"Failed to parse bibliography: {exc}") from exc

    out: list[ParsedEntry] = []
    for raw in database.entries:
        fields = {k.lower(): v for k, v in raw.items() if k not in _META_KEYS}
        out.append(
            ParsedEntry(
                key=str(raw.get("ID", "")).strip(),
                type=str(raw.get("ENTRYTYPE", "")).strip().lower(),
                fields=fields,
            )
        )
    return out
