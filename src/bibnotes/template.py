from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from bibnotes.models import NoteMetadata
from bibnotes.utils import inline_array, yaml_quote

TEMPLATE_FILENAME = "bibtex-template.md"

RE_PLACEHOLDER = re.compile(r"\{\{(.*?)\}\}")

_YAML_SCALARS = (
    "citekey",
    "createdDate",
    "lastModified",
    "title",
    "year",
    "abstract",
    "journaltitle",
    "journalTitle",
    "type",
    "entryType",
    "typeLabel",
    "publisher",
    "volume",
    "issue",
    "pages",
    "doi",
    "url",
    "zoteroLink",
    "authors",
    "keywords",
)

DEFAULT_TEMPLATE = """---
citekey: {{citekeyYaml}}
type: {{typeLabelYaml}}
authors: {{authorsYaml}}
year: {{yearYaml}}
title: {{titleYaml}}
journal: {{journaltitleYaml}}
publisher: {{publisherYaml}}
volume: {{volumeYaml}}
issue: {{issueYaml}}
pages: {{pagesYaml}}
doi: {{doiYaml}}
url: {{urlYaml}}
keywords: {{keywordsYaml}}
tags: {{tags}}
created: {{createdDate}}
modified: {{lastModifiedYaml}}
---

# {{title}}

**Authors**: {{authors}}
**Year**: {{year}}
**Keywords**: {{formattedKeywords}}

## Abstract

{{abstract}}

## Notes

"""


@dataclass(slots=True)
class PopulatedTemplate:
    text: str
    unresolved: list[str] = field(default_factory=list)


def populate(template: str, replacements: Mapping[str, str]) -> PopulatedTemplate:
    unresolved: list[str] = []

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        if name in replacements:
            return replacements[name]
        unresolved.append(name)
        return match.group(0)

    text = RE_PLACEHOLDER.sub(_sub, template)
    return PopulatedTemplate(text=text, unresolved=unresolved)


def build_replacements(meta: NoteMetadata) -> dict[str, str]:
    keyword_text = ", ".join(meta.keywords) if meta.keywords else "None"
    replacements = {
        "citekey": meta.citekey,
        "createdDate": meta.created_date,
        "lastModified": meta.last_modified,
        "title": meta.title,
        "year": meta.year,
        "abstract": meta.abstract,
        "journaltitle": meta.journal_title,
        "journalTitle": meta.journal_title,
        "type": meta.entry_type,
        "entryType": meta.entry_type,
        "typeLabel": meta.entry_type_label,
        "publisher": meta.publisher,
        "volume": meta.volume,
        "issue": meta.issue,
        "pages": meta.pages,
        "doi": meta.doi,
        "url": meta.url,
        "zoteroLink": meta.url,
        "conditionalFields": "",
        "authors": meta.authors_display,
        "authorTags": inline_array(f"#{t}" for t in meta.author_tags),
        "keywords": keyword_text,
        "keywordTags": inline_array(meta.keyword_tags),
        "formattedKeywords": " ".join(meta.keyword_tags),
        "tags": inline_array(meta.all_tags),
    }
    # front matter variants: {{titleYaml}} etc. carry a quoted YAML scalar
    for name in _YAML_SCALARS:
        replacements[f"{name}Yaml"] = yaml_quote(replacements[name])
    return replacements
