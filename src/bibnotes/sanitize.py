from __future__ import annotations

import re

UNSAFE_CHARS = '/\\:*?"<>|'

_RE_UNSAFE = re.compile(r'[/\\:*?"<>|]')
_RE_PARENS = re.compile(r"[()]")
_RE_WS = re.compile(r"\s+")
_RE_TAG_SEPARATORS = re.compile(r"[\s\-]+")
_RE_UNDERSCORES = re.compile(r"_+")


def sanitize(value: str, *, preserve_spaces: bool = False, for_tag_use: bool = False) -> str:
    """Strip characters that are unsafe in file names or tag identifiers.

    Tag mode turns whitespace and hyphens into single underscores and drops
    trailing underscores. Text mode collapses whitespace to single spaces
    unless ``preserve_spaces`` is set.
    """
    if not value:
        return ""
    out = _RE_UNSAFE.sub("", value).replace(".", "_")
    if for_tag_use:
        out = _RE_PARENS.sub("_", out).strip()
        out = _RE_TAG_SEPARATORS.sub("_", out)
        out = _RE_UNDERSCORES.sub("_", out)
        return out.rstrip("_")
    out = _RE_PARENS.sub("", out).strip()
    if not preserve_spaces:
        out = _RE_WS.sub(" ", out)
    return out
