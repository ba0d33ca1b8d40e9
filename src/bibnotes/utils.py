from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Iterable

_RE_WS = re.compile(r"\s+")


def dedupe_preserving_order(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def clean_ws(s: str) -> str:
    return _RE_WS.sub(" ", s).strip()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def iso_date(today: date | None = None) -> str:
    return (today or utc_now().date()).isoformat()


def date_stamp(now: datetime | None = None) -> str:
    """``YYYY-MM-DD HH:MM:SS`` in UTC, used when an entry has nothing to name a note after."""
    return (now or utc_now()).strftime("%Y-%m-%d %H:%M:%S")


def inline_array(items: Iterable[str]) -> str:
    values = [item.replace('"', '\\"') for item in items]
    if not values:
        return "[]"
    return '["' + '","'.join(values) + '"]'


def yaml_quote(value: str) -> str:
    """Single-quoted YAML scalar: no escape sequences, ``'`` doubled."""
    return "'" + clean_ws(value).replace("'", "''") + "'"
