#!/usr/bin/env python3
# markers.py
"""
README marker regions.
  legacy  : <!-- TODO-IST:START --> ... <!-- TODO-IST:END -->
  granular: <!-- TODO-IST-KARMA:START --> ... <!-- TODO-IST-KARMA:END -->  (one per stat)
Only the text between a START token and the first END token after it is ever touched,
and only when that name has exactly one START and one END.
"""

import re
from enum import Enum
from typing import List, Optional, Tuple

from errors import AmbiguousMarkers, MarkerNotFound
from stats import STAT_TAGS

LEGACY_NAME = "TODO-IST"
GRANULAR_PREFIX = "TODO-IST-"
GRANULAR_NAMES = [GRANULAR_PREFIX + t for t in STAT_TAGS]

# any TODO-IST-<something>:START, used to spot typos like TODO-IST-KARAM
_ANY_GRANULAR_START = re.compile(r"<!--\s*TODO-IST-([A-Za-z0-9_-]+):START\s*-->")

class DisplayMode(Enum):
    LEGACY = "legacy"
    GRANULAR = "granular"
    NONE = "none"

def token(name: str, side: str) -> str:
    return f"<!-- {name}:{side.upper()} -->"

def _token_re(name: str, side: str):
    # full-token match: TODO-IST:START must never hit TODO-IST-KARMA:START
    return re.compile(r"<!--\s*" + re.escape(name) + ":" + side.upper() + r"\s*-->")

def _search(name: str, side: str, text: str, pos: int = 0) -> Optional[re.Match]:
    return _token_re(name, side).search(text, pos)

def has_start(text: str, name: str) -> bool:
    return _search(name, "start", text) is not None

def detect_mode(text: str) -> DisplayMode:
    if any(has_start(text, n) for n in GRANULAR_NAMES):
        return DisplayMode.GRANULAR
    if has_start(text, LEGACY_NAME) and _search(LEGACY_NAME, "end", text) is not None:
        return DisplayMode.LEGACY
    return DisplayMode.NONE

def find_region(text: str, name: str) -> Tuple[int, int]:
    """(interior_start, interior_end) for `name`.

    Raises MarkerNotFound when a token is missing, AmbiguousMarkers when the
    pair is not unique.
    """
    m_start = _search(name, "start", text)
    if m_start is None:
        raise MarkerNotFound(name, "start")
    m_end = _search(name, "end", text, m_start.end())
    if m_end is None:
        raise MarkerNotFound(name, "end")
    starts = len(_token_re(name, "start").findall(text))
    ends = len(_token_re(name, "end").findall(text))
    if starts > 1 or ends > 1:
        raise AmbiguousMarkers(name, starts, ends)
    return m_start.end(), m_end.start()

def replace_region(text: str, name: str, body: str) -> str:
    a, b = find_region(text, name)
    return text[:a] + "\n" + body + "\n" + text[b:]

def unknown_tags(text: str) -> List[str]:
    known = set(STAT_TAGS)
    seen: List[str] = []
    for m in _ANY_GRANULAR_START.finditer(text):
        tag = m.group(1)
        if tag not in known and tag not in seen:
            seen.append(tag)
    return seen
