#!/usr/bin/env python3
# update_readme.py
"""
Render Todoist stats into the README marker blocks.

  legacy   -> all available lines joined into the single TODO-IST block
  granular -> each TODO-IST-<TAG> block filled on its own; unavailable stats leave
              the block as it was

Nothing here exits the process or touches git; callers get an UpdateResult back.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from errors import AmbiguousMarkers, MarkerNotFound, NoRecognizedMarkers, ReadmeStatsError
from markers import (DisplayMode, GRANULAR_PREFIX, LEGACY_NAME, detect_mode,
                     has_start, replace_region, unknown_tags)
from stats import STAT_TAGS, StatsPayload, format_all, render_stat

LEGACY_SEPARATOR = "           \n"

@dataclass
class RenderSummary:
    processed: List[str] = field(default_factory=list)
    skipped:   List[str] = field(default_factory=list)   # stat not in payload
    missing:   List[str] = field(default_factory=list)   # START without END
    unknown:   List[str] = field(default_factory=list)   # TODO-IST-<typo>
    ambiguous: List[str] = field(default_factory=list)   # START or END repeated

class Outcome(Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"

@dataclass
class UpdateResult:
    outcome: Outcome
    content: str
    mode: DisplayMode
    summary: RenderSummary = field(default_factory=RenderSummary)
    reason: Optional[ReadmeStatsError] = None

# =========================
# ---- Renderers ----------
# =========================
def render_legacy(text: str, payload: StatsPayload, premium: bool = False) -> Tuple[str, RenderSummary]:
    summary = RenderSummary()
    lines = []
    for tag, line in format_all(payload, premium):
        if line is None:
            summary.skipped.append(tag)
        else:
            summary.processed.append(tag)
            lines.append(line)
    if not lines:
        return text, summary
    # MarkerNotFound / AmbiguousMarkers propagate: a half-written combined block is worse than none
    return replace_region(text, LEGACY_NAME, LEGACY_SEPARATOR.join(lines)), summary

def render_granular(text: str, payload: StatsPayload, premium: bool = False) -> Tuple[str, RenderSummary]:
    summary = RenderSummary(unknown=unknown_tags(text))
    for tag in STAT_TAGS:
        name = GRANULAR_PREFIX + tag
        if not has_start(text, name):
            continue
        line = render_stat(tag, payload, premium)
        if line is None:
            summary.skipped.append(tag)
            continue
        try:
            text = replace_region(text, name, line)
        except MarkerNotFound:
            summary.missing.append(tag)
            continue
        except AmbiguousMarkers:
            summary.ambiguous.append(tag)
            continue
        summary.processed.append(tag)
    return text, summary

# =========================
# ---- Orchestration ------
# =========================
def update_document(text: str, payload: StatsPayload, premium: bool = False) -> UpdateResult:
    mode = detect_mode(text)
    try:
        if mode is DisplayMode.GRANULAR:
            new_text, summary = render_granular(text, payload, premium)
        elif mode is DisplayMode.LEGACY:
            new_text, summary = render_legacy(text, payload, premium)
        else:
            raise NoRecognizedMarkers()
    except ReadmeStatsError as e:
        return UpdateResult(Outcome.FAILED, text, mode, reason=e)

    outcome = Outcome.UNCHANGED if new_text == text else Outcome.UPDATED
    return UpdateResult(outcome, new_text, mode, summary)

def read(p):
    with open(p, "r", encoding="utf-8", newline="") as f:
        return f.read()

def update_readme_file(path: str, payload: StatsPayload, premium: bool = False,
                       dry_run: bool = False) -> UpdateResult:
    """Read `path` once, render, and write it back only if the text changed."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"readme not found: {path}")
    text = read(path)
    result = update_document(text, payload, premium)
    if result.outcome is Outcome.UPDATED and not dry_run:
        # newline="" keeps CRLF readmes byte-identical outside the blocks
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(result.content)
    return result
