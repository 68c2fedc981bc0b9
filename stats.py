#!/usr/bin/env python3
# stats.py
"""
Todoist stats -> README lines.
- StatsPayload: the six numbers we show, each one optional (None = absent, not 0)
- one formatter per stat, returns a display line or None
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

# =========================
# ---- Payload ------------
# =========================
@dataclass(frozen=True)
class StatsPayload:
    karma: Optional[int] = None
    completed_count: Optional[int] = None
    daily_completed: Optional[int] = None
    weekly_completed: Optional[int] = None
    current_streak_days: Optional[int] = None
    longest_streak_days: Optional[int] = None

    @classmethod
    def from_response(cls, stats: Dict[str, Any], user: Optional[Dict[str, Any]] = None) -> "StatsPayload":
        """Map the Sync API `stats` object (and optional `user`) onto our fields."""
        goals = stats.get("goals") or {}
        karma = _int_or_none(stats.get("karma"))
        if karma is None and user:
            karma = _int_or_none(user.get("karma"))
        return cls(
            karma=karma,
            completed_count=_int_or_none(stats.get("completed_count")),
            daily_completed=_first_total(stats.get("days_items")),
            weekly_completed=_first_total(stats.get("week_items")),
            current_streak_days=_int_or_none(_dig(goals, "current_daily_streak", "count")),
            longest_streak_days=_int_or_none(_dig(goals, "max_daily_streak", "count")),
        )

def _int_or_none(v) -> Optional[int]:
    # bool is an int subclass; a stray True must not render as "1"
    if isinstance(v, bool):
        return None
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if not isinstance(v, int):
        return None
    return v

def _dig(d, *keys):
    for k in keys:
        if not isinstance(d, dict):
            return None
        d = d.get(k)
    return d

def _first_total(items) -> Optional[int]:
    if not isinstance(items, list) or not items or not isinstance(items[0], dict):
        return None
    return _int_or_none(items[0].get("total_completed"))

# =========================
# ---- Formatters ---------
# =========================
def fmt_karma(p: StatsPayload) -> Optional[str]:
    if p.karma is None: return None
    return f"🏆  **{p.karma:,}** Karma Points"

def fmt_daily(p: StatsPayload) -> Optional[str]:
    if p.daily_completed is None: return None
    return f"🌸  Completed **{p.daily_completed}** tasks today"

def fmt_weekly(p: StatsPayload, premium: bool = False) -> Optional[str]:
    """Weekly counts only exist for premium accounts."""
    if not premium or p.weekly_completed is None: return None
    return f"🗓  Completed **{p.weekly_completed}** tasks this week"

def fmt_total(p: StatsPayload) -> Optional[str]:
    if p.completed_count is None: return None
    return f"✅  Completed **{p.completed_count:,}** tasks so far"

def fmt_current_streak(p: StatsPayload) -> Optional[str]:
    n = p.current_streak_days
    if n is None: return None
    if n == 0:
        return "🔥  Current streak: **0 days** - Start one today!"
    return f"🔥  Current streak: **{n} {'day' if n == 1 else 'days'}**"

def fmt_longest_streak(p: StatsPayload) -> Optional[str]:
    if p.longest_streak_days is None: return None
    return f"⏳  Longest streak is **{p.longest_streak_days}** days"

# Declaration order == legacy block order. Keys are the granular tag suffixes.
FORMATTERS = [
    ("KARMA",          lambda p, premium: fmt_karma(p)),
    ("DAILY",          lambda p, premium: fmt_daily(p)),
    ("WEEKLY",         fmt_weekly),
    ("TOTAL",          lambda p, premium: fmt_total(p)),
    ("CURRENT-STREAK", lambda p, premium: fmt_current_streak(p)),
    ("LONGEST-STREAK", lambda p, premium: fmt_longest_streak(p)),
]

STAT_TAGS = [tag for tag, _ in FORMATTERS]

def render_stat(tag: str, p: StatsPayload, premium: bool = False) -> Optional[str]:
    for name, fn in FORMATTERS:
        if name == tag:
            return fn(p, premium)
    raise KeyError(tag)

def format_all(p: StatsPayload, premium: bool = False) -> List[Tuple[str, Optional[str]]]:
    return [(tag, fn(p, premium)) for tag, fn in FORMATTERS]
