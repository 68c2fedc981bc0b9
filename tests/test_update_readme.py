"""Tests for stat rendering and the update decision."""

from errors import AmbiguousMarkers, MarkerNotFound, NoRecognizedMarkers
from markers import DisplayMode
from stats import StatsPayload
from update_readme import (LEGACY_SEPARATOR, Outcome, render_granular,
                           render_legacy, update_document, update_readme_file)

import pytest


@pytest.fixture
def payload(example_response):
    return StatsPayload.from_response(example_response["stats"])


EXPECTED_LEGACY_LINES = [
    "🏆  **12,345** Karma Points",
    "🌸  Completed **3** tasks today",
    "✅  Completed **6,789** tasks so far",
    "🔥  Current streak: **0 days** - Start one today!",
    "⏳  Longest streak is **42** days",
]


class TestLegacy:

    def test_example_block(self, legacy_readme, payload):
        out, summary = render_legacy(legacy_readme, payload, premium=False)
        block = LEGACY_SEPARATOR.join(EXPECTED_LEGACY_LINES)
        assert f"<!-- TODO-IST:START -->\n{block}\n<!-- TODO-IST:END -->" in out
        assert "this week" not in out
        assert summary.processed == ["KARMA", "DAILY", "TOTAL", "CURRENT-STREAK", "LONGEST-STREAK"]
        assert summary.skipped == ["WEEKLY"]

    def test_missing_week_items_with_premium(self, legacy_readme, payload):
        out, _ = render_legacy(legacy_readme, payload, premium=True)
        assert LEGACY_SEPARATOR.join(EXPECTED_LEGACY_LINES) in out

    def test_weekly_slots_in_after_daily(self, legacy_readme):
        p = StatsPayload(karma=1, daily_completed=2, weekly_completed=9, completed_count=3)
        out, _ = render_legacy(legacy_readme, p, premium=True)
        lines = [l.strip() for l in out.splitlines()]
        i_daily = lines.index("🌸  Completed **2** tasks today")
        assert lines[i_daily + 1] == "🗓  Completed **9** tasks this week"
        assert lines[i_daily + 2] == "✅  Completed **3** tasks so far"

    def test_no_stats_leaves_document_alone(self, legacy_readme):
        out, summary = render_legacy(legacy_readme, StatsPayload())
        assert out == legacy_readme
        assert summary.processed == []

    def test_missing_end_marker_raises(self, payload):
        with pytest.raises(MarkerNotFound):
            render_legacy("<!-- TODO-IST:START -->\n", payload)


class TestGranular:

    def test_fills_present_regions_only(self, granular_readme, payload):
        out, summary = render_granular(granular_readme, payload)
        assert "<!-- TODO-IST-KARMA:START -->\n🏆  **12,345** Karma Points\n<!-- TODO-IST-KARMA:END -->" in out
        assert ("Today:\n<!-- TODO-IST-DAILY:START -->\n🌸  Completed **3** tasks today\n"
                "<!-- TODO-IST-DAILY:END -->\n") in out
        assert "Start one today!" in out
        assert "<!-- TODO-IST-WEEKLY:START -->\nkeep me\n<!-- TODO-IST-WEEKLY:END -->" in out
        assert "tasks so far" not in out
        assert summary.processed == ["KARMA", "DAILY", "CURRENT-STREAK"]
        assert summary.skipped == ["WEEKLY"]
        assert summary.missing == []

    def test_region_isolation(self, granular_readme):
        out, _ = render_granular(granular_readme, StatsPayload(karma=9))
        before, _, after = granular_readme.partition("old karma")
        assert out.startswith(before.rstrip("\n"))
        assert out.endswith(after.lstrip("\n"))
        assert "<!-- TODO-IST-DAILY:START -->\nx\n<!-- TODO-IST-DAILY:END -->" in out
        assert "<!-- TODO-IST-CURRENT-STREAK:START -->?<!-- TODO-IST-CURRENT-STREAK:END -->" in out

    def test_missing_end_is_recoverable(self, payload):
        text = ("<!-- TODO-IST-KARMA:START -->\nbroken\n"
                "<!-- TODO-IST-TOTAL:START -->\n<!-- TODO-IST-TOTAL:END -->\n")
        out, summary = render_granular(text, payload)
        assert summary.missing == ["KARMA"]
        assert summary.processed == ["TOTAL"]
        assert "broken" in out
        assert "**6,789**" in out

    def test_duplicate_pair_is_skipped_others_proceed(self, payload):
        text = ("<!-- TODO-IST-KARMA:START -->\none\n<!-- TODO-IST-KARMA:END -->\n"
                "<!-- TODO-IST-KARMA:START -->\ntwo\n<!-- TODO-IST-KARMA:END -->\n"
                "<!-- TODO-IST-TOTAL:START -->\n<!-- TODO-IST-TOTAL:END -->\n")
        out, summary = render_granular(text, payload)
        assert summary.ambiguous == ["KARMA"]
        assert summary.processed == ["TOTAL"]
        assert "\none\n" in out and "\ntwo\n" in out
        assert "Karma Points" not in out

    def test_unknown_tags_reported(self, payload):
        text = ("<!-- TODO-IST-KARMA:START --><!-- TODO-IST-KARMA:END -->\n"
                "<!-- TODO-IST-KARAM:START --><!-- TODO-IST-KARAM:END -->\n")
        out, summary = render_granular(text, payload)
        assert summary.unknown == ["KARAM"]
        assert "<!-- TODO-IST-KARAM:START --><!-- TODO-IST-KARAM:END -->" in out


class TestUpdateDocument:

    def test_duplicate_legacy_pair_fails(self, legacy_readme, payload):
        text = legacy_readme + "\n<!-- TODO-IST:START -->\nagain\n<!-- TODO-IST:END -->\n"
        result = update_document(text, payload)
        assert result.outcome is Outcome.FAILED
        assert isinstance(result.reason, AmbiguousMarkers)
        assert result.content == text

    def test_updated_then_unchanged(self, legacy_readme, payload):
        first = update_document(legacy_readme, payload)
        assert first.outcome is Outcome.UPDATED
        assert first.mode is DisplayMode.LEGACY
        second = update_document(first.content, payload)
        assert second.outcome is Outcome.UNCHANGED
        assert second.content == first.content

    def test_granular_idempotent(self, granular_readme, payload):
        first = update_document(granular_readme, payload, premium=True)
        second = update_document(first.content, payload, premium=True)
        assert second.outcome is Outcome.UNCHANGED

    def test_no_markers_fails(self, payload):
        result = update_document("# nothing here\n", payload)
        assert result.outcome is Outcome.FAILED
        assert isinstance(result.reason, NoRecognizedMarkers)
        assert "<!-- TODO-IST:START -->" in str(result.reason)
        assert "<!-- TODO-IST-KARMA:START -->" in str(result.reason)
        assert result.content == "# nothing here\n"

    def test_empty_payload_legacy_is_unchanged(self, legacy_readme):
        assert update_document(legacy_readme, StatsPayload()).outcome is Outcome.UNCHANGED

    def test_granular_all_skipped_is_unchanged(self, granular_readme):
        result = update_document(granular_readme, StatsPayload())
        assert result.outcome is Outcome.UNCHANGED
        assert result.summary.skipped == ["KARMA", "DAILY", "WEEKLY", "CURRENT-STREAK"]


class TestUpdateReadmeFile:

    def test_writes_only_when_changed(self, tmp_path, legacy_readme, payload):
        readme = tmp_path / "README.md"
        readme.write_text(legacy_readme, encoding="utf-8")

        result = update_readme_file(str(readme), payload)
        assert result.outcome is Outcome.UPDATED
        assert readme.read_text(encoding="utf-8") == result.content

        mtime = readme.stat().st_mtime_ns
        again = update_readme_file(str(readme), payload)
        assert again.outcome is Outcome.UNCHANGED
        assert readme.stat().st_mtime_ns == mtime

    def test_dry_run_does_not_write(self, tmp_path, legacy_readme, payload):
        readme = tmp_path / "README.md"
        readme.write_text(legacy_readme, encoding="utf-8")
        result = update_readme_file(str(readme), payload, dry_run=True)
        assert result.outcome is Outcome.UPDATED
        assert readme.read_text(encoding="utf-8") == legacy_readme

    def test_failed_does_not_write(self, tmp_path, payload):
        readme = tmp_path / "README.md"
        readme.write_text("plain\n", encoding="utf-8")
        assert update_readme_file(str(readme), payload).outcome is Outcome.FAILED
        assert readme.read_text(encoding="utf-8") == "plain\n"

    def test_crlf_preserved_outside_block(self, tmp_path, payload):
        readme = tmp_path / "README.md"
        readme.write_bytes(b"top\r\n<!-- TODO-IST:START -->\r\nx\r\n<!-- TODO-IST:END -->\r\nend\r\n")
        update_readme_file(str(readme), payload)
        data = readme.read_bytes()
        assert data.startswith(b"top\r\n<!-- TODO-IST:START -->\n")
        assert data.endswith(b"\n<!-- TODO-IST:END -->\r\nend\r\n")

    def test_missing_file(self, tmp_path, payload):
        with pytest.raises(FileNotFoundError):
            update_readme_file(str(tmp_path / "nope.md"), payload)
