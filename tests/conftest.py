import pytest

import runlog


@pytest.fixture(autouse=True)
def _run_log_in_tmp(tmp_path, monkeypatch):
    monkeypatch.setattr(runlog, "RUN_LOG", str(tmp_path / "run.log"))


LEGACY_README = """# Hi there

My week in Todoist:

<!-- TODO-IST:START -->
old stats
<!-- TODO-IST:END -->

Bye.
"""

GRANULAR_README = """# Stats

<!-- TODO-IST-KARMA:START -->
old karma
<!-- TODO-IST-KARMA:END -->

Today:
<!-- TODO-IST-DAILY:START -->
x
<!-- TODO-IST-DAILY:END -->

<!-- TODO-IST-CURRENT-STREAK:START -->?<!-- TODO-IST-CURRENT-STREAK:END -->

<!-- TODO-IST-WEEKLY:START -->
keep me
<!-- TODO-IST-WEEKLY:END -->
"""


@pytest.fixture
def legacy_readme():
    return LEGACY_README


@pytest.fixture
def granular_readme():
    return GRANULAR_README


@pytest.fixture
def example_response():
    return {
        "stats": {
            "karma": 12345,
            "completed_count": 6789,
            "days_items": [{"date": "2026-10-19", "total_completed": 3}],
            "goals": {
                "current_daily_streak": {"count": 0},
                "max_daily_streak": {"count": 42},
            },
        },
        "sync_token": "abc",
    }
