#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Todoist readme stats - main.py
- Fetch Todoist productivity stats (Sync API, bearer token)
- Fill the README marker blocks (combined TODO-IST block or per-stat TODO-IST-* blocks)
- Commit + push when the README actually changed (skipped in TEST_MODE / --no-commit)
- Exit 0 on updated/unchanged, 1 on any fatal failure
"""

import sys, argparse, traceback
from typing import List, Optional

import controls
from errors import PublishError, ReadmeStatsError
from publish import commit_readme
from runlog import log
from stats import FORMATTERS, StatsPayload
from todoist_api import fetch_stats
from update_readme import Outcome, UpdateResult, update_readme_file

EXIT_OK   = 0
EXIT_FAIL = 1

# =========================
# ---- Defaults -----------
# =========================
# controls.py (+ env) overrides these
README_PATH        = "./README.md"
PREMIUM            = False
TODOIST_API_KEY    = ""
TEST_MODE          = False
COMMITTER_USERNAME = "todoist-readme-bot"
COMMITTER_EMAIL    = ""
COMMIT_MESSAGE     = "Todoist updated."
PUSH               = True

CONFIG_KEYS = ("README_PATH", "PREMIUM", "TODOIST_API_KEY", "TEST_MODE",
               "COMMITTER_USERNAME", "COMMITTER_EMAIL", "COMMIT_MESSAGE", "PUSH")

try:
    controls.apply_overrides(globals())
except Exception as e:
    print(f"[warn] controls.py not applied: {e}")

def load_config(args=None, environ=None) -> dict:
    g = {k: globals()[k] for k in CONFIG_KEYS}
    # secrets/modes come from the environment of this call only
    g["TODOIST_API_KEY"], g["TEST_MODE"] = "", False
    controls.apply_overrides(g, environ)
    if args is not None:
        if args.readme:    g["README_PATH"] = args.readme
        if args.premium:   g["PREMIUM"] = True
        if args.no_push:   g["PUSH"] = False
    return g

# =========================
# ---- Reporting ----------
# =========================
def log_unavailable(payload: StatsPayload, premium: bool):
    for tag, fn in FORMATTERS:
        if fn(payload, premium) is None:
            why = "premium only" if tag == "WEEKLY" and not premium else "not in response"
            log(f"[info] {tag.lower()} unavailable ({why})")

def log_result(result: UpdateResult):
    s = result.summary
    for tag in s.unknown:
        log(f"[warn] unknown tag TODO-IST-{tag} (typo?) - known: "
            + ", ".join(t for t, _ in FORMATTERS))
    for tag in s.missing:
        log(f"[warn] TODO-IST-{tag}:START has no matching END tag, skipped")
    for tag in s.ambiguous:
        log(f"[warn] TODO-IST-{tag} tags appear more than once, skipped")
    if s.processed or s.skipped or s.missing or s.unknown or s.ambiguous:
        log(f"[info] {result.mode.value} mode: processed={len(s.processed)} "
            f"skipped={len(s.skipped)} missing={len(s.missing)} unknown={len(s.unknown)} "
            f"ambiguous={len(s.ambiguous)}")

# =========================
# ---- Run ----------------
# =========================
def run(argv: Optional[List[str]] = None, environ=None) -> int:
    ap = argparse.ArgumentParser(description="Write Todoist stats into a README")
    ap.add_argument("--readme", type=str, help="README path (default ./README.md)")
    ap.add_argument("--premium", action="store_true", help="Include weekly stats (premium accounts)")
    ap.add_argument("--dry-run", action="store_true", help="Render only; do not write or commit")
    ap.add_argument("--no-commit", action="store_true", help="Write the README but skip git")
    ap.add_argument("--no-push", action="store_true", help="Commit but do not push")
    args = ap.parse_args(argv)
    cfg = load_config(args, environ)

    if not cfg["TODOIST_API_KEY"]:
        log("[fatal] TODOIST_API_KEY is not set")
        return EXIT_FAIL

    try:
        payload = fetch_stats(cfg["TODOIST_API_KEY"])
    except ReadmeStatsError as e:
        log(f"[fatal] {e}")
        return EXIT_FAIL
    log_unavailable(payload, cfg["PREMIUM"])

    path = cfg["README_PATH"]
    try:
        result = update_readme_file(path, payload, cfg["PREMIUM"], dry_run=args.dry_run)
    except (OSError, UnicodeDecodeError) as e:
        log(f"[fatal] cannot read/write {path}: {e}")
        return EXIT_FAIL
    log_result(result)

    if result.outcome is Outcome.FAILED:
        log(f"[fatal] {result.reason}")
        return EXIT_FAIL
    if result.outcome is Outcome.UNCHANGED:
        log("[info] No change detected, skipping")
        return EXIT_OK

    if args.dry_run:
        log(f"[info] dry run: {path} would be updated")
        print(result.content)
        return EXIT_OK
    log(f"[info] Wrote {path}")

    if args.no_commit or cfg["TEST_MODE"]:
        log("[info] commit skipped")
        return EXIT_OK
    try:
        commit_readme(path, cfg["COMMITTER_USERNAME"], cfg["COMMITTER_EMAIL"],
                      cfg["COMMIT_MESSAGE"], push=cfg["PUSH"])
    except PublishError as e:
        log(f"[fatal] {e}")
        return EXIT_FAIL
    return EXIT_OK

def main():
    try:
        code = run()
    except Exception as e:
        log(f"[fatal] {e}")
        traceback.print_exc()
        code = EXIT_FAIL
    sys.exit(code)

if __name__ == "__main__":
    main()
