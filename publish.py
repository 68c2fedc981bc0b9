#!/usr/bin/env python3
# publish.py
"""git add / commit / push for the updated readme."""

import subprocess
from typing import List, Optional

from errors import PublishError
from runlog import log

def sh(args: List[str], cwd: Optional[str] = None) -> str:
    try:
        return subprocess.run(args, cwd=cwd, check=True, text=True,
                              capture_output=True).stdout.strip()
    except FileNotFoundError as e:
        raise PublishError(f"{args[0]} not found on PATH") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or e.stdout or "").strip()
        raise PublishError(f"`{' '.join(args)}` failed ({e.returncode}): {detail}") from e

def commit_readme(path: str, username: str, email: str, message: str,
                  push: bool = True, cwd: Optional[str] = None):
    sh(["git", "config", "--global", "user.email", email], cwd)
    sh(["git", "config", "--global", "user.name", username], cwd)
    sh(["git", "add", path], cwd)
    sh(["git", "commit", "-m", message], cwd)
    if push:
        sh(["git", "push"], cwd)
    log("[info] readme committed" + (" and pushed" if push else ""))
