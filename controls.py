# controls.py
"""
Todoist readme stats controls: safe config defaults for the job.
Environment variables (and GitHub Actions INPUT_* inputs) win over SETTINGS;
CLI flags win over both.
"""

import os

SETTINGS = {
    # ---- Readme ----
    "README_PATH": "./README.md",

    # ---- Todoist ----
    "PREMIUM": False,          # weekly counts only exist on premium accounts

    # ---- Commit ----
    "COMMITTER_USERNAME": "todoist-readme-bot",
    "COMMITTER_EMAIL": "todoist-readme-bot@users.noreply.github.com",
    "COMMIT_MESSAGE": "Todoist updated.",
    "PUSH": True,
}

# env var -> setting; first hit wins
ENV_KEYS = {
    "TODOIST_API_KEY":    ["TODOIST_API_KEY", "INPUT_TODOIST_API_KEY"],
    "PREMIUM":            ["PREMIUM", "INPUT_PREMIUM"],
    "README_PATH":        ["README_PATH", "INPUT_README_PATH"],
    "COMMITTER_USERNAME": ["COMMITTER_USERNAME", "INPUT_COMMITTER_USERNAME"],
    "COMMITTER_EMAIL":    ["COMMITTER_EMAIL", "INPUT_COMMITTER_EMAIL"],
    "COMMIT_MESSAGE":     ["COMMIT_MESSAGE", "INPUT_COMMIT_MESSAGE"],
    "TEST_MODE":          ["TEST_MODE"],
}

BOOL_KEYS = {"PREMIUM", "PUSH"}
# set at all (any non-empty value, even "false") == on
FLAG_KEYS = {"TEST_MODE"}

def truthy(v) -> bool:
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in ("1", "true", "yes", "on")

def env_overrides(environ=None):
    env = os.environ if environ is None else environ
    out = {}
    for key, names in ENV_KEYS.items():
        for n in names:
            v = env.get(n)
            if v is not None and v.strip() != "":
                if key in FLAG_KEYS:
                    out[key] = True
                else:
                    out[key] = truthy(v) if key in BOOL_KEYS else v.strip()
                break
    return out

def apply_overrides(g, environ=None):
    """Apply SETTINGS, then env, into main.py globals safely."""
    S = {**SETTINGS, **env_overrides(environ)}
    g["README_PATH"]        = S.get("README_PATH",        g.get("README_PATH", "./README.md"))
    g["PREMIUM"]            = truthy(S.get("PREMIUM",     g.get("PREMIUM", False)))
    g["TODOIST_API_KEY"]    = S.get("TODOIST_API_KEY",    g.get("TODOIST_API_KEY", ""))
    g["TEST_MODE"]          = truthy(S.get("TEST_MODE",   g.get("TEST_MODE", False)))

    # commit
    g["COMMITTER_USERNAME"] = S.get("COMMITTER_USERNAME", g.get("COMMITTER_USERNAME", "todoist-readme-bot"))
    g["COMMITTER_EMAIL"]    = S.get("COMMITTER_EMAIL",    g.get("COMMITTER_EMAIL", ""))
    g["COMMIT_MESSAGE"]     = S.get("COMMIT_MESSAGE",     g.get("COMMIT_MESSAGE", "Todoist updated."))
    g["PUSH"]               = truthy(S.get("PUSH",        g.get("PUSH", True)))
