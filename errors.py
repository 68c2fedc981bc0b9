# errors.py
"""Failure types for a stats run. Anything here that escapes the core is fatal."""

class ReadmeStatsError(Exception):
    pass

class MarkerNotFound(ReadmeStatsError):
    def __init__(self, name: str, side: str):
        self.name = name
        self.side = side  # "start" | "end"
        super().__init__(f"Cannot find the {side} tag <!-- {name}:{side.upper()} --> in the readme")

class NoRecognizedMarkers(ReadmeStatsError):
    def __init__(self):
        super().__init__(
            "No stat markers found in the readme. Add either the combined block:\n"
            "<!-- TODO-IST:START -->\n<!-- TODO-IST:END -->\n"
            "or one block per stat, e.g.:\n"
            "<!-- TODO-IST-KARMA:START -->\n<!-- TODO-IST-KARMA:END -->\n"
            "(tags: KARMA, DAILY, WEEKLY, TOTAL, CURRENT-STREAK, LONGEST-STREAK)"
        )

class NoStatsInResponse(ReadmeStatsError):
    def __init__(self, keys):
        self.keys = sorted(keys)
        super().__init__("Stats not found in API response. Available keys: " + ", ".join(self.keys))

class TodoistApiError(ReadmeStatsError):
    def __init__(self, kind: str, message: str, status=None):
        self.kind = kind
        self.status = status
        super().__init__(message)

class PublishError(ReadmeStatsError):
    pass

class AmbiguousMarkers(ReadmeStatsError):
    def __init__(self, name: str, starts: int, ends: int):
        self.name = name
        self.starts = starts
        self.ends = ends
        super().__init__(
            f"Tag {name} appears more than once in the readme "
            f"({starts} START, {ends} END); keep exactly one <!-- {name}:START --> / <!-- {name}:END --> pair"
        )
