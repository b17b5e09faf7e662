"""Heuristic commit message classification."""

# Checked in order; first match wins
COMMIT_TYPE_RULES = [
    ("feature", ("add", "feature", "implement")),
    ("fix", ("fix", "bug", "issue")),
    ("docs", ("doc", "readme")),
    ("refactor", ("refactor", "clean", "improve")),
    ("test", ("test",)),
]


def classify_commit(message: str) -> str:
    """Return feature, fix, docs, refactor, test or other."""
    lowered = (message or "").lower()
    for commit_type, keywords in COMMIT_TYPE_RULES:
        if any(keyword in lowered for keyword in keywords):
            return commit_type
    return "other"
