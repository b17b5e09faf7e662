"""Markdown rendering from Jinja2 templates."""

from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from commit_types import classify_commit
from events import ActivitySummary

SPARK_CHARS = "▁▂▃▄▅▆▇█"


def language_percentages(languages: dict[str, int]) -> list[dict]:
    """Share of each language in the histogram, most frequent first."""
    total = sum(languages.values())
    if not total:
        return []
    entries = sorted(languages.items(), key=lambda kv: kv[1], reverse=True)
    return [
        {"name": name, "count": count, "percentage": round(count / total * 100)}
        for name, count in entries
    ]


def sparkline(values) -> str:
    peak = max(max(values, default=0), 1)
    return "".join(SPARK_CHARS[round(v / peak * (len(SPARK_CHARS) - 1))] for v in values)


def render_markdown(summary: ActivitySummary, template_path: Path) -> str:
    """Render an activity summary to markdown using a Jinja2 template."""
    template_dir = template_path.parent
    template_name = template_path.name

    env = Environment(loader=FileSystemLoader(template_dir))
    template = env.get_template(template_name)

    context = {
        **summary.to_dict(),
        "language_shares": language_percentages(summary.language_histogram),
        "activity_sparkline": sparkline(summary.activity_by_day),
        "commits": [
            {**c.to_dict(), "type": classify_commit(c.message)}
            for c in summary.recent_commits
        ],
        "generated_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
    }

    return template.render(**context)
