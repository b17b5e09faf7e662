"""Activity aggregation: turns raw GitHub data into an ActivitySummary."""

import logging
from collections import Counter, defaultdict
from datetime import date, datetime, timedelta, timezone

from events import (
    ActivitySummary,
    Event,
    IssuesEvent,
    Profile,
    PullRequestEvent,
    PushEvent,
    RecentCommit,
    parse_events,
)
from fetcher import fetch_repo_languages, fetch_user_data

log = logging.getLogger(__name__)

ACTIVITY_WINDOW_DAYS = 30
MAX_RECENT_COMMITS = 10


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def count_languages(repos: list[dict], fetch_languages) -> dict[str, int]:
    """Count language appearances across repos.

    Each repo adds 1 for its primary language and 1 for every key of its
    language breakdown, so a primary language is counted twice. Byte
    counts are ignored.
    """
    languages = defaultdict(int)

    for repo in repos:
        primary = repo.get("language")
        if primary:
            languages[primary] += 1

        try:
            breakdown = fetch_languages(repo["languages_url"])
        except Exception as e:
            log.error(f"Error fetching languages for {repo.get('name', '?')}: {e}")
            continue

        for lang in breakdown:
            languages[lang] += 1

    return dict(languages)


def bucket_activity(events: list[Event], today: date) -> list[int]:
    """Count events per UTC day for the trailing window, oldest first."""
    per_day = defaultdict(int)

    for event in events:
        event_day = event.created_at.date()
        days_diff = (today - event_day).days
        if 0 <= days_diff < ACTIVITY_WINDOW_DAYS:
            per_day[event_day.isoformat()] += 1

    return [
        per_day.get((today - timedelta(days=ACTIVITY_WINDOW_DAYS - 1 - i)).isoformat(), 0)
        for i in range(ACTIVITY_WINDOW_DAYS)
    ]


def count_event_types(events: list[Event]) -> dict[str, int]:
    return dict(Counter(event.type for event in events))


def extract_recent_commits(events: list[Event], limit: int = MAX_RECENT_COMMITS) -> list[RecentCommit]:
    """Expand push events into commits, in event order, keeping the first `limit`."""
    commits = []
    for event in events:
        if not isinstance(event, PushEvent):
            continue
        for commit in event.commits:
            if len(commits) >= limit:
                return commits
            commits.append(RecentCommit(
                message=commit.message,
                date=event.created_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
                repo=event.repo_short_name,
            ))
    return commits


def build_summary(
    profile_data: dict,
    repos: list[dict],
    raw_events,
    handle: str,
    fetch_languages,
    today: date = None,
) -> ActivitySummary:
    """Aggregate already-fetched data into a summary."""
    events = parse_events(raw_events)
    # Newest first; sort is stable for equal timestamps
    events.sort(key=lambda e: e.created_at, reverse=True)

    languages = count_languages(repos, fetch_languages)
    today = today or utc_today()

    return ActivitySummary(
        profile=Profile.from_api(profile_data, handle),
        language_histogram=languages,
        activity_by_day=tuple(bucket_activity(events, today)),
        event_type_histogram=count_event_types(events),
        total_commits=sum(len(e.commits) for e in events if isinstance(e, PushEvent)),
        total_prs=sum(1 for e in events if isinstance(e, PullRequestEvent)),
        total_issues=sum(1 for e in events if isinstance(e, IssuesEvent)),
        recent_commits=tuple(extract_recent_commits(events)),
    )


def summarize(handle: str, token: str | None = None, config: dict = None, today: date = None) -> ActivitySummary:
    """Fetch and aggregate a user's GitHub activity.

    Raises UpstreamFetchError when the profile, repo or event fetch fails.
    Per-repo language failures are logged and skipped.
    """
    if not handle:
        raise ValueError("handle must be a non-empty string")

    profile_data, repos, raw_events = fetch_user_data(handle, token, config)
    log.info(f"Fetched {len(repos)} repos for {handle}")

    summary = build_summary(
        profile_data,
        repos,
        raw_events,
        handle,
        fetch_languages=lambda url: fetch_repo_languages(url, token, config),
        today=today,
    )

    log.info(f"Summary for {handle}: {summary.total_commits} commits, "
             f"{summary.total_prs} PRs, {summary.total_issues} issues")
    return summary
