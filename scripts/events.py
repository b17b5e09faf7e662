"""Typed models for GitHub profile data, events and the activity summary."""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

log = logging.getLogger(__name__)

PUSH_EVENT = "PushEvent"
PULL_REQUEST_EVENT = "PullRequestEvent"
ISSUES_EVENT = "IssuesEvent"


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class Profile:
    display_name: str
    handle: str
    avatar_url: str | None
    follower_count: int
    following_count: int
    public_repo_count: int

    @classmethod
    def from_api(cls, data: dict, handle: str) -> "Profile":
        return cls(
            display_name=data.get("name") or handle,
            handle=data.get("login") or handle,
            avatar_url=data.get("avatar_url"),
            follower_count=data.get("followers", 0),
            following_count=data.get("following", 0),
            public_repo_count=data.get("public_repos", 0),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.display_name,
            "login": self.handle,
            "avatar_url": self.avatar_url,
            "followers": self.follower_count,
            "following": self.following_count,
            "public_repos": self.public_repo_count,
        }


@dataclass(frozen=True)
class Commit:
    message: str


@dataclass(frozen=True)
class Event:
    """Base event. Subclasses exist only for the types we inspect."""

    type: str
    created_at: datetime
    repo_name: str

    @property
    def repo_short_name(self) -> str:
        # "owner/name" -> "name"
        owner, sep, name = self.repo_name.partition("/")
        return name if sep else owner


@dataclass(frozen=True)
class PushEvent(Event):
    commits: tuple[Commit, ...] = ()


@dataclass(frozen=True)
class PullRequestEvent(Event):
    pass


@dataclass(frozen=True)
class IssuesEvent(Event):
    pass


@dataclass(frozen=True)
class OtherEvent(Event):
    pass


EVENT_TYPES = {
    PULL_REQUEST_EVENT: PullRequestEvent,
    ISSUES_EVENT: IssuesEvent,
}


def parse_event(raw: dict) -> Event:
    """Build the matching Event variant from a raw feed record."""
    event_type = raw.get("type", "")
    common = {
        "type": event_type,
        "created_at": parse_timestamp(raw["created_at"]),
        "repo_name": (raw.get("repo") or {}).get("name", ""),
    }

    if event_type == PUSH_EVENT:
        payload = raw.get("payload") or {}
        commits = tuple(
            Commit(message=c.get("message", ""))
            for c in payload.get("commits") or []
        )
        return PushEvent(commits=commits, **common)

    return EVENT_TYPES.get(event_type, OtherEvent)(**common)


def parse_events(raw_events) -> list[Event]:
    """Parse an events payload, treating a non-list payload as empty."""
    if not isinstance(raw_events, list):
        log.error(f"Events data is not a list: {raw_events!r}")
        return []
    return [parse_event(raw) for raw in raw_events]


@dataclass(frozen=True)
class RecentCommit:
    message: str
    date: str
    repo: str

    def to_dict(self) -> dict:
        return {"message": self.message, "date": self.date, "repo": self.repo}


@dataclass(frozen=True)
class ActivitySummary:
    profile: Profile
    language_histogram: dict[str, int]
    activity_by_day: tuple[int, ...]
    event_type_histogram: dict[str, int]
    total_commits: int
    total_prs: int
    total_issues: int
    recent_commits: tuple[RecentCommit, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """JSON body served to the presentation layer."""
        return {
            "user": self.profile.to_dict(),
            "languages": dict(self.language_histogram),
            "activityData": list(self.activity_by_day),
            "activityTypes": dict(self.event_type_histogram),
            "totalCommits": self.total_commits,
            "totalPRs": self.total_prs,
            "totalIssues": self.total_issues,
            "recentCommits": [c.to_dict() for c in self.recent_commits],
        }
