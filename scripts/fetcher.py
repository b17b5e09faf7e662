"""GitHub API interactions for fetching a user's profile, repos and activity."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed

import requests

log = logging.getLogger(__name__)

GITHUB_API = "https://api.github.com"

# Defaults (can be overridden via config)
DEFAULT_TIMEOUT = 30
EVENTS_PER_PAGE = 100


class UpstreamFetchError(Exception):
    """A required GitHub request failed."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        self.message = message
        self.url = url
        self.status_code = status_code
        super().__init__(message)


def get_token() -> str | None:
    return os.environ.get("GITHUB_TOKEN") or None


def get_headers(token: str | None = None) -> dict:
    headers = {
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": "2022-11-28",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def check_rate_limit(response) -> int | None:
    """Log when the rate limit is exhausted. Returns remaining calls if known."""
    remaining = response.headers.get("X-RateLimit-Remaining")
    if remaining is None:
        return None

    remaining = int(remaining)
    if remaining == 0:
        reset_time = response.headers.get("X-RateLimit-Reset")
        log.warning(f"GitHub rate limit exhausted (resets at {reset_time}), set GITHUB_TOKEN to raise it")
    return remaining


def get_json(url: str, token: str | None = None, timeout=DEFAULT_TIMEOUT, extra_headers=None, **kwargs):
    """GET a GitHub URL and decode the JSON body. No retries."""
    headers = get_headers(token)
    if extra_headers:
        headers.update(extra_headers)

    try:
        resp = requests.get(url, headers=headers, timeout=timeout, **kwargs)
    except requests.exceptions.RequestException as e:
        raise UpstreamFetchError(f"Request error for {url}: {e}", url=url) from e

    check_rate_limit(resp)
    if not resp.ok:
        raise UpstreamFetchError(
            f"GitHub returned {resp.status_code} for {url}",
            url=url,
            status_code=resp.status_code,
        )

    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamFetchError(f"Invalid JSON from {url}", url=url, status_code=resp.status_code) from e


def _api_timeout(config: dict = None):
    cfg = config or {}
    return cfg.get("api", {}).get("request_timeout", DEFAULT_TIMEOUT)


def fetch_profile(handle: str, token: str | None = None, config: dict = None) -> dict:
    data = get_json(f"{GITHUB_API}/users/{handle}", token, timeout=_api_timeout(config))
    if not isinstance(data, dict):
        raise UpstreamFetchError(f"Unexpected profile payload for {handle}")
    return data


def fetch_repos(handle: str, token: str | None = None, config: dict = None) -> list[dict]:
    """Fetch the first page of the user's repositories."""
    data = get_json(f"{GITHUB_API}/users/{handle}/repos", token, timeout=_api_timeout(config))
    if not isinstance(data, list):
        raise UpstreamFetchError(f"Unexpected repository payload for {handle}")
    return data


def fetch_events(handle: str, token: str | None = None, config: dict = None):
    """Fetch up to 100 recent public events, bypassing caches.

    The payload is returned as-is; callers decide what to do with a
    malformed (non-list) body.
    """
    return get_json(
        f"{GITHUB_API}/users/{handle}/events",
        token,
        timeout=_api_timeout(config),
        extra_headers={"Cache-Control": "no-cache"},
        params={"per_page": EVENTS_PER_PAGE},
    )


def fetch_repo_languages(languages_url: str, token: str | None = None, config: dict = None) -> dict:
    """Fetch a repo's language -> bytes mapping."""
    data = get_json(languages_url, token, timeout=_api_timeout(config))
    if not isinstance(data, dict):
        raise UpstreamFetchError(f"Unexpected languages payload from {languages_url}", url=languages_url)
    return data


def fetch_user_data(handle: str, token: str | None = None, config: dict = None) -> tuple:
    """Fetch profile, repos and events in parallel.

    Returns (profile, repos, events). The first failure is raised.
    """
    cfg = config or {}
    max_workers = cfg.get("api", {}).get("max_workers", 3)

    fetchers = {
        "profile": fetch_profile,
        "repos": fetch_repos,
        "events": fetch_events,
    }
    results = {}

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(fn, handle, token, config): name
            for name, fn in fetchers.items()
        }

        for future in as_completed(futures):
            name = futures[future]
            try:
                results[name] = future.result()
            except UpstreamFetchError:
                log.error(f"Error fetching {name} for {handle}")
                for other in futures:
                    other.cancel()
                raise
            log.debug(f"Fetched {name} for {handle}")

    return results["profile"], results["repos"], results["events"]
