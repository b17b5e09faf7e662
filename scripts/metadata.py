"""Scrape title, description and favicon from a web page."""

import logging
from urllib.parse import urlsplit

import requests
from bs4 import BeautifulSoup

log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; PortfolioBot/1.0; +http://example.com)"
DEFAULT_TIMEOUT = 15

FAVICON_RELS = ["icon", "shortcut icon", "apple-touch-icon"]


class MetadataFetchError(Exception):
    """The target page returned a non-success status."""

    def __init__(self, url: str, status_code: int):
        self.url = url
        self.status_code = status_code
        super().__init__(f"{url} returned {status_code}")


def _meta_content(soup, **attrs) -> str:
    tag = soup.find("meta", attrs=attrs)
    return (tag.get("content") or "") if tag else ""


def _link_href(soup, rel: str) -> str:
    # bs4 splits rel into a list, so compare the joined value exactly
    for tag in soup.find_all("link", href=True):
        if " ".join(tag.get("rel") or []) == rel:
            return tag["href"]
    return ""


def absolute_favicon(favicon: str, page_url: str) -> str:
    """Resolve a favicon path against the page's scheme and host."""
    if favicon.startswith("http"):
        return favicon
    parts = urlsplit(page_url)
    path = favicon if favicon.startswith("/") else f"/{favicon}"
    return f"{parts.scheme}://{parts.netloc}{path}"


def extract_metadata(html: str, page_url: str) -> dict:
    soup = BeautifulSoup(html, "html.parser")

    title = soup.title.get_text() if soup.title else ""
    title = title or _meta_content(soup, property="og:title")
    description = _meta_content(soup, name="description") or _meta_content(soup, property="og:description")
    site_name = _meta_content(soup, property="og:site_name")

    favicon = next((href for href in (_link_href(soup, rel) for rel in FAVICON_RELS) if href), "/favicon.ico")

    return {
        "title": title,
        "description": description,
        "siteName": site_name,
        "favicon": absolute_favicon(favicon, page_url),
    }


def fetch_metadata(url: str, config: dict = None) -> dict:
    """Fetch a page and extract its metadata.

    Raises MetadataFetchError on a non-success status; network errors
    propagate as requests exceptions.
    """
    cfg = (config or {}).get("metadata", {})
    headers = {"User-Agent": cfg.get("user_agent", DEFAULT_USER_AGENT)}
    timeout = cfg.get("request_timeout", DEFAULT_TIMEOUT)

    resp = requests.get(url, headers=headers, timeout=timeout)
    if not resp.ok:
        log.warning(f"Metadata fetch for {url} returned {resp.status_code}")
        raise MetadataFetchError(url, resp.status_code)

    return extract_metadata(resp.text, url)
