"""HTTP API for the portfolio site."""

import logging
from contextlib import asynccontextmanager

import requests
import uvicorn
from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from aggregator import summarize
from blog_store import ensure_seeded, get_all_posts, get_post_by_slug
from fetcher import UpstreamFetchError, get_token
from metadata import MetadataFetchError, fetch_metadata
from settings import config_path_from_env, load_config, resolve_blog_dir, setup_logging

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = load_config(config_path_from_env())
    app.state.config = config
    app.state.blog_dir = resolve_blog_dir(config)
    # Seed once at start-up; reads never write
    ensure_seeded(app.state.blog_dir)
    yield


app = FastAPI(
    title="Portfolio API",
    version="0.1.0",
    lifespan=lifespan,
)


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


@app.get("/api/github")
def github_endpoint():
    """
    Activity summary for the configured GitHub user.
    """
    config = app.state.config
    try:
        summary = summarize(config["github_user"], get_token(), config)
    except UpstreamFetchError as e:
        log.error(f"GitHub API error: {e}")
        return error_response("Failed to fetch GitHub data", 500)
    except Exception as e:
        log.exception(f"Unexpected error building GitHub summary: {e}")
        return error_response("Failed to fetch GitHub data", 500)
    return JSONResponse(content=summary.to_dict())


@app.get("/api/blog")
def blog_list_endpoint():
    try:
        posts = get_all_posts(app.state.blog_dir)
    except OSError as e:
        log.error(f"Error fetching blog posts: {e}")
        return error_response("Failed to fetch blog posts", 500)
    return JSONResponse(content=[p.to_dict() for p in posts])


@app.get("/api/blog/{slug}")
def blog_post_endpoint(slug: str):
    post = get_post_by_slug(app.state.blog_dir, slug)
    if post is None:
        return error_response("Blog post not found", 404)
    return JSONResponse(content=post.to_dict())


@app.get("/api/metadata")
def metadata_endpoint(url: str | None = Query(default=None)):
    """
    Title, description, site name and favicon for an external URL.
    """
    if not url:
        return error_response("URL parameter is required", 400)

    try:
        result = fetch_metadata(url, app.state.config)
    except MetadataFetchError as e:
        return error_response("Failed to fetch URL", e.status_code)
    except requests.exceptions.RequestException as e:
        log.error(f"Error fetching metadata for {url}: {e}")
        return error_response("Failed to fetch metadata", 500)
    except Exception as e:
        log.exception(f"Unexpected error scraping metadata for {url}: {e}")
        return error_response("Failed to fetch metadata", 500)
    return JSONResponse(content=result)


def main():
    setup_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)


if __name__ == "__main__":
    main()
