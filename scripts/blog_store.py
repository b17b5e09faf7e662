"""Markdown blog posts stored as files with a YAML frontmatter header."""

import logging
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

DEFAULT_TITLE = "Untitled"
DEFAULT_READ_TIME = "5 min read"

FRONTMATTER_RE = re.compile(r"\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)", re.DOTALL | re.MULTILINE)
SLUG_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


@dataclass
class BlogPost:
    slug: str
    title: str
    date: str
    excerpt: str
    content: str
    cover_image: str | None = None
    read_time: str = DEFAULT_READ_TIME
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "date": self.date,
            "excerpt": self.excerpt,
            "coverImage": self.cover_image,
            "readTime": self.read_time,
            "tags": self.tags,
            "content": self.content,
        }


def split_frontmatter(text: str) -> tuple[dict, str]:
    """Split a document into (metadata, body). No header means empty metadata."""
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text

    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid frontmatter: {e}") from e
    if not isinstance(metadata, dict):
        raise ValueError("Frontmatter must be a mapping")
    return metadata, text[match.end():]


def _normalize_date(value) -> str:
    if not value:
        return datetime.now(timezone.utc).isoformat()
    # Unquoted YAML dates load as date objects
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _normalize_tags(value) -> list:
    if not value:
        return []
    # A single scalar tag, e.g. "tags: Python"
    if isinstance(value, str):
        return [value]
    return list(value)


def parse_post(slug: str, text: str) -> BlogPost:
    metadata, body = split_frontmatter(text)
    return BlogPost(
        slug=slug,
        title=metadata.get("title") or DEFAULT_TITLE,
        date=_normalize_date(metadata.get("date")),
        excerpt=metadata.get("excerpt") or "",
        content=body,
        cover_image=metadata.get("coverImage"),
        read_time=metadata.get("readTime") or DEFAULT_READ_TIME,
        tags=_normalize_tags(metadata.get("tags")),
    )


def get_all_slugs(blog_dir: Path) -> list[str]:
    blog_dir = Path(blog_dir)
    if not blog_dir.is_dir():
        return []
    return sorted(p.stem for p in blog_dir.glob("*.md"))


def get_all_posts(blog_dir: Path) -> list[BlogPost]:
    """Load every post, newest first."""
    blog_dir = Path(blog_dir)
    posts = []

    for slug in get_all_slugs(blog_dir):
        path = blog_dir / f"{slug}.md"
        try:
            posts.append(parse_post(slug, path.read_text(encoding="utf-8")))
        except (OSError, ValueError) as e:
            log.error(f"Skipping unreadable blog post {path}: {e}")

    posts.sort(key=lambda p: p.date, reverse=True)
    return posts


def get_post_by_slug(blog_dir: Path, slug: str) -> BlogPost | None:
    if not SLUG_RE.match(slug or ""):
        log.warning(f"Rejected blog slug: {slug!r}")
        return None

    path = Path(blog_dir) / f"{slug}.md"
    if not path.is_file():
        log.warning(f"Blog post file not found: {path}")
        return None

    try:
        return parse_post(slug, path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.error(f"Error reading blog post {path}: {e}")
        return None


def render_post_file(frontmatter: dict, content: str) -> str:
    header = yaml.dump(frontmatter, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return f"---\n{header}---\n\n{content.lstrip()}"


def ensure_seeded(blog_dir: Path, samples: list[dict] = None) -> list[str]:
    """Create the blog directory and write any missing sample posts.

    Existing files are never overwritten. Returns the slugs written.
    """
    blog_dir = Path(blog_dir)
    blog_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for sample in SAMPLE_POSTS if samples is None else samples:
        path = blog_dir / f"{sample['slug']}.md"
        if path.exists():
            log.debug(f"Sample blog post already exists: {path}")
            continue

        frontmatter = {k: v for k, v in sample.items() if k not in ("slug", "content")}
        path.write_text(render_post_file(frontmatter, sample["content"]), encoding="utf-8")
        log.info(f"Created sample blog post: {path}")
        written.append(sample["slug"])

    return written


SAMPLE_POSTS = [
    {
        "slug": "getting-started-with-nextjs-typescript",
        "title": "Getting Started with Next.js and TypeScript",
        "date": "2023-04-15",
        "excerpt": "Setting up a new Next.js project with TypeScript, plus a few pitfalls to avoid.",
        "coverImage": "/placeholder.svg?height=400&width=800",
        "readTime": "8 min read",
        "tags": ["Next.js", "TypeScript", "Web Development"],
        "content": """
# Getting Started with Next.js and TypeScript

Next.js gives you server-side rendering and static generation out of the box.
Adding TypeScript on top catches a whole class of mistakes before they ship.

## Creating the project

```bash
npx create-next-app@latest my-app --typescript
```

## Typing API routes

Request and response objects can be typed, so handlers document their own
payloads:

```ts
type Data = { name: string }
```

Check the Next.js and TypeScript documentation for the details.
""",
    },
    {
        "slug": "building-portfolio-with-tailwind",
        "title": "Building a Portfolio with Tailwind CSS",
        "date": "2023-03-22",
        "excerpt": "Building a responsive portfolio site with Tailwind CSS utility classes.",
        "coverImage": "/placeholder.svg?height=400&width=800",
        "readTime": "6 min read",
        "tags": ["Tailwind CSS", "React", "Portfolio"],
        "content": """
# Building a Portfolio with Tailwind CSS

A portfolio is where your work speaks for itself. Tailwind's utility classes
make it quick to build a layout that works on every screen size.

## Setup

```bash
npm install -D tailwindcss postcss autoprefixer
npx tailwindcss init -p
```

## Responsive layouts

Breakpoint prefixes (`sm:`, `md:`, `lg:`) switch a single column on mobile to
a grid on desktop without writing any custom CSS.
""",
    },
    {
        "slug": "power-of-server-components",
        "title": "The Power of Server Components in Next.js",
        "date": "2023-02-10",
        "excerpt": "Where Server Components help, and where you still need client components.",
        "coverImage": "/placeholder.svg?height=400&width=800",
        "readTime": "10 min read",
        "tags": ["Next.js", "Server Components", "Performance"],
        "content": """
# The Power of Server Components in Next.js

Server Components render only on the server. They can read from databases and
the file system directly and add nothing to the client bundle.

## When to reach for client components

Anything that needs state, effects, browser APIs or event handlers still has
to be a client component, marked with the `"use client"` directive.

## Streaming

Wrapping slow sections in `Suspense` lets the rest of the page render first.
""",
    },
]
