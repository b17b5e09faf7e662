"""Tests for the markdown blog store."""

import sys

sys.path.insert(0, "scripts")

from blog_store import (
    DEFAULT_READ_TIME,
    SAMPLE_POSTS,
    ensure_seeded,
    get_all_posts,
    get_all_slugs,
    get_post_by_slug,
    parse_post,
    split_frontmatter,
)


POST = """---
title: "Hello"
date: "2024-05-01"
excerpt: "First post"
coverImage: "/cover.png"
readTime: "3 min read"
tags: ["Python", "FastAPI"]
---

# Hello

Body text.
"""


def write_post(blog_dir, slug, date_value, title="Post"):
    (blog_dir / f"{slug}.md").write_text(f'---\ntitle: "{title}"\ndate: "{date_value}"\n---\nbody\n')


class TestParsing:
    """Frontmatter parsing."""

    def test_full_frontmatter(self):
        """All frontmatter fields are mapped onto the post."""
        post = parse_post("hello", POST)
        assert post.title == "Hello"
        assert post.date == "2024-05-01"
        assert post.excerpt == "First post"
        assert post.cover_image == "/cover.png"
        assert post.read_time == "3 min read"
        assert post.tags == ["Python", "FastAPI"]
        assert post.content.strip().startswith("# Hello")

    def test_defaults(self):
        """Missing fields get defaults."""
        post = parse_post("bare", "---\n---\njust text")
        assert post.title == "Untitled"
        assert post.excerpt == ""
        assert post.read_time == DEFAULT_READ_TIME
        assert post.tags == []
        assert post.cover_image is None
        assert post.date  # defaults to now

    def test_unquoted_date(self):
        """Unquoted YAML dates are stored as ISO strings."""
        post = parse_post("d", "---\ndate: 2024-05-01\n---\nx")
        assert post.date == "2024-05-01"

    def test_no_frontmatter(self):
        """Text without a header is all body."""
        metadata, body = split_frontmatter("plain markdown")
        assert metadata == {}
        assert body == "plain markdown"

    def test_scalar_tag_kept_whole(self):
        """A single scalar tag is not split into characters."""
        post = parse_post("p", "---\ntags: Python\n---\nbody")
        assert post.tags == ["Python"]

    def test_wire_keys(self):
        """to_dict uses camelCase wire keys."""
        body = parse_post("hello", POST).to_dict()
        assert body["coverImage"] == "/cover.png"
        assert body["readTime"] == "3 min read"
        assert body["slug"] == "hello"


class TestListing:
    """Directory listing and ordering."""

    def test_missing_directory_is_empty_and_not_created(self, tmp_path):
        """Reading a missing directory returns nothing and creates nothing."""
        blog_dir = tmp_path / "blog"
        assert get_all_posts(blog_dir) == []
        assert get_all_slugs(blog_dir) == []
        assert not blog_dir.exists()

    def test_sorted_newest_first(self, tmp_path):
        """Posts are sorted by date descending."""
        write_post(tmp_path, "old", "2022-01-01")
        write_post(tmp_path, "new", "2024-01-01")
        write_post(tmp_path, "mid", "2023-01-01")

        assert [p.slug for p in get_all_posts(tmp_path)] == ["new", "mid", "old"]

    def test_only_markdown_files(self, tmp_path):
        """Non-markdown files are ignored."""
        write_post(tmp_path, "post", "2024-01-01")
        (tmp_path / "notes.txt").write_text("ignore me")
        assert get_all_slugs(tmp_path) == ["post"]

    def test_bad_post_skipped(self, tmp_path):
        """Unparseable posts are skipped."""
        write_post(tmp_path, "good", "2024-01-01")
        (tmp_path / "bad.md").write_text("---\ntitle: [unclosed\n---\nbody")
        assert [p.slug for p in get_all_posts(tmp_path)] == ["good"]


class TestGetBySlug:
    """Single post lookup."""

    def test_found(self, tmp_path):
        """Existing slug returns the post."""
        (tmp_path / "hello.md").write_text(POST)
        assert get_post_by_slug(tmp_path, "hello").title == "Hello"

    def test_missing(self, tmp_path):
        """Unknown slug returns None."""
        assert get_post_by_slug(tmp_path, "nope") is None

    def test_unparseable_post(self, tmp_path):
        """Bad frontmatter returns None instead of raising."""
        (tmp_path / "bad.md").write_text("---\ntitle: [unclosed\n---\nbody")
        assert get_post_by_slug(tmp_path, "bad") is None

    def test_path_traversal_rejected(self, tmp_path):
        """Slugs with path separators are rejected."""
        assert get_post_by_slug(tmp_path, "../secret") is None


class TestSeeding:
    """Explicit sample seeding."""

    def test_seeds_samples(self, tmp_path):
        """Seeding writes every sample post."""
        blog_dir = tmp_path / "content" / "blog"
        written = ensure_seeded(blog_dir)

        assert sorted(written) == sorted(s["slug"] for s in SAMPLE_POSTS)
        posts = get_all_posts(blog_dir)
        assert len(posts) == len(SAMPLE_POSTS)
        assert posts[0].slug == "getting-started-with-nextjs-typescript"
        assert posts[0].date == "2023-04-15"
        assert posts[0].tags == ["Next.js", "TypeScript", "Web Development"]

    def test_idempotent_and_never_overwrites(self, tmp_path):
        """Seeding skips existing files and is repeatable."""
        slug = SAMPLE_POSTS[0]["slug"]
        (tmp_path / f"{slug}.md").write_text(POST)

        written = ensure_seeded(tmp_path)
        assert slug not in written
        assert get_post_by_slug(tmp_path, slug).title == "Hello"
        assert ensure_seeded(tmp_path) == []
