from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from zoneinfo import ZoneInfo

from markupsafe import Markup

from .errors import SiteFrozenError
from .routes import PathType, markdown_url
from .utils import atom_date

FEED_LIMIT = 50


@dataclass(frozen=True)
class Page:
    title: str
    description: str
    date: str
    content: Markup
    markdown_source: bytes
    url: str
    slug: str
    template: str = ""
    draft: bool = False

    @property
    def markdown_url(self) -> str:
        return markdown_url(self.url)


@dataclass(frozen=True)
class JournalEntry:
    id: str
    timestamp: int
    date: str
    date_rss: str
    date_atom: str
    url: str


@dataclass(frozen=True)
class BlogPost:
    title: str
    slug: str
    date: str
    date_rss: str
    date_atom: str
    content: Markup

    @property
    def url(self) -> str:
        return f"/blog/{self.slug}"


@dataclass(frozen=True)
class PageInfo:
    """A collected page waiting for the render pass."""

    page: Page
    source: Path
    rel: str
    output_path: Path
    template_name: str
    path_type: PathType


@dataclass
class SiteData:
    """Site-wide aggregates shared by every page and feed.

    Blog posts are appended while content is collected. ``finalize`` is the
    barrier between collecting and rendering: it sorts the posts and freezes
    both collections, so every render sees the same complete, ordered data.
    """

    journal_entries: Sequence[JournalEntry] = field(default_factory=list)
    blog_posts: Sequence[BlogPost] = field(default_factory=list)
    tz: ZoneInfo = field(default_factory=lambda: ZoneInfo("UTC"))
    feed_limit: int = FEED_LIMIT
    finalized: bool = False

    def add_blog_post(self, post: BlogPost) -> None:
        if self.finalized:
            raise SiteFrozenError(f"blog post {post.slug!r} added after the site was finalized")
        self.blog_posts.append(post)

    def finalize(self) -> None:
        if self.finalized:
            return
        # sorted() is stable; dates are YYYY-MM-DD so string order is date order.
        self.blog_posts = tuple(sorted(self.blog_posts, key=lambda post: post.date, reverse=True))
        self.journal_entries = tuple(self.journal_entries)
        self.finalized = True

    @property
    def feed_journal_entries(self):
        return self.journal_entries[: self.feed_limit]

    @property
    def feed_blog_posts(self):
        return self.blog_posts[: self.feed_limit]

    def _now_atom(self) -> str:
        return atom_date(dt.datetime.now(self.tz).replace(microsecond=0))

    @property
    def latest_journal_date_atom(self) -> str:
        if not self.journal_entries:
            return self._now_atom()
        return self.journal_entries[0].date_atom

    @property
    def latest_blog_date_atom(self) -> str:
        for post in self.blog_posts:
            if post.date_atom:
                return post.date_atom
        return self._now_atom()
