"""Markdown copies of rendered pages, written next to the HTML."""
from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .content import dump_frontmatter
from .models import BlogPost, JournalEntry, Page, PageInfo
from .routes import PathType


def journal_markdown(page: Page, entries: Iterable[JournalEntry]) -> str:
    lines = [dump_frontmatter(page), "# journal\n\n"]
    for entry in entries:
        lines.append(f"- {entry.date} [{entry.url}]({entry.url})\n")
    return "".join(lines)


def blog_index_markdown(page: Page, posts: Iterable[BlogPost]) -> str:
    lines = [dump_frontmatter(page), "# blog\n\n"]
    for post in posts:
        lines.append(f"- {post.date} [{post.title}]({post.url})\n")
    return "".join(lines)


def page_markdown(page: Page) -> bytes:
    return dump_frontmatter(page).encode("utf-8") + page.markdown_source


def mirror_content(info: PageInfo, journal_entries, blog_posts) -> bytes:
    if info.path_type is PathType.JOURNAL:
        data = journal_markdown(info.page, journal_entries).encode("utf-8")
    elif info.path_type is PathType.BLOG_INDEX:
        data = blog_index_markdown(info.page, blog_posts).encode("utf-8")
    else:
        data = page_markdown(info.page)
    if data and not data.endswith(b"\n"):
        data += b"\n"
    return data


def mirror_path(info: PageInfo) -> Path:
    return info.output_path.with_suffix(".md")
