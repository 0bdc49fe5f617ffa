"""Map content-relative paths to page types, templates, output files and URLs.

All functions here take the path relative to the content root with posix
separators, e.g. ``blog/first-post.md``.
"""
from __future__ import annotations

import enum
from pathlib import Path, PurePosixPath

ROOT_INDEX = "index.md"
INDEX_SUFFIX = "/index.md"
BLOG_DIR = "blog"
JOURNAL_DIR = "journal"
UNTITLED = "Untitled"


class PathType(enum.Enum):
    HOME = "home"
    JOURNAL = "journal"
    BLOG_INDEX = "blog-index"
    BLOG_POST = "blog-post"
    PAGE = "page"

    @property
    def template(self) -> str:
        return self.value


def relative_path(path: Path, content_dir: Path) -> str:
    return path.relative_to(content_dir).as_posix()


def classify_path(rel: str) -> PathType:
    if rel == ROOT_INDEX:
        return PathType.HOME
    if rel.startswith(f"{JOURNAL_DIR}/"):
        return PathType.JOURNAL
    if rel == f"{BLOG_DIR}{INDEX_SUFFIX}":
        return PathType.BLOG_INDEX
    if rel.startswith(f"{BLOG_DIR}/"):
        return PathType.BLOG_POST
    return PathType.PAGE


def determine_template(rel: str, override: str = "") -> str:
    if override:
        return override
    return classify_path(rel).template


def dir_index(rel: str) -> str | None:
    """Directory name for ``<dir>/index.md``, otherwise None."""
    if rel.endswith(INDEX_SUFFIX):
        return rel[: -len(INDEX_SUFFIX)]
    return None


def determine_output_path(rel: str) -> str:
    if rel == ROOT_INDEX:
        return "index.html"
    directory = dir_index(rel)
    if directory is not None:
        return f"{directory}.html"
    return f"{rel.removesuffix('.md')}.html"


def determine_url(rel: str) -> str:
    if rel == ROOT_INDEX:
        return "/"
    directory = dir_index(rel)
    if directory is not None:
        return f"/{directory}"
    path = PurePosixPath(rel)
    parent = path.parent.as_posix()
    if parent == ".":
        return f"/{path.stem}"
    return f"/{parent}/{path.stem}"


def determine_slug(rel: str) -> str:
    return PurePosixPath(rel).name.removesuffix(".md")


def markdown_url(url: str) -> str:
    if url == "/":
        return "/index.md"
    return f"{url}.md"


def default_title(path_type: PathType, slug: str, title: str) -> str:
    if title:
        return title
    if path_type is PathType.BLOG_POST:
        return slug.replace("-", " ")
    return UNTITLED
