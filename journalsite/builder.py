"""Two-pass site build.

Pass 1 walks the content tree, renders Markdown and collects blog posts into
the shared :class:`SiteData`. Once every file has been seen the posts are
sorted and the aggregate is frozen. Pass 2 then renders each page and the
feeds against that complete aggregate, so a blog index or feed never misses
a post that happened to be walked after it.
"""
from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from markupsafe import Markup

from .config import BuildConfig
from .content import extract_frontmatter, parse_date
from .errors import ConfigError, ContentError, MissingTemplateError, SiteError
from .journal import load_journal, load_timezone
from .mirror import mirror_content, mirror_path
from .models import BlogPost, Page, PageInfo, SiteData
from .render import copy_static, render_markdown
from .routes import (
    PathType,
    classify_path,
    default_title,
    determine_output_path,
    determine_slug,
    determine_template,
    determine_url,
    relative_path,
)
from .templates import FEED_TEMPLATES, TemplateSet, write_template
from .utils import atom_date, clean_output_dir, rfc822_date, write_bytes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildSummary:
    pages: int
    blog_posts: int
    journal_entries: int
    output_dir: Path


def walk_markdown(root: Path) -> Iterator[Path]:
    """Yield ``*.md`` files depth-first, directory entries in name order."""
    for path in sorted(root.iterdir(), key=lambda p: p.name):
        if path.is_dir():
            yield from walk_markdown(path)
        elif path.name.endswith(".md"):
            yield path


class SiteBuilder:
    def __init__(self, config: BuildConfig):
        logger.info("building site")
        self.config = config
        self.tz = load_timezone(config.timezone)
        entries = load_journal(config.journal_file, self.tz)
        self.site = SiteData(journal_entries=entries, tz=self.tz, feed_limit=config.feed_limit)
        self.templates = TemplateSet.load(config.templates_dir, config.template_globals())

    def build(self) -> BuildSummary:
        config = self.config
        if not config.content_dir.is_dir():
            raise ConfigError(f"content directory not found: {config.content_dir}")
        if config.clean:
            clean_output_dir(config.output_dir, config.root)
        try:
            config.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ConfigError(f"creating output directory {config.output_dir}: {exc}") from exc

        logger.info("copying static files")
        copy_static(config.static_dir, config.output_dir)

        logger.info("processing content")
        pages = self.collect_content()

        self.site.finalize()

        self.render_pages(pages)

        logger.info("generating feeds")
        self.build_feeds()

        summary = BuildSummary(
            pages=len(pages),
            blog_posts=len(self.site.blog_posts),
            journal_entries=len(self.site.journal_entries),
            output_dir=config.output_dir,
        )
        logger.info(
            "build complete: %d pages, %d blog posts, %d journal entries",
            summary.pages,
            summary.blog_posts,
            summary.journal_entries,
        )
        return summary

    def collect_content(self) -> list[PageInfo]:
        pages = []
        for path in walk_markdown(self.config.content_dir):
            try:
                info = self.collect_page(path)
            except SiteError as exc:
                raise type(exc)(f"collecting {path}: {exc}") from exc
            except (OSError, UnicodeDecodeError) as exc:
                raise ContentError(f"collecting {path}: {exc}") from exc
            if info is not None:
                pages.append(info)
        return pages

    def collect_page(self, path: Path) -> PageInfo | None:
        raw = path.read_bytes()
        meta, body = extract_frontmatter(raw)
        if meta.draft:
            logger.debug("skipping draft %s", path)
            return None

        rel = relative_path(path, self.config.content_dir)
        path_type = classify_path(rel)
        slug = determine_slug(rel)
        content = Markup(render_markdown(body))
        page = Page(
            title=default_title(path_type, slug, meta.title),
            description=meta.description,
            date=meta.date,
            content=content,
            markdown_source=body,
            url=determine_url(rel),
            slug=slug,
            template=meta.template,
            draft=meta.draft,
        )

        if path_type is PathType.BLOG_POST:
            date_rss = date_atom = ""
            if page.date:
                moment = parse_date(page.date, self.tz)
                date_rss = rfc822_date(moment)
                date_atom = atom_date(moment)
            self.site.add_blog_post(
                BlogPost(
                    title=page.title,
                    slug=page.slug,
                    date=page.date,
                    date_rss=date_rss,
                    date_atom=date_atom,
                    content=content,
                )
            )

        return PageInfo(
            page=page,
            source=path,
            rel=rel,
            output_path=self.config.output_dir / determine_output_path(rel),
            template_name=determine_template(rel, meta.template),
            path_type=path_type,
        )

    def resolve_template(self, info: PageInfo):
        template = self.templates.page(info.template_name)
        if template is not None:
            return template
        if info.page.template:
            raise MissingTemplateError(f"template {info.template_name!r} not found for {info.source}")
        return self.templates.page(PathType.PAGE.template)

    def render_pages(self, pages: list[PageInfo]) -> None:
        for info in pages:
            template = self.resolve_template(info)
            try:
                write_template(info.output_path, template, page=info.page, site=self.site)
            except SiteError as exc:
                raise type(exc)(f"rendering {info.source}: {exc}") from exc
            if self.config.markdown_mirror:
                self.write_markdown_page(info)

    def write_markdown_page(self, info: PageInfo) -> None:
        data = mirror_content(info, self.site.journal_entries, self.site.blog_posts)
        try:
            write_bytes(mirror_path(info), data)
        except OSError as exc:
            raise ContentError(f"writing markdown for {info.source}: {exc}") from exc

    def build_feeds(self) -> None:
        for name, output in FEED_TEMPLATES.items():
            template = self.templates.feeds[name]
            try:
                write_template(self.config.output_dir / output, template, site=self.site)
            except SiteError as exc:
                raise type(exc)(f"rendering feed {output}: {exc}") from exc


def build_site(config: BuildConfig) -> BuildSummary:
    return SiteBuilder(config).build()
