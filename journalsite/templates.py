"""Jinja2 template loading and rendering.

Two environments back the two kinds of output: HTML pages (autoescaped,
every page template extends ``base.html``) and feeds (plain text with an
``xml`` escaping helper). Both hand out ordinary ``jinja2.Template`` objects,
looked up by logical name.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import jinja2

from .errors import RenderError, TemplateLoadError
from .links import safe_href
from .routes import PathType
from .utils import escape_xml

logger = logging.getLogger(__name__)

BASE_TEMPLATE = "base.html"
PAGE_TEMPLATES = tuple(path_type.template for path_type in PathType)

# feed template -> output file name at the site root
FEED_TEMPLATES = {
    "feeds/journal.xml": "journal.xml",
    "feeds/journal.atom": "journal.atom",
    "feeds/blog.xml": "blog.xml",
    "feeds/blog.atom": "blog.atom",
}


def html_environment(templates_dir: Path) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(templates_dir),
        autoescape=True,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["safe_href"] = safe_href
    return env


def feed_environment(templates_dir: Path) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(templates_dir),
        autoescape=False,
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
    )
    env.filters["xml"] = escape_xml
    env.filters["safe_href"] = safe_href
    env.globals["xml"] = escape_xml
    return env


def _load(env: jinja2.Environment, name: str) -> jinja2.Template:
    try:
        return env.get_template(name)
    except jinja2.TemplateNotFound as exc:
        raise TemplateLoadError(f"template {name} not found") from exc
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateLoadError(f"parsing template {name}: {exc.message} (line {exc.lineno})") from exc


@dataclass
class TemplateSet:
    pages: dict[str, jinja2.Template] = field(default_factory=dict)
    feeds: dict[str, jinja2.Template] = field(default_factory=dict)

    @classmethod
    def load(cls, templates_dir: Path, template_globals: dict | None = None) -> "TemplateSet":
        if not templates_dir.is_dir():
            raise TemplateLoadError(f"templates directory not found: {templates_dir}")
        html_env = html_environment(templates_dir)
        feed_env = feed_environment(templates_dir)
        for env in (html_env, feed_env):
            env.globals.update(template_globals or {})

        templates = cls()
        _load(html_env, BASE_TEMPLATE)
        for name in PAGE_TEMPLATES:
            templates.pages[name] = _load(html_env, f"{name}.html")
        # Extra top-level templates can be picked with a frontmatter override.
        for path in sorted(templates_dir.glob("*.html")):
            name = path.stem
            if path.name == BASE_TEMPLATE or name in templates.pages:
                continue
            templates.pages[name] = _load(html_env, path.name)
        for name in FEED_TEMPLATES:
            templates.feeds[name] = _load(feed_env, name)
        logger.debug("loaded %d page and %d feed templates", len(templates.pages), len(templates.feeds))
        return templates

    def page(self, name: str) -> jinja2.Template | None:
        return self.pages.get(name)


def write_template(path: Path, template: jinja2.Template, **context) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as handle:
            template.stream(**context).dump(handle)
    except jinja2.TemplateError as exc:
        raise RenderError(f"template {template.name}: {exc}") from exc
    except OSError as exc:
        raise RenderError(f"writing {path}: {exc}") from exc
