from __future__ import annotations

import logging
import shutil
from pathlib import Path

import markdown

from .errors import ConfigError
from .links import SafeLinkExtension

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables", "toc", "pymdownx.caret", "pymdownx.tilde"]


def new_markdown() -> markdown.Markdown:
    return markdown.Markdown(extensions=[*MARKDOWN_EXTENSIONS, SafeLinkExtension()])


def render_markdown(body: str | bytes) -> str:
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    md = new_markdown()
    html_content = md.convert(body)
    md.reset()
    return html_content


def copy_static(static_dir: Path, output_dir: Path) -> None:
    if not static_dir.is_dir():
        raise ConfigError(f"static directory not found: {static_dir}")
    count = 0
    for item in sorted(static_dir.rglob("*")):
        dest = output_dir / item.relative_to(static_dir)
        try:
            if item.is_dir():
                dest.mkdir(parents=True, exist_ok=True)
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, dest)
        except OSError as exc:
            raise ConfigError(f"copying static file {item}: {exc}") from exc
        count += 1
    logger.debug("copied %d static files from %s", count, static_dir)
