from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from .builder import build_site
from .config import BuildConfig, load_config
from .errors import SiteError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the site from Markdown content and the journal log.")
    parser.add_argument(
        "--config",
        default="site.toml",
        help="Path to site config file (TOML/YAML/JSON).",
    )
    parser.add_argument("--content", help="Directory containing Markdown content.")
    parser.add_argument("--templates", help="Directory containing page and feed templates.")
    parser.add_argument("--static", help="Directory containing static assets.")
    parser.add_argument("--output", help="Output directory for the site.")
    parser.add_argument("--journal", help="Path to the journal log.")
    parser.add_argument("--timezone", help="IANA timezone used for journal and post dates.")
    parser.add_argument("--feed-limit", type=int, help="Maximum number of items in each feed.")
    parser.add_argument(
        "--markdown-mirror",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write a Markdown copy next to every HTML page.",
    )
    parser.add_argument(
        "--clean",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Clean output directory before build.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output.")
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> BuildConfig:
    data = load_config(Path(args.config))
    overrides = {
        "content_dir": args.content,
        "templates_dir": args.templates,
        "static_dir": args.static,
        "output_dir": args.output,
        "journal_file": args.journal,
        "timezone": args.timezone,
        "feed_limit": args.feed_limit,
        "markdown_mirror": args.markdown_mirror,
        "clean": args.clean,
    }
    for key, value in overrides.items():
        if value is not None:
            data[key] = value
    return BuildConfig.from_mapping(data)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format=LOG_FORMAT)
    start = time.perf_counter()
    try:
        config = resolve_config(args)
        summary = build_site(config)
    except (SiteError, OSError) as exc:
        logger.error("build failed: %s", exc)
        return 1
    elapsed = time.perf_counter() - start
    logger.info("build completed in %.2fs, site generated in %s", elapsed, summary.output_dir)
    return 0
