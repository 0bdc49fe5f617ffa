from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from zoneinfo import ZoneInfo

import yaml

from .errors import FrontmatterError
from .utils import parse_bool

DELIMITER = b"---\n"
CLOSING = b"\n---\n"
TRAILING_CLOSING = b"\n---"
DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves bare dates as strings."""


FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


@dataclass(frozen=True)
class Frontmatter:
    title: str = ""
    description: str = ""
    date: str = ""
    template: str = ""
    draft: bool = False


def split_frontmatter(content: bytes) -> tuple[bytes | None, bytes]:
    """Return the raw frontmatter block (or None) and the remaining body.

    Input without an opening ``---`` line, or without a closing one, has no
    frontmatter and is returned whole as the body.
    """
    if not content.startswith(DELIMITER):
        return None, content
    rest = content[len(DELIMITER) :]
    end = rest.find(CLOSING)
    if end != -1:
        return rest[:end], rest[end + len(CLOSING) :]
    if rest.endswith(TRAILING_CLOSING):
        return rest[: -len(TRAILING_CLOSING)], b""
    return None, content


def _as_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def validate_date(value: object) -> str:
    # An explicit !!timestamp tag still yields a date object.
    if isinstance(value, dt.date) and not isinstance(value, dt.datetime):
        value = value.isoformat()
    text = _as_text(value)
    if not text:
        return ""
    if not DATE_RE.fullmatch(text):
        raise FrontmatterError(f"invalid date format {text!r}, expected YYYY-MM-DD")
    try:
        dt.date.fromisoformat(text)
    except ValueError as exc:
        raise FrontmatterError(f"invalid date {text!r}: {exc}") from exc
    return text


def parse_frontmatter_block(block: bytes) -> Frontmatter:
    try:
        data = yaml.load(block.decode("utf-8"), Loader=FrontmatterLoader)
    except (yaml.YAMLError, UnicodeDecodeError, ValueError) as exc:
        raise FrontmatterError(f"invalid YAML: {exc}") from exc
    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise FrontmatterError(f"frontmatter must be a mapping, got {type(data).__name__}")
    return Frontmatter(
        title=_as_text(data.get("title")),
        description=_as_text(data.get("description")),
        date=validate_date(data.get("date")),
        template=_as_text(data.get("template")),
        draft=parse_bool(data.get("draft")),
    )


def extract_frontmatter(content: bytes) -> tuple[Frontmatter, bytes]:
    block, body = split_frontmatter(content)
    if block is None:
        return Frontmatter(), body
    return parse_frontmatter_block(block), body


def dump_frontmatter(meta: object) -> str:
    """Serialize title, description, date and template as a ``---`` block.

    Works with anything carrying those attributes (Frontmatter, Page). Empty
    values are left out; every value goes through the YAML emitter so quotes,
    colons and lookalike booleans survive a re-parse. Returns an empty string
    when there is nothing to write.
    """
    fields = {}
    for key in ("title", "description", "date", "template"):
        value = getattr(meta, key, "")
        if value:
            fields[key] = value
    if not fields:
        return ""
    block = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True)
    return f"---\n{block}---\n\n"


def parse_date(value: str, tz: ZoneInfo) -> dt.datetime:
    """Midnight of a YYYY-MM-DD date in the given zone."""
    day = dt.date.fromisoformat(validate_date(value))
    return dt.datetime.combine(day, dt.time(), tzinfo=tz)
