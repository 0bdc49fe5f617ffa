from __future__ import annotations

import datetime as dt
import logging
import re
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import ConfigError, JournalError
from .models import JournalEntry
from .utils import DATE_FMT, atom_date, rfc822_date

logger = logging.getLogger(__name__)

TIMESTAMP_RE = re.compile(r"[+-]?[0-9]+")


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ConfigError(f"loading timezone {name!r}: {exc}") from exc


def parse_journal_line(line: str, tz: ZoneInfo) -> tuple[int, dt.datetime, str]:
    fields = line.split()
    if len(fields) < 2:
        raise JournalError(f"malformed journal entry, expected '<timestamp> <url>', got: {line!r}")
    # ASCII digits only; int() would also take "1_700" and other scripts' digits.
    if not TIMESTAMP_RE.fullmatch(fields[0]):
        raise JournalError(f"parsing timestamp {fields[0]!r}: not a base-10 integer")
    timestamp = int(fields[0])
    try:
        moment = dt.datetime.fromtimestamp(timestamp, tz)
    except (OverflowError, OSError, ValueError) as exc:
        raise JournalError(f"timestamp {timestamp} out of range") from exc
    return timestamp, moment, fields[1]


def parse_journal(text: str, tz: ZoneInfo) -> list[JournalEntry]:
    entries = []
    seen: dict[int, int] = {}
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        timestamp, moment, url = parse_journal_line(stripped, tz)
        seen[timestamp] = seen.get(timestamp, 0) + 1
        entries.append(
            JournalEntry(
                id=f"{timestamp}-{seen[timestamp]}",
                timestamp=timestamp,
                date=moment.strftime(DATE_FMT),
                date_rss=rfc822_date(moment),
                date_atom=atom_date(moment),
                url=url,
            )
        )
    # Newest first; sort is stable so equal timestamps keep file order.
    entries.sort(key=lambda entry: entry.timestamp, reverse=True)
    return entries


def load_journal(path: Path, tz: ZoneInfo) -> list[JournalEntry]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise JournalError(f"opening journal {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise JournalError(f"reading journal {path}: {exc}") from exc
    entries = parse_journal(text, tz)
    logger.debug("loaded %d journal entries from %s", len(entries), path)
    return entries
