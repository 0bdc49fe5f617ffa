from __future__ import annotations

import datetime as dt
import logging
import shutil
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)

DATE_FMT = "%Y-%m-%d"
RSS_DATE_FMT = "%a, %d %b %Y %H:%M:%S %z"

XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "y", "on"}
    return False


def parse_int(value: object, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def rfc822_date(value: dt.datetime) -> str:
    return value.strftime(RSS_DATE_FMT)


def atom_date(value: dt.datetime) -> str:
    text = value.isoformat(timespec="seconds")
    if text.endswith("+00:00"):
        text = text[: -len("+00:00")] + "Z"
    return text


def escape_xml(text: object) -> str:
    text = "" if text is None else str(text)
    for char, entity in XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def write_bytes(path: Path, data: bytes) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)


def clean_output_dir(output_dir: Path, project_root: Path) -> None:
    if not output_dir.exists():
        return
    output_resolved = output_dir.resolve()
    root_resolved = project_root.resolve()
    if output_resolved == root_resolved:
        raise ConfigError("refusing to clean project root")
    if not output_resolved.is_relative_to(root_resolved):
        raise ConfigError(f"refusing to clean output directory outside project root: {output_dir}")
    logger.info("cleaning %s", output_dir)
    try:
        shutil.rmtree(output_dir)
    except OSError as exc:
        raise ConfigError(f"cleaning {output_dir}: {exc}") from exc
