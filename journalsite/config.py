from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .errors import ConfigError
from .models import FEED_LIMIT
from .utils import parse_bool, parse_int

DEFAULT_TIMEZONE = "America/Los_Angeles"


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"reading config file {path}: {exc}") from exc
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"invalid TOML in config file {path}: {exc}") from exc
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in config file {path}: {exc}") from exc
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"invalid JSON in config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping: {path}")
    return data


@dataclass
class BuildConfig:
    root: Path = field(default_factory=Path.cwd)
    content_dir: Path = Path("content")
    templates_dir: Path = Path("templates")
    static_dir: Path = Path("static")
    output_dir: Path = Path("public")
    journal_file: Path = Path("journal/journal.txt")
    timezone: str = DEFAULT_TIMEZONE
    feed_limit: int = FEED_LIMIT
    markdown_mirror: bool = True
    clean: bool = False
    site_name: str = ""
    site_url: str = ""
    site_description: str = ""

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        for name in ("content_dir", "templates_dir", "static_dir", "output_dir", "journal_file"):
            value = Path(getattr(self, name))
            if not value.is_absolute():
                value = self.root / value
            setattr(self, name, value)
        if self.feed_limit < 0:
            raise ConfigError(f"feed_limit must not be negative, got {self.feed_limit}")

    @classmethod
    def from_mapping(cls, data: dict, root: Path | None = None) -> "BuildConfig":
        defaults = cls.__dataclass_fields__

        def cfg_str(key: str) -> str:
            value = data.get(key)
            return defaults[key].default if value is None else str(value)

        return cls(
            root=Path(root) if root is not None else Path.cwd(),
            content_dir=Path(cfg_str("content_dir")),
            templates_dir=Path(cfg_str("templates_dir")),
            static_dir=Path(cfg_str("static_dir")),
            output_dir=Path(cfg_str("output_dir")),
            journal_file=Path(cfg_str("journal_file")),
            timezone=cfg_str("timezone"),
            feed_limit=parse_int(data.get("feed_limit"), FEED_LIMIT),
            markdown_mirror=parse_bool(data.get("markdown_mirror", True)),
            clean=parse_bool(data.get("clean", False)),
            site_name=cfg_str("site_name"),
            site_url=cfg_str("site_url").rstrip("/"),
            site_description=cfg_str("site_description"),
        )

    def template_globals(self) -> dict:
        return {
            "site_name": self.site_name,
            "site_url": self.site_url,
            "site_description": self.site_description,
        }
