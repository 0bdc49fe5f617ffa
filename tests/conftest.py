"""
conftest.py
-----------
Shared pytest fixtures for journalsite tests.

Provides a throwaway site tree (content, journal, static assets and the
shipped templates) under ``tmp_path`` plus a helper to write content files.
"""
import shutil
from pathlib import Path

import pytest

from journalsite.config import BuildConfig

REPO_ROOT = Path(__file__).resolve().parents[1]

JOURNAL_LOG = """1700000000 https://example.com/post
1700086400 https://example.com/later

1699913600 https://example.com/earlier
"""


@pytest.fixture
def write_content(site_root):
    """Write a file under content/ and return its path."""

    def _write(rel: str, text: str) -> Path:
        path = site_root / "content" / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def site_root(tmp_path):
    """Minimal site with templates, a journal log and one static file."""
    root = tmp_path / "site"
    (root / "content").mkdir(parents=True)
    (root / "journal").mkdir()
    (root / "journal" / "journal.txt").write_text(JOURNAL_LOG, encoding="utf-8")
    (root / "static" / "img").mkdir(parents=True)
    (root / "static" / "style.css").write_text("body { margin: 0; }\n", encoding="utf-8")
    (root / "static" / "img" / "logo.svg").write_text("<svg/>\n", encoding="utf-8")
    shutil.copytree(REPO_ROOT / "templates", root / "templates")
    return root


@pytest.fixture
def config(site_root):
    return BuildConfig(
        root=site_root,
        site_name="Test Site",
        site_url="https://example.org",
        site_description="A site for tests",
    )
