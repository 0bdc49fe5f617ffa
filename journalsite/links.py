from __future__ import annotations

import enum
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

EXTERNAL_SCHEMES = ("http://", "https://")
SAFE_SCHEMES = EXTERNAL_SCHEMES + ("mailto:", "tel:")

HREF_ESCAPES = str.maketrans(
    {
        "\0": "\ufffd",
        "&": "&amp;",
        "'": "&#39;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&#34;",
    }
)


class LinkKind(enum.Enum):
    EXTERNAL = "external"
    SAFE = "safe"
    INTERNAL = "internal"
    UNSAFE = "unsafe"


def classify_link(dest: str) -> LinkKind:
    lower = dest.lower()
    if lower.startswith(SAFE_SCHEMES):
        # Only a literal lowercase scheme opens in a new tab.
        if dest.startswith(EXTERNAL_SCHEMES):
            return LinkKind.EXTERNAL
        return LinkKind.SAFE
    # javascript:, data:, vbscript: and friends.
    if ":" in lower and not lower.startswith("/"):
        return LinkKind.UNSAFE
    return LinkKind.INTERNAL


def safe_href(url) -> str:
    """Jinja2 filter: the URL itself, or ``#`` when the link policy rejects it."""
    url = "" if url is None else str(url)
    if classify_link(url) is LinkKind.UNSAFE:
        return "#"
    return url


def escape_href(dest: str) -> str:
    return dest.translate(HREF_ESCAPES)


def anchor_open_tag(dest: str) -> str:
    kind = classify_link(dest)
    if kind is LinkKind.UNSAFE:
        return '<a href="#">'
    href = escape_href(dest)
    if kind is LinkKind.EXTERNAL:
        return f'<a href="{href}" target="_blank" rel="noopener">'
    return f'<a href="{href}">'


class SafeLinkProcessor(Treeprocessor):
    """Replace each ``<a>`` with raw opening and closing tags around its children.

    The tags go through the HTML stash so the serializer neither re-escapes
    the ``href`` nor reorders the attributes.
    """

    def run(self, root: etree.Element) -> None:
        links = [(parent, child) for parent in root.iter() for child in parent if child.tag == "a"]
        for parent, link in links:
            if link.get("href") is None:
                continue
            self.unwrap(parent, link)

    def unwrap(self, parent: etree.Element, link: etree.Element) -> None:
        stash = self.md.htmlStash
        opening = stash.store(anchor_open_tag(link.get("href")))
        closing = stash.store("</a>")
        index = list(parent).index(link)
        children = list(link)

        head = opening + (link.text or "")
        if children:
            last = children[-1]
            last.tail = (last.tail or "") + closing + (link.tail or "")
        else:
            head += closing + (link.tail or "")

        if index == 0:
            parent.text = (parent.text or "") + head
        else:
            previous = parent[index - 1]
            previous.tail = (previous.tail or "") + head

        parent.remove(link)
        for offset, child in enumerate(children):
            parent.insert(index + offset, child)


class SafeLinkExtension(Extension):
    def extendMarkdown(self, md):
        # After the inline processor (20) has built every <a>.
        md.treeprocessors.register(SafeLinkProcessor(md), "safe_links", 1)
