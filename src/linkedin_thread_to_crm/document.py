# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Document adapter over saved LinkedIn pages (HTML/MHTML)."""

from __future__ import annotations

import codecs
import logging
import re
from collections.abc import Iterable
from email import policy
from email.message import Message
from email.parser import BytesParser
from pathlib import Path
from typing import Any, Protocol

from bs4 import BeautifulSoup, Tag
from bs4.element import NavigableString, PreformattedString

LOGGER = logging.getLogger(__name__)

# Elements that start a new line in rendered text.
_BLOCK_TAGS = frozenset(
    {
        "address", "article", "aside", "blockquote", "dd", "div", "dl", "dt",
        "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2", "h3",
        "h4", "h5", "h6", "header", "hr", "li", "main", "nav", "ol", "p", "pre",
        "section", "table", "tr", "ul",
    }
)
_HIDDEN_TAGS = frozenset({"script", "style", "template", "noscript", "head", "title"})

# Source newlines inside text nodes are not rendered line breaks.
_WHITESPACE_RE = re.compile(r"\s+")
_SAVED_FROM_RE = re.compile(r"<!--\s*saved from url=\(\d+\)(\S+?)\s*-->", re.I)


class DocumentAdapter(Protocol):
    """Read-only capabilities the extraction pipeline needs from a document."""

    location: str

    def select(self, selector: str, root: Any = None) -> list[Any]: ...

    def select_one(self, selector: str, root: Any = None) -> Any | None: ...

    def text_content(self, element: Any) -> str: ...

    def rendered_text(self, element: Any) -> str: ...

    def attribute(self, element: Any, name: str) -> str: ...

    def classes(self, element: Any) -> list[str]: ...

    def ancestors(self, element: Any) -> Iterable[Any]: ...


class SoupDocument:
    """DocumentAdapter backed by BeautifulSoup with the lxml parser."""

    def __init__(self, soup: BeautifulSoup, location: str = "") -> None:
        self.soup = soup
        self.location = location

    @classmethod
    def from_html(cls, html: str, location: str = "") -> SoupDocument:
        return cls(BeautifulSoup(html, "lxml"), location)

    def select(self, selector: str, root: Tag | None = None) -> list[Tag]:
        scope = self.soup if root is None else root
        return [el for el in scope.select(selector) if isinstance(el, Tag)]

    def select_one(self, selector: str, root: Tag | None = None) -> Tag | None:
        scope = self.soup if root is None else root
        return scope.select_one(selector)

    def text_content(self, element: Tag) -> str:
        return element.get_text().strip()

    def rendered_text(self, element: Tag) -> str:
        """Approximate the browser's innerText for *element*.

        Block-level elements and ``<br>`` break lines, whitespace inside a
        line is collapsed, blank lines are dropped, and script/style content
        is ignored.
        """
        parts: list[str] = []
        _collect_rendered(element, parts)
        lines = (" ".join(line.split()) for line in "".join(parts).split("\n"))
        return "\n".join(line for line in lines if line)

    def attribute(self, element: Tag, name: str) -> str:
        value = element.get(name)
        if value is None:
            return ""
        # multi-valued attributes (class, rel) come back as lists
        if isinstance(value, list):
            return " ".join(str(v) for v in value).strip()
        return str(value).strip()

    def classes(self, element: Tag) -> list[str]:
        value = element.get("class") or []
        if isinstance(value, str):
            return value.split()
        return [str(c) for c in value]

    def ancestors(self, element: Tag) -> Iterable[Tag]:
        for parent in element.parents:
            if isinstance(parent, BeautifulSoup):
                break
            yield parent


def _collect_rendered(node: Tag, parts: list[str]) -> None:
    for child in node.children:
        if isinstance(child, Tag):
            name = (child.name or "").lower()
            if name in _HIDDEN_TAGS:
                continue
            if name == "br":
                parts.append("\n")
            elif name in _BLOCK_TAGS:
                parts.append("\n")
                _collect_rendered(child, parts)
                parts.append("\n")
            else:
                _collect_rendered(child, parts)
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(_WHITESPACE_RE.sub(" ", str(child)))


# --------------------------------------------------------------------------- #
# Thread address discovery                                                    #
# --------------------------------------------------------------------------- #


def _location_from_html(html: str, soup: BeautifulSoup) -> str:
    """Recover the page address a browser snapshot was saved from."""
    canonical = soup.select_one('link[rel="canonical"][href]')
    if canonical is not None:
        href = str(canonical.get("href") or "").strip()
        if href:
            LOGGER.debug("Thread URL taken from canonical link: %s", href)
            return href

    og_url = soup.select_one('meta[property="og:url"][content]')
    if og_url is not None:
        content = str(og_url.get("content") or "").strip()
        if content:
            LOGGER.debug("Thread URL taken from og:url: %s", content)
            return content

    saved_from = _SAVED_FROM_RE.search(html)
    if saved_from:
        LOGGER.debug("Thread URL taken from saved-from comment: %s", saved_from.group(1))
        return saved_from.group(1)

    LOGGER.debug("No thread URL found in HTML snapshot")
    return ""


# --------------------------------------------------------------------------- #
# MHTML parsing                                                               #
# --------------------------------------------------------------------------- #


def _get_email_charset_or_error(message: Message, context: str) -> str:
    """Return a usable charset for a MIME part.

    Text parts without a declared charset are US-ASCII per RFC 2045.

    Raises:
        ValueError: If the declared charset is unknown or the part is not text
    """
    charset = message.get_content_charset()
    if charset:
        try:
            codecs.lookup(charset)
        except LookupError as exc:
            LOGGER.error("Invalid charset '%s' in %s: %s", charset, context, exc)
            raise ValueError(f"Invalid charset '{charset}' in {context}") from exc
        return charset

    content_type = message.get_content_type() or ""
    if content_type.startswith("text/"):
        LOGGER.debug("No charset in %s, defaulting to US-ASCII", context)
        return "us-ascii"

    raise ValueError(
        f"No charset specified and content type '{content_type}' in {context} - "
        f"cannot determine encoding"
    )


def _read_mhtml(path: Path) -> tuple[str, str]:
    """Return (html, location) for the first text/html part of an MHTML file."""
    LOGGER.debug("Starting MHTML parsing for: %s", path)
    try:
        with path.open("rb") as f:
            msg = BytesParser(policy=policy.default).parse(f)
    except Exception as exc:
        LOGGER.error("Failed to parse MHTML file %s: %s", path, exc, exc_info=True)
        raise ValueError(f"MHTML parsing failed for {path}: {exc}") from exc

    location = str(msg.get("Snapshot-Content-Location") or "").strip()

    for i, part in enumerate(msg.walk()):
        if part.is_multipart():
            continue
        ctype = (part.get_content_type() or "").lower()
        if not ctype.startswith("text/html"):
            LOGGER.debug("Skipping MHTML part %d (%s)", i, ctype)
            continue

        payload = part.get_payload(decode=True)
        if not isinstance(payload, bytes):
            raise ValueError(f"Unexpected payload in {path.name} part {i}")
        charset = _get_email_charset_or_error(part, f"{path.name} HTML part {i}")
        try:
            html = payload.decode(charset)
        except UnicodeDecodeError as exc:
            LOGGER.error("HTML part encoding error in %s part %d: %s", path, i, exc)
            raise ValueError(f"HTML part encoding error in {path.name}: {exc}") from exc

        if not location:
            location = str(part.get("Content-Location") or "").strip()
        LOGGER.info("MHTML HTML part %d decoded: charset=%s, length=%d chars", i, charset, len(html))
        return html, location

    raise ValueError(f"No text/html parts found in {path}")


def load_document(file_path: Path, location: str | None = None) -> SoupDocument:
    """Load a saved thread page as a document adapter.

    Args:
        file_path: Saved page (.html, .htm, .mhtml or .mht)
        location: Thread URL override; discovered from the snapshot if omitted

    Returns:
        A SoupDocument whose ``location`` is the thread URL ("" if unknown)

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the format is unsupported or the MHTML can't be decoded
    """
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix in (".html", ".htm"):
        html = file_path.read_text(encoding="utf-8")
        part_location = ""
    elif suffix in (".mhtml", ".mht"):
        html, part_location = _read_mhtml(file_path)
    else:
        raise ValueError(f"Unsupported file format: {suffix}")

    soup = BeautifulSoup(html, "lxml")
    if location:
        resolved = location
    elif part_location:
        resolved = part_location
    else:
        resolved = _location_from_html(html, soup)

    LOGGER.info("Loaded %s (%d chars), thread URL=%r", file_path.name, len(html), resolved)
    return SoupDocument(soup, resolved)
