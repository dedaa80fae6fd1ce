# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Resolve the other party's display name and profile URL."""

from __future__ import annotations

import logging
from urllib.parse import urljoin, urlparse

from .document import DocumentAdapter
from .locator import LocationRule, first_valid_match, is_plausible_name
from .models import Identity

LOGGER = logging.getLogger(__name__)

# Most specific thread-header markup first, bare heading last.
NAME_RULES: tuple[LocationRule, ...] = (
    LocationRule(".msg-entity-lockup__entity-title"),
    LocationRule("h2.msg-entity-lockup__entity-title"),
    LocationRule("[data-control-name='thread_details_name']"),
    LocationRule(".msg-thread__link-to-profile"),
    LocationRule(".msg-thread__name"),
    LocationRule("h2"),
)

PROFILE_PATH_PREFIX = "/in/"
PROFILE_HOST = "linkedin.com"


def first_name_token(name: str) -> str:
    """Lower-cased first whitespace-delimited token of *name*, or ""."""
    tokens = name.lower().split()
    return tokens[0] if tokens else ""


def resolve_name(document: DocumentAdapter) -> str:
    name = first_valid_match(document, NAME_RULES, accept=is_plausible_name)
    return " ".join(name.split())


def _is_profile_url(url: str) -> bool:
    parsed = urlparse(url)
    host = parsed.netloc.lower()
    if host and host != PROFILE_HOST and not host.endswith("." + PROFILE_HOST):
        return False
    slug = parsed.path[len(PROFILE_PATH_PREFIX):] if parsed.path.startswith(PROFILE_PATH_PREFIX) else ""
    return bool(slug.strip("/"))


def profile_links(document: DocumentAdapter) -> list[tuple[str, str]]:
    """Return (url, lower-cased link text) for every profile-shaped link."""
    links: list[tuple[str, str]] = []
    for anchor in document.select("a[href]"):
        href = document.attribute(anchor, "href")
        if not href:
            continue
        url = urljoin(document.location, href) if document.location else href
        if _is_profile_url(url):
            links.append((url, document.text_content(anchor).lower()))
    LOGGER.debug("Found %d profile-shaped links", len(links))
    return links


def resolve_profile_url(document: DocumentAdapter, name: str) -> str:
    """Pick the other party's profile link.

    Links are scanned once in document order and the first one whose text
    mentions "view", "profile" or the first token of *name* wins. This is a
    single first-matching-link scan, not one pass per criterion, so a
    name-matching link earlier on the page beats a later "View profile".
    Without any such link the first profile link is used.
    """
    links = profile_links(document)
    if not links:
        return ""

    token = first_name_token(name)
    for position, (url, text) in enumerate(links):
        if "view" in text or "profile" in text or (token and token in text):
            LOGGER.debug("Profile link %d selected by link-text scan: %s", position, url)
            return url

    LOGGER.debug("No link text matched; falling back to first profile link")
    return links[0][0]


def resolve_identity(document: DocumentAdapter) -> Identity:
    name = resolve_name(document)
    profile_url = resolve_profile_url(document, name)
    LOGGER.info("Resolved other party: name=%r, profile=%r", name, profile_url)
    return Identity(name=name, profile_url=profile_url)
