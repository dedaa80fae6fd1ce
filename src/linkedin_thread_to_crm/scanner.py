# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Enumerate message containers in document order."""

from __future__ import annotations

import logging
from typing import Any

from .document import DocumentAdapter
from .locator import RENDERED, LocationRule, first_valid_match
from .models import RawMessageUnit

LOGGER = logging.getLogger(__name__)

# The first selector that matches anything defines the container set.
CONTAINER_SELECTORS: tuple[str, ...] = (
    ".msg-s-event-listitem",
    ".msg-s-message-list__event",
    "li[class*='event-listitem']",
)

TEXT_RULES: tuple[LocationRule, ...] = (
    LocationRule(".msg-s-event-listitem__body", RENDERED),
    LocationRule(".msg-s-message-group__text", RENDERED),
    LocationRule(".msg-s-event-listitem__message-bubble", RENDERED),
    LocationRule("[class*='message-body']", RENDERED),
    LocationRule("[class*='msg-s-event-listitem__body']", RENDERED),
)

TIMESTAMP_RULES: tuple[LocationRule, ...] = (
    LocationRule("time", "datetime"),
    LocationRule("time"),
)

# Classes LinkedIn puts on items written by the other party.
INBOUND_MARKERS = frozenset(
    {
        "msg-s-event-listitem--other",
        "msg-s-message-group--other",
    }
)


def find_containers(document: DocumentAdapter) -> list[Any]:
    for selector in CONTAINER_SELECTORS:
        containers = document.select(selector)
        if containers:
            LOGGER.debug("Selector %r matched %d message containers", selector, len(containers))
            return containers
        LOGGER.debug("Selector %r matched no message containers", selector)
    LOGGER.warning("No message containers found in document")
    return []


def _carries_inbound_marker(document: DocumentAdapter, container: Any) -> bool:
    if INBOUND_MARKERS.intersection(document.classes(container)):
        return True
    for ancestor in document.ancestors(container):
        if INBOUND_MARKERS.intersection(document.classes(ancestor)):
            return True
    marker_selector = ", ".join(f".{marker}" for marker in sorted(INBOUND_MARKERS))
    return document.select_one(marker_selector, container) is not None


def scan_container(document: DocumentAdapter, container: Any, ordinal: int) -> RawMessageUnit:
    text = first_valid_match(document, TEXT_RULES, root=container)
    if not text:
        text = document.rendered_text(container)
        LOGGER.debug("Message %d: no body markup, using full container text", ordinal)
    timestamp = first_valid_match(document, TIMESTAMP_RULES, root=container) or None
    is_outgoing = not _carries_inbound_marker(document, container)
    return RawMessageUnit(ordinal=ordinal, raw_text=text, timestamp=timestamp, is_outgoing=is_outgoing)


def scan_messages(document: DocumentAdapter) -> list[RawMessageUnit]:
    """Return one unit per container, empty ones included."""
    units = [
        scan_container(document, container, ordinal)
        for ordinal, container in enumerate(find_containers(document), start=1)
    ]
    LOGGER.info("Scanned %d message containers", len(units))
    return units
