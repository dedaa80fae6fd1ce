# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Conversation extraction from a LinkedIn messaging thread document."""

from __future__ import annotations

import dataclasses
import logging

from .classifier import classify, is_page_text
from .dedup import deduplicate
from .document import DocumentAdapter
from .identity import resolve_identity
from .models import ConversationSummary, ExtractionMode, Message
from .normalizer import clean_message
from .scanner import scan_messages

LOGGER = logging.getLogger(__name__)

LATEST_SELECTOR = (
    ".msg-s-event-listitem__body, "
    ".msg-s-message-group__text, "
    ".msg-s-event-listitem__message-bubble"
)
LATEST_WINDOW = 20


def extract_latest_message(document: DocumentAdapter) -> str:
    """Return the newest message body that is not page noise, or ""."""
    candidates = document.select(LATEST_SELECTOR)[-LATEST_WINDOW:]
    LOGGER.debug("Checking %d latest message candidates", len(candidates))
    for element in reversed(candidates):
        cleaned = clean_message(document.rendered_text(element))
        if cleaned is not None:
            return cleaned
    LOGGER.info("No latest message found")
    return ""


def extract_thread(document: DocumentAdapter, other_party_name: str) -> list[Message]:
    """Scan, attribute, clean and deduplicate every message in the thread."""
    cleaned: list[Message] = []
    for unit in scan_messages(document):
        if is_page_text(unit):
            LOGGER.debug("Dropping page text in message %d", unit.ordinal)
            continue
        message = classify(unit, other_party_name)
        text = clean_message(message.text)
        if text is None:
            continue
        cleaned.append(dataclasses.replace(message, text=text))

    messages = deduplicate(cleaned)
    LOGGER.info("Extracted %d messages (%d before deduplication)", len(messages), len(cleaned))
    return messages


def extract_conversation(document: DocumentAdapter, mode: ExtractionMode) -> ConversationSummary:
    """Extract a ConversationSummary; never raises for missing data.

    Args:
        document: Adapter over the rendered thread page
        mode: ``LATEST`` for the newest message only, ``THREAD`` for all messages

    Returns:
        Summary with empty strings for anything that could not be resolved
    """
    identity = resolve_identity(document)
    summary = ConversationSummary(
        thread_url=document.location,
        other_party_name=identity.name,
        profile_url=identity.profile_url,
    )
    if ExtractionMode(mode) is ExtractionMode.THREAD:
        summary.messages = extract_thread(document, identity.name)
    else:
        summary.latest_message = extract_latest_message(document)
    return summary
