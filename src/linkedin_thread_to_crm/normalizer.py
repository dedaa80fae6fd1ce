# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Noise removal for message text scraped from the messaging UI."""

from __future__ import annotations

import logging
import re

LOGGER = logging.getLogger(__name__)

# "3 notifications total - " badges the page injects into message bubbles
_NOTIFICATION_COUNTER_RE = re.compile(r"\d+\s+notifications?\s+total\s*-?\s*", re.I)

_SYSTEM_PHRASES = ("sent the following message",)


def normalize(text: str) -> str:
    """Strip notification counters and lines mentioning notifications."""
    stripped = _NOTIFICATION_COUNTER_RE.sub("", text)
    lines = [_NOTIFICATION_COUNTER_RE.sub("", line) for line in stripped.split("\n")]
    kept = [line for line in lines if "notifications" not in line.lower()]
    return "\n".join(kept).strip()


def is_noise(text: str) -> bool:
    """True for text that the page generated rather than a participant."""
    if not text:
        return True
    lower = text.lower()
    if "notifications total" in lower:
        return True
    # also covers "sent the following messages"
    if any(phrase in lower for phrase in _SYSTEM_PHRASES):
        return True
    return "view" in lower and "profile" in lower


def clean_message(text: str) -> str | None:
    """Return the normalized text, or None if the message must be dropped."""
    cleaned = normalize(text)
    if is_noise(cleaned):
        LOGGER.debug("Dropping noise text: %r", text[:60])
        return None
    return cleaned
