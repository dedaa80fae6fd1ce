# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Collapse repeated messages.

LinkedIn renders some bubbles twice (grouped and ungrouped views), often
once with a generic sender. Messages are keyed by exact text; the first
occurrence fixes the position and a later one can only contribute a more
specific sender.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable

from .models import Message

LOGGER = logging.getLogger(__name__)


def prefer_specific(held: Message, candidate: Message) -> Message:
    """Merge two messages with the same text into the one to keep."""
    if held.has_generic_sender and not candidate.has_generic_sender:
        return dataclasses.replace(candidate, index=held.index)
    return held


def deduplicate(messages: Iterable[Message]) -> list[Message]:
    best: dict[str, Message] = {}
    for message in messages:
        held = best.get(message.text)
        if held is None:
            best[message.text] = message
            continue
        best[message.text] = prefer_specific(held, message)
        LOGGER.debug("Duplicate of message %d dropped (index %d)", held.index, message.index)
    return list(best.values())
