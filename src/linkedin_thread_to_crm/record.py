# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Assemble the CRM record and render message lists for it."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from io import StringIO

from .models import YOU, ConversationSummary, CrmRecord, Direction, ExtractionMode, Message

LOGGER = logging.getLogger(__name__)

LINES = "lines"
BLOCKS = "blocks"
RENDER_STYLES = (LINES, BLOCKS)

NO_MESSAGES = "No messages found"
_RULE = "-" * 40


def _display_sender(message: Message) -> str:
    return YOU if message.direction is Direction.OUTBOUND else message.sender


def _render_lines(messages: Sequence[Message]) -> str:
    return "\n".join(f"{_display_sender(m)} - {m.text}" for m in messages)


def _render_blocks(messages: Sequence[Message]) -> str:
    output = StringIO()
    for i, message in enumerate(messages):
        output.write(f"#{message.index} {_display_sender(message)} ({message.direction.value})\n")
        if message.timestamp:
            output.write(f"{message.timestamp}\n")
        output.write(f"{message.text}\n")

        # Add separator between messages (except last)
        if i < len(messages) - 1:
            output.write(f"{_RULE}\n")
    return output.getvalue().rstrip("\n")


def render_messages(messages: Sequence[Message], style: str = LINES) -> str:
    """Render *messages* as text for the record's ``message`` field.

    Args:
        messages: Extracted thread messages
        style: ``"lines"`` for one ``sender - text`` line per message, or
            ``"blocks"`` for index/direction/timestamp blocks between rules

    Raises:
        ValueError: If the style is unknown
    """
    if style not in RENDER_STYLES:
        raise ValueError(f"Unknown render style '{style}'. Use one of: {', '.join(RENDER_STYLES)}")
    if not messages:
        return NO_MESSAGES
    if style == BLOCKS:
        return _render_blocks(messages)
    return _render_lines(messages)


def build_record(
    summary: ConversationSummary,
    direction: str,
    person_type: str,
    message: str | None = None,
    style: str = LINES,
    mode: ExtractionMode = ExtractionMode.LATEST,
) -> CrmRecord:
    """Build the CRM record from a summary.

    ``message`` wins when given; otherwise the rendered thread is used in
    full-thread mode (``NO_MESSAGES`` for an empty thread) and the latest
    message in latest-only mode.
    """
    if message is None:
        if ExtractionMode(mode) is ExtractionMode.THREAD:
            message = render_messages(summary.messages, style)
        else:
            message = summary.latest_message
    return CrmRecord(
        direction=direction.strip(),
        person_type=person_type.strip(),
        profile_url=summary.profile_url.strip(),
        other_party_name=summary.other_party_name.strip(),
        thread_url=summary.thread_url.strip(),
        message=message.strip(),
    )


def require_profile_url(record: CrmRecord) -> None:
    """Raise ValueError with an actionable hint if the profile URL is missing."""
    if not record.profile_url:
        LOGGER.debug("Record has no profile URL: %s", record)
        raise ValueError(
            "Couldn't detect profile URL. Save the thread with the person's "
            "/in/ profile link visible, or pass --profile-url, then try again."
        )
