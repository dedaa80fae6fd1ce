# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Value types shared by the extraction pipeline and the record layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

PLATFORM = "linkedin"

YOU = "You"
OTHER = "Other"
GENERIC_LABELS = frozenset({YOU, OTHER})


class Direction(str, Enum):
    """Which side of the thread wrote a message."""

    INBOUND = "Inbound"
    OUTBOUND = "Outbound"


class ExtractionMode(str, Enum):
    """Pipeline mode selected by the caller."""

    LATEST = "latest"
    THREAD = "thread"


@dataclass(frozen=True)
class RawMessageUnit:
    """One scanned message container, before attribution and cleanup."""

    ordinal: int
    raw_text: str
    timestamp: str | None
    is_outgoing: bool


@dataclass(frozen=True)
class Message:
    index: int
    sender: str
    text: str
    timestamp: str | None
    direction: Direction

    @property
    def has_generic_sender(self) -> bool:
        return self.sender in GENERIC_LABELS


@dataclass(frozen=True)
class Identity:
    """The other party as resolved from the thread header and links."""

    name: str = ""
    profile_url: str = ""


@dataclass
class ConversationSummary:
    thread_url: str = ""
    other_party_name: str = ""
    profile_url: str = ""
    latest_message: str = ""
    messages: list[Message] = field(default_factory=list)


@dataclass
class CrmRecord:
    """Record forwarded to the system of record."""

    direction: str
    person_type: str
    profile_url: str
    other_party_name: str
    thread_url: str
    message: str
    platform: str = PLATFORM

    def to_payload(self) -> dict[str, str]:
        """Return the JSON body with the keys the CRM web app expects."""
        return {
            "platform": self.platform,
            "direction": self.direction,
            "personType": self.person_type,
            "profileUrl": self.profile_url,
            "otherPartyName": self.other_party_name,
            "threadUrl": self.thread_url,
            "message": self.message,
        }
