# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Sender attribution for scanned message units.

Precedence, highest first:

1. structural flag: sets the direction and the default label
   ("You" for outgoing, the other party's name or "Other" for inbound);
2. name match: a ``Name: text`` prefix containing the other party's first
   name is attributed to them, whatever the direction;
3. inbound trust: on inbound units any other plausible prefix becomes the
   label verbatim.

A prefix on an outgoing unit that does not name the other party is left in
the text, since it is usually a quoted fragment rather than a sender.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from .identity import first_name_token
from .models import OTHER, YOU, Direction, Message, RawMessageUnit
from .normalizer import is_noise, normalize

LOGGER = logging.getLogger(__name__)

_SENDER_PREFIX_RE = re.compile(r"^([^:]+):\s*(.*)$", re.S)
PREFIX_MAX_LENGTH = 50


@dataclass(frozen=True)
class Attribution:
    sender: str
    text: str


@dataclass(frozen=True)
class _Prefix:
    name: str
    body: str


PrefixRule = Callable[[RawMessageUnit, _Prefix, str], Optional[Attribution]]


def split_sender_prefix(text: str) -> tuple[str, str] | None:
    """Split ``"Name: body"`` into (name, body) when the prefix looks like a name."""
    match = _SENDER_PREFIX_RE.match(text)
    if not match:
        return None
    name = match.group(1).strip()
    if not name or len(name) >= PREFIX_MAX_LENGTH or "-" in name:
        return None
    return name, match.group(2).strip()


def _default_attribution(unit: RawMessageUnit, other_party_name: str) -> Attribution:
    sender = YOU if unit.is_outgoing else (other_party_name or OTHER)
    return Attribution(sender=sender, text=unit.raw_text)


def _name_match_rule(unit: RawMessageUnit, prefix: _Prefix, other_party_name: str) -> Attribution | None:
    token = first_name_token(other_party_name)
    if token and token in prefix.name.lower():
        return Attribution(sender=other_party_name, text=prefix.body)
    return None


def _inbound_trust_rule(unit: RawMessageUnit, prefix: _Prefix, other_party_name: str) -> Attribution | None:
    if unit.is_outgoing:
        return None
    return Attribution(sender=prefix.name, text=prefix.body)


PREFIX_RULES: tuple[PrefixRule, ...] = (_name_match_rule, _inbound_trust_rule)


def is_page_text(unit: RawMessageUnit) -> bool:
    """True when the whole unit is text the page generated.

    Checked on the raw text before any prefix split, so narration such as
    "Jordan Lee sent the following messages at 10:07 AM" is not cut at the
    clock colon and mistaken for a sender prefix.
    """
    return is_noise(normalize(unit.raw_text))


def attribute(unit: RawMessageUnit, other_party_name: str) -> Attribution:
    """Return the sender label and message body for *unit*."""
    attribution = _default_attribution(unit, other_party_name)
    split = split_sender_prefix(unit.raw_text)
    if split is None:
        return attribution

    prefix = _Prefix(*split)
    for rule in PREFIX_RULES:
        override = rule(unit, prefix, other_party_name)
        if override is not None:
            LOGGER.debug("Message %d: %s relabelled sender as %r", unit.ordinal, rule.__name__, override.sender)
            return override
    return attribution


def classify(unit: RawMessageUnit, other_party_name: str) -> Message:
    """Build a Message whose direction mirrors the structural flag.

    The text is not normalized yet.
    """
    attribution = attribute(unit, other_party_name)
    return Message(
        index=unit.ordinal,
        sender=attribution.sender,
        text=attribution.text,
        timestamp=unit.timestamp,
        direction=Direction.OUTBOUND if unit.is_outgoing else Direction.INBOUND,
    )
