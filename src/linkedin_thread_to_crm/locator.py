# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Ordered-fallback element lookup.

LinkedIn's class names are not a stable contract, so every lookup is a list
of ``LocationRule`` tried in order. The first rule whose first matching
element yields a value accepted by the caller's predicate wins; when none
does the result is the empty string, which callers treat as "unresolved".
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from .document import DocumentAdapter

LOGGER = logging.getLogger(__name__)

TEXT = "text"
RENDERED = "rendered"

NAME_MAX_LENGTH = 80


@dataclass(frozen=True)
class LocationRule:
    """A selector plus what to read from the element it finds.

    ``read`` is ``"text"`` for the raw text content, ``"rendered"`` for the
    line-aware rendered text, or the name of an attribute.
    """

    selector: str
    read: str = TEXT

    def value(self, document: DocumentAdapter, element: Any) -> str:
        if self.read == TEXT:
            return document.text_content(element)
        if self.read == RENDERED:
            return document.rendered_text(element)
        return document.attribute(element, self.read)


def non_empty(value: str) -> bool:
    return bool(value)


def is_plausible_name(value: str) -> bool:
    """Accept header text that can be a person's name."""
    return bool(value) and len(value) < NAME_MAX_LENGTH and "notifications" not in value.lower()


def first_valid_match(
    document: DocumentAdapter,
    rules: Sequence[LocationRule],
    accept: Callable[[str], bool] = non_empty,
    root: Any = None,
) -> str:
    """Return the first accepted value produced by *rules*, or ""."""
    for rule in rules:
        element = document.select_one(rule.selector, root)
        if element is None:
            continue
        value = rule.value(document, element).strip()
        if accept(value):
            LOGGER.debug("Rule %r matched: %r", rule.selector, value[:60])
            return value
        LOGGER.debug("Rule %r found an element but its value was rejected", rule.selector)
    return ""
