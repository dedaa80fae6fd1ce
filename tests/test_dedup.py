# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later
"""Tests for message deduplication."""

from linkedin_thread_to_crm.dedup import deduplicate, prefer_specific
from linkedin_thread_to_crm.models import Direction, Message


def _msg(index: int, sender: str, text: str, direction: Direction = Direction.INBOUND) -> Message:
    return Message(index=index, sender=sender, text=text, timestamp=None, direction=direction)


def test_exact_duplicates_keep_first() -> None:
    first = _msg(1, "Jordan Lee", "Hello")
    result = deduplicate([first, _msg(2, "Sam Doe", "Hello")])
    assert result == [first]


def test_specific_label_replaces_generic() -> None:
    generic = _msg(2, "You", "Hello there", Direction.OUTBOUND)
    specific = _msg(5, "Jordan Lee", "Hello there", Direction.INBOUND)

    (kept,) = deduplicate([generic, specific])

    assert kept.sender == "Jordan Lee"
    assert kept.direction is Direction.INBOUND
    assert kept.index == 2


def test_generic_never_replaces_specific() -> None:
    specific = _msg(1, "Jordan Lee", "Hello")
    assert deduplicate([specific, _msg(2, "Other", "Hello")]) == [specific]


def test_two_generic_labels_keep_first() -> None:
    first = _msg(1, "Other", "Hello")
    assert prefer_specific(first, _msg(2, "You", "Hello")) is first


def test_order_and_case_sensitivity() -> None:
    messages = [
        _msg(1, "You", "Hi"),
        _msg(2, "Jordan Lee", "hi"),
        _msg(3, "You", "Later"),
        _msg(4, "Jordan Lee", "Hi"),
    ]
    result = deduplicate(messages)

    assert [m.text for m in result] == ["Hi", "hi", "Later"]
    assert [m.index for m in result] == [1, 2, 3]
    assert result[0].sender == "Jordan Lee"


def test_empty_input() -> None:
    assert deduplicate([]) == []
