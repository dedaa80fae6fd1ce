# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later
"""Tests for message container scanning."""

from linkedin_thread_to_crm.models import RawMessageUnit
from linkedin_thread_to_crm.scanner import scan_messages


def test_scan_thread(thread_document) -> None:
    units = scan_messages(thread_document)

    assert [u.ordinal for u in units] == [1, 2, 3, 4, 5]
    assert units[0] == RawMessageUnit(
        ordinal=1,
        raw_text="Jordan: Are we still on for Tuesday?",
        timestamp="2025-03-04T10:01:00Z",
        is_outgoing=False,
    )
    assert units[1].timestamp == "10:05 AM"
    assert units[1].is_outgoing
    assert units[2].timestamp is None
    assert [u.is_outgoing for u in units] == [False, True, True, False, False]


def test_specific_body_markup_preferred(make_document) -> None:
    document = make_document(
        """
        <div class="msg-s-event-listitem">
          <div class="msg-s-event-listitem__message-bubble">
            <span class="sender">Me</span>
            <p class="msg-s-event-listitem__body">Only the body</p>
          </div>
        </div>
        """
    )
    assert scan_messages(document)[0].raw_text == "Only the body"


def test_generic_body_attribute_fallback(make_document) -> None:
    document = make_document(
        '<div class="msg-s-event-listitem"><div class="x-message-body-v2">Generic body</div></div>'
    )
    assert scan_messages(document)[0].raw_text == "Generic body"


def test_falls_back_to_container_text(make_document) -> None:
    document = make_document(
        '<div class="msg-s-event-listitem"><span>Plain</span><div>container text</div></div>'
    )
    assert scan_messages(document)[0].raw_text == "Plain\ncontainer text"


def test_empty_container_is_still_emitted(make_document) -> None:
    document = make_document(
        '<div class="msg-s-event-listitem"></div><div class="msg-s-event-listitem"><p class="msg-s-event-listitem__body">Hi</p></div>'
    )
    units = scan_messages(document)
    assert [(u.ordinal, u.raw_text) for u in units] == [(1, ""), (2, "Hi")]


def test_fallback_container_selector(make_document) -> None:
    document = make_document(
        """
        <ul>
          <li class="msg-s-message-list__event"><p class="msg-s-event-listitem__body">One</p></li>
          <li class="msg-s-message-list__event"><p class="msg-s-event-listitem__body">Two</p></li>
        </ul>
        """
    )
    assert [u.raw_text for u in scan_messages(document)] == ["One", "Two"]


def test_inbound_marker_on_ancestor_or_descendant(make_document) -> None:
    document = make_document(
        """
        <div class="msg-s-message-group--other">
          <div class="msg-s-event-listitem"><p class="msg-s-event-listitem__body">From ancestor</p></div>
        </div>
        <div class="msg-s-event-listitem">
          <div class="msg-s-event-listitem--other"><p class="msg-s-event-listitem__body">From descendant</p></div>
        </div>
        <div class="msg-s-event-listitem"><p class="msg-s-event-listitem__body">Mine</p></div>
        """
    )
    assert [u.is_outgoing for u in scan_messages(document)] == [False, False, True]


def test_no_containers(make_document) -> None:
    assert scan_messages(make_document("<html><body><p>Empty inbox</p></body></html>")) == []
