# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later
"""Shared fixtures: synthetic LinkedIn messaging pages."""

from collections.abc import Callable

import pytest

from linkedin_thread_to_crm.document import SoupDocument

THREAD_URL = "https://www.linkedin.com/messaging/thread/2-abc123/"

THREAD_HTML = f"""<!DOCTYPE html>
<html>
<head>
<title>Messaging | LinkedIn</title>
<link rel="canonical" href="{THREAD_URL}">
</head>
<body>
<header class="global-nav"><span class="notification-badge">3 notifications total</span></header>
<div class="msg-thread">
  <div class="msg-entity-lockup">
    <h2 class="msg-entity-lockup__entity-title">Jordan Lee</h2>
    <a href="https://www.linkedin.com/in/jordan-lee-123/">View profile</a>
  </div>
  <ul class="msg-s-message-list-content">
    <li class="msg-s-message-list__event">
      <div class="msg-s-event-listitem msg-s-event-listitem--other">
        <time datetime="2025-03-04T10:01:00Z">10:01 AM</time>
        <p class="msg-s-event-listitem__body">Jordan: Are we still on for Tuesday?</p>
      </div>
    </li>
    <li class="msg-s-message-list__event">
      <div class="msg-s-event-listitem">
        <time>10:05 AM</time>
        <p class="msg-s-event-listitem__body">Yes, see you at 3pm</p>
      </div>
    </li>
    <li class="msg-s-message-list__event">
      <div class="msg-s-event-listitem">
        <p class="msg-s-event-listitem__body">1 notification total - Great, thanks!</p>
      </div>
    </li>
    <li class="msg-s-message-list__event">
      <div class="msg-s-event-listitem msg-s-event-listitem--other">
        <p class="msg-s-event-listitem__body">Great, thanks!</p>
      </div>
    </li>
    <li class="msg-s-message-list__event">
      <div class="msg-s-event-listitem msg-s-event-listitem--other">
        <p class="msg-s-event-listitem__body">Jordan Lee sent the following messages at 10:07 AM</p>
      </div>
    </li>
  </ul>
</div>
</body>
</html>
"""


@pytest.fixture
def make_document() -> Callable[..., SoupDocument]:
    """Build a SoupDocument from an HTML string."""

    def _make(html: str, location: str = "") -> SoupDocument:
        return SoupDocument.from_html(html, location)

    return _make


@pytest.fixture
def thread_document(make_document) -> SoupDocument:
    return make_document(THREAD_HTML, THREAD_URL)
