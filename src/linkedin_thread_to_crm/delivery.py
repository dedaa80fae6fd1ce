# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Fire-and-forget delivery of a record to the CRM web app."""

from __future__ import annotations

import logging

import requests

from .models import CrmRecord

LOGGER = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
HEADERS = {"Content-Type": "application/json"}


def deliver(record: CrmRecord, endpoint_url: str, timeout: float = DEFAULT_TIMEOUT) -> None:
    """POST *record* as JSON to *endpoint_url* once.

    The response is not read or validated; dispatching without a transport
    error counts as success. There are no retries.

    Raises:
        ValueError: If no endpoint is configured
        RuntimeError: If the request could not be dispatched
    """
    url = endpoint_url.strip()
    if not url:
        raise ValueError("No endpoint URL configured")

    LOGGER.info("Sending record for %r to %s", record.other_party_name, url)
    try:
        response = requests.post(url, json=record.to_payload(), headers=HEADERS, timeout=timeout)
    except requests.RequestException as exc:
        LOGGER.error("Delivery to %s failed: %s", url, exc)
        raise RuntimeError(f"Could not send record to {url}: {exc}") from exc
    LOGGER.debug("Endpoint answered HTTP %s (not checked)", response.status_code)
