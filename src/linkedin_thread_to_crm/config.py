# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later

"""Persisted CRM endpoint URL."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import typer

LOGGER = logging.getLogger(__name__)

APP_NAME = "linkedin-thread-to-crm"
CONFIG_FILE_NAME = "config.json"
ENDPOINT_ENV = "LINKEDIN_THREAD_TO_CRM_ENDPOINT"
CONFIG_PATH_ENV = "LINKEDIN_THREAD_TO_CRM_CONFIG"


def config_path() -> Path:
    override = os.getenv(CONFIG_PATH_ENV)
    if override:
        return Path(override)
    return Path(typer.get_app_dir(APP_NAME)) / CONFIG_FILE_NAME


def _read_stored_endpoint(path: Path) -> str:
    if not path.exists():
        LOGGER.debug("No config file at %s", path)
        return ""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        LOGGER.warning("Ignoring unreadable config file %s: %s", path, exc)
        return ""
    if not isinstance(data, dict):
        LOGGER.warning("Ignoring config file %s: expected a JSON object", path)
        return ""
    return str(data.get("endpoint_url") or "").strip()


def load_endpoint(path: Path | None = None) -> str:
    """Return the configured endpoint URL, or "" if none is set.

    The environment variable takes precedence over the stored value.
    """
    from_env = (os.getenv(ENDPOINT_ENV) or "").strip()
    if from_env:
        LOGGER.debug("Endpoint URL taken from %s", ENDPOINT_ENV)
        return from_env
    return _read_stored_endpoint(path or config_path())


def save_endpoint(url: str, path: Path | None = None) -> Path:
    """Persist *url* and return the file it was written to."""
    target = path or config_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps({"endpoint_url": url.strip()}, indent=2) + "\n", encoding="utf-8")
    LOGGER.info("Saved endpoint URL to %s", target)
    return target
