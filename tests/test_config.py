# Copyright (C) 2025 Torsten Knodt and contributors
# GNU General Public License
# SPDX-License-Identifier: GPL-3.0-or-later
"""Tests for the persisted endpoint setting."""

import json
from pathlib import Path

import pytest

from linkedin_thread_to_crm import config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    monkeypatch.delenv(config.ENDPOINT_ENV, raising=False)
    monkeypatch.delenv(config.CONFIG_PATH_ENV, raising=False)


def test_nothing_configured(tmp_path: Path) -> None:
    assert config.load_endpoint(tmp_path / "config.json") == ""


def test_save_and_load(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"

    written = config.save_endpoint(" https://script.example/exec ", path)

    assert written == path
    assert json.loads(path.read_text(encoding="utf-8")) == {"endpoint_url": "https://script.example/exec"}
    assert config.load_endpoint(path) == "https://script.example/exec"


def test_environment_overrides_file(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "config.json"
    config.save_endpoint("https://stored.example/exec", path)
    monkeypatch.setenv(config.ENDPOINT_ENV, "https://env.example/exec")

    assert config.load_endpoint(path) == "https://env.example/exec"


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_unreadable_config_is_ignored(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")
    assert config.load_endpoint(path) == ""


def test_config_path_override(tmp_path: Path, monkeypatch) -> None:
    target = tmp_path / "custom.json"
    monkeypatch.setenv(config.CONFIG_PATH_ENV, str(target))

    config.save_endpoint("https://script.example/exec")

    assert config.config_path() == target
    assert config.load_endpoint() == "https://script.example/exec"


def test_default_path_is_per_user_app_dir(monkeypatch) -> None:
    monkeypatch.setattr(config.typer, "get_app_dir", lambda name: f"/home/test/.config/{name}")
    assert config.config_path() == Path("/home/test/.config/linkedin-thread-to-crm/config.json")
