"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import textwrap

import pytest

from gchat.engine import GChat
from gchat.models import Player
from gchat.permissions import StaticPermissionBackend

CONFIG_YAML = textwrap.dedent(
    """\
    require-permission:
      send: false
      send-fail: "no chat for you"
      receive: false
      passthrough: true
    formats:
      default:
        priority: 0
        check-permission: false
        format: "{username}: {message}"
      staff:
        priority: 100
        format: "[STAFF] {username}: {message}"
        format-extra:
          hover: "{username} on {server_name}"
          click-type: suggest_command
          click-value: "/msg {username} "
    """
)


@pytest.fixture
def alice():
    return Player(username="Alice", uuid="0000-aaaa", server_name="lobby")


@pytest.fixture
def bob():
    return Player(username="Bob", server_name="survival")


@pytest.fixture
def permissions():
    return StaticPermissionBackend()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text(CONFIG_YAML, encoding="utf-8")
    return path


@pytest.fixture
def api(config_file, permissions):
    """GChat loaded from the test config with built-in providers registered."""
    instance = GChat.from_config_file(config_file, permissions)
    yield instance
    instance.close()
