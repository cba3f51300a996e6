"""Config loading: YAML file -> validated, immutable GChatConfig."""
from __future__ import annotations

import logging
import shutil
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

from gchat.errors import ConfigError
from gchat.formats import always, format_permission, never, permission_predicate
from gchat.models import CLICK_TYPES, ChatFormat, GChatConfig, RequirePermission
from gchat.permissions import PermissionBackend

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "config.yml"
BUNDLED_CONFIG = "config.yml"


def ensure_config_file(path: str | Path) -> Path:
    """Copy the bundled default config to path if nothing exists there yet."""
    path = Path(path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        with resources.as_file(resources.files("gchat").joinpath(BUNDLED_CONFIG)) as bundled:
            shutil.copyfile(bundled, path)
        logger.info("Wrote default config to %s", path)
    return path


def load_config(path: str | Path) -> dict:
    """Load YAML config from path."""
    with open(path, encoding="utf-8") as f:
        try:
            return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"config: {path}: {e}") from e


def validate_config(config: dict) -> None:
    """Validate require-permission and formats; raise ConfigError on error."""
    if not isinstance(config, dict):
        raise ConfigError("config: top level must be a mapping")

    require = config.get("require-permission") or {}
    if not isinstance(require, dict):
        raise ConfigError("config: require-permission must be a dict")
    for key in ("send", "receive", "passthrough"):
        if key in require and not isinstance(require[key], bool):
            raise ConfigError(f"config: require-permission.{key} must be a boolean")
    send_fail = require.get("send-fail")
    if send_fail is not None and not isinstance(send_fail, str):
        raise ConfigError("config: require-permission.send-fail must be a string")

    formats = config.get("formats") or {}
    if not isinstance(formats, dict):
        raise ConfigError("config: formats must be a dict of id -> format")
    for fid, fmt in formats.items():
        where = f"formats.{fid}"
        if not isinstance(fmt, dict):
            raise ConfigError(f"config: {where} must be a dict")
        if not isinstance(fmt.get("format"), str):
            raise ConfigError(f"config: {where} missing 'format' string")
        priority = fmt.get("priority", 0)
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise ConfigError(f"config: {where}.priority must be an integer")
        if not isinstance(fmt.get("check-permission", True), bool):
            raise ConfigError(f"config: {where}.check-permission must be a boolean")
        extra = fmt.get("format-extra") or {}
        if not isinstance(extra, dict):
            raise ConfigError(f"config: {where}.format-extra must be a dict")
        for key in ("hover", "click-value"):
            if key in extra and not isinstance(extra[key], str):
                raise ConfigError(f"config: {where}.format-extra.{key} must be a string")
        click_type = extra.get("click-type")
        if click_type is not None and click_type not in CLICK_TYPES:
            raise ConfigError(
                f"config: {where}.format-extra.click-type '{click_type}' not one of {', '.join(CLICK_TYPES)}"
            )
        if click_type is not None and not isinstance(extra.get("click-value"), str):
            raise ConfigError(f"config: {where}.format-extra.click-value required with click-type")


def _parse_format(fid: str, fmt: dict, permissions: PermissionBackend | None) -> ChatFormat:
    check_permission = fmt.get("check-permission", True)
    if check_permission:
        if permissions is None:
            logger.warning("format '%s' checks permission but no permission backend is set; it can never match", fid)
            predicate = never
        else:
            predicate = permission_predicate(permissions, format_permission(fid))
    else:
        predicate = always
    extra = fmt.get("format-extra") or {}
    return ChatFormat(
        id=str(fid),
        template=fmt["format"],
        predicate=predicate,
        priority=fmt.get("priority", 0),
        hover_text=extra.get("hover"),
        click_type=extra.get("click-type"),
        click_value=extra.get("click-value"),
    )


def parse_config(config: dict, permissions: PermissionBackend | None = None) -> GChatConfig:
    """Build the config snapshot; formats sorted by priority, highest first.

    Formats with equal priority keep their file order.
    """
    validate_config(config)
    require = config.get("require-permission") or {}
    formats = [
        _parse_format(str(fid), fmt, permissions)
        for fid, fmt in (config.get("formats") or {}).items()
    ]
    formats.sort(key=lambda f: f.priority, reverse=True)
    return GChatConfig(
        formats=tuple(formats),
        require_permission=RequirePermission(
            send=require.get("send", False),
            send_fail=require.get("send-fail"),
            receive=require.get("receive", False),
            passthrough=require.get("passthrough", True),
        ),
    )


def read_config(path: str | Path, permissions: PermissionBackend | None = None) -> GChatConfig:
    """Load, validate and parse the config at path, writing the default first if missing."""
    path = ensure_config_file(path)
    return parse_config(load_config(path), permissions)
