"""CLI entry: python -m gchat.cli {render,formats,init} [--config path]."""
from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from gchat.config import DEFAULT_CONFIG, ensure_config_file
from gchat.dispatch import ChatDispatcher
from gchat.engine import GChat
from gchat.errors import GChatError
from gchat.models import Player
from gchat.permissions import StaticPermissionBackend

load_dotenv()

LOG_DIR = Path("logs")


def _setup_logging(verbose: bool = False) -> None:
    LOG_DIR.mkdir(exist_ok=True)
    log_file = LOG_DIR / "gchat.log"
    fmt = "%(asctime)s %(levelname)s %(name)s %(message)s"
    formatter = logging.Formatter(fmt)
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not root.handlers:
        h_stderr = logging.StreamHandler(sys.stderr)
        h_stderr.setFormatter(formatter)
        root.addHandler(h_stderr)
        h_file = logging.FileHandler(log_file, encoding="utf-8")
        h_file.setFormatter(formatter)
        root.addHandler(h_file)


def _player_from_args(args: argparse.Namespace) -> tuple[Player, StaticPermissionBackend]:
    player = Player(
        username=args.player,
        uuid=args.uuid or "",
        server_name=args.server,
        display_name=args.display_name,
    )
    permissions = StaticPermissionBackend()
    permissions.grant(player, *args.permission)
    permissions.set_meta(player, prefix=args.prefix, suffix=args.suffix, primary_group=args.group)
    return player, permissions


def cmd_render(args: argparse.Namespace) -> int:
    player, permissions = _player_from_args(args)
    api = GChat.from_config_file(args.config, permissions)
    try:
        outcome = ChatDispatcher(api).handle(player, args.message, online=[player])
    finally:
        api.close()
    if outcome.notice:
        print(outcome.notice, file=sys.stderr)
    if outcome.action != "broadcast":
        print(f"({outcome.action}) {args.message}")
        return 0
    print(outcome.rendered.text)
    if outcome.rendered.hover_text:
        print(f"  hover: {outcome.rendered.hover_text}")
    if outcome.rendered.click_type:
        print(f"  click: {outcome.rendered.click_type} {outcome.rendered.click_value}")
    return 0


def cmd_formats(args: argparse.Namespace) -> int:
    api = GChat.from_config_file(args.config)
    for fmt in api.get_formats():
        print(f"{fmt.priority:>5}  {fmt.id}: {fmt.template}")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    existed = Path(args.config).exists()
    path = ensure_config_file(args.config)
    print(f"config already exists: {path}" if existed else f"wrote {path}")
    return 0


def main(argv: list[str] | None = None) -> None:
    default_config = os.environ.get("GCHAT_CONFIG", DEFAULT_CONFIG)
    parser = argparse.ArgumentParser(prog="gchat", description="gChat message formatter")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_config(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--config",
            default=default_config,
            help=f"Config file path (default: {default_config})",
        )

    render_parser = sub.add_parser("render", help="Format a chat message as a player")
    add_config(render_parser)
    render_parser.add_argument("--player", required=True, help="Sender username")
    render_parser.add_argument("--server", default=None, help="Server the sender is connected to")
    render_parser.add_argument("--uuid", default=None)
    render_parser.add_argument("--display-name", default=None)
    render_parser.add_argument(
        "--permission",
        action="append",
        default=[],
        help="Permission node held by the sender (repeatable)",
    )
    render_parser.add_argument("--prefix", default=None)
    render_parser.add_argument("--suffix", default=None)
    render_parser.add_argument("--group", default=None)
    render_parser.add_argument("message")
    render_parser.set_defaults(func=cmd_render)

    formats_parser = sub.add_parser("formats", help="List formats in selection order")
    add_config(formats_parser)
    formats_parser.set_defaults(func=cmd_formats)

    init_parser = sub.add_parser("init", help="Write the default config if missing")
    add_config(init_parser)
    init_parser.set_defaults(func=cmd_init)

    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    try:
        code = args.func(args)
    except FileNotFoundError as e:
        logging.error("%s", e)
        sys.exit(1)
    except GChatError as e:
        logging.error("%s", e)
        sys.exit(1)
    sys.exit(code)


if __name__ == "__main__":
    main()
