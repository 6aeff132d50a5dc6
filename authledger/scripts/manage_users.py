# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Account and key file administration."""

from __future__ import annotations

import argparse
import getpass
import sys
from datetime import UTC, datetime
from pathlib import Path

from authledger.container import Container
from authledger.shared.errors import AppError
from authledger.shared.logging import setup_logging


def _password(args: argparse.Namespace) -> str:
    if args.password is not None:
        return args.password
    return getpass.getpass(f"Password for {args.name}: ")


def cmd_add(container: Container, args: argparse.Namespace) -> int:
    container.users.add_user(args.name, _password(args))
    container.users.flush()
    print(f"Added user {args.name}")
    return 0


def cmd_delete(container: Container, args: argparse.Namespace) -> int:
    container.users.delete_user(args.name)
    revoked = container.keys.revoke_owner(args.name) if args.revoke_keys else 0
    container.registry.flush_dirty()
    print(f"Deleted user {args.name} (revoked {revoked} keys)")
    return 0


def cmd_verify(container: Container, args: argparse.Namespace) -> int:
    container.users.verify(args.name, _password(args))
    print(f"Password OK for {args.name}")
    return 0


def cmd_list(container: Container, args: argparse.Namespace) -> int:
    for name in container.users.names():
        print(name)
    return 0


def cmd_keys(container: Container, args: argparse.Namespace) -> int:
    for session in container.keys.sessions_for(args.name):
        expires = datetime.fromtimestamp(session.expires_at, UTC).isoformat()
        print(f"{session.token[:8]}…  expires {expires}")
    return 0


def cmd_cull(container: Container, args: argparse.Namespace) -> int:
    culled = container.keys.cull()
    # load() drops already-expired rows without marking the store dirty
    written = container.keys.flush()
    print(f"Culled {culled} expired keys; {written} live keys remain")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the user and key files")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="key=value configuration file (USER_FILE, KEY_FILE, ...)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level for stderr output")
    sub = parser.add_subparsers(dest="command", required=True)

    add = sub.add_parser("add", help="Add a user")
    add.add_argument("name")
    add.add_argument("--password", default=None, help="Password (prompted when omitted)")
    add.set_defaults(func=cmd_add)

    delete = sub.add_parser("delete", help="Delete a user")
    delete.add_argument("name")
    delete.add_argument(
        "--revoke-keys", action="store_true", help="Also drop every key issued to the user"
    )
    delete.set_defaults(func=cmd_delete)

    verify = sub.add_parser("verify", help="Check a user's password")
    verify.add_argument("name")
    verify.add_argument("--password", default=None, help="Password (prompted when omitted)")
    verify.set_defaults(func=cmd_verify)

    list_ = sub.add_parser("list", help="List user names")
    list_.set_defaults(func=cmd_list)

    keys = sub.add_parser("keys", help="List live keys for a user")
    keys.add_argument("name")
    keys.set_defaults(func=cmd_keys)

    cull = sub.add_parser("cull", help="Drop expired keys from the key file")
    cull.set_defaults(func=cmd_cull)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    container = Container(args.config)
    try:
        return args.func(container, args)
    except AppError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
