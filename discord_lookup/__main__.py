import argparse
import asyncio
import discord_lookup
import logging
import os
import platform
import sys

from importlib.metadata import version
from typing import Optional


def get_package_version(name: str) -> str:
    try:
        output = version(name)
        if not output.lower().startswith("v"):
            output = f"v{output}"
        return output
    except Exception:
        return "N/A (not installed?)"


def show_version() -> None:
    pyver = sys.version_info

    container = [
        f"python         v{pyver.major}.{pyver.minor}.{pyver.micro}-{pyver.releaselevel}",
        f"discord.lookup v{discord_lookup.__version__}",
        f"aiohttp        {get_package_version('aiohttp')}",
        f"system_info    {platform.system()} {platform.release()} ({platform.version()})",
    ]

    print("\n".join(container))


def resolve_token(token: Optional[str]) -> str:
    output = token or os.environ.get("DISCORD_TOKEN", None)
    if not output:
        raise SystemExit("No token given, use --token or set DISCORD_TOKEN")
    return output


async def run(args: argparse.Namespace) -> int:
    token = resolve_token(args.token)

    match args.command:
        case "admin-check":
            result = await discord_lookup.admin_check(token, args.guild)
            print(discord_lookup.get_json_string(result))
            return 0 if result else 1

        case "members":
            members = await discord_lookup.get_users(token, args.guild)
            print(discord_lookup.get_json_string(members))
            return 0

        case "user":
            user = await discord_lookup.fetch_single_user(token, args.user)
            if user is None:
                print(f"User {args.user} could not be fetched", file=sys.stderr)
                return 1
            print(discord_lookup.get_json_string(user))
            return 0

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="discord.lookup",
        description="Look up guild members, users and admin rights from the command line"
    )

    parser.add_argument(
        "-v",
        "--version",
        action="store_true",
        help="Show relevant version information"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every request made"
    )

    subparsers = parser.add_subparsers(dest="command")

    admin = subparsers.add_parser(
        "admin-check",
        help="Check if a user token has full permissions in a guild"
    )
    admin.add_argument("--guild", required=True, help="Guild ID")
    admin.add_argument("--token", help="Bearer token, defaults to $DISCORD_TOKEN")

    members = subparsers.add_parser(
        "members",
        help="Print every member of a guild as JSON"
    )
    members.add_argument("--guild", required=True, help="Guild ID")
    members.add_argument("--token", help="Bot token, defaults to $DISCORD_TOKEN")

    user = subparsers.add_parser(
        "user",
        help="Print a single user as JSON"
    )
    user.add_argument("--user", required=True, help="User ID")
    user.add_argument("--token", help="Bot token, defaults to $DISCORD_TOKEN")

    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    if args.version:
        show_version()
        return

    if not args.command:
        parser.print_help()
        return

    discord_lookup.setup_logger(
        level=logging.DEBUG if args.debug else logging.WARNING,
        stream=sys.stderr
    )

    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
