"""Tests for the command line entry point."""

import asyncio

import pytest

import discord_lookup

from discord_lookup import ADMIN_PERMISSIONS
from discord_lookup.__main__ import build_parser, main, resolve_token, run


def parse(*argv: str):
    return build_parser().parse_args(list(argv))


class TestCommandLine:
    def test_token_from_environment(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "env-token")
        assert resolve_token(None) == "env-token"
        assert resolve_token("flag-token") == "flag-token"

    def test_missing_token(self, monkeypatch):
        monkeypatch.delenv("DISCORD_TOKEN", raising=False)
        with pytest.raises(SystemExit):
            resolve_token(None)

    def test_members(self, discord, member_payload, capsys):
        discord.reply_json([member_payload("1")])

        code = asyncio.run(run(parse("members", "--guild", "10", "--token", "t")))

        assert code == 0
        assert capsys.readouterr().out.startswith('[{"avatar":""')
        assert discord.calls[0]["headers"]["Authorization"] == "Bot t"

    def test_admin_check(self, discord, capsys):
        discord.reply_json([{"id": "10", "permissions": ADMIN_PERMISSIONS}])

        code = asyncio.run(run(parse("admin-check", "--guild", "10", "--token", "t")))

        assert code == 0
        assert capsys.readouterr().out.strip() == "true"

    def test_user_not_found(self, discord, capsys):
        discord.reply_json({"message": "Unknown User", "code": 10013}, status=404)

        code = asyncio.run(run(parse("user", "--user", "1", "--token", "t")))

        captured = capsys.readouterr()
        assert code == 1
        assert captured.out == ""
        assert "could not be fetched" in captured.err

    def test_not_admin_exits_with_one(self, discord, capsys):
        discord.reply_json([{"id": "10", "permissions": 8}])

        code = asyncio.run(run(parse("admin-check", "--guild", "10", "--token", "t")))

        assert code == 1
        assert capsys.readouterr().out.strip() == "false"

    @pytest.mark.parametrize("flag", ["-v", "--version"])
    def test_version(self, flag, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["discord.lookup", flag])

        main()

        out = capsys.readouterr().out
        assert f"discord.lookup v{discord_lookup.__version__}" in out
        assert out.startswith("python ")
        assert "aiohttp" in out

    def test_main_exit_code(self, discord, monkeypatch):
        discord.reply_json([{"id": "10", "permissions": 8}])
        monkeypatch.setattr(discord_lookup, "setup_logger", lambda **kwargs: None)
        monkeypatch.setattr("sys.argv", ["discord.lookup", "admin-check", "--guild", "10", "--token", "t"])

        with pytest.raises(SystemExit) as exc:
            main()

        assert exc.value.code == 1
