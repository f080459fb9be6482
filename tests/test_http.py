"""Tests for the DiscordAPI request layer."""

import pytest

from discord_lookup import (
    DiscordAPI, DiscordServerError, Forbidden,
    HTTPException, InvalidToken, NotFound, Unauthorized
)


class TestDiscordAPI:
    def test_authorization_header(self):
        assert DiscordAPI(token="abc").authorization == "Bot abc"
        assert DiscordAPI(token="abc", token_type="Bearer").authorization == "Bearer abc"

    def test_default_base_url(self):
        assert DiscordAPI(token="abc").base_url == "https://discord.com/api"

    @pytest.mark.parametrize("token", ["line\nbreak", "carriage\rreturn", "nul\x00", "del\x7f", "émoji"])
    def test_rejects_tokens_unfit_for_a_header(self, token):
        with pytest.raises(InvalidToken):
            DiscordAPI(token=token)

    def test_accepts_tabs_and_spaces(self):
        DiscordAPI(token="with space\tand tab")

    @pytest.mark.asyncio
    async def test_only_authorization_header_is_sent(self, discord):
        discord.reply_json({"id": "1"})
        state = DiscordAPI(token="abc")

        r = await state.query("GET", "/users/1")

        assert r.response == {"id": "1"}
        assert discord.calls[0]["headers"] == {"Authorization": "Bot abc"}
        assert discord.calls[0]["res_method"] == "json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status, error", [
        (400, HTTPException),
        (401, Unauthorized),
        (403, Forbidden),
        (404, NotFound),
        (429, HTTPException),
        (502, DiscordServerError),
    ])
    async def test_status_errors(self, discord, status, error):
        discord.reply_json({"message": "nope", "code": 12345}, status=status, reason="Nope")
        state = DiscordAPI(token="abc")

        with pytest.raises(error) as exc:
            await state.query("GET", "/users/1")

        assert exc.value.status == status
        assert exc.value.code == 12345
        assert "nope" in str(exc.value)

    @pytest.mark.asyncio
    async def test_error_with_text_body(self, discord):
        discord.reply_text("upstream connect error", status=503)

        with pytest.raises(DiscordServerError) as exc:
            await DiscordAPI(token="abc").query("GET", "/users/1")

        assert exc.value.code == 0
        assert exc.value.text == "upstream connect error"
