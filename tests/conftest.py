"""Pytest configuration and shared fixtures."""

import pytest

from discord_lookup import http
from discord_lookup.http import HTTPResponse


def json_response(payload, status: int = 200, reason: str = "OK") -> HTTPResponse:
    return HTTPResponse(
        status=status,
        response=payload,
        reason=reason,
        res_method="json",
    )


def text_response(text: str, status: int = 200, reason: str = "OK") -> HTTPResponse:
    return HTTPResponse(
        status=status,
        response=text,
        reason=reason,
        res_method="text",
    )


class FakeDiscord:
    """Stands in for `discord_lookup.http.query`, answering from a queue."""

    def __init__(self):
        self.calls: list[dict] = []
        self._queue: list = []

    def reply_json(self, payload, status: int = 200, reason: str = "OK"):
        self._queue.append(json_response(payload, status, reason))
        return self

    def reply_text(self, text: str, status: int = 200):
        self._queue.append(text_response(text, status))
        return self

    def fail_with(self, exc: BaseException):
        self._queue.append(exc)
        return self

    @property
    def urls(self) -> list[str]:
        return [c["url"] for c in self.calls]

    async def __call__(self, method, url, *, res_method="text", **kwargs):
        self.calls.append({
            "method": method,
            "url": url,
            "res_method": res_method,
            "headers": dict(kwargs.get("headers") or {}),
        })

        if not self._queue:
            raise AssertionError(f"Unexpected request: {method} {url}")

        item = self._queue.pop(0)
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def discord(monkeypatch):
    """Replace the HTTP layer with a FakeDiscord for the duration of a test."""
    fake = FakeDiscord()
    monkeypatch.setattr(http, "query", fake)
    return fake


@pytest.fixture
def user_payload():
    """Build a user object the way Discord sends it."""

    def _make(user_id: str = "80351110224678912", **overrides) -> dict:
        data = {
            "id": user_id,
            "username": f"user{user_id[-4:]}",
            "discriminator": "0",
            "global_name": None,
            "avatar": "8342729096ea3675442027381ff50dfe",
            "public_flags": 64,
            "flags": 64,
            "banner": None,
            "accent_color": None,
        }
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def member_payload(user_payload):
    """Build a guild member object the way Discord sends it."""

    def _make(user_id: str = "80351110224678912", **overrides) -> dict:
        data = {
            "user": user_payload(user_id),
            "nick": None,
            "avatar": None,
            "roles": ["41771983423143936"],
            "joined_at": "2015-04-26T06:26:56.936000+00:00",
            "premium_since": None,
            "deaf": False,
            "mute": False,
            "flags": 0,
            "pending": False,
            "communication_disabled_until": None,
        }
        data.update(overrides)
        return data

    return _make
