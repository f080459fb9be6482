import aiohttp
import asyncio
import json
import logging

from typing import (
    Any, Generic, Literal, Optional,
    TypeVar, overload
)

from . import utils
from .errors import (
    DiscordServerError, Forbidden, HTTPException,
    InvalidToken, NotFound, Unauthorized
)

MethodTypes = Literal["GET"]
ResMethodTypes = Literal["text", "json"]
TokenTypes = Literal["Bot", "Bearer"]
ResponseT = TypeVar("ResponseT")

# Anything that can go wrong before Discord gets to answer
TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, OSError)

_log = logging.getLogger(__name__)

__all__ = (
    "DiscordAPI",
    "HTTPResponse",
    "TRANSPORT_ERRORS",
)


class HTTPResponse(Generic[ResponseT]):
    def __init__(
        self,
        *,
        status: int,
        response: ResponseT,
        reason: str,
        res_method: ResMethodTypes,
    ):
        self.status = status
        self.response = response
        self.res_method = res_method
        self.reason = reason

    def __repr__(self) -> str:
        return (
            f"<HTTPResponse status={self.status} "
            f"res_method='{self.res_method}'>"
        )


@overload
async def query(
    method: MethodTypes,
    url: str,
    *,
    res_method: Literal["text"],
    **kwargs
) -> HTTPResponse[str]:
    ...


@overload
async def query(
    method: MethodTypes,
    url: str,
    *,
    res_method: Literal["json"],
    **kwargs
) -> HTTPResponse[Any]:
    ...


async def query(
    method: MethodTypes,
    url: str,
    *,
    res_method: ResMethodTypes = "text",
    **kwargs
) -> HTTPResponse:
    """
    Make a request using the aiohttp library

    When asking for JSON and the body is not valid JSON, or nested
    too deep to decode, the raw text is returned instead and
    `res_method` becomes `text`.

    Parameters
    ----------
    method: `str`
        The HTTP method to use
    url: `str`
        The URL to make the request to
    res_method: `Optional[str]`
        The method to use to get the response, defaults to text

    Returns
    -------
    `HTTPResponse`
        The response from the request

    Raises
    ------
    `ValueError`
        Invalid HTTP method or res_method
    `aiohttp.ClientError`
        The request could not be made
    """
    if res_method not in ("text", "json"):
        raise ValueError(
            f"Invalid res_method: {res_method}, "
            "must be either text or json"
        )

    async with aiohttp.ClientSession() as session:
        session_method = getattr(session, str(method).lower(), None)
        if not session_method:
            raise ValueError(f"Invalid HTTP method: {method}")

        async with session_method(str(url), **kwargs) as res:
            r = await res.text(errors="replace")

            if res_method == "json":
                try:
                    r = json.loads(r)
                except (json.JSONDecodeError, RecursionError):
                    res_method = "text"

            return HTTPResponse(
                status=res.status,
                response=r,
                res_method=res_method,
                reason=res.reason or ""
            )


class DiscordAPI:
    def __init__(
        self,
        *,
        token: str,
        token_type: TokenTypes = "Bot",
        base_url: Optional[str] = None
    ):
        """
        Holds one token and makes requests to the Discord API with it

        Parameters
        ----------
        token: `str`
            The token to authorize with
        token_type: `str`
            Either `Bot` for bot tokens or `Bearer` for OAuth2 access tokens
        base_url: `Optional[str]`
            Root of the API, defaults to `https://discord.com/api`

        Raises
        ------
        `InvalidToken`
            The token can not be sent as a HTTP header
        """
        if not utils.is_header_safe(token):
            raise InvalidToken(token_type)

        self.token: str = token
        self.token_type: TokenTypes = token_type
        self.base_url: str = (base_url or "https://discord.com/api").rstrip("/")

    def __repr__(self) -> str:
        return f"<DiscordAPI token_type='{self.token_type}' base_url='{self.base_url}'>"

    @property
    def authorization(self) -> str:
        """ `str`: The value of the Authorization header """
        return f"{self.token_type} {self.token}"

    async def query(
        self,
        method: MethodTypes,
        path: str,
        *,
        res_method: ResMethodTypes = "json",
        **kwargs
    ) -> HTTPResponse:
        """
        Make a request to the Discord API

        Parameters
        ----------
        method: `str`
            Which HTTP method to use
        path: `str`
            The path to make the request to
        res_method: `str`
            The method to use to get the response

        Returns
        -------
        `HTTPResponse`
            The response from the request

        Raises
        ------
        `Unauthorized`
            The token was not accepted
        `Forbidden`
            You are not allowed to do this
        `NotFound`
            The resource was not found
        `DiscordServerError`
            Something went wrong on Discord's end
        `HTTPException`
            Something else went wrong
        """
        headers = kwargs.pop("headers", None) or {}
        headers["Authorization"] = self.authorization

        r: HTTPResponse = await query(
            method,
            f"{self.base_url}{path}",
            res_method=res_method,
            headers=headers,
            **kwargs
        )

        _log.debug(f"HTTP {method.upper()} ({r.status}): {path}")

        match r.status:
            case x if x >= 200 and x <= 299:
                return r

            case 401:
                raise Unauthorized(r)

            case 403:
                raise Forbidden(r)

            case 404:
                raise NotFound(r)

            case x if x >= 500:
                raise DiscordServerError(r)

            case _:
                raise HTTPException(r)
