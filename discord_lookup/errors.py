from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .http import HTTPResponse

__all__ = (
    "DiscordException",
    "DiscordServerError",
    "Forbidden",
    "HTTPException",
    "InvalidPayload",
    "InvalidToken",
    "NotFound",
    "Unauthorized",
)


class DiscordException(Exception):
    """ Base exception for discord_lookup """
    pass


class InvalidToken(DiscordException):
    """ Raised whenever a token can not be used as an Authorization header """
    def __init__(self, token_type: str):
        self.token_type: str = token_type
        super().__init__(
            f"{token_type} token contains characters "
            "that are not allowed in a HTTP header"
        )


class InvalidPayload(DiscordException):
    """ Raised whenever a JSON payload does not have the expected shape """
    def __init__(self, model: str, key: str, reason: str):
        self.model: str = model
        self.key: str = key
        super().__init__(f"Invalid {model} payload, key '{key}': {reason}")


class HTTPException(DiscordException):
    """ Base exception for HTTP requests """
    def __init__(self, r: "HTTPResponse"):
        self.request = r
        self.status: int = r.status

        self.code: int
        self.text: str

        if isinstance(r.response, dict):
            self.code = r.response.get("code", 0)
            self.text = r.response.get("message", "Unknown")
        else:
            self.text = str(r.response)
            self.code = 0

        error_text = f"HTTP {self.request.status} > {self.request.reason} (code: {self.code})"
        if len(self.text):
            error_text += f": {self.text}"

        super().__init__(error_text)


class Unauthorized(HTTPException):
    """ Raised whenever a HTTP request returns 401 """
    pass


class Forbidden(HTTPException):
    """ Raised whenever a HTTP request returns 403 """
    pass


class NotFound(HTTPException):
    """ Raised whenever a HTTP request returns 404 """
    pass


class DiscordServerError(HTTPException):
    """ Raised whenever Discord answers with a 5xx status """
    pass
