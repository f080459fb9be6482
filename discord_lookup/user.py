from datetime import datetime
from typing import TYPE_CHECKING, Optional, Any, Self

from . import utils
from .errors import DiscordException
from .flag import PublicFlags
from .http import TRANSPORT_ERRORS

if TYPE_CHECKING:
    from .http import DiscordAPI

__all__ = (
    "FetchedUser",
    "PartialUser",
    "User",
)


class PartialUser:
    def __init__(
        self,
        *,
        state: "DiscordAPI",
        id: str
    ):
        self._state = state
        self.id: str = str(id)

    def __repr__(self) -> str:
        return f"<PartialUser id={self.id}>"

    @property
    def mention(self) -> str:
        """ `str`: Returns a string that allows you to mention the user """
        return f"<@!{self.id}>"

    async def fetch(self) -> Optional["FetchedUser"]:
        """
        Fetches the user

        Every failure, from the request to parsing the payload,
        gives None. A missing user and a network error look the same.

        Returns
        -------
        `Optional[FetchedUser]`
            The user if it could be fetched
        """
        try:
            r = await self._state.query(
                "GET",
                f"/users/{self.id}"
            )
        except (DiscordException, *TRANSPORT_ERRORS):
            return None

        if r.res_method != "json":
            return None

        try:
            return FetchedUser(data=r.response)
        except DiscordException:
            return None


class User:
    def __init__(self, *, data: dict):
        data = utils.ensure_object(data, model=self._model)

        self.accent_color: Optional[int] = self._get(data, "accent_color", int)
        self.avatar: Optional[str] = self._get(data, "avatar", str)
        self.avatar_decoration: Optional[str] = self._get(data, "avatar_decoration", str)
        self.banner: Optional[str] = self._get(data, "banner", str)
        self.banner_color: Optional[int] = utils.get_colour(
            data, "banner_color", model=self._model
        )
        self.bot: Optional[bool] = self._get(data, "bot", bool)
        self.discriminator: str = self._get(data, "discriminator", str, utils.MISSING)
        self.display_name: Optional[str] = self._get(data, "display_name", str)
        self.flags: int = self._get(data, "flags", int, 0)
        self.global_name: Optional[str] = self._get(data, "global_name", str)
        self.id: str = self._get(data, "id", str, utils.MISSING)
        self.public_flags: int = self._get(data, "public_flags", int, 0)
        self.username: str = self._get(data, "username", str, utils.MISSING)

    def __repr__(self) -> str:
        return (
            f"<{self._model} id={self.id} name='{self.username}' "
            f"global_name='{self.global_name}'>"
        )

    def __str__(self) -> str:
        if self.discriminator and self.discriminator != "0":
            return f"{self.username}#{self.discriminator}"
        return self.username

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @property
    def _model(self) -> str:
        return self.__class__.__name__

    def _get(
        self,
        data: dict,
        key: str,
        expected: type,
        default: Any = None
    ) -> Any:
        return utils.get_typed(
            data, key, expected,
            model=self._model,
            default=default
        )

    @classmethod
    def placeholder(cls) -> Self:
        """ `User`: Returns a user where every field is empty """
        return cls(data={
            "accent_color": 0,
            "avatar": "",
            "avatar_decoration": "",
            "banner": "",
            "banner_color": 0,
            "bot": False,
            "discriminator": "",
            "display_name": "",
            "flags": 0,
            "global_name": "",
            "id": "",
            "public_flags": 0,
            "username": "",
        })

    @property
    def name(self) -> str:
        """ `str`: Alias for `User.username` """
        return self.username

    @property
    def display(self) -> str:
        """ `str`: Returns the global name if set, otherwise the username """
        return self.global_name or self.username

    @property
    def mention(self) -> str:
        """ `str`: Returns a string that allows you to mention the user """
        return f"<@!{self.id}>"

    @property
    def created_at(self) -> Optional[datetime]:
        """ `Optional[datetime]`: When the account was created, None if the ID is not a snowflake """
        if not self.id.isascii() or not self.id.isdigit():
            return None

        try:
            return utils.snowflake_time(self.id)
        except (ValueError, OverflowError, OSError):
            return None

    @property
    def resolved_public_flags(self) -> PublicFlags:
        """ `PublicFlags`: Returns the public flags of the user """
        return PublicFlags(self.public_flags)

    def to_dict(self) -> dict:
        """
        Returns the user as a dictionary

        Keys keep the field order and fields that are not set
        are given their empty value instead of None.

        Returns
        -------
        `dict`
            The user as a dictionary
        """
        return {
            "accent_color": self.accent_color or 0,
            "avatar": self.avatar or "",
            "avatar_decoration": self.avatar_decoration or "",
            "banner": self.banner or "",
            "banner_color": self.banner_color or 0,
            "bot": bool(self.bot),
            "discriminator": self.discriminator,
            "display_name": self.display_name or "",
            "flags": self.flags,
            "global_name": self.global_name or "",
            "id": self.id,
            "public_flags": self.public_flags,
            "username": self.username,
        }


class FetchedUser(User):
    """ A user fetched directly by its ID """
    pass
