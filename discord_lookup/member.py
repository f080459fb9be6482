from datetime import datetime
from typing import Optional, Any, Self

from . import utils
from .errors import InvalidPayload
from .flag import GuildMemberFlags
from .user import User

__all__ = (
    "Member",
)


class Member:
    def __init__(self, *, data: dict):
        data = utils.ensure_object(data, model="Member")

        self.avatar: Optional[str] = self._get(data, "avatar", str)
        self.communication_disabled_until: Optional[str] = self._get(
            data, "communication_disabled_until", str
        )
        self.deaf: bool = self._get(data, "deaf", bool, utils.MISSING)
        self.flags: int = self._get(data, "flags", int, utils.MISSING)
        self.joined_at: str = self._get(data, "joined_at", str, utils.MISSING)
        self.mute: bool = self._get(data, "mute", bool, utils.MISSING)
        self.nick: Optional[str] = self._get(data, "nick", str)
        self.pending: bool = self._get(data, "pending", bool, False)
        self.premium_since: Optional[str] = self._get(data, "premium_since", str)

        roles: list[Any] = self._get(data, "roles", list, utils.MISSING)
        if not all(isinstance(r, str) for r in roles):
            raise InvalidPayload("Member", "roles", "expected a list of role IDs")
        self.roles: list[str] = roles

        self.user: User = User(data=self._get(data, "user", dict, utils.MISSING))

    def __repr__(self) -> str:
        return (
            f"<Member id={self.id} name='{self.name}' "
            f"nick='{self.nick}'>"
        )

    def __str__(self) -> str:
        return str(self.user)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Member):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def _get(
        data: dict,
        key: str,
        expected: type,
        default: Any = None
    ) -> Any:
        return utils.get_typed(
            data, key, expected,
            model="Member",
            default=default
        )

    @classmethod
    def placeholder(cls) -> Self:
        """
        Returns a member where every field is empty

        Used in place of members that Discord sent, but could not be parsed.

        Returns
        -------
        `Member`
            The empty member
        """
        return cls(data={
            "avatar": "",
            "communication_disabled_until": "",
            "deaf": False,
            "flags": 0,
            "joined_at": "",
            "mute": False,
            "nick": "",
            "pending": False,
            "premium_since": "",
            "roles": [],
            "user": User.placeholder().to_dict(),
        })

    @classmethod
    def from_payload(cls, data: Any) -> Self:
        """
        Parses a member, falling back to `Member.placeholder()`

        Parameters
        ----------
        data: `Any`
            One member object from the members endpoint

        Returns
        -------
        `Member`
            The parsed member, or the placeholder if it could not be parsed
        """
        try:
            return cls(data=data)
        except InvalidPayload:
            return cls.placeholder()

    def is_placeholder(self) -> bool:
        """ `bool`: Whether this member is the placeholder for an unparsable payload """
        return not self.user.id and not self.joined_at

    @property
    def id(self) -> str:
        """ `str`: Returns the ID of the member """
        return self.user.id

    @property
    def name(self) -> str:
        """ `str`: Returns the username of the member """
        return self.user.username

    @property
    def bot(self) -> bool:
        """ `bool`: Returns whether the member is a bot """
        return bool(self.user.bot)

    @property
    def global_name(self) -> Optional[str]:
        """ `Optional[str]`: Gives the global display name of a member if available """
        return self.user.global_name

    @property
    def display_name(self) -> str:
        """ `str`: Returns the display name of the member """
        return self.nick or self.global_name or self.name

    @property
    def joined_at_datetime(self) -> Optional[datetime]:
        """ `Optional[datetime]`: When the member joined the guild """
        return utils.parse_time(self.joined_at)

    @property
    def timed_out_until(self) -> Optional[datetime]:
        """ `Optional[datetime]`: Until when the member is timed out, if at all """
        return utils.parse_time(self.communication_disabled_until)

    @property
    def premium_since_datetime(self) -> Optional[datetime]:
        """ `Optional[datetime]`: Since when the member has been boosting the guild """
        return utils.parse_time(self.premium_since)

    @property
    def resolved_flags(self) -> GuildMemberFlags:
        """ `GuildMemberFlags`: Returns the guild flags of the member """
        return GuildMemberFlags(self.flags)

    def to_dict(self) -> dict:
        """ `dict`: Returns the member as a dictionary, in field order and without None values """
        return {
            "avatar": self.avatar or "",
            "communication_disabled_until": self.communication_disabled_until or "",
            "deaf": self.deaf,
            "flags": self.flags,
            "joined_at": self.joined_at,
            "mute": self.mute,
            "nick": self.nick or "",
            "pending": self.pending,
            "premium_since": self.premium_since or "",
            "roles": list(self.roles),
            "user": self.user.to_dict(),
        }
