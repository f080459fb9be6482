from typing import TYPE_CHECKING, Optional

from .errors import DiscordException
from .http import TRANSPORT_ERRORS
from .member import Member

if TYPE_CHECKING:
    from .http import DiscordAPI

__all__ = (
    "ADMIN_PERMISSIONS",
    "MEMBER_PAGE_LIMIT",
    "PartialGuild",
)

# Every permission bit from 0 to 30 set
ADMIN_PERMISSIONS = 2147483647

# Largest page Discord will give for the members endpoint
MEMBER_PAGE_LIMIT = 1000


class PartialGuild:
    def __init__(self, *, state: "DiscordAPI", id: str):
        self._state = state
        self.id: str = str(id)

    def __repr__(self) -> str:
        return f"<PartialGuild id={self.id}>"

    async def is_admin(self) -> bool:
        """
        Checks if the owner of the token has full permissions in the guild

        The state must hold a Bearer token. The permission value is
        compared exactly as Discord sent it, so only the integer
        `ADMIN_PERMISSIONS` counts, any other value, a string included, does not.

        Returns
        -------
        `bool`
            True if the guild was found with full permissions,
            False otherwise or if anything went wrong
        """
        try:
            r = await self._state.query("GET", "/users/@me/guilds")
        except (DiscordException, *TRANSPORT_ERRORS):
            return False

        if r.res_method != "json" or not isinstance(r.response, list):
            return False

        for guild in r.response:
            if not isinstance(guild, dict):
                continue

            current_guild_id = guild.get("id", None)
            if not isinstance(current_guild_id, str):
                current_guild_id = "0"

            permissions = guild.get("permissions", None)
            if isinstance(permissions, bool) or not isinstance(permissions, int):
                continue

            if current_guild_id == self.id and permissions == ADMIN_PERMISSIONS:
                return True

        return False

    async def fetch_members(self) -> list[Member]:
        """
        Fetches all the members in the guild

        Pages are fetched one after the other, each one starting
        after the last member of the previous page. Members that
        can not be parsed are replaced with `Member.placeholder()`.

        If a request fails, the members gathered so far are returned.

        Returns
        -------
        `list[Member]`
            The members in the guild, in the order Discord gave them
        """
        members: list[Member] = []
        after: Optional[str] = "0"

        while after is not None:
            try:
                r = await self._state.query(
                    "GET",
                    f"/guilds/{self.id}/members?limit={MEMBER_PAGE_LIMIT}&after={after}"
                )
            except (DiscordException, *TRANSPORT_ERRORS):
                break

            if r.res_method != "json" or not isinstance(r.response, list):
                break

            if not r.response:
                break

            members.extend(
                Member.from_payload(member_data)
                for member_data in r.response
            )

            if len(r.response) < MEMBER_PAGE_LIMIT:
                break

            after = self._next_cursor(r.response[-1])

        return members

    @staticmethod
    def _next_cursor(last: object) -> Optional[str]:
        # None ends the pagination
        if not isinstance(last, dict):
            return None

        user = last.get("user", None)
        if not isinstance(user, dict):
            return None

        user_id = user.get("id", None)
        if not isinstance(user_id, str) or not user_id:
            return None

        return user_id
