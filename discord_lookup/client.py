import logging

from typing import Optional

from . import utils
from .errors import InvalidToken
from .guild import PartialGuild
from .http import DiscordAPI
from .member import Member
from .user import FetchedUser, PartialUser

_log = logging.getLogger(__name__)

__all__ = (
    "Client",
    "admin_check",
    "fetch_single_user",
    "get_users",
)


async def admin_check(
    discord_token: str,
    guild_id: str,
    *,
    base_url: Optional[str] = None
) -> bool:
    """
    Checks if the owner of an OAuth2 token is an admin of a guild

    Parameters
    ----------
    discord_token: `str`
        The Bearer token of the user
    guild_id: `str`
        The guild to check
    base_url: `Optional[str]`
        Root of the API, defaults to `https://discord.com/api`

    Returns
    -------
    `bool`
        True if the user has full permissions in the guild,
        False if not, or if the check could not be done
    """
    try:
        state = DiscordAPI(
            token=discord_token,
            token_type="Bearer",
            base_url=base_url
        )
    except InvalidToken:
        return False

    return await PartialGuild(state=state, id=guild_id).is_admin()


async def get_users(
    discord_token: str,
    guild_id: str,
    *,
    base_url: Optional[str] = None
) -> list[Member]:
    """
    Gets all the members of a guild

    Parameters
    ----------
    discord_token: `str`
        The bot token
    guild_id: `str`
        The guild to list the members of
    base_url: `Optional[str]`
        Root of the API, defaults to `https://discord.com/api`

    Returns
    -------
    `list[Member]`
        The members, possibly incomplete if a request failed.
        Members that could not be parsed are placeholders.
    """
    try:
        state = DiscordAPI(token=discord_token, base_url=base_url)
    except InvalidToken:
        return []

    return await PartialGuild(state=state, id=guild_id).fetch_members()


async def fetch_single_user(
    discord_token: str,
    user_id: str,
    *,
    base_url: Optional[str] = None
) -> Optional[FetchedUser]:
    """
    Fetches a single user

    Parameters
    ----------
    discord_token: `str`
        The bot token
    user_id: `str`
        The user to fetch
    base_url: `Optional[str]`
        Root of the API, defaults to `https://discord.com/api`

    Returns
    -------
    `Optional[FetchedUser]`
        The user, None if it could not be fetched or parsed
    """
    try:
        state = DiscordAPI(token=discord_token, base_url=base_url)
    except InvalidToken:
        return None

    return await PartialUser(state=state, id=user_id).fetch()


class Client:
    def __init__(
        self,
        *,
        token: str,
        base_url: Optional[str] = None,
        logging_level: int = logging.INFO
    ):
        """
        Client that remembers a bot token

        Parameters
        ----------
        token: `str`
            Discord bot token
        base_url: `Optional[str]`
            Root of the API, defaults to `https://discord.com/api`
        logging_level: `int`
            Logging level to use, if not provided, it will use `logging.INFO`
        """
        self.token: str = token
        self.base_url: Optional[str] = base_url
        self.logging_level: int = logging_level

        utils.setup_logger(level=self.logging_level)

    def __repr__(self) -> str:
        return f"<Client base_url='{self.base_url}'>"

    async def admin_check(self, bearer_token: str, guild_id: str) -> bool:
        """
        Checks if the owner of a user token is an admin of a guild

        The bot token is not used, the check is made with the user's own token.

        Parameters
        ----------
        bearer_token: `str`
            The OAuth2 access token of the user
        guild_id: `str`
            The guild to check

        Returns
        -------
        `bool`
            Whether the user has full permissions in the guild
        """
        return await admin_check(bearer_token, guild_id, base_url=self.base_url)

    async def fetch_members(self, guild_id: str) -> list[Member]:
        """ `list[Member]`: Fetches every member of a guild """
        members = await get_users(self.token, guild_id, base_url=self.base_url)
        _log.debug(f"Fetched {len(members)} members from guild {guild_id}")
        return members

    async def fetch_user(self, user_id: str) -> Optional[FetchedUser]:
        """ `Optional[FetchedUser]`: Fetches a user, None if it could not be fetched """
        return await fetch_single_user(self.token, user_id, base_url=self.base_url)
