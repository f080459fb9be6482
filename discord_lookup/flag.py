from enum import Flag, CONFORM
from typing import Self

__all__ = (
    "BaseFlag",
    "GuildMemberFlags",
    "PublicFlags",
)


class BaseFlag(Flag, boundary=CONFORM):
    def __str__(self) -> str:
        return str(self.value)

    def __int__(self) -> int:
        return self.value

    @classmethod
    def none(cls) -> Self:
        """ `BaseFlag`: Returns a flag with no flags """
        return cls(0)

    @property
    def list_names(self) -> list[str]:
        """ `list[str]`: Returns a list of all the names of the flag """
        return [
            g.name or "UNKNOWN"
            for g in self
        ]


class GuildMemberFlags(BaseFlag):
    did_rejoin = 1 << 0
    completed_onboarding = 1 << 1
    bypasses_verification = 1 << 2
    started_onboarding = 1 << 3
    is_guest = 1 << 4
    started_home_actions = 1 << 5
    completed_home_actions = 1 << 6
    automod_quarantined_username = 1 << 7
    dm_settings_upsell_acknowledged = 1 << 9


class PublicFlags(BaseFlag):
    staff = 1 << 0
    partner = 1 << 1
    hypesquad = 1 << 2
    bug_hunter_level_1 = 1 << 3
    hypesquad_online_house_1 = 1 << 6
    hypesquad_online_house_2 = 1 << 7
    hypesquad_online_house_3 = 1 << 8
    premium_early_supporter = 1 << 9
    team_pseudo_user = 1 << 10
    bug_hunter_level_2 = 1 << 14
    verified_bot = 1 << 16
    verified_developer = 1 << 17
    certified_moderator = 1 << 18
    bot_http_interactions = 1 << 19
    active_developer = 1 << 22
