"""Tier and blacklist-action enumerations for guilds."""

from __future__ import annotations

from enum import IntEnum


class GuildType(IntEnum):
    """Premium tier of a guild; stored as its integer value."""

    ALPHA = 0
    BETA = 1
    NORMAL = 2

    def __str__(self) -> str:
        return self.name.capitalize()


class BlacklistActionType(IntEnum):
    """What happens to a blacklisted member; stored as its integer value."""

    NONE = 0
    KICK = 1
    BAN = 2

    def __str__(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, text: str) -> BlacklistActionType:
        """Parse a case-insensitive action name."""
        try:
            return cls[text.strip().upper()] if text.strip() == text else cls[text.upper()]
        except KeyError:
            raise ValueError(f"unknown blacklist action: {text!r}") from None