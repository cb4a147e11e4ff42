"""Linked Discord/Roblox accounts and premium subscriptions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from rowifi.guild.types import GuildType


@dataclass
class RoUser:
    discord_id: int
    roblox_id: int
    alts: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoUser:
        return cls(
            discord_id=int(data["_id"]),
            roblox_id=int(data["RobloxId"]),
            alts=[int(a) for a in data.get("Alts", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {"_id": self.discord_id, "RobloxId": self.roblox_id, "Alts": list(self.alts)}


@dataclass
class RoGuildUser:
    guild_id: int
    discord_id: int
    roblox_id: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RoGuildUser:
        return cls(
            guild_id=int(data["GuildId"]),
            discord_id=int(data["UserId"]),
            roblox_id=int(data["RobloxId"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "GuildId": self.guild_id,
            "UserId": self.discord_id,
            "RobloxId": self.roblox_id,
        }


@dataclass
class QueueUser:
    roblox_id: int
    discord_id: int
    verified: bool

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> QueueUser:
        return cls(
            roblox_id=int(data["_id"]),
            discord_id=int(data["DiscordId"]),
            verified=bool(data["Verified"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"_id": self.roblox_id, "DiscordId": self.discord_id, "Verified": self.verified}


class PremiumType(IntEnum):
    ALPHA = 0
    BETA = 1
    STAFF = 2
    COUNCIL = 3
    PARTNER = 4

    @classmethod
    def from_int(cls, value: int) -> PremiumType:
        """Map an integer to a tier, falling back to ``ALPHA`` for unknown values."""
        try:
            return cls(value)
        except ValueError:
            return cls.ALPHA

    def has_backup(self) -> bool:
        """Whether this tier may use the backup system."""
        return self in (PremiumType.BETA, PremiumType.COUNCIL, PremiumType.PARTNER)

    def to_guild_type(self) -> GuildType:
        """The guild tier granted by this premium tier."""
        return GuildType.BETA if self.has_backup() else GuildType.ALPHA


@dataclass
class PremiumUser:
    discord_id: int
    premium_type: PremiumType
    discord_servers: list[int] = field(default_factory=list)
    patreon_id: int | None = None
    premium_owner: int | None = None
    premium_patreon_owner: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PremiumUser:
        return cls(
            discord_id=int(data["_id"]),
            premium_type=PremiumType(data["Type"]),
            discord_servers=[int(s) for s in data["Servers"]],
            patreon_id=data.get("PatreonId"),
            premium_owner=data.get("PremiumOwner"),
            premium_patreon_owner=data.get("PatreonOwner"),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "_id": self.discord_id,
            "Type": int(self.premium_type),
            "Servers": list(self.discord_servers),
        }
        optional = {
            "PatreonId": self.patreon_id,
            "PremiumOwner": self.premium_owner,
            "PatreonOwner": self.premium_patreon_owner,
        }
        result.update({key: value for key, value in optional.items() if value is not None})
        return result