"""Binds granting roles for owning an asset, badge or gamepass."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from rowifi.binds.base import Bind, names_to_roles, roles_to_names
from rowifi.binds.template import Template
from rowifi.roblox_models import PartialUser
from rowifi.users import RoGuildUser


class AssetType(IntEnum):
    """Kind of item; stored as its integer value."""

    ASSET = 0
    BADGE = 1
    GAMEPASS = 2

    def __str__(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, text: str) -> AssetType:
        """Parse a case-insensitive asset type name."""
        try:
            return cls[text.lower().upper()] if text.lower().isascii() else cls[""]
        except KeyError:
            raise ValueError(f"unknown asset type: {text!r}") from None


def _template(data: Mapping[str, Any]) -> Template | None:
    value = data.get("Template")
    return Template(value) if value is not None else None


@dataclass
class BackupAssetBind:
    id: int
    asset_type: AssetType
    discord_roles: list[str] = field(default_factory=list)
    priority: int = 0
    template: Template | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackupAssetBind:
        return cls(
            id=int(data["_id"]),
            asset_type=AssetType(data["Type"]),
            discord_roles=[str(r) for r in data["DiscordRoles"]],
            priority=int(data.get("Priority", 0)),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "_id": self.id,
            "Type": int(self.asset_type),
            "DiscordRoles": list(self.discord_roles),
            "Priority": self.priority,
        }
        if self.template is not None:
            result["Template"] = self.template.value
        return result


@dataclass
class AssetBind(Bind):
    """Roles given to members who own a Roblox item."""

    id: int
    asset_type: AssetType
    discord_roles: list[int] = field(default_factory=list)
    priority: int = 0
    template: Template | None = None

    def to_backup(self, roles: Mapping[int, str]) -> BackupAssetBind:
        return BackupAssetBind(
            id=self.id,
            asset_type=self.asset_type,
            discord_roles=roles_to_names(self.discord_roles, roles),
            priority=self.priority,
            template=self.template,
        )

    @classmethod
    def from_backup(cls, bind: BackupAssetBind, roles: Mapping[str, int]) -> AssetBind:
        return cls(
            id=bind.id,
            asset_type=bind.asset_type,
            discord_roles=names_to_roles(bind.discord_roles, roles),
            priority=bind.priority,
            template=bind.template,
        )

    def nickname(
        self,
        roblox_user: PartialUser,
        user: RoGuildUser,
        discord_username: str,
        discord_nick: str | None,
    ) -> str:
        if self.template is not None:
            return self.template.nickname(roblox_user, user, discord_username)
        return roblox_user.name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AssetBind:
        return cls(
            id=int(data["_id"]),
            asset_type=AssetType(data["Type"]),
            discord_roles=[int(r) for r in data["DiscordRoles"]],
            priority=int(data.get("Priority", 0)),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "_id": self.id,
            "Type": int(self.asset_type),
            "DiscordRoles": list(self.discord_roles),
            "Priority": self.priority,
        }
        if self.template is not None:
            result["Template"] = self.template.value
        return result