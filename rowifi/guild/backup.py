"""Saved copies of a guild's configuration, with roles and channels kept by name."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from bson import ObjectId

from rowifi.binds.asset import BackupAssetBind
from rowifi.binds.custom import BackupCustomBind
from rowifi.binds.group import BackupGroupBind
from rowifi.binds.rank import BackupRankBind
from rowifi.blacklist import Blacklist
from rowifi.events import EventType
from rowifi.guild.types import BlacklistActionType, GuildType


@dataclass
class BackupGuildSettings:
    auto_detection: bool = False
    guild_type: GuildType = GuildType.NORMAL
    blacklist_action: BlacklistActionType = BlacklistActionType.NONE
    update_on_join: bool = False
    admin_roles: list[str] = field(default_factory=list)
    trainer_roles: list[str] = field(default_factory=list)
    bypass_roles: list[str] = field(default_factory=list)
    nickname_bypass_roles: list[str] = field(default_factory=list)
    log_channel: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackupGuildSettings:
        return cls(
            auto_detection=bool(data["AutoDetection"]),
            guild_type=GuildType(data["Type"]),
            blacklist_action=BlacklistActionType(data.get("BlacklistAction", 0)),
            update_on_join=bool(data.get("UpdateOnJoin", False)),
            admin_roles=[str(r) for r in data.get("AdminRoles", [])],
            trainer_roles=[str(r) for r in data.get("TrainerRoles", [])],
            bypass_roles=[str(r) for r in data.get("BypassRoles", [])],
            nickname_bypass_roles=[str(r) for r in data.get("NicknameBypassRoles", [])],
            log_channel=data.get("LogChannel"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "AutoDetection": self.auto_detection,
            "Type": int(self.guild_type),
            "BlacklistAction": int(self.blacklist_action),
            "UpdateOnJoin": self.update_on_join,
            "AdminRoles": list(self.admin_roles),
            "TrainerRoles": list(self.trainer_roles),
            "BypassRoles": list(self.bypass_roles),
            "NicknameBypassRoles": list(self.nickname_bypass_roles),
            "LogChannel": self.log_channel,
        }


@dataclass
class BackupGuild:
    """A named backup owned by a user."""

    id: ObjectId = field(default_factory=ObjectId)
    user_id: int = 0
    name: str = ""
    command_prefix: str | None = None
    settings: BackupGuildSettings = field(default_factory=BackupGuildSettings)
    verification_role: str | None = None
    verified_role: str | None = None
    rankbinds: list[BackupRankBind] = field(default_factory=list)
    groupbinds: list[BackupGroupBind] = field(default_factory=list)
    custombinds: list[BackupCustomBind] = field(default_factory=list)
    assetbinds: list[BackupAssetBind] = field(default_factory=list)
    blacklists: list[Blacklist] = field(default_factory=list)
    registered_groups: list[int] = field(default_factory=list)
    event_types: list[EventType] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackupGuild:
        return cls(
            id=ObjectId(data["_id"]),
            user_id=int(data["UserId"]),
            name=str(data["Name"]),
            command_prefix=data.get("Prefix"),
            settings=BackupGuildSettings.from_dict(data["Settings"]),
            verification_role=data.get("VerificationRole"),
            verified_role=data.get("VerifiedRole"),
            rankbinds=[BackupRankBind.from_dict(b) for b in data["Rankbinds"]],
            groupbinds=[BackupGroupBind.from_dict(b) for b in data["Groupbinds"]],
            custombinds=[BackupCustomBind.from_dict(b) for b in data.get("Custombinds", [])],
            assetbinds=[BackupAssetBind.from_dict(b) for b in data.get("Assetbinds", [])],
            blacklists=[Blacklist.from_dict(b) for b in data.get("Blacklists", [])],
            registered_groups=[int(g) for g in data.get("RegisteredGroups", [])],
            event_types=[EventType.from_dict(e) for e in data.get("EventTypes", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "_id": self.id,
            "UserId": self.user_id,
            "Name": self.name,
            "Prefix": self.command_prefix,
            "Settings": self.settings.to_dict(),
            "VerificationRole": self.verification_role,
            "VerifiedRole": self.verified_role,
            "Rankbinds": [b.to_dict() for b in self.rankbinds],
            "Groupbinds": [b.to_dict() for b in self.groupbinds],
            "Custombinds": [b.to_dict() for b in self.custombinds],
            "Assetbinds": [b.to_dict() for b in self.assetbinds],
            "Blacklists": [b.to_dict() for b in self.blacklists],
            "RegisteredGroups": list(self.registered_groups),
            "EventTypes": [e.to_dict() for e in self.event_types],
        }