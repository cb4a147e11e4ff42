"""Binds granting roles for holding a rank in a Roblox group."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rowifi.binds.base import Bind, names_to_roles, prefix_nickname, roles_to_names
from rowifi.binds.template import Template
from rowifi.roblox_models import PartialUser
from rowifi.users import RoGuildUser


def _template(data: Mapping[str, Any]) -> Template | None:
    value = data.get("Template")
    return Template(value) if value is not None else None


def _encode(bind: Any) -> dict[str, Any]:
    result: dict[str, Any] = {
        "GroupId": bind.group_id,
        "DiscordRoles": list(bind.discord_roles),
        "RbxRankId": bind.rank_id,
        "RbxGrpRoleId": bind.rbx_rank_id,
        "Priority": bind.priority,
    }
    if bind.prefix is not None:
        result["Prefix"] = bind.prefix
    if bind.template is not None:
        result["Template"] = bind.template.value
    return result


@dataclass
class BackupRankBind:
    group_id: int
    discord_roles: list[str]
    rank_id: int
    rbx_rank_id: int
    priority: int
    prefix: str | None = None
    template: Template | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackupRankBind:
        return cls(
            group_id=int(data["GroupId"]),
            discord_roles=[str(r) for r in data["DiscordRoles"]],
            rank_id=int(data["RbxRankId"]),
            rbx_rank_id=int(data["RbxGrpRoleId"]),
            priority=int(data["Priority"]),
            prefix=data.get("Prefix"),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return _encode(self)


@dataclass
class RankBind(Bind):
    """Roles given to members holding one rank (0-255) of a group."""

    group_id: int
    discord_roles: list[int] = field(default_factory=list)
    rank_id: int = 0
    rbx_rank_id: int = 0
    priority: int = 0
    prefix: str | None = None
    template: Template | None = None

    def to_backup(self, roles: Mapping[int, str]) -> BackupRankBind:
        return BackupRankBind(
            group_id=self.group_id,
            discord_roles=roles_to_names(self.discord_roles, roles),
            rank_id=self.rank_id,
            rbx_rank_id=self.rbx_rank_id,
            priority=self.priority,
            prefix=self.prefix,
            template=self.template,
        )

    @classmethod
    def from_backup(cls, bind: BackupRankBind, roles: Mapping[str, int]) -> RankBind:
        return cls(
            group_id=bind.group_id,
            discord_roles=names_to_roles(bind.discord_roles, roles),
            rank_id=bind.rank_id,
            rbx_rank_id=bind.rbx_rank_id,
            priority=bind.priority,
            prefix=bind.prefix,
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
        return prefix_nickname(self.prefix, roblox_user, discord_username, discord_nick)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RankBind:
        return cls(
            group_id=int(data["GroupId"]),
            discord_roles=[int(r) for r in data["DiscordRoles"]],
            rank_id=int(data["RbxRankId"]),
            rbx_rank_id=int(data["RbxGrpRoleId"]),
            priority=int(data["Priority"]),
            prefix=data.get("Prefix"),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return _encode(self)