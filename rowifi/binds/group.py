"""Binds granting roles for membership of a Roblox group."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rowifi.binds.base import Bind, names_to_roles, roles_to_names
from rowifi.binds.template import Template
from rowifi.roblox_models import PartialUser
from rowifi.users import RoGuildUser


def _template(data: Mapping[str, Any]) -> Template | None:
    value = data.get("Template")
    return Template(value) if value is not None else None


def _encode(group_id: int, roles: list, priority: int, template: Template | None) -> dict[str, Any]:
    result: dict[str, Any] = {
        "GroupId": group_id,
        "DiscordRoles": list(roles),
        "Priority": priority,
    }
    if template is not None:
        result["Template"] = template.value
    return result


@dataclass
class BackupGroupBind:
    group_id: int
    discord_roles: list[str] = field(default_factory=list)
    priority: int = 0
    template: Template | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackupGroupBind:
        return cls(
            group_id=int(data["GroupId"]),
            discord_roles=[str(r) for r in data["DiscordRoles"]],
            priority=int(data.get("Priority", 0)),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return _encode(self.group_id, self.discord_roles, self.priority, self.template)


@dataclass
class GroupBind(Bind):
    """Roles given to every member of a Roblox group."""

    group_id: int
    discord_roles: list[int] = field(default_factory=list)
    priority: int = 0
    template: Template | None = None

    def to_backup(self, roles: Mapping[int, str]) -> BackupGroupBind:
        return BackupGroupBind(
            group_id=self.group_id,
            discord_roles=roles_to_names(self.discord_roles, roles),
            priority=self.priority,
            template=self.template,
        )

    @classmethod
    def from_backup(cls, bind: BackupGroupBind, roles: Mapping[str, int]) -> GroupBind:
        return cls(
            group_id=bind.group_id,
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
    def from_dict(cls, data: Mapping[str, Any]) -> GroupBind:
        return cls(
            group_id=int(data["GroupId"]),
            discord_roles=[int(r) for r in data["DiscordRoles"]],
            priority=int(data.get("Priority", 0)),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return _encode(self.group_id, self.discord_roles, self.priority, self.template)