"""Binds granting roles to members who satisfy a piece of condition code."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from rowifi.binds.base import Bind, names_to_roles, prefix_nickname, roles_to_names
from rowifi.binds.template import Template
from rowifi.roblox_models import PartialUser
from rowifi.rolang.command import RoCommand
from rowifi.users import RoGuildUser


def _template(data: Mapping[str, Any]) -> Template | None:
    value = data.get("Template")
    return Template(value) if value is not None else None


def _encode(bind: Any) -> dict[str, Any]:
    result: dict[str, Any] = {
        "_id": bind.id,
        "DiscordRoles": list(bind.discord_roles),
        "Code": bind.code,
        "Priority": bind.priority,
    }
    if bind.prefix is not None:
        result["Prefix"] = bind.prefix
    if bind.template is not None:
        result["Template"] = bind.template.value
    return result


@dataclass
class BackupCustomBind:
    id: int
    discord_roles: list[str]
    code: str
    priority: int
    prefix: str | None = None
    template: Template | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BackupCustomBind:
        return cls(
            id=int(data["_id"]),
            discord_roles=[str(r) for r in data["DiscordRoles"]],
            code=str(data["Code"]),
            priority=int(data["Priority"]),
            prefix=data.get("Prefix"),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return _encode(self)


@dataclass
class CustomBind(Bind):
    """Roles given to members for whom the bind's code evaluates to true.

    The code is compiled on construction; invalid code raises
    :class:`~rowifi.rolang.tokens.RolangError`.
    """

    id: int
    discord_roles: list[int]
    code: str
    priority: int
    prefix: str | None = None
    template: Template | None = None
    command: RoCommand = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.command = RoCommand(self.code)

    def to_backup(self, roles: Mapping[int, str]) -> BackupCustomBind:
        return BackupCustomBind(
            id=self.id,
            discord_roles=roles_to_names(self.discord_roles, roles),
            code=self.code,
            priority=self.priority,
            prefix=self.prefix,
            template=self.template,
        )

    @classmethod
    def from_backup(cls, bind: BackupCustomBind, roles: Mapping[str, int]) -> CustomBind:
        return cls(
            id=bind.id,
            discord_roles=names_to_roles(bind.discord_roles, roles),
            code=bind.code,
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
    def from_dict(cls, data: Mapping[str, Any]) -> CustomBind:
        """Build a bind from a stored document; unknown keys are ignored."""
        return cls(
            id=int(data["_id"]),
            discord_roles=[int(r) for r in data["DiscordRoles"]],
            code=str(data["Code"]),
            priority=int(data["Priority"]),
            prefix=data.get("Prefix"),
            template=_template(data),
        )

    def to_dict(self) -> dict[str, Any]:
        return _encode(self)