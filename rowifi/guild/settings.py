"""Per-guild settings and their conversion to and from backups."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from rowifi.binds.base import roles_to_names
from rowifi.guild.backup import BackupGuildSettings
from rowifi.guild.types import BlacklistActionType, GuildType


def _resolve_roles(
    names: Iterable[str],
    names_to_ids: Mapping[str, int],
    existing_roles: list[tuple[int, str]],
    create_role: Callable[[str], int],
) -> list[int]:
    resolved = []
    for name in names:
        if name in names_to_ids:
            resolved.append(names_to_ids[name])
            continue
        existing = next((rid for rid, rname in existing_roles if rname == name), None)
        resolved.append(existing if existing is not None else create_role(name))
    return resolved


@dataclass
class GuildSettings:
    auto_detection: bool = False
    guild_type: GuildType = GuildType.NORMAL
    blacklist_action: BlacklistActionType = BlacklistActionType.NONE
    update_on_join: bool = False
    admin_roles: list[int] = field(default_factory=list)
    trainer_roles: list[int] = field(default_factory=list)
    bypass_roles: list[int] = field(default_factory=list)
    nickname_bypass_roles: list[int] = field(default_factory=list)
    log_channel: int | None = None

    def to_backup(
        self, roles: Mapping[int, str], channels: Mapping[int, str]
    ) -> BackupGuildSettings:
        """Settings with role and channel ids replaced by their names.

        Every role list of the backup is filled from the admin roles.
        """
        admin_names = roles_to_names(self.admin_roles, roles)
        log_channel = channels.get(self.log_channel) if self.log_channel is not None else None
        return BackupGuildSettings(
            auto_detection=self.auto_detection,
            guild_type=self.guild_type,
            blacklist_action=self.blacklist_action,
            update_on_join=self.update_on_join,
            admin_roles=admin_names,
            trainer_roles=list(admin_names),
            bypass_roles=list(admin_names),
            nickname_bypass_roles=list(admin_names),
            log_channel=log_channel,
        )

    @classmethod
    def from_backup(
        cls,
        backup_settings: BackupGuildSettings,
        names_to_ids: Mapping[str, int],
        existing_roles: Iterable[tuple[int, str]],
        existing_channels: Mapping[str, int],
        create_role: Callable[[str], int],
    ) -> GuildSettings:
        """Restore settings, creating (via ``create_role``) roles that cannot be found.

        A role name is looked up first in ``names_to_ids``, then among the
        ``(id, name)`` pairs of ``existing_roles`` by exact name.
        """
        existing = list(existing_roles)

        def resolve(names: Iterable[str]) -> list[int]:
            return _resolve_roles(names, names_to_ids, existing, create_role)

        log_channel = (
            existing_channels.get(backup_settings.log_channel)
            if backup_settings.log_channel is not None
            else None
        )
        return cls(
            auto_detection=backup_settings.auto_detection,
            guild_type=backup_settings.guild_type,
            blacklist_action=backup_settings.blacklist_action,
            update_on_join=backup_settings.update_on_join,
            admin_roles=resolve(backup_settings.admin_roles),
            trainer_roles=resolve(backup_settings.trainer_roles),
            bypass_roles=resolve(backup_settings.bypass_roles),
            nickname_bypass_roles=resolve(backup_settings.nickname_bypass_roles),
            log_channel=log_channel,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GuildSettings:
        return cls(
            auto_detection=bool(data["AutoDetection"]),
            guild_type=GuildType(data["Type"]),
            blacklist_action=BlacklistActionType(data.get("BlacklistAction", 0)),
            update_on_join=bool(data.get("UpdateOnJoin", False)),
            admin_roles=[int(r) for r in data.get("AdminRoles", [])],
            trainer_roles=[int(r) for r in data.get("TrainerRoles", [])],
            bypass_roles=[int(r) for r in data.get("BypassRoles", [])],
            nickname_bypass_roles=[int(r) for r in data.get("NicknameBypassRoles", [])],
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