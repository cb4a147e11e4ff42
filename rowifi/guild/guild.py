"""A guild's stored configuration and its conversion to and from backups."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from itertools import chain
from typing import Any

from rowifi.binds.asset import AssetBind
from rowifi.binds.custom import CustomBind
from rowifi.binds.group import GroupBind
from rowifi.binds.rank import RankBind
from rowifi.blacklist import Blacklist
from rowifi.events import EventType
from rowifi.guild.backup import BackupGuild
from rowifi.guild.settings import GuildSettings

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _ascii_fold(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def _unique(items: Iterable[Any]) -> list[Any]:
    return list(dict.fromkeys(items))


def _bind_roles(*bind_lists: Iterable[Any]) -> list[Any]:
    """Every discord role of the binds, in order of first appearance."""
    return _unique(
        chain.from_iterable(bind.discord_roles for bind in chain.from_iterable(bind_lists))
    )


def _role_name(roles: Mapping[int, str], role_id: int | None) -> str | None:
    return roles.get(role_id) if role_id is not None else None


@dataclass
class RoGuild:
    """Configuration of one Discord guild.

    ``all_roles`` lists every role covered by the binds; it is never stored
    and is worked out from the binds when not given.
    """

    id: int
    settings: GuildSettings = field(default_factory=GuildSettings)
    command_prefix: str | None = None
    verification_role: int | None = None
    verified_role: int | None = None
    rankbinds: list[RankBind] = field(default_factory=list)
    groupbinds: list[GroupBind] = field(default_factory=list)
    custombinds: list[CustomBind] = field(default_factory=list)
    assetbinds: list[AssetBind] = field(default_factory=list)
    blacklists: list[Blacklist] = field(default_factory=list)
    disabled_channels: list[int] = field(default_factory=list)
    registered_groups: list[int] = field(default_factory=list)
    event_types: list[EventType] = field(default_factory=list)
    event_counter: int = 0
    all_roles: list[int] | None = None

    def __post_init__(self) -> None:
        if self.all_roles is None:
            self.all_roles = _bind_roles(
                self.rankbinds, self.groupbinds, self.custombinds, self.assetbinds
            )

    def to_backup(
        self,
        user_id: int,
        name: str,
        roles: Mapping[int, str],
        channels: Mapping[int, str],
    ) -> BackupGuild:
        """A backup owned by ``user_id`` with role and channel ids replaced by names."""
        return BackupGuild(
            user_id=user_id,
            name=name,
            command_prefix=self.command_prefix,
            settings=self.settings.to_backup(roles, channels),
            verification_role=_role_name(roles, self.verification_role),
            verified_role=_role_name(roles, self.verified_role),
            rankbinds=[b.to_backup(roles) for b in self.rankbinds],
            groupbinds=[b.to_backup(roles) for b in self.groupbinds],
            custombinds=[b.to_backup(roles) for b in self.custombinds],
            assetbinds=[b.to_backup(roles) for b in self.assetbinds],
            blacklists=list(self.blacklists),
            registered_groups=list(self.registered_groups),
            event_types=list(self.event_types),
        )

    @classmethod
    def from_backup(
        cls,
        backup: BackupGuild,
        guild_id: int,
        existing_roles: Iterable[tuple[int, str]],
        existing_channels: Mapping[str, int],
        create_role: Callable[[str], int],
    ) -> RoGuild:
        """Restore a guild from a backup, creating roles it cannot find.

        Bind roles match existing roles ignoring ASCII case; the verification
        and verified roles match by exact name. ``create_role`` takes a role
        name and returns the id of the new role. A missing verification or
        verified role becomes ``0``.
        """
        existing = list(existing_roles)
        names_to_ids: dict[str, int] = {}

        for role_name in _bind_roles(
            backup.rankbinds, backup.groupbinds, backup.custombinds, backup.assetbinds
        ):
            folded = _ascii_fold(role_name)
            match = next(
                (rid for rid, rname in existing if _ascii_fold(rname) == folded), None
            )
            names_to_ids[role_name] = match if match is not None else create_role(role_name)

        def resolve(role_name: str | None) -> int:
            if role_name is None:
                return 0
            if role_name in names_to_ids:
                return names_to_ids[role_name]
            match = next((rid for rid, rname in existing if rname == role_name), None)
            return match if match is not None else create_role(role_name)

        rankbinds = [RankBind.from_backup(b, names_to_ids) for b in backup.rankbinds]
        groupbinds = [GroupBind.from_backup(b, names_to_ids) for b in backup.groupbinds]
        custombinds = [CustomBind.from_backup(b, names_to_ids) for b in backup.custombinds]
        assetbinds = [AssetBind.from_backup(b, names_to_ids) for b in backup.assetbinds]

        verification_role = resolve(backup.verification_role)
        verified_role = resolve(backup.verified_role)

        settings = GuildSettings.from_backup(
            backup.settings, names_to_ids, existing, existing_channels, create_role
        )

        return cls(
            id=guild_id,
            command_prefix=backup.command_prefix,
            settings=settings,
            verification_role=verification_role,
            verified_role=verified_role,
            rankbinds=rankbinds,
            groupbinds=groupbinds,
            custombinds=custombinds,
            assetbinds=assetbinds,
            blacklists=list(backup.blacklists),
            disabled_channels=[],
            registered_groups=list(backup.registered_groups),
            event_types=list(backup.event_types),
            event_counter=0,
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RoGuild:
        """Build a guild from a stored document; ``_id`` and ``Settings`` are required."""
        if "_id" not in data:
            raise KeyError("missing field `_id`")
        if "Settings" not in data:
            raise KeyError("missing field `Settings`")
        return cls(
            id=int(data["_id"]),
            command_prefix=data.get("Prefix"),
            settings=GuildSettings.from_dict(data["Settings"]),
            verification_role=data.get("VerificationRole"),
            verified_role=data.get("VerifiedRole"),
            rankbinds=[RankBind.from_dict(b) for b in data.get("RankBinds") or []],
            groupbinds=[GroupBind.from_dict(b) for b in data.get("GroupBinds") or []],
            custombinds=[CustomBind.from_dict(b) for b in data.get("CustomBinds") or []],
            assetbinds=[AssetBind.from_dict(b) for b in data.get("AssetBinds") or []],
            blacklists=[Blacklist.from_dict(b) for b in data.get("Blacklists") or []],
            disabled_channels=[int(c) for c in data.get("DisabledChannels") or []],
            registered_groups=[int(g) for g in data.get("RegisteredGroups") or []],
            event_types=[EventType.from_dict(e) for e in data.get("EventTypes") or []],
            event_counter=int(data.get("EventCounter") or 0),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"_id": self.id}
        if self.command_prefix is not None:
            result["Prefix"] = self.command_prefix
        result["Settings"] = self.settings.to_dict()
        if self.verification_role is not None:
            result["VerificationRole"] = self.verification_role
        if self.verified_role is not None:
            result["VerifiedRole"] = self.verified_role
        result.update(
            {
                "RankBinds": [b.to_dict() for b in self.rankbinds],
                "GroupBinds": [b.to_dict() for b in self.groupbinds],
                "CustomBinds": [b.to_dict() for b in self.custombinds],
                "AssetBinds": [b.to_dict() for b in self.assetbinds],
                "Blacklists": [b.to_dict() for b in self.blacklists],
                "DisabledChannels": list(self.disabled_channels),
                "RegisteredGroups": list(self.registered_groups),
                "EventTypes": [e.to_dict() for e in self.event_types],
                "EventCounter": self.event_counter,
            }
        )
        return result