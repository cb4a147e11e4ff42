"""Behaviour shared by every kind of bind."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from rowifi.roblox_models import PartialUser
from rowifi.users import RoGuildUser


class Bind(ABC):
    """A rule tying Discord roles to a condition; ``priority`` picks the nickname."""

    priority: int

    @abstractmethod
    def nickname(
        self,
        roblox_user: PartialUser,
        user: RoGuildUser,
        discord_username: str,
        discord_nick: str | None,
    ) -> str:
        """The nickname to give a member when this bind is chosen."""


def roles_to_names(role_ids: Iterable[int], roles: Mapping[int, str]) -> list[str]:
    """Names of the given role ids, skipping ids that have no known name."""
    return [roles[role_id] for role_id in role_ids if role_id in roles]


def names_to_roles(names: Iterable[str], roles: Mapping[str, int]) -> list[int]:
    """Role ids of the given names; every name must be known."""
    try:
        return [roles[name] for name in names]
    except KeyError as exc:
        raise KeyError(f"no role named {exc.args[0]!r}") from None


def _ascii_equal(text: str, expected: str) -> bool:
    return text.isascii() and text.lower() == expected


def prefix_nickname(
    prefix: str | None,
    roblox_user: PartialUser,
    discord_username: str,
    discord_nick: str | None,
) -> str:
    """Nickname from a legacy prefix: ``N/A``, ``disable`` or text put before the name."""
    if prefix is None or _ascii_equal(prefix, "n/a"):
        return roblox_user.name
    if _ascii_equal(prefix, "disable"):
        return discord_nick if discord_nick is not None else discord_username
    return f"{prefix} {roblox_user.name}"