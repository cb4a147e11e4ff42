"""Nickname templates with ``{slug}`` placeholders."""

from __future__ import annotations

import re
from dataclasses import dataclass

from rowifi.roblox_models import PartialUser
from rowifi.users import RoGuildUser

_TEMPLATE_RE = re.compile(r"\{(.*?)\}")

SLUGS = frozenset(
    {"roblox-username", "roblox-id", "discord-id", "discord-name", "display-name"}
)


@dataclass(frozen=True)
class Template:
    """A nickname format such as ``"[HR] {roblox-username}"``."""

    value: str

    def nickname(
        self, roblox_user: PartialUser, user: RoGuildUser, discord_username: str
    ) -> str:
        """Fill in the known slugs; unknown ``{...}`` parts are kept as written."""
        values = {
            "roblox-username": roblox_user.name,
            "roblox-id": str(user.roblox_id),
            "discord-id": str(user.discord_id),
            "discord-name": discord_username,
            "display-name": roblox_user.display_name or "",
        }
        return _TEMPLATE_RE.sub(
            lambda match: values.get(match.group(1), match.group(0)), self.value
        )

    @staticmethod
    def has_slug(template_str: str) -> bool:
        """Whether the text holds at least one known slug."""
        return any(m.group(1) in SLUGS for m in _TEMPLATE_RE.finditer(template_str))

    @classmethod
    def default(cls) -> Template:
        """The template that keeps the member's Discord name."""
        return cls("{discord-name}")

    def __str__(self) -> str:
        return self.value